# coremark

A small CPU benchmark that runs three workloads over a fixed block of data:

- **list**: finding, reversing, removing and merge-sorting items in a linked list.
- **matrix**: adding, scaling and multiplying small integer matrices.
- **state**: scanning comma-separated number tokens with a state machine.

Each workload folds its results into a 16-bit CRC. For the well-known seed
sets the CRCs are checked against reference values. A run therefore measures
speed and also confirms that the arithmetic was done correctly.

## Installing

```
pip install .
```

## Running

```
coremark [seed1 [seed2 [seed3 [iterations [execs [unused [total_size]]]]]]]
```

All arguments are optional. A missing argument counts as `0`. Values may be
decimal or lower-case hex (`0x66`) and may be negative. A value may end in
`K` or `M` to multiply it by 1024 or 1024². Parsing stops at the first
character that is not a digit.

- `seed1 seed2 seed3`: the seeds for the data, taken as signed 16-bit values.
  - `0 0 0` selects the performance run (`0, 0, 0x66`).
  - `1 0 0` selects the validation run (`0x3415, 0x3415, 0x66`).
- `iterations`: the number of iterations. `0` makes the benchmark calibrate
  itself, increasing the count tenfold until one pass takes at least a second,
  then scaling it up so the run takes about ten seconds.
- `execs`: a bit mask of the workloads to run (1 = list, 2 = matrix,
  4 = state). `0` runs all three.
- The sixth argument is ignored.
- `total_size`: the total data size in bytes, shared equally between the
  selected workloads. The default is 2000.

For example, a validation run with 100 iterations:

```
coremark 1 0 0 100
```

The report begins with a line naming the parameter set, when the seeds and
size match a known run. It then gives:

- the data size per workload, the elapsed ticks (milliseconds) and seconds;
- iterations per second, and the number of iterations;
- the interpreter version and optimisation flags, and the memory location;
- the seed CRC, the CRC of each selected workload and the final CRC.

A valid result needs at least ten seconds of run time, and shorter runs are
reported as an error. Parameters that match no known run are reported as
unvalidated. The command exits with status 0. If the arguments select no
workload or give a size that cannot hold the data, it prints a message to
standard error and exits with status 1.

## Using it from Python

```python
import io
from coremark.main import run

out = io.StringIO()
errors = run(["0x3415", "0x3415", "0x66", "10"], out)
print(out.getvalue())
```

`run` returns the error count. The count is negative when the parameters
have no known results.

`coremark.main` also provides these steps separately:

- `setup` prepares a `CoreResults` context.
- `iterate` runs the iterations.
- `seed_crc` and `known_run` identify the parameter set.
- `check_results` compares CRCs against `KNOWN_RUNS`.

The building blocks are available on their own as well:

- `coremark.crc`: `crcu8`, `crcu16`, `crcu32`, `crc16`, `parse_value`, `get_seed`
- `coremark.state`: `CoreState`, `init_state`, `state_transition`, `bench_state`
- `coremark.matrix`: `MatrixParams`, `init_matrix`, `bench_matrix`, `matrix_test` and the individual matrix operations
- `coremark.listbench`: `ListData`, `ListNode`, `init_list`, `bench_list`, `find`, `reverse`, `remove`, `undo_remove`, `mergesort`
- `coremark.results`: `Algorithm`, `CoreResults`
- `coremark.timing`: `Timer`, `time_in_secs`

## Limitations

The benchmark runs a single context. It does not run several copies in
parallel threads or processes.

## Tests

```
pip install .[test]
pytest
```