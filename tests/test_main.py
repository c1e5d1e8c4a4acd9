import io

import pytest

from coremark.listbench import iter_nodes
from coremark.main import (
    KNOWN_RUNS,
    check_results,
    iterate,
    known_run,
    main,
    run,
    seed_crc,
    setup,
)
from coremark.results import Algorithm

KNOWN_PARAMETERS = [
    # seeds, total size, known id, (list, matrix, state) CRCs
    ((0, 0, 0x66), 6000, 0, (0xD4B0, 0xBE52, 0x5E47)),
    ((0x3415, 0x3415, 0x66), 6000, 1, (0x3340, 0x1199, 0x39BF)),
    ((0x8, 0x8, 0x8), 1200, 2, (0x6A79, 0x5608, 0xE5A4)),
    ((0, 0, 0x66), 2000, 3, (0xE714, 0x1FD7, 0x8E3A)),
    ((0x3415, 0x3415, 0x66), 2000, 4, (0xE3C1, 0x0747, 0x8D84)),
]


def _snapshot(res):
    return [(node.info.idx, node.info.data16) for node in iter_nodes(res.list)]


@pytest.mark.parametrize(
    "seedcrc, expected",
    [(0x8A02, 0), (0x7B05, 1), (0x4EAF, 2), (0xE9F5, 3), (0x18F2, 4)],
)
def test_known_run_ids(seedcrc, expected):
    assert known_run(seedcrc) == expected


def test_known_run_unknown():
    assert known_run(0x1234) is None


@pytest.mark.parametrize("seeds, total, known_id, crcs", KNOWN_PARAMETERS)
def test_known_runs_produce_expected_crcs(seeds, total, known_id, crcs):
    res = setup(*seeds, 1, 0, total)
    assert known_run(seed_crc(res)) == known_id
    iterate(res)
    assert (res.crclist, res.crcmatrix, res.crcstate) == crcs
    assert check_results(res, known_id) == []
    assert res.err == 0


def test_setup_performance_defaults():
    res = setup(0, 0, 0, 1, 0, 2000)
    assert (res.seed1, res.seed2, res.seed3) == (0, 0, 0x66)
    assert seed_crc(res) == 0xE9F5


def test_setup_validation_defaults():
    res = setup(1, 0, 0, 1, 0, 2000)
    assert (res.seed1, res.seed2, res.seed3) == (0x3415, 0x3415, 0x66)
    assert seed_crc(res) == 0x18F2


def test_setup_shares_size_between_algorithms():
    all_algorithms = setup(0, 0, 0, 1, 0, 2000)
    assert all_algorithms.execs == Algorithm.ALL
    assert all_algorithms.size * 3 <= 2000 < (all_algorithms.size + 1) * 3
    only_matrix = setup(0, 0, 0, 1, int(Algorithm.MATRIX), 2000)
    assert only_matrix.size == 2000
    assert only_matrix.list is None
    assert only_matrix.mat.n > 0


def test_setup_rejects_empty_selection():
    with pytest.raises(ValueError):
        setup(0, 0, 0, 1, 8, 2000)


def test_setup_rejects_negative_size():
    with pytest.raises(ValueError):
        setup(0, 0, 0, 1, 0, -5)


def test_iterate_requires_list():
    res = setup(0, 0, 0, 1, int(Algorithm.MATRIX), 2000)
    with pytest.raises(ValueError):
        iterate(res)


def test_iterate_restores_data():
    res = setup(0x3415, 0x3415, 0x66, 2, 0, 2000)
    before_list = _snapshot(res)
    before_state = bytes(res.state)
    before_a = list(res.mat.a)
    iterate(res)
    assert _snapshot(res) == before_list
    assert bytes(res.state) == before_state
    assert res.mat.a == before_a


def test_crclist_depends_only_on_first_iteration():
    one = setup(0, 0, 0, 1, 0, 2000)
    two = setup(0, 0, 0, 2, 0, 2000)
    iterate(one)
    iterate(two)
    assert one.crclist == two.crclist
    assert one.crcmatrix == two.crcmatrix
    assert one.crcstate == two.crcstate


def test_check_results_reports_mismatch():
    res = setup(0, 0, 0, 1, 0, 2000)
    iterate(res)
    res.crclist ^= 0x1
    errors = check_results(res, 3)
    assert len(errors) == 1
    assert "list crc" in errors[0]
    assert res.err == 1


def test_check_results_ignores_disabled_algorithms():
    res = setup(0, 0, 0, 1, int(Algorithm.LIST), 2000)
    iterate(res)
    res.crcmatrix = 0
    res.crcstate = 0
    # Only the list CRC is checked; with a different size it cannot match.
    errors = check_results(res, 3)
    assert all("list crc" in message for message in errors)


def test_run_reports_known_performance_run():
    out = io.StringIO()
    errors = run(["0", "0", "0", "1"], out)
    text = out.getvalue()
    assert KNOWN_RUNS[3].label in text
    assert "seedcrc          : 0xe9f5" in text
    assert "[0]crclist       : 0xe714" in text
    assert "[0]crcmatrix     : 0x1fd7" in text
    assert "[0]crcstate      : 0x8e3a" in text
    assert "ERROR! Must execute for at least 10 secs" in text
    assert "Errors detected" in text
    assert errors == 1


def test_run_unknown_seeds_short_run():
    out = io.StringIO()
    errors = run(["5", "5", "80", "1"], out)
    text = out.getvalue()
    assert not any(known.label in text for known in KNOWN_RUNS)
    assert errors == 0
    assert "Correct operation validated" in text


def test_run_size_override_selects_6k_run():
    out = io.StringIO()
    run(["1", "0", "0", "1", "0", "0", "6000"], out)
    assert KNOWN_RUNS[1].label in out.getvalue()


def test_main_rejects_bad_mask(capsys):
    assert main(["0", "0", "0", "1", "8"]) == 1
    assert "no benchmark algorithm selected" in capsys.readouterr().err


def test_main_succeeds(capsys):
    assert main(["1", "0", "0", "1"]) == 0
    assert KNOWN_RUNS[4].label in capsys.readouterr().out