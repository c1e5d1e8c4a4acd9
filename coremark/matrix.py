"""Matrix benchmark: small integer matrix arithmetic folded into a CRC."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass, field

from coremark.crc import crc16

__all__ = [
    "MatrixParams",
    "init_matrix",
    "bench_matrix",
    "matrix_test",
    "matrix_sum",
    "matrix_mul_const",
    "matrix_add_const",
    "matrix_mul_vect",
    "matrix_mul_matrix",
    "matrix_mul_matrix_bitextract",
]


def _to_s16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def _to_s32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _c_mod(value: int, modulus: int) -> int:
    """Remainder that takes the sign of the dividend."""
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


def _bit_extract(value: int, start: int, width: int) -> int:
    return (value >> start) & ((1 << width) - 1)


@dataclass
class MatrixParams:
    """Square matrices of dimension ``n``: inputs ``a``, ``b`` and result ``c``.

    ``a`` and ``b`` hold signed 16-bit values, ``c`` signed 32-bit values,
    all stored row by row.
    """

    n: int
    a: list[int]
    b: list[int]
    c: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        size = self.n * self.n
        if len(self.a) != size or len(self.b) != size:
            raise ValueError("matrices a and b must hold n*n elements")
        if not self.c:
            self.c = [0] * size
        elif len(self.c) != size:
            raise ValueError("matrix c must hold n*n elements")


def init_matrix(blksize: int, seed: int) -> MatrixParams:
    """Create matrices sized to fit ``blksize`` bytes, filled from ``seed``."""
    seed = _to_s32(seed)
    if seed == 0:
        seed = 1
    i = 0
    used = 0
    while used < blksize:
        i += 1
        used = i * i * 2 * 4
    n = max(i - 1, 0)

    a: list[int] = []
    b: list[int] = []
    for order in range(1, n * n + 1):
        seed = _c_mod(order * seed, 65536)
        val = _to_s16(seed + order)
        b.append(val)
        a.append(_to_s16(val + order) & 0xFF)
    return MatrixParams(n=n, a=a, b=b)


def matrix_add_const(a: MutableSequence[int], val: int) -> None:
    """Add ``val`` to every element of ``a`` in place, wrapping to 16 bits."""
    for index, element in enumerate(a):
        a[index] = _to_s16(element + val)


def matrix_mul_const(n: int, a: Sequence[int], val: int) -> list[int]:
    """Return the ``n``x``n`` matrix ``a`` scaled by ``val``."""
    return [_to_s32(element * val) for element in a[: n * n]]


def matrix_mul_vect(n: int, a: Sequence[int], b: Sequence[int]) -> list[int]:
    """Return the product of ``a`` with the first ``n`` elements of ``b``."""
    vector = b[:n]
    return [
        _to_s32(sum(x * y for x, y in zip(a[row * n:(row + 1) * n], vector)))
        for row in range(n)
    ]


def matrix_mul_matrix(n: int, a: Sequence[int], b: Sequence[int]) -> list[int]:
    """Return the matrix product of ``a`` and ``b``."""
    rows = [a[r * n:(r + 1) * n] for r in range(n)]
    columns = [b[c:n * n:n] for c in range(n)]
    return [
        _to_s32(sum(x * y for x, y in zip(row, column)))
        for row in rows
        for column in columns
    ]


def matrix_mul_matrix_bitextract(
    n: int, a: Sequence[int], b: Sequence[int]
) -> list[int]:
    """Matrix product where each term contributes two bit fields multiplied."""
    rows = [a[r * n:(r + 1) * n] for r in range(n)]
    columns = [b[c:n * n:n] for c in range(n)]
    result = []
    for row in rows:
        for column in columns:
            total = 0
            for x, y in zip(row, column):
                product = _to_s32(x * y)
                total += _bit_extract(product, 2, 4) * _bit_extract(product, 5, 7)
            result.append(_to_s32(total))
    return result


def matrix_sum(n: int, c: Sequence[int], clipval: int) -> int:
    """Summarise ``c`` as a signed 16-bit value.

    Elements are accumulated; while the running sum stays at or below
    ``clipval`` each element larger than its predecessor adds 1, otherwise
    the accumulator is reset and 10 is added.
    """
    tmp = 0
    prev = 0
    ret = 0
    for cur in c[: n * n]:
        tmp = _to_s32(tmp + cur)
        if tmp > clipval:
            ret += 10
            tmp = 0
        elif cur > prev:
            ret += 1
        prev = cur
    return _to_s16(ret)


def matrix_test(params: MatrixParams, val: int) -> int:
    """Run the matrix operations and return a CRC of their summaries.

    Matrix ``a`` is temporarily offset by ``val`` and restored afterwards;
    ``c`` holds the last result.
    """
    n = params.n
    val = _to_s16(val)
    clipval = _to_s16(0xF000 | val)
    c = params.c
    crc = 0

    matrix_add_const(params.a, val)
    c[:] = matrix_mul_const(n, params.a, val)
    crc = crc16(matrix_sum(n, c, clipval), crc)
    c[:n] = matrix_mul_vect(n, params.a, params.b)
    crc = crc16(matrix_sum(n, c, clipval), crc)
    c[:] = matrix_mul_matrix(n, params.a, params.b)
    crc = crc16(matrix_sum(n, c, clipval), crc)
    c[:] = matrix_mul_matrix_bitextract(n, params.a, params.b)
    crc = crc16(matrix_sum(n, c, clipval), crc)
    matrix_add_const(params.a, -val)
    return _to_s16(crc)


def bench_matrix(params: MatrixParams, seed: int, crc: int) -> int:
    """Fold the result of one :func:`matrix_test` run into ``crc``."""
    return crc16(matrix_test(params, _to_s16(seed)), crc)