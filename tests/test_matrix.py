import pytest

from coremark.crc import crc16
from coremark.matrix import (
    MatrixParams,
    bench_matrix,
    init_matrix,
    matrix_add_const,
    matrix_mul_const,
    matrix_mul_matrix,
    matrix_mul_matrix_bitextract,
    matrix_mul_vect,
    matrix_sum,
    matrix_test,
)


def _identity(n):
    return [1 if r == c else 0 for r in range(n) for c in range(n)]


@pytest.mark.parametrize("blksize", [1, 8, 9, 100, 666, 2000])
def test_init_matrix_dimension_fits_block(blksize):
    params = init_matrix(blksize, 0x3415)
    n = params.n
    assert 8 * n * n < blksize <= 8 * (n + 1) * (n + 1)
    assert len(params.a) == len(params.b) == len(params.c) == n * n


def test_init_matrix_values_in_range():
    params = init_matrix(666, 0x34153415)
    assert all(0 <= x <= 0xFF for x in params.a)
    assert all(-0x8000 <= x <= 0x7FFF for x in params.b)


def test_init_matrix_zero_seed_behaves_like_one():
    assert init_matrix(400, 0) == init_matrix(400, 1)


def test_init_matrix_depends_on_seed():
    assert init_matrix(400, 5).b != init_matrix(400, 6).b


def test_matrix_params_rejects_wrong_size():
    with pytest.raises(ValueError):
        MatrixParams(n=2, a=[1, 2, 3], b=[1, 2, 3, 4])


def test_add_const_wraps_and_restores():
    a = [32767, -32768, 0, 5]
    original = list(a)
    matrix_add_const(a, 1)
    assert a[0] == -32768
    matrix_add_const(a, -1)
    assert a == original


def test_mul_const_by_one_and_zero():
    a = [3, -4, 7, 100]
    assert matrix_mul_const(2, a, 1) == a
    assert matrix_mul_const(2, a, 0) == [0, 0, 0, 0]


def test_mul_vect_with_unit_vector_selects_first_column():
    n = 3
    a = list(range(1, 10))
    b = [1, 0, 0] + [0] * 6
    assert matrix_mul_vect(n, a, b) == a[0:9:3]


def test_mul_matrix_identity():
    n = 4
    a = [x - 8 for x in range(16)]
    assert matrix_mul_matrix(n, a, _identity(n)) == a
    assert matrix_mul_matrix(n, _identity(n), a) == a


def test_bitextract_zero_matrix():
    n = 3
    a = list(range(9))
    assert matrix_mul_matrix_bitextract(n, a, [0] * 9) == [0] * 9


def test_bitextract_single_element():
    assert matrix_mul_matrix_bitextract(1, [36], [1]) == [9]


def test_matrix_sum_zero_matrix():
    assert matrix_sum(3, [0] * 9, 100) == 0


def test_matrix_sum_negative_clip_resets_every_element():
    assert matrix_sum(2, [0] * 4, -1) == 40


def test_matrix_test_restores_a():
    params = init_matrix(666, 0)
    original_a = list(params.a)
    original_b = list(params.b)
    matrix_test(params, 0x22)
    assert params.a == original_a
    assert params.b == original_b


def test_matrix_test_is_repeatable():
    params = init_matrix(666, 0x3415)
    first = matrix_test(params, 0x33)
    second = matrix_test(params, 0x33)
    assert first == second
    assert -0x8000 <= first <= 0x7FFF


def test_bench_matrix_folds_matrix_test_result():
    params = init_matrix(666, 7)
    other = init_matrix(666, 7)
    expected = crc16(matrix_test(other, 0x55), 0x1234)
    assert bench_matrix(params, 0x55, 0x1234) == expected