import pytest

from dockscore.triangular import (
    TriangularMatrix,
    triangular_matrix_index,
    triangular_matrix_index_permissive,
)


@pytest.mark.parametrize("n", [1, 2, 5, 9])
def test_indices_cover_packed_range_exactly(n):
    indices = [triangular_matrix_index(n, i, j) for j in range(n) for i in range(j + 1)]
    assert sorted(indices) == list(range(n * (n + 1) // 2))


def test_first_cell_is_zero():
    assert triangular_matrix_index(4, 0, 0) == 0


@pytest.mark.parametrize("i,j", [(0, 3), (2, 1), (1, 1), (3, 0)])
def test_permissive_is_symmetric(i, j):
    assert triangular_matrix_index_permissive(4, i, j) == triangular_matrix_index_permissive(4, j, i)


def test_strict_index_rejects_lower_triangle():
    with pytest.raises(IndexError):
        triangular_matrix_index(4, 2, 1)


def test_strict_index_rejects_out_of_range_column():
    with pytest.raises(IndexError):
        triangular_matrix_index(3, 0, 3)


def test_matrix_set_and_get_by_pair_and_flat_index():
    m = TriangularMatrix(3, 0)
    m[1, 2] = "x"
    assert m[1, 2] == "x"
    assert m[m.index_permissive(2, 1)] == "x"


def test_matrix_len_and_dim():
    m = TriangularMatrix(4, 0.0)
    assert len(m) == 4 * 5 // 2
    assert m.dim == 4
    assert list(m) == [0.0] * len(m)


def test_factory_fill_gives_distinct_cells():
    m = TriangularMatrix(3, list)
    m[0, 0].append(1)
    assert m[0, 1] == []
    assert m[0, 0] == [1]


def test_pairs_order_and_count():
    m = TriangularMatrix(3)
    pairs = list(m.pairs())
    assert pairs == [(0, 0), (0, 1), (0, 2), (1, 1), (1, 2), (2, 2)]
    assert len(pairs) == len(m)


def test_matrix_rejects_lower_pair():
    m = TriangularMatrix(3, 0)
    m[0, 2] = 7
    with pytest.raises(IndexError):
        m[2, 0]
    assert m[0, 2] == 7


def test_matrix_rejects_bad_flat_index():
    m = TriangularMatrix(3, 0)
    m[len(m) - 1] = 5
    with pytest.raises(IndexError):
        m[len(m)]
    assert m[2, 2] == 5


def test_negative_dimension_rejected():
    with pytest.raises(ValueError):
        TriangularMatrix(-1)