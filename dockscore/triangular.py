"""Packed storage for symmetric matrices indexed by unordered pairs."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any


def triangular_matrix_index(n: int, i: int, j: int) -> int:
    """Return the packed index of cell (i, j) of an n-by-n upper triangle.

    Requires ``0 <= i <= j < n``.
    """
    if not 0 <= j < n:
        raise IndexError(f"column {j} out of range for dimension {n}")
    if not 0 <= i <= j:
        raise IndexError(f"row {i} must satisfy 0 <= row <= column ({j})")
    return i + j * (j + 1) // 2


def triangular_matrix_index_permissive(n: int, i: int, j: int) -> int:
    """Return the packed index of the unordered pair {i, j}."""
    if i <= j:
        return triangular_matrix_index(n, i, j)
    return triangular_matrix_index(n, j, i)


class TriangularMatrix:
    """A symmetric matrix that stores only the cells with row <= column.

    ``fill`` is either a value shared by every cell or a zero-argument
    callable that builds a fresh value for each cell.
    """

    def __init__(self, dim: int, fill: Any = None) -> None:
        if dim < 0:
            raise ValueError(f"dimension must be non-negative, got {dim}")
        self._dim = dim
        size = dim * (dim + 1) // 2
        if callable(fill):
            factory: Callable[[], Any] = fill
            self._cells = [factory() for _ in range(size)]
        else:
            self._cells = [fill] * size

    @property
    def dim(self) -> int:
        """Number of rows (and columns)."""
        return self._dim

    def _flat(self, key: int | tuple[int, int]) -> int:
        if isinstance(key, tuple):
            i, j = key
            return triangular_matrix_index(self._dim, i, j)
        if not 0 <= key < len(self._cells):
            raise IndexError(f"index {key} out of range")
        return key

    def __getitem__(self, key: int | tuple[int, int]) -> Any:
        return self._cells[self._flat(key)]

    def __setitem__(self, key: int | tuple[int, int], value: Any) -> None:
        self._cells[self._flat(key)] = value

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._cells)

    def index_permissive(self, i: int, j: int) -> int:
        """Packed index of the unordered pair {i, j}."""
        return triangular_matrix_index_permissive(self._dim, i, j)

    def pairs(self) -> Iterator[tuple[int, int]]:
        """Yield every stored (row, column) pair, row by row."""
        for i in range(self._dim):
            for j in range(i, self._dim):
                yield i, j