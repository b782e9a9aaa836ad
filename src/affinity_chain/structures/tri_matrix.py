from __future__ import annotations

import numpy as np

from typing import Generic, TypeVar, List, Tuple, Iterator

Interval = Tuple[int, int]

T = TypeVar("T")


class ChainTriMatrix(Generic[T]):
    """
    An upper-triangular table indexed by chain intervals `[i, j]`.

    Only cells with `1 <= i <= j <= n` are stored; the sentinel positions 0
    and `n + 1` never start or end an interval, so they get no rows. Row
    `i` is kept as a list of `n - i + 1` cells, which keeps the footprint at
    roughly half of a dense square table.
    """
    __slots__ = ("_chain_len", "_rows")

    def __init__(self, chain_len: int, fill: T):
        self._chain_len = chain_len
        self._rows: List[List[T]] = [[fill for _ in range(chain_len - i)] for i in range(chain_len)]

    @property
    def size(self) -> int:
        """Returns the chain length n that defines the matrix dimensions."""
        return self._chain_len

    @property
    def shape(self) -> Tuple[int, int]:
        """Returns the matrix shape as a tuple `(n, n)`."""
        return self._chain_len, self._chain_len

    def _offset(self, i: int, j: int) -> int:
        """Calculates the column offset within a row and validates indices."""
        if i < 1 or j > self._chain_len or j < i:
            raise IndexError(f"ChainTriMatrix invalid interval: (i={i}, j={j}) for n={self._chain_len}")
        return j - i

    def get(self, i: int, j: int) -> T:
        """
        Retrieves the value stored for interval `[i, j]`.

        Parameters
        ----------
        i : int
            Left end of the interval (1-based).
        j : int
            Right end of the interval (1-based, `j >= i`).

        Returns
        -------
        T
            The value stored at the specified cell.
        """
        return self._rows[i - 1][self._offset(i, j)]

    def set(self, i: int, j: int, value: T) -> None:
        """
        Stores `value` for interval `[i, j]`.

        Parameters
        ----------
        i : int
            Left end of the interval (1-based).
        j : int
            Right end of the interval (1-based, `j >= i`).
        value : T
            The value to store in the cell.
        """
        self._rows[i - 1][self._offset(i, j)] = value

    def iter_upper_indices(self) -> Iterator[Interval]:
        """
        Yields every valid `(i, j)` interval in row-major order.

        Yields
        ------
        Iterator[Tuple[int, int]]
            An iterator over the `(i, j)` index tuples with `1 <= i <= j <= n`.
        """
        n = self._chain_len
        for i in range(1, n + 1):
            for j in range(i, n + 1):
                yield i, j

    @classmethod
    def from_dense(cls, dense: np.ndarray, chain_len: int) -> "ChainTriMatrix[int]":
        """
        Copies the upper triangle of a dense, sentinel-padded array.

        The array is expected to have shape `(n + 2, n + 2)` with interval
        `[i, j]` stored at `dense[i, j]`, as produced by the compiled fill
        kernel. Numpy scalars are converted to Python ints.

        Parameters
        ----------
        dense : np.ndarray
            Dense table indexed by padded chain positions.
        chain_len : int
            The chain length n.

        Returns
        -------
        ChainTriMatrix[int]
            A new triangular table holding the same interval values.
        """
        if dense.shape[0] < chain_len + 1 or dense.shape[1] < chain_len + 1:
            raise ValueError(f"Dense table of shape {dense.shape} is too small for n={chain_len}")

        tri = cls(chain_len, 0)
        for i in range(1, chain_len + 1):
            tri._rows[i - 1] = [int(v) for v in dense[i, i:chain_len + 1]]
        return tri
