from __future__ import annotations
from typing import Final

import numpy as np

from affinity_chain.structures.chain import Category

__all__ = ["AFFINITY", "NUM_CATEGORIES", "get"]

NUM_CATEGORIES: Final[int] = len(Category)

# Row = first category, column = second category, both in Category order.
# The table is directional: AFFINITY[N, P] = 5 while AFFINITY[P, N] = 3.
AFFINITY: Final[np.ndarray] = np.array(
    [
        #  P  N  A  B  T
        [1, 3, 1, 3, 1],  # P
        [5, 1, 0, 1, 1],  # N
        [0, 1, 0, 4, 1],  # A
        [1, 3, 2, 3, 1],  # B
        [1, 1, 1, 1, 1],  # T
    ],
    dtype=np.int64,
)
AFFINITY.flags.writeable = False

# Plain-int mirror so hot loops avoid numpy scalar arithmetic.
_AFFINITY_ROWS: Final[tuple] = tuple(tuple(int(v) for v in row) for row in AFFINITY)


def get(category_a: Category, category_b: Category) -> int:
    """
    Looks up the directional affinity score of `category_a` next to `category_b`.

    Parameters
    ----------
    category_a : Category
        Category of the left element of the ordered pair.
    category_b : Category
        Category of the right element of the ordered pair.

    Returns
    -------
    int
        The non-negative affinity score.
    """
    return _AFFINITY_ROWS[category_a][category_b]
