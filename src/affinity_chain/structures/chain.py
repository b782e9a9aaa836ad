from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Final, Sequence, Tuple, Union

__all__ = ["Category", "Chain", "make_chain", "SENTINEL_POTENTIAL", "SENTINEL_CATEGORY"]


class Category(IntEnum):
    """
    The closed set of element categories.

    The integer value of each member is its row/column index in the affinity
    table, so members can be used directly as table coordinates.

    P, N, A, B : Ordinary element categories.
    T          : Terminal category, also used by the two boundary sentinels.
    """
    P = 0
    N = 1
    A = 2
    B = 3
    T = 4

    @classmethod
    def from_symbol(cls, symbol: str) -> "Category":
        """
        Maps a single uppercase letter to its `Category`.

        Raises
        ------
        ValueError
            If `symbol` is not one of P, N, A, B, T (case-sensitive).
        """
        try:
            return cls[symbol]
        except KeyError:
            raise ValueError(f"Unknown category symbol {symbol!r}; expected one of P, N, A, B, T.") from None


SENTINEL_POTENTIAL: Final[int] = 1
SENTINEL_CATEGORY: Final[Category] = Category.T

CategoryLike = Union[Category, str]


@dataclass(frozen=True, slots=True)
class Chain:
    """
    A linear chain of weighted, typed elements padded with two sentinels.

    Position 0 and position `n + 1` hold the boundary sentinels (category `T`,
    potential 1). The real elements occupy positions 1..n, matching the
    1-based interval coordinates used by the DP tables.

    Attributes
    ----------
    potentials : Tuple[int, ...]
        Non-negative element weights, length `n + 2`.
    categories : Tuple[Category, ...]
        Element categories, length `n + 2`.
    """
    potentials: Tuple[int, ...]
    categories: Tuple[Category, ...]

    @property
    def n(self) -> int:
        """Number of real (non-sentinel) elements."""
        return len(self.potentials) - 2

    def element(self, pos: int) -> Tuple[int, Category]:
        """Returns `(potential, category)` for padded position `pos`."""
        return self.potentials[pos], self.categories[pos]

    def symbols(self) -> str:
        """Category letters of the real elements, e.g. ``"PNA"``."""
        return "".join(cat.name for cat in self.categories[1:-1])


def make_chain(potentials: Sequence[int], categories: Sequence[CategoryLike]) -> Chain:
    """
    Builds a sentinel-padded `Chain` from the real elements.

    Parameters
    ----------
    potentials : Sequence[int]
        One non-negative integer weight per element.
    categories : Sequence[Category | str]
        One category per element, either a `Category` member or its letter.
        A plain string such as ``"PNA"`` is accepted as a sequence of letters.

    Returns
    -------
    Chain
        The padded chain with sentinels at positions 0 and n+1.

    Raises
    ------
    ValueError
        If the lengths differ, a potential is negative or not an integer, or
        a category letter is unknown.
    """
    if len(potentials) != len(categories):
        raise ValueError(
            f"Got {len(potentials)} potentials but {len(categories)} categories; lengths must match."
        )

    padded_potentials = [SENTINEL_POTENTIAL]
    for pos, value in enumerate(potentials, start=1):
        # bool is an int subclass but never a meaningful weight.
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Potential at position {pos} must be an integer, got {value!r}.")
        if value < 0:
            raise ValueError(f"Potential at position {pos} must be non-negative, got {value}.")
        padded_potentials.append(int(value))
    padded_potentials.append(SENTINEL_POTENTIAL)

    padded_categories = [SENTINEL_CATEGORY]
    for cat in categories:
        padded_categories.append(cat if isinstance(cat, Category) else Category.from_symbol(cat))
    padded_categories.append(SENTINEL_CATEGORY)

    return Chain(potentials=tuple(padded_potentials), categories=tuple(padded_categories))
