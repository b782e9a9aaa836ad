from __future__ import annotations

from affinity_chain.energies import affinity_table
from affinity_chain.structures.chain import Category, Chain


def calculate_energy(
    p_left: int, type_left: Category,
    p_middle: int, type_middle: Category,
    p_right: int, type_right: Category,
) -> int:
    """
    Pairwise energy of a middle element interacting with its two neighbours.

    The energy is the sum of the left bond and the right bond, each scaled
    by the directional affinity of the two categories involved::

        E = p_left * aff(type_left, type_middle) * p_middle
          + p_middle * aff(type_middle, type_right) * p_right

    Python integers are unbounded, so the triple products never wrap.

    Parameters
    ----------
    p_left, type_left : int, Category
        Potential and category of the left neighbour.
    p_middle, type_middle : int, Category
        Potential and category of the middle element.
    p_right, type_right : int, Category
        Potential and category of the right neighbour.

    Returns
    -------
    int
        The non-negative combined energy.
    """
    left_bond = p_left * affinity_table.get(type_left, type_middle) * p_middle
    right_bond = p_middle * affinity_table.get(type_middle, type_right) * p_right

    return left_bond + right_bond


def element_energy(chain: Chain, left: int, middle: int, right: int) -> int:
    """
    Energy of the element at `middle` bonded to the elements at `left` and `right`.

    Positions are padded chain positions, so 0 and `n + 1` address the
    sentinels.
    """
    potentials = chain.potentials
    categories = chain.categories
    return calculate_energy(
        potentials[left], categories[left],
        potentials[middle], categories[middle],
        potentials[right], categories[right],
    )
