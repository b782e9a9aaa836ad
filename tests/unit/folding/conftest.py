"""
Shared fixtures for the folding tests.
"""
from functools import lru_cache
import random

import pytest

from affinity_chain.energies import element_energy
from affinity_chain.structures import Category, make_chain


@pytest.fixture
def pna_chain():
    """The three-element chain P2 N1 A3 used throughout the worked example."""
    return make_chain([2, 1, 3], "PNA")


@pytest.fixture
def random_chains():
    """A reproducible batch of small random chains, including n = 0 and n = 1."""
    rng = random.Random(1234)
    chains = [make_chain([], []), make_chain([7], "B")]
    for n in range(2, 9):
        for _ in range(4):
            potentials = [rng.randint(0, 9) for _ in range(n)]
            categories = rng.choices(list(Category), k=n)
            chains.append(make_chain(potentials, categories))
    return chains


@pytest.fixture
def reference_best():
    """
    Top-down memoized reference for the best total of an interval.

    Written independently of the engine: it enumerates every representative
    `k` recursively and keeps the plain maximum (no tie-break needed for values).
    """
    def solve(chain):
        @lru_cache(maxsize=None)
        def best(i, j):
            if i > j:
                return 0
            return max(
                best(i, k - 1) + best(k + 1, j) + element_energy(chain, i - 1, k, j + 1)
                for k in range(i, j + 1)
            )
        return best
    return solve
