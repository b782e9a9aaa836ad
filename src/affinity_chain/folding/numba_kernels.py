import numpy as np
import numba as nb

# Largest value a uint64 accumulator can hold.
UINT64_MAX = int(np.iinfo(np.uint64).max)

# Largest entry of the affinity table; bounds every bond term.
MAX_AFFINITY = 5


def fits_uint64(chain_len: int, max_potential: int) -> bool:
    """
    Checks whether every DP total of a chain is guaranteed to fit in uint64.

    Each interval total is a sum of at most `n` element energies and each
    element energy is two bonds of at most `MAX_AFFINITY * p_max**2`, so
    `n * 2 * MAX_AFFINITY * p_max**2` bounds every cell of the table.
    """
    bound_potential = max(max_potential, 1)
    worst_total = max(chain_len, 1) * 2 * MAX_AFFINITY * bound_potential * bound_potential
    return worst_total <= UINT64_MAX


@nb.njit(cache=False)
def _bond_energy(potentials, types, affinity, left, mid, right):
    """
    Energy of element `mid` bonded to `left` and `right` (uint64 arithmetic).
    """
    term_left = potentials[left] * affinity[types[left], types[mid]] * potentials[mid]
    term_right = potentials[mid] * affinity[types[mid], types[right]] * potentials[right]
    return term_left + term_right


@nb.njit(cache=False)
def fill_collapse_tables(potentials, types, affinity, n):
    """
    Fills the dense `dp` and `ks` tables for a padded chain.

    This is the compiled counterpart of the Python recurrence. All energy
    arithmetic stays in uint64, so callers must check `fits_uint64` first.

    Parameters
    ----------
    potentials : np.ndarray
        uint64 array of length `n + 2`, sentinels included.
    types : np.ndarray
        int64 array of category codes, length `n + 2`.
    affinity : np.ndarray
        uint64 `(5, 5)` affinity table.
    n : int
        Number of real elements.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        `dp` (uint64) and `ks` (int64), both of shape `(n + 2, n + 2)` and
        indexed by padded chain positions.
    """
    dim = n + 2
    dp = np.zeros((dim, dim), dtype=np.uint64)
    ks = np.zeros((dim, dim), dtype=np.int64)
    zero = np.uint64(0)

    # Single-element intervals use the true neighbours.
    for i in range(1, n + 1):
        dp[i, i] = _bond_energy(potentials, types, affinity, i - 1, i, i + 1)
        ks[i, i] = i

    for length in range(2, n + 1):
        for i in range(1, n - length + 2):
            j = i + length - 1

            max_energy = zero
            best_k = -1

            for k in range(i, j + 1):
                if k == i:
                    cost_left = zero
                else:
                    cost_left = dp[i, k - 1]

                if k == j:
                    cost_right = zero
                else:
                    cost_right = dp[k + 1, j]

                k_energy = _bond_energy(potentials, types, affinity, i - 1, k, j + 1)
                total = cost_left + cost_right + k_energy

                # Non-strict: later (larger) k wins ties.
                if total >= max_energy:
                    max_energy = total
                    best_k = k

            dp[i, j] = max_energy
            ks[i, j] = best_k

    return dp, ks
