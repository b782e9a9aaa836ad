from __future__ import annotations
from dataclasses import dataclass

from affinity_chain.structures import ChainTriMatrix


@dataclass(frozen=True, slots=True)
class CollapseFoldState:
    """
    Holds the two DP tables of the chain-collapse algorithm.

    Attributes
    ----------
    dp_matrix : ChainTriMatrix[int]
        `dp[i, j]` is the maximum total energy obtainable inside interval
        `[i, j]` when the elements at `i - 1` and `j + 1` stay fixed.
    ks_matrix : ChainTriMatrix[int]
        `ks[i, j]` is the representative index `k` (with `i <= k <= j`)
        that realizes `dp[i, j]`. Read by the traceback.
    """
    dp_matrix: ChainTriMatrix[int]
    ks_matrix: ChainTriMatrix[int]

    @property
    def n(self) -> int:
        """The chain length both tables were allocated for."""
        return self.dp_matrix.size


def make_fold_state(chain_len: int) -> CollapseFoldState:
    """
    Allocates zero-filled `dp` and `ks` tables for a chain of `chain_len` elements.

    Parameters
    ----------
    chain_len : int
        The number of real elements n. Zero yields empty tables.

    Returns
    -------
    CollapseFoldState
        A new state object ready to be filled by the folding engine.
    """
    return CollapseFoldState(
        dp_matrix=ChainTriMatrix[int](chain_len, 0),
        ks_matrix=ChainTriMatrix[int](chain_len, 0),
    )
