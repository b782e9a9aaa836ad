from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional
import time
import logging

import numpy as np
from tqdm import tqdm

from affinity_chain.energies.affinity_table import AFFINITY
from affinity_chain.energies.energy_ops import calculate_energy
from affinity_chain.folding.collapse_fold_state import CollapseFoldState, make_fold_state
from affinity_chain.folding.numba_kernels import fill_collapse_tables, fits_uint64
from affinity_chain.structures import Chain, ChainTriMatrix

logger = logging.getLogger(__name__)

Backend = Literal["python", "numba"]
BACKENDS = ("python", "numba")


@dataclass(slots=True)
class CollapseFoldingConfig:
    """
    Configuration settings for the chain-collapse DP.

    Attributes
    ----------
    verbose : bool
        If True, shows a progress bar over interval lengths.
    backend : {"python", "numba"}
        "python" runs the recurrence on unbounded Python ints. "numba" runs
        the compiled uint64 kernel, and falls back to "python" when the
        chain's worst-case total could overflow 64 bits.
    """
    verbose: bool = False
    backend: Backend = "python"


@dataclass(slots=True)
class CollapseFoldingEngine:
    """
    Fills the `dp` and `ks` tables of the interval collapse DP.

    For every interval `[i, j]` the engine tries each element `k` as the
    representative the interval collapses to. The sub-intervals `[i, k-1]`
    and `[k+1, j]` collapse first (their optimal totals are already in `dp`),
    then `k` bonds with the elements just outside the whole interval,
    `i - 1` and `j + 1`.

    Attributes
    ----------
    config : CollapseFoldingConfig
        A configuration object containing settings for the folding process.
    """
    config: CollapseFoldingConfig

    def fill_all_matrices(self, chain: Chain, state: CollapseFoldState) -> None:
        """
        Executes the full DP over `chain`, writing into `state`.

        Intervals are processed by increasing length, since every cell of
        length L reads only cells of length < L.

        Parameters
        ----------
        chain : Chain
            The sentinel-padded chain to collapse.
        state : CollapseFoldState
            Tables allocated for `chain.n` elements.
        """
        n = chain.n
        if state.n != n:
            raise ValueError(f"Fold state was allocated for n={state.n}, chain has n={n}")

        if n == 0:
            logger.info("Collapse DP: empty chain; nothing to fill.")
            return

        start_time = time.perf_counter()

        logger.info("=" * 60)
        logger.info(f"Collapse DP for chain length n={n}")
        logger.info(f"Expected complexity: O(n³) ≈ {n ** 3:,} operations")
        logger.info("=" * 60)

        backend = self.config.backend
        if backend == "numba" and not fits_uint64(n, max(chain.potentials)):
            logger.warning("Potentials too large for 64-bit accumulators; falling back to the python backend.")
            backend = "python"

        if backend == "numba":
            self._fill_numba(chain, state)
        elif backend == "python":
            self._fill_python(chain, state)
        else:
            raise ValueError(f"Unknown backend {backend!r}; expected one of {BACKENDS}")

        elapsed = time.perf_counter() - start_time
        logger.info(f"Collapse DP ({backend}) completed in {elapsed:.2f}s ({elapsed * 1000:.0f}ms)")
        logger.info(f"Final dp[1,{n}] = {state.dp_matrix.get(1, n)}")

    def _fill_python(self, chain: Chain, state: CollapseFoldState) -> None:
        """
        Pure-Python fill of both tables.
        """
        n = chain.n
        potentials = chain.potentials
        categories = chain.categories
        dp = state.dp_matrix
        ks = state.ks_matrix

        # Base case: a single element bonds with its true neighbours (sentinels at the edges).
        for i in range(1, n + 1):
            dp.set(i, i, calculate_energy(
                potentials[i - 1], categories[i - 1],
                potentials[i], categories[i],
                potentials[i + 1], categories[i + 1],
            ))
            ks.set(i, i, i)

        show_progress = self.config.verbose or logger.isEnabledFor(logging.INFO)
        length_iter = tqdm(range(2, n + 1), desc="Collapse DP", leave=True, disable=not show_progress)

        for length in length_iter:
            for i in range(1, n - length + 2):
                j = i + length - 1
                self._fill_cell(chain, i, j, state)

    @staticmethod
    def _fill_cell(chain: Chain, i: int, j: int, state: CollapseFoldState) -> None:
        """
        Fills a single cell `[i, j]` with `i < j`.

        Notes
        -----
        `dp[i, j] = max_k ( dp[i, k-1] + dp[k+1, j] + E(i-1, k, j+1) )`,
        where an empty side contributes 0. The running maximum uses `>=`, so
        among equal totals the largest `k` is recorded.
        """
        potentials = chain.potentials
        categories = chain.categories
        dp = state.dp_matrix

        p_out_left, t_out_left = potentials[i - 1], categories[i - 1]
        p_out_right, t_out_right = potentials[j + 1], categories[j + 1]

        max_energy = 0
        best_k = -1

        for k in range(i, j + 1):
            cost_left = 0 if k == i else dp.get(i, k - 1)
            cost_right = 0 if k == j else dp.get(k + 1, j)

            k_energy = calculate_energy(
                p_out_left, t_out_left,
                potentials[k], categories[k],
                p_out_right, t_out_right,
            )
            total = cost_left + cost_right + k_energy

            if total >= max_energy:
                max_energy = total
                best_k = k

        dp.set(i, j, max_energy)
        state.ks_matrix.set(i, j, best_k)

    def _fill_numba(self, chain: Chain, state: CollapseFoldState) -> None:
        """
        Runs the compiled kernel and copies its dense results into `state`.
        """
        n = chain.n
        potentials = np.asarray(chain.potentials, dtype=np.uint64)
        types = np.asarray([int(cat) for cat in chain.categories], dtype=np.int64)
        affinity = AFFINITY.astype(np.uint64)

        dp_dense, ks_dense = fill_collapse_tables(potentials, types, affinity, n)

        dp = ChainTriMatrix.from_dense(dp_dense, n)
        ks = ChainTriMatrix.from_dense(ks_dense, n)
        for i, j in dp.iter_upper_indices():
            state.dp_matrix.set(i, j, dp.get(i, j))
            state.ks_matrix.set(i, j, ks.get(i, j))


def max_energy(state: CollapseFoldState) -> int:
    """
    Returns `dp[1, n]`, the best total for the whole chain (0 for an empty chain).
    """
    if state.n == 0:
        return 0
    return state.dp_matrix.get(1, state.n)


def build_tables(chain: Chain, config: Optional[CollapseFoldingConfig] = None) -> CollapseFoldState:
    """
    Allocates a fold state for `chain` and fills it.

    Parameters
    ----------
    chain : Chain
        The sentinel-padded chain.
    config : CollapseFoldingConfig, optional
        Engine settings; defaults to the python backend without progress bar.

    Returns
    -------
    CollapseFoldState
        The filled `dp` and `ks` tables.
    """
    engine = CollapseFoldingEngine(config=config or CollapseFoldingConfig())
    state = make_fold_state(chain.n)
    engine.fill_all_matrices(chain, state)
    return state
