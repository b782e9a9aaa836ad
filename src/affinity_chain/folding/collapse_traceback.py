from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple
import logging

from affinity_chain.folding.collapse_fold_state import CollapseFoldState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CollapseTrace:
    """
    The reconstructed collapse order.

    Attributes
    ----------
    order : List[int]
        Representative indices in post-order: for every interval, the
        representatives of its left part, then of its right part, then its
        own representative. Covers each index of the traced interval once.
    """
    order: List[int]

    def as_line(self) -> str:
        """Space-separated indices, e.g. ``"2 1 3"``; empty for an empty trace."""
        return " ".join(str(k) for k in self.order)


@dataclass(slots=True)
class _Frame:
    """
    One pending interval on the traceback stack.

    `visited` is False while the children still have to be pushed and True
    once they have been, at which point popping the frame emits its `k`.
    """
    i: int
    j: int
    visited: bool = False


def traceback_postorder(state: CollapseFoldState) -> CollapseTrace:
    """
    Reconstructs the collapse order of the whole chain `[1, n]`.

    Parameters
    ----------
    state : CollapseFoldState
        Filled DP tables.

    Returns
    -------
    CollapseTrace
        The post-order sequence of representatives, of length n.
    """
    if state.n == 0:
        return CollapseTrace(order=[])
    return _traceback_core(state, seed=(1, state.n))


def traceback_interval(state: CollapseFoldState, i: int, j: int) -> CollapseTrace:
    """
    Reconstructs the collapse order restricted to interval `[i, j]`.

    Parameters
    ----------
    state : CollapseFoldState
        Filled DP tables.
    i : int
        Left end of the interval (1-based).
    j : int
        Right end of the interval (1-based).

    Returns
    -------
    CollapseTrace
        The post-order sequence of representatives inside `[i, j]`; empty if `i > j`.
    """
    return _traceback_core(state, seed=(i, j))


def _traceback_core(state: CollapseFoldState, seed: Tuple[int, int]) -> CollapseTrace:
    """
    Stack-based post-order walk over the `ks` backpointers.

    Each frame goes through two phases. On first sight it looks up `k`,
    flips to visited and pushes its right child then its left child, so the
    left child is popped first. On second sight both children are done, so
    `k` is emitted and the frame is dropped. The walk never recurses, so its
    depth is bounded by memory rather than the interpreter's stack.
    """
    ks = state.ks_matrix
    order: List[int] = []
    stack: List[_Frame] = [_Frame(*seed)]

    while stack:
        frame = stack[-1]
        i, j = frame.i, frame.j

        # Empty interval: nothing to emit.
        if i > j:
            stack.pop()
            continue

        k = ks.get(i, j)
        if not i <= k <= j:
            raise ValueError(f"Corrupt choice table: ks[{i},{j}] = {k} lies outside the interval")

        if frame.visited:
            order.append(k)
            stack.pop()
        else:
            frame.visited = True
            if k < j:
                stack.append(_Frame(k + 1, j))
            if i < k:
                stack.append(_Frame(i, k - 1))

    logger.debug(f"Traceback of [{seed[0]},{seed[1]}] emitted {len(order)} representatives")
    return CollapseTrace(order=order)
