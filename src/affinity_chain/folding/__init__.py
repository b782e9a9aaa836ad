from affinity_chain.folding.collapse_fold_state import CollapseFoldState, make_fold_state
from affinity_chain.folding.collapse_recurrences import (
    CollapseFoldingConfig,
    CollapseFoldingEngine,
    build_tables,
    max_energy,
)
from affinity_chain.folding.collapse_traceback import CollapseTrace, traceback_interval, traceback_postorder

__all__ = [
    "CollapseFoldState",
    "CollapseFoldingConfig",
    "CollapseFoldingEngine",
    "CollapseTrace",
    "build_tables",
    "make_fold_state",
    "max_energy",
    "traceback_interval",
    "traceback_postorder",
]
