from affinity_chain.structures import Category, Chain, make_chain
from affinity_chain.folding import build_tables, max_energy, traceback_postorder

__version__ = "0.1.0"

__all__ = [
    "Category",
    "Chain",
    "build_tables",
    "make_chain",
    "max_energy",
    "traceback_postorder",
]
