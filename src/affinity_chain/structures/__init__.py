from affinity_chain.structures.chain import Category, Chain, make_chain
from affinity_chain.structures.tri_matrix import ChainTriMatrix

__all__ = [
    "Category",
    "Chain",
    "ChainTriMatrix",
    "make_chain",
]
