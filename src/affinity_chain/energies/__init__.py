from affinity_chain.energies.affinity_table import AFFINITY
from affinity_chain.energies.energy_ops import calculate_energy, element_energy

__all__ = [
    "AFFINITY",
    "calculate_energy",
    "element_energy",
]
