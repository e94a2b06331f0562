"""Unit cell geometry: basis vectors, atom positions and cell vertices."""

from .atoms import Atom, atom_positions_array, generate_atoms, iter_atoms, unit_cell_vertices
from .unit_cell import (
    UNIT_CELL_EDGES,
    cartesian_to_fractional,
    cell_volume,
    compute_basis_vectors,
    fractional_to_cartesian,
)

__all__ = [
    "Atom",
    "generate_atoms",
    "iter_atoms",
    "unit_cell_vertices",
    "atom_positions_array",
    "compute_basis_vectors",
    "cell_volume",
    "fractional_to_cartesian",
    "cartesian_to_fractional",
    "UNIT_CELL_EDGES",
]
