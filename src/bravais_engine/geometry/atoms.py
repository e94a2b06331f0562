"""
Atom and vertex generation across a grid of unit cells.

Fractional atom positions are expanded into absolute Cartesian coordinates
for every cell (i, j, k) with 0 <= i, j, k < repeats.
"""

import numbers
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from ..errors import InvalidRepeatCount


@dataclass(frozen=True)
class Atom:
    """An atom at an absolute position, tagged with the cell it belongs to."""
    position: Tuple[float, float, float]
    unit_cell: Tuple[int, int, int]


def _check_repeats(repeats) -> int:
    if isinstance(repeats, bool) or not isinstance(repeats, numbers.Integral):
        raise InvalidRepeatCount(f"Repeat count must be an integer, got {repeats!r}")
    if repeats < 0:
        raise InvalidRepeatCount(f"Repeat count must be >= 0, got {repeats}")
    return int(repeats)


def iter_atoms(basis: np.ndarray,
               atom_positions: Sequence[Sequence[float]],
               repeats: int = 1) -> Iterator[Atom]:
    """
    Lazily yield atoms for a repeats x repeats x repeats block of cells.

    Cells are visited with i outermost and k innermost; within a cell,
    atoms follow the order of atom_positions.
    """
    repeats = _check_repeats(repeats)
    a1, a2, a3 = np.asarray(basis, dtype=np.float64)
    fractions = [tuple(float(x) for x in frac) for frac in atom_positions]

    for i in range(repeats):
        for j in range(repeats):
            for k in range(repeats):
                # Origin of this unit cell
                base = i * a1 + j * a2 + k * a3

                for rel_x, rel_y, rel_z in fractions:
                    cart_pos = base + rel_x * a1 + rel_y * a2 + rel_z * a3
                    yield Atom(
                        position=(float(cart_pos[0]), float(cart_pos[1]), float(cart_pos[2])),
                        unit_cell=(i, j, k),
                    )


def generate_atoms(basis: np.ndarray,
                   atom_positions: Sequence[Sequence[float]],
                   repeats: int = 1) -> List[Atom]:
    """
    Generate atom positions in Cartesian coordinates.

    Parameters
    ----------
    basis : np.ndarray
        3x3 matrix of basis vectors (rows a, b, c).
    atom_positions : sequence of (x, y, z)
        Fractional coordinates of the atoms in one cell.
    repeats : int, optional
        Number of unit cells along each axis. 0 gives no atoms.

    Returns
    -------
    list of Atom
        repeats³ × len(atom_positions) atoms in (i, j, k, site) order.

    Raises
    ------
    InvalidRepeatCount
        If repeats is negative or not an integer.
    """
    # Validate eagerly; iter_atoms alone would defer the error to iteration
    _check_repeats(repeats)
    return list(iter_atoms(basis, atom_positions, repeats))


def unit_cell_vertices(basis: np.ndarray,
                       cell_index: Tuple[int, int, int] = (0, 0, 0)) -> np.ndarray:
    """
    Return the 8 corners of a unit cell.

    Order: origin, a, b, a+b, c, a+c, b+c, a+b+c, each offset by
    i·a + j·b + k·c for cell_index (i, j, k). Edge drawing relies on this
    order (see geometry.unit_cell.UNIT_CELL_EDGES).

    Returns
    -------
    np.ndarray
        Array of shape (8, 3).
    """
    a1, a2, a3 = np.asarray(basis, dtype=np.float64)
    i, j, k = cell_index
    base = i * a1 + j * a2 + k * a3

    return np.array([
        base,
        base + a1,
        base + a2,
        base + a1 + a2,
        base + a3,
        base + a1 + a3,
        base + a2 + a3,
        base + a1 + a2 + a3,
    ])


def atom_positions_array(atoms: Sequence[Atom]) -> np.ndarray:
    """Stack atom positions into an (N, 3) array."""
    if not atoms:
        return np.zeros((0, 3))
    return np.array([atom.position for atom in atoms], dtype=np.float64)
