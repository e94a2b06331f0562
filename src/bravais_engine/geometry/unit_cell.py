"""
Unit cell geometry.

Converts lattice parameters (a, b, c, alpha, beta, gamma) into Cartesian
basis vectors using the general triclinic convention:
    - a₁ is along the x-axis
    - a₂ lies in the xy-plane
    - a₃ has components in all three directions

Units:
    Lengths share one caller-defined unit (typically Å).
    Angles are in degrees at the API boundary and converted to radians
    only inside the computation.
"""

import math
from typing import Mapping, Tuple

import numpy as np

from ..errors import DegenerateCell, UnknownParameter


# sin(pi) evaluates to ~1.2e-16, not zero
SIN_TOLERANCE = 1e-12

LENGTH_NAMES = ('a', 'b', 'c')
ANGLE_NAMES = ('alpha', 'beta', 'gamma')

# Vertex-index pairs for the 12 edges of a cell, using the vertex order
# returned by geometry.atoms.unit_cell_vertices
UNIT_CELL_EDGES: Tuple[Tuple[int, int], ...] = (
    (0, 1), (0, 2), (0, 4),   # from origin
    (1, 3), (1, 5),           # from a
    (2, 3), (2, 6),           # from b
    (3, 7),                   # from a+b
    (4, 5), (4, 6),           # from c
    (5, 7),                   # from a+c
    (6, 7),                   # from b+c
)


def _read(parameters: Mapping[str, float], name: str) -> float:
    try:
        value = parameters[name]
    except KeyError:
        raise UnknownParameter(name) from None
    return float(value)


def compute_basis_vectors(parameters: Mapping[str, float]) -> np.ndarray:
    """
    Compute the Cartesian basis vectors of a unit cell.

    Parameters
    ----------
    parameters : mapping
        Lattice parameters with keys a, b, c (lengths) and
        alpha, beta, gamma (degrees). alpha is the angle between b and c,
        beta between a and c, gamma between a and b.

    Returns
    -------
    np.ndarray
        3x3 matrix whose rows are the basis vectors a, b, c.

    Raises
    ------
    DegenerateCell
        If a length is not a positive finite number, an angle is outside
        (0°, 180°), gamma is numerically 0° or 180°, or the parameters
        admit no 3D cell.
    """
    a, b, c = (_read(parameters, name) for name in LENGTH_NAMES)
    alpha_deg, beta_deg, gamma_deg = (_read(parameters, name) for name in ANGLE_NAMES)

    for name, length in zip(LENGTH_NAMES, (a, b, c)):
        if not math.isfinite(length) or length <= 0:
            raise DegenerateCell(f"Edge length {name} must be a positive number, got {length}")
    for name, angle in zip(ANGLE_NAMES, (alpha_deg, beta_deg, gamma_deg)):
        if not 0 < angle < 180:
            raise DegenerateCell(f"Angle {name} must lie strictly between 0° and 180°, got {angle}")

    alpha = np.radians(alpha_deg)  # Angle between b and c
    beta = np.radians(beta_deg)    # Angle between a and c
    gamma = np.radians(gamma_deg)  # Angle between a and b

    sin_gamma = np.sin(gamma)
    if abs(sin_gamma) < SIN_TOLERANCE:
        raise DegenerateCell(f"gamma = {gamma_deg}° collapses a and b onto one line")

    a1 = np.array([a, 0.0, 0.0])
    a2 = np.array([b * np.cos(gamma), b * sin_gamma, 0.0])

    a3x = c * np.cos(beta)
    a3y = c * (np.cos(alpha) - np.cos(beta) * np.cos(gamma)) / sin_gamma
    a3z_sq = c**2 - a3x**2 - a3y**2
    if a3z_sq < 0:
        raise DegenerateCell(
            f"No unit cell exists for alpha={alpha_deg}°, beta={beta_deg}°, "
            f"gamma={gamma_deg}°"
        )
    a3 = np.array([a3x, a3y, np.sqrt(a3z_sq)])

    return np.array([a1, a2, a3])


def cell_volume(basis: np.ndarray) -> float:
    """Unit cell volume, |det(basis)|."""
    return float(np.abs(np.linalg.det(np.asarray(basis, dtype=np.float64))))


def fractional_to_cartesian(fractional: np.ndarray, basis: np.ndarray) -> np.ndarray:
    """
    Convert fractional to Cartesian coordinates.

    Accepts shape (3,) or (N, 3) and returns the same shape.
    """
    fractional = np.asarray(fractional, dtype=np.float64)
    return fractional @ np.asarray(basis, dtype=np.float64)


def cartesian_to_fractional(cartesian: np.ndarray, basis: np.ndarray) -> np.ndarray:
    """
    Convert Cartesian to fractional coordinates.

    Raises DegenerateCell if the basis is singular.
    """
    cartesian = np.asarray(cartesian, dtype=np.float64)
    try:
        inverse_basis = np.linalg.inv(np.asarray(basis, dtype=np.float64))
    except np.linalg.LinAlgError:
        raise DegenerateCell("Basis vectors are linearly dependent") from None
    return cartesian @ inverse_basis
