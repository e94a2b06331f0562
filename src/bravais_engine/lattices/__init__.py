"""Lattice type catalog, parameter constraints and the UI-facing lattice model."""

from .bravais import BravaisLattice, LatticeRenderData, LatticeState, OperationResult
from .catalog import (
    LatticeCatalog,
    LatticeKind,
    LatticeTypeDescriptor,
    ParameterConstraint,
    get_catalog,
    lattice_types_by_system,
    load_catalog,
    lookup,
)
from .constraints import PARAMETER_NAMES, load_defaults, set_parameter

__all__ = [
    "BravaisLattice",
    "LatticeRenderData",
    "LatticeState",
    "OperationResult",
    "LatticeCatalog",
    "LatticeKind",
    "LatticeTypeDescriptor",
    "ParameterConstraint",
    "get_catalog",
    "lattice_types_by_system",
    "load_catalog",
    "lookup",
    "PARAMETER_NAMES",
    "load_defaults",
    "set_parameter",
]
