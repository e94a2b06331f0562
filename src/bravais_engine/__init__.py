"""
Bravais Engine - lattice geometry for the 14 Bravais lattices.

Select a lattice type, adjust its parameters under the type's symmetry
constraints, and obtain unit cell basis vectors and atom coordinates for
rendering.

Example:
    >>> from bravais_engine import BravaisLattice
    >>>
    >>> lattice = BravaisLattice('hexagonal')
    >>> lattice.set_parameter('a', 2.46).ok
    True
    >>> result = lattice.generate_lattice(repeats=2)
    >>> len(result.value.atoms)
    24

    >>> # Pure functions, no held state
    >>> from bravais_engine import compute_basis_vectors, generate_atoms, lookup
    >>> desc = lookup('body-centered-cubic')
    >>> basis = compute_basis_vectors(desc.default_parameters)
    >>> atoms = generate_atoms(basis, desc.atom_positions, repeats=1)
"""

__version__ = "1.0.0"

# Errors
from .errors import (
    CatalogError,
    DegenerateCell,
    InvalidParameterValue,
    InvalidRepeatCount,
    LatticeError,
    LatticeTypeNotFound,
    UnknownParameter,
)

# Geometry
from .geometry import (
    UNIT_CELL_EDGES,
    Atom,
    atom_positions_array,
    cartesian_to_fractional,
    cell_volume,
    compute_basis_vectors,
    fractional_to_cartesian,
    generate_atoms,
    unit_cell_vertices,
)

# Catalog, constraints and lattice model
from .lattices import (
    PARAMETER_NAMES,
    BravaisLattice,
    LatticeCatalog,
    LatticeKind,
    LatticeRenderData,
    LatticeState,
    LatticeTypeDescriptor,
    OperationResult,
    get_catalog,
    lattice_types_by_system,
    load_catalog,
    load_defaults,
    lookup,
    set_parameter,
)

__all__ = [
    # Version
    "__version__",
    # Lattice model
    "BravaisLattice",
    "LatticeState",
    "LatticeRenderData",
    "OperationResult",
    # Catalog
    "LatticeCatalog",
    "LatticeKind",
    "LatticeTypeDescriptor",
    "get_catalog",
    "load_catalog",
    "lookup",
    "lattice_types_by_system",
    # Constraints
    "PARAMETER_NAMES",
    "load_defaults",
    "set_parameter",
    # Geometry
    "Atom",
    "compute_basis_vectors",
    "generate_atoms",
    "unit_cell_vertices",
    "atom_positions_array",
    "cell_volume",
    "fractional_to_cartesian",
    "cartesian_to_fractional",
    "UNIT_CELL_EDGES",
    # Errors
    "LatticeError",
    "LatticeTypeNotFound",
    "UnknownParameter",
    "InvalidParameterValue",
    "DegenerateCell",
    "InvalidRepeatCount",
    "CatalogError",
]
