"""
Bravais lattice model driven by a UI.

BravaisLattice holds the active lattice type and parameter set and exposes
the operations a form or viewer needs: switch type, edit a parameter, reset,
and generate atoms for rendering. Expected input errors are returned as
OperationResult failures rather than raised, and a failed operation never
changes the held state.
"""

import logging
import math
import numbers
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from ..errors import InvalidParameterValue, LatticeError, UnknownParameter
from ..geometry.atoms import Atom, generate_atoms, unit_cell_vertices
from ..geometry.unit_cell import compute_basis_vectors
from . import constraints
from .catalog import LatticeCatalog, LatticeKind, LatticeTypeDescriptor, get_catalog

logger = logging.getLogger(__name__)

DEFAULT_LATTICE_TYPE = LatticeKind.SIMPLE_CUBIC.value


@dataclass
class LatticeState:
    """Active lattice type id and its current parameters."""
    type_id: str
    parameters: Dict[str, float] = field(default_factory=dict)

    def copy(self) -> 'LatticeState':
        return replace(self, parameters=dict(self.parameters))


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a UI operation: a value on success, the error otherwise."""
    ok: bool
    value: Any = None
    error: Optional[LatticeError] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: Any = None) -> 'OperationResult':
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: LatticeError) -> 'OperationResult':
        return cls(ok=False, error=error)


@dataclass(frozen=True)
class LatticeRenderData:
    """Atoms and unit cell vectors handed to a renderer."""
    type_id: str
    repeats: int
    atoms: Tuple[Atom, ...]
    unit_cell_vectors: np.ndarray = field(compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """
        Plain-data form of the render contract.

        Bonds are not included; a renderer may add a 'bonds' key.
        """
        a, b, c = (vec.tolist() for vec in self.unit_cell_vectors)
        return {
            'atoms': [
                {'position': list(atom.position), 'unitCell': list(atom.unit_cell)}
                for atom in self.atoms
            ],
            'unitCellVectors': {'a': a, 'b': b, 'c': c},
        }


class BravaisLattice:
    """
    Lattice model for one of the 14 Bravais lattice types.

    Parameters
    ----------
    type_id : str or LatticeKind, optional
        Initial lattice type. Defaults to simple cubic.
    catalog : LatticeCatalog, optional
        Catalog to draw lattice types from. Defaults to the shared catalog.

    Raises
    ------
    LatticeTypeNotFound
        If the initial type is not in the catalog.

    Examples
    --------
    >>> lattice = BravaisLattice('face-centered-cubic')
    >>> lattice.set_parameter('a', 4.05).ok
    True
    >>> render = lattice.generate_lattice(repeats=2).value
    >>> len(render.atoms)
    32
    """

    def __init__(self, type_id: Union[str, LatticeKind] = DEFAULT_LATTICE_TYPE,
                 catalog: Optional[LatticeCatalog] = None):
        self._catalog = catalog or get_catalog()
        descriptor = self._catalog.lookup(type_id)
        self._descriptor = descriptor
        self._state = LatticeState(descriptor.id, constraints.load_defaults(descriptor))

    # -------------------------------------------------------------------------
    # Read accessors
    # -------------------------------------------------------------------------

    @property
    def type_id(self) -> str:
        return self._state.type_id

    @property
    def descriptor(self) -> LatticeTypeDescriptor:
        return self._descriptor

    @property
    def parameters(self) -> Dict[str, float]:
        return dict(self._state.parameters)

    @property
    def state(self) -> LatticeState:
        return self._state.copy()

    def basis_vectors(self) -> np.ndarray:
        """Basis vectors for the current parameters, rows a, b, c."""
        return compute_basis_vectors(self._state.parameters)

    def unit_cell_vertices(self, cell_index: Tuple[int, int, int] = (0, 0, 0)) -> np.ndarray:
        return unit_cell_vertices(self.basis_vectors(), cell_index)

    def constraint_violations(self) -> List[str]:
        return constraints.constraint_violations(self._state.parameters, self._descriptor)

    def info(self) -> Dict[str, Any]:
        """Display metadata for the current lattice type."""
        d = self._descriptor
        return {
            'id': d.id,
            'name': d.name,
            'description': d.description,
            'crystal_system': d.crystal_system,
            'centering': d.centering,
            'examples': list(d.examples),
            'atoms_per_cell': d.atoms_per_cell,
        }

    # -------------------------------------------------------------------------
    # UI operations
    # -------------------------------------------------------------------------

    def set_lattice_type(self, type_id: Union[str, LatticeKind]) -> OperationResult:
        """Switch lattice type and reset parameters to its defaults."""
        try:
            descriptor = self._catalog.lookup(type_id)
        except LatticeError as exc:
            logger.debug("Rejected lattice type %r: %s", type_id, exc)
            return OperationResult.failure(exc)

        self._descriptor = descriptor
        self._state = LatticeState(descriptor.id, constraints.load_defaults(descriptor))
        logger.debug("Lattice type set to %s", descriptor.id)
        return OperationResult.success(self.parameters)

    def set_parameter(self, name: str, value: float) -> OperationResult:
        """
        Set one lattice parameter and its mirrored parameters.

        The edit is rejected, leaving the current parameters in place, if
        the name is unknown, the value is not a real number, or the
        resulting cell would be degenerate.
        """
        try:
            if name not in constraints.PARAMETER_NAMES:
                raise UnknownParameter(name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real) \
                    or not math.isfinite(value):
                raise InvalidParameterValue(f"Value for {name} must be a finite number, "
                                            f"got {value!r}")
            candidate = constraints.set_parameter(
                self._state.parameters, self._descriptor, name, float(value)
            )
            compute_basis_vectors(candidate)
        except LatticeError as exc:
            logger.debug("Rejected %s=%r for %s: %s", name, value, self.type_id, exc)
            return OperationResult.failure(exc)

        self._state = LatticeState(self._state.type_id, candidate)
        logger.debug("Set %s=%s for %s", name, value, self.type_id)
        return OperationResult.success(self.parameters)

    def reset_parameters(self) -> OperationResult:
        """Restore the default parameters of the current lattice type."""
        self._state = LatticeState(self._state.type_id,
                                   constraints.load_defaults(self._descriptor))
        return OperationResult.success(self.parameters)

    def generate_lattice(self, repeats: int = 1) -> OperationResult:
        """
        Generate atoms for a repeats³ block of unit cells.

        Returns
        -------
        OperationResult
            value is a LatticeRenderData on success.
        """
        try:
            basis = self.basis_vectors()
            atoms = generate_atoms(basis, self._descriptor.atom_positions, repeats)
        except LatticeError as exc:
            logger.debug("Lattice generation failed for %s: %s", self.type_id, exc)
            return OperationResult.failure(exc)

        logger.debug("Generated %d atoms for %s (repeats=%s)", len(atoms), self.type_id, repeats)
        return OperationResult.success(LatticeRenderData(
            type_id=self.type_id,
            repeats=repeats,
            atoms=tuple(atoms),
            unit_cell_vectors=basis,
        ))

    def __repr__(self) -> str:
        """String representation of lattice."""
        return (f"BravaisLattice(type='{self.type_id}', "
                f"a={self._state.parameters['a']:.4f}, "
                f"atoms_per_cell={self._descriptor.atoms_per_cell})")
