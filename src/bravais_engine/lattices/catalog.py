"""
Catalog of the 14 Bravais lattice types.

Each entry gives the default lattice parameters, the symmetry constraints
between them, and the fractional positions of the atoms in the unit cell.

The 14 Bravais Lattices by Crystal System:
    - Cubic (3): simple, body-centered, face-centered
    - Tetragonal (2): simple, body-centered
    - Orthorhombic (4): simple, body-centered, face-centered, base-centered
    - Monoclinic (2): simple, base-centered
    - Triclinic (1)
    - Rhombohedral (1)
    - Hexagonal (1)

The default catalog is read from data/lattice_catalog.json the first time it
is needed and shared read-only afterwards.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

from ..errors import CatalogError, DegenerateCell, LatticeTypeNotFound
from ..geometry.unit_cell import ANGLE_NAMES, LENGTH_NAMES, compute_basis_vectors
from .constraints import PARAMETER_NAMES

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_CATALOG_PATH = DATA_DIR / "lattice_catalog.json"

CRYSTAL_SYSTEMS = (
    'Cubic', 'Tetragonal', 'Orthorhombic', 'Monoclinic',
    'Triclinic', 'Rhombohedral', 'Hexagonal',
)


class LatticeKind(str, Enum):
    """The 14 Bravais lattice kinds; each value is its catalog id."""
    SIMPLE_CUBIC = 'simple-cubic'
    BODY_CENTERED_CUBIC = 'body-centered-cubic'
    FACE_CENTERED_CUBIC = 'face-centered-cubic'
    SIMPLE_TETRAGONAL = 'simple-tetragonal'
    BODY_CENTERED_TETRAGONAL = 'body-centered-tetragonal'
    SIMPLE_ORTHORHOMBIC = 'simple-orthorhombic'
    BODY_CENTERED_ORTHORHOMBIC = 'body-centered-orthorhombic'
    FACE_CENTERED_ORTHORHOMBIC = 'face-centered-orthorhombic'
    BASE_CENTERED_ORTHORHOMBIC = 'base-centered-orthorhombic'
    SIMPLE_MONOCLINIC = 'simple-monoclinic'
    BASE_CENTERED_MONOCLINIC = 'base-centered-monoclinic'
    TRICLINIC = 'triclinic'
    RHOMBOHEDRAL = 'rhombohedral'
    HEXAGONAL = 'hexagonal'

    @property
    def descriptor(self) -> 'LatticeTypeDescriptor':
        return get_catalog().lookup(self)

    @classmethod
    def from_id(cls, type_id: str) -> 'LatticeKind':
        try:
            return cls(type_id)
        except ValueError:
            raise LatticeTypeNotFound(type_id, [k.value for k in cls]) from None


@dataclass(frozen=True)
class ParameterConstraint:
    """Either pins a parameter (fixed) or mirrors it into others (equals)."""
    fixed: Optional[float] = None
    equals: Tuple[str, ...] = ()


@dataclass(frozen=True)
class LatticeTypeDescriptor:
    """Immutable description of one Bravais lattice type."""
    id: str
    name: str
    crystal_system: str
    centering: str
    default_parameters: Mapping[str, float] = field(hash=False)
    constraints: Mapping[str, ParameterConstraint] = field(hash=False)
    atom_positions: Tuple[Tuple[float, float, float], ...]
    description: str = ''
    examples: Tuple[str, ...] = ()
    mirror_graph: Mapping[str, Tuple[str, ...]] = field(init=False, hash=False, compare=False, repr=False)

    def __post_init__(self):
        graph = {name: c.equals for name, c in self.constraints.items() if c.equals}
        object.__setattr__(self, 'mirror_graph', MappingProxyType(graph))

    @property
    def atoms_per_cell(self) -> int:
        return len(self.atom_positions)

    @property
    def kind(self) -> Optional[LatticeKind]:
        """Matching LatticeKind, or None for types outside the standard 14."""
        try:
            return LatticeKind(self.id)
        except ValueError:
            return None

    def __repr__(self) -> str:
        return (f"LatticeTypeDescriptor(id='{self.id}', "
                f"system='{self.crystal_system}', "
                f"atoms_per_cell={self.atoms_per_cell})")


# =============================================================================
# Parsing and validation
# =============================================================================

def _parse_fraction(value, type_id: str) -> float:
    """Parse a coordinate given as a number or a fraction string like '1/3'."""
    try:
        if isinstance(value, str):
            return float(Fraction(value.strip()))
        return float(value)
    except (TypeError, ValueError, ZeroDivisionError):
        raise CatalogError(f"{type_id}: invalid fractional coordinate {value!r}") from None


def _parse_constraint(type_id: str, name: str, raw) -> ParameterConstraint:
    if not isinstance(raw, dict) or len(raw.keys() & {'fixed', 'equals'}) != 1:
        raise CatalogError(f"{type_id}: constraint on {name} needs exactly one of "
                           f"'fixed' or 'equals', got {raw!r}")
    if 'fixed' in raw:
        try:
            return ParameterConstraint(fixed=float(raw['fixed']))
        except (TypeError, ValueError):
            raise CatalogError(f"{type_id}: fixed value for {name} must be a number") from None
    if not isinstance(raw['equals'], list):
        raise CatalogError(f"{type_id}: equals on {name} must be a list of parameter names")
    return ParameterConstraint(equals=tuple(raw['equals']))


def _validate_descriptor(desc: LatticeTypeDescriptor) -> None:
    """Check the consistency rules a catalog entry must satisfy."""
    tid = desc.id
    params = desc.default_parameters

    missing = [p for p in PARAMETER_NAMES if p not in params]
    if missing:
        raise CatalogError(f"{tid}: missing default parameters {missing}")
    for name in LENGTH_NAMES:
        if not params[name] > 0:
            raise CatalogError(f"{tid}: length {name} must be positive")
    for name in ANGLE_NAMES:
        if not 0 < params[name] < 180:
            raise CatalogError(f"{tid}: angle {name} must lie strictly between 0 and 180 degrees")

    mirrored_from: Dict[str, str] = {}
    for name, constraint in desc.constraints.items():
        if name not in PARAMETER_NAMES:
            raise CatalogError(f"{tid}: constraint on unknown parameter {name!r}")
        if constraint.fixed is not None and abs(params[name] - constraint.fixed) > 1e-9:
            raise CatalogError(f"{tid}: default {name}={params[name]} contradicts "
                               f"fixed value {constraint.fixed}")
        for target in constraint.equals:
            if target not in PARAMETER_NAMES:
                raise CatalogError(f"{tid}: {name} mirrors into unknown parameter {target!r}")
            if target == name:
                raise CatalogError(f"{tid}: {name} mirrors into itself")
            target_constraint = desc.constraints.get(target)
            if target_constraint is not None and target_constraint.fixed is not None:
                raise CatalogError(f"{tid}: {target} is fixed and also mirrors {name}")
            if target in mirrored_from:
                raise CatalogError(f"{tid}: {target} mirrors both "
                                   f"{mirrored_from[target]} and {name}")
            mirrored_from[target] = name
            if abs(params[target] - params[name]) > 1e-9:
                raise CatalogError(f"{tid}: default {target} differs from its source {name}")

    if not desc.atom_positions:
        raise CatalogError(f"{tid}: at least one atom position is required")
    for pos in desc.atom_positions:
        if len(pos) != 3 or not all(0 <= x < 1 for x in pos):
            raise CatalogError(f"{tid}: atom position {pos} outside [0, 1)³")

    try:
        compute_basis_vectors(params)
    except DegenerateCell as exc:
        raise CatalogError(f"{tid}: default parameters are degenerate ({exc})") from exc


def descriptor_from_dict(type_id: str, data: dict) -> LatticeTypeDescriptor:
    """Build and validate a descriptor from one catalog JSON entry."""
    if not isinstance(data, dict):
        raise CatalogError(f"{type_id}: entry must be a mapping")
    try:
        parameters = {k: float(v) for k, v in data['parameters'].items()}
        raw_positions = data['atom_positions']
    except KeyError as exc:
        raise CatalogError(f"{type_id}: missing field {exc.args[0]!r}") from None
    except (TypeError, ValueError, AttributeError):
        raise CatalogError(f"{type_id}: parameters must be a mapping of numbers") from None

    constraints = {
        name: _parse_constraint(type_id, name, raw)
        for name, raw in data.get('constraints', {}).items()
    }
    positions = tuple(
        tuple(_parse_fraction(x, type_id) for x in pos) for pos in raw_positions
    )

    desc = LatticeTypeDescriptor(
        id=type_id,
        name=data.get('name', type_id),
        crystal_system=data.get('crystal_system', ''),
        centering=data.get('centering', ''),
        default_parameters=MappingProxyType(parameters),
        constraints=MappingProxyType(constraints),
        atom_positions=positions,
        description=data.get('description', ''),
        examples=tuple(data.get('examples', ())),
    )
    _validate_descriptor(desc)
    return desc


# =============================================================================
# Catalog
# =============================================================================

class LatticeCatalog:
    """
    Read-only registry of lattice type descriptors keyed by id.

    Examples
    --------
    >>> catalog = get_catalog()
    >>> catalog.lookup('hexagonal').atoms_per_cell
    3
    >>> catalog.lookup(LatticeKind.FACE_CENTERED_CUBIC).name
    'Face-Centered Cubic'
    """

    def __init__(self, descriptors: Mapping[str, LatticeTypeDescriptor]):
        self._descriptors = MappingProxyType(dict(descriptors))

    def lookup(self, type_id: Union[str, LatticeKind]) -> LatticeTypeDescriptor:
        """
        Return the descriptor for a lattice type.

        Raises
        ------
        LatticeTypeNotFound
            If type_id is not in the catalog.
        """
        key = type_id.value if isinstance(type_id, LatticeKind) else type_id
        try:
            return self._descriptors[key]
        except (KeyError, TypeError):
            raise LatticeTypeNotFound(type_id, self._descriptors.keys()) from None

    def ids(self) -> List[str]:
        return list(self._descriptors)

    def __getitem__(self, type_id) -> LatticeTypeDescriptor:
        return self.lookup(type_id)

    def __contains__(self, type_id) -> bool:
        key = type_id.value if isinstance(type_id, LatticeKind) else type_id
        return key in self._descriptors

    def __iter__(self) -> Iterator[str]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __repr__(self) -> str:
        return f"LatticeCatalog({len(self)} lattice types)"


def load_catalog(path: Union[str, Path]) -> LatticeCatalog:
    """
    Load a lattice catalog from a JSON file.

    The file holds {"lattice_types": {id: entry, ...}} where each entry has
    parameters, constraints and atom_positions plus optional display fields
    (name, description, crystal_system, centering, examples).

    Raises
    ------
    CatalogError
        If the file is not valid JSON or any entry is inconsistent.
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise CatalogError(f"{path}: invalid JSON ({exc})") from exc

    entries = raw.get('lattice_types') if isinstance(raw, dict) else None
    if not isinstance(entries, dict):
        raise CatalogError(f"{path}: expected a 'lattice_types' mapping")

    descriptors = {tid: descriptor_from_dict(tid, entry) for tid, entry in entries.items()}
    logger.debug("Loaded %d lattice types from %s", len(descriptors), path)
    return LatticeCatalog(descriptors)


@lru_cache(maxsize=None)
def get_catalog() -> LatticeCatalog:
    """Return the shared default catalog, loading it on first use."""
    catalog = load_catalog(DEFAULT_CATALOG_PATH)
    missing = [kind.value for kind in LatticeKind if kind.value not in catalog]
    if missing:
        raise CatalogError(f"Default catalog is missing lattice types: {missing}")
    return catalog


def lookup(type_id: Union[str, LatticeKind]) -> LatticeTypeDescriptor:
    """Look up a lattice type in the default catalog."""
    return get_catalog().lookup(type_id)


def lattice_types_by_system(catalog: Optional[LatticeCatalog] = None) -> Dict[str, List[str]]:
    """
    Group lattice type ids by crystal system.

    Systems appear in the conventional order (Cubic first); any system not
    in CRYSTAL_SYSTEMS is appended after them.
    """
    catalog = catalog or get_catalog()
    groups: Dict[str, List[str]] = {system: [] for system in CRYSTAL_SYSTEMS}
    for type_id in catalog:
        groups.setdefault(catalog[type_id].crystal_system, []).append(type_id)
    return {system: ids for system, ids in groups.items() if ids}
