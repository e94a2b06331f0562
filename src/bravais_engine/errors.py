"""
Error types raised by the lattice engine.

All engine errors derive from LatticeError, so callers at the UI boundary can
catch one type. Each kind also derives from the built-in exception a plain
Python caller would expect (KeyError for lookups, ValueError for bad values).
"""


class LatticeError(Exception):
    """Base class for recoverable lattice engine errors."""


class _KeyLookupError(LatticeError, KeyError):
    # KeyError.__str__ wraps the message in quotes
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ''


class LatticeTypeNotFound(_KeyLookupError):
    """Requested lattice type id is not in the catalog."""

    def __init__(self, type_id, valid_ids=()):
        self.type_id = type_id
        super().__init__(f"Unknown lattice type: {type_id}. "
                         f"Valid types: {sorted(valid_ids)}")


class UnknownParameter(_KeyLookupError):
    """Parameter name is not one of a, b, c, alpha, beta, gamma."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown lattice parameter: {name!r}. "
                         f"Valid parameters: a, b, c, alpha, beta, gamma")


class InvalidParameterValue(LatticeError, ValueError):
    """Parameter value is not a real number."""


class DegenerateCell(LatticeError, ValueError):
    """Parameters describe a unit cell with no 3D realisation."""


class InvalidRepeatCount(LatticeError, ValueError):
    """Unit cell repeat count is negative or not an integer."""


class CatalogError(LatticeError, ValueError):
    """Catalog data is malformed or its constraints are inconsistent."""
