"""
Symmetry constraint propagation for lattice parameters.

Two kinds of constraint are declared per lattice type in the catalog:
    - fixed: an angle pinned to a value. Applied when defaults are loaded
      and by apply_fixed(); set_parameter() does not enforce it, so a user
      may still move a fixed angle away from its default.
    - equals: the source parameter's value is copied into each listed
      target whenever the source is edited. Copies go one way only and
      are not chained.
"""

from typing import Dict, List, Mapping

from ..errors import UnknownParameter


PARAMETER_NAMES = ('a', 'b', 'c', 'alpha', 'beta', 'gamma')


def _check_name(name: str) -> None:
    if name not in PARAMETER_NAMES:
        raise UnknownParameter(name)


def load_defaults(descriptor) -> Dict[str, float]:
    """Return a fresh, mutable copy of a descriptor's default parameters."""
    return dict(descriptor.default_parameters)


def set_parameter(parameters: Mapping[str, float], descriptor,
                  name: str, value: float) -> Dict[str, float]:
    """
    Set one parameter and propagate it to its mirror targets.

    Parameters
    ----------
    parameters : mapping
        Current parameter set. Not modified.
    descriptor : LatticeTypeDescriptor
        Active lattice type, supplying the constraints.
    name : str
        One of a, b, c, alpha, beta, gamma.
    value : float
        New value.

    Returns
    -------
    dict
        Updated copy of the parameter set.

    Raises
    ------
    UnknownParameter
        If name is not a lattice parameter.
    """
    _check_name(name)
    updated = dict(parameters)
    updated[name] = value

    for target in descriptor.mirror_graph.get(name, ()):
        updated[target] = value

    return updated


def apply_fixed(parameters: Mapping[str, float], descriptor) -> Dict[str, float]:
    """Return a copy with every fixed angle reset to its pinned value."""
    updated = dict(parameters)
    for name, constraint in descriptor.constraints.items():
        if constraint.fixed is not None:
            updated[name] = constraint.fixed
    return updated


def constraint_violations(parameters: Mapping[str, float], descriptor,
                          tol: float = 1e-9) -> List[str]:
    """
    Describe where parameters depart from the descriptor's symmetry.

    Fixed angles that were overridden and mirror targets that no longer
    match their source are reported. An empty list means the parameter
    set has the full symmetry of the lattice type.
    """
    messages = []
    for name, constraint in descriptor.constraints.items():
        value = parameters[name]
        if constraint.fixed is not None and abs(value - constraint.fixed) > tol:
            messages.append(f"{name} = {value:g} differs from fixed value {constraint.fixed:g}")
        for target in constraint.equals:
            if abs(parameters[target] - value) > tol:
                messages.append(f"{target} = {parameters[target]:g} differs from {name} = {value:g}")
    return messages


def is_locked(descriptor, name: str) -> bool:
    """True if the parameter is fixed or driven by another parameter."""
    _check_name(name)
    constraint = descriptor.constraints.get(name)
    if constraint is not None and constraint.fixed is not None:
        return True
    return any(name in targets for targets in descriptor.mirror_graph.values())
