"""
Tests for parameter constraint propagation.
"""

import pytest

from bravais_engine import UnknownParameter, load_defaults, lookup, set_parameter
from bravais_engine.lattices.constraints import (
    PARAMETER_NAMES,
    apply_fixed,
    constraint_violations,
    is_locked,
)


class TestLoadDefaults:
    """Test loading descriptor defaults."""

    def test_returns_defaults(self):
        params = load_defaults(lookup('hexagonal'))
        assert params == {'a': 1.0, 'b': 1.0, 'c': 1.5,
                          'alpha': 90.0, 'beta': 90.0, 'gamma': 120.0}

    def test_returns_fresh_copy(self):
        desc = lookup('simple-cubic')
        params = load_defaults(desc)
        params['a'] = 5.0
        assert desc.default_parameters['a'] == 1.0
        assert load_defaults(desc) is not load_defaults(desc)

    def test_all_six_parameters(self):
        assert tuple(sorted(load_defaults(lookup('triclinic')))) == tuple(sorted(PARAMETER_NAMES))


class TestSetParameter:
    """Test setting parameters with mirror propagation."""

    def test_cubic_a_mirrors_into_b_and_c(self):
        desc = lookup('simple-cubic')
        params = set_parameter(load_defaults(desc), desc, 'a', 2)
        assert params['a'] == params['b'] == params['c'] == 2

    def test_input_not_mutated(self):
        desc = lookup('simple-cubic')
        original = load_defaults(desc)
        set_parameter(original, desc, 'a', 2)
        assert original['a'] == original['b'] == 1.0

    def test_mirroring_is_one_directional(self):
        desc = lookup('simple-cubic')
        params = set_parameter(load_defaults(desc), desc, 'b', 3)
        assert params['b'] == 3
        assert params['a'] == params['c'] == 1.0

    def test_tetragonal_leaves_c_alone(self):
        desc = lookup('simple-tetragonal')
        params = set_parameter(load_defaults(desc), desc, 'a', 2)
        assert params['b'] == 2
        assert params['c'] == 1.5

    def test_rhombohedral_angles_mirror(self):
        desc = lookup('rhombohedral')
        params = set_parameter(load_defaults(desc), desc, 'alpha', 80)
        assert params['alpha'] == params['beta'] == params['gamma'] == 80
        assert params['a'] == 1.0

    def test_orthorhombic_lengths_independent(self):
        desc = lookup('simple-orthorhombic')
        params = set_parameter(load_defaults(desc), desc, 'a', 2)
        assert (params['a'], params['b'], params['c']) == (2, 1.2, 1.5)

    def test_fixed_angle_can_be_overridden(self):
        desc = lookup('simple-cubic')
        params = set_parameter(load_defaults(desc), desc, 'gamma', 100)
        assert params['gamma'] == 100

    def test_unknown_parameter(self):
        desc = lookup('simple-cubic')
        with pytest.raises(UnknownParameter, match='delta'):
            set_parameter(load_defaults(desc), desc, 'delta', 1)

    def test_unknown_parameter_is_key_error(self):
        desc = lookup('simple-cubic')
        with pytest.raises(KeyError):
            set_parameter(load_defaults(desc), desc, 'A', 1)


class TestFixedConstraints:
    """Test fixed-angle helpers and symmetry reporting."""

    def test_apply_fixed_restores_angles(self):
        desc = lookup('hexagonal')
        params = set_parameter(load_defaults(desc), desc, 'gamma', 100)
        params = set_parameter(params, desc, 'alpha', 80)
        restored = apply_fixed(params, desc)
        assert restored['gamma'] == 120
        assert restored['alpha'] == 90
        assert params['gamma'] == 100

    def test_apply_fixed_keeps_free_angle(self):
        desc = lookup('simple-monoclinic')
        params = set_parameter(load_defaults(desc), desc, 'beta', 110)
        assert apply_fixed(params, desc)['beta'] == 110

    def test_defaults_have_no_violations(self):
        for kind_id in ('simple-cubic', 'hexagonal', 'rhombohedral', 'triclinic'):
            desc = lookup(kind_id)
            assert constraint_violations(load_defaults(desc), desc) == []

    def test_overridden_fixed_angle_reported(self):
        desc = lookup('simple-cubic')
        params = set_parameter(load_defaults(desc), desc, 'gamma', 100)
        violations = constraint_violations(params, desc)
        assert len(violations) == 1
        assert 'gamma' in violations[0]

    def test_edited_mirror_target_reported(self):
        desc = lookup('simple-cubic')
        params = set_parameter(load_defaults(desc), desc, 'c', 2)
        violations = constraint_violations(params, desc)
        assert violations == ['c = 2 differs from a = 1']

    def test_is_locked(self):
        cubic = lookup('simple-cubic')
        assert not is_locked(cubic, 'a')
        assert is_locked(cubic, 'b')
        assert is_locked(cubic, 'c')
        assert is_locked(cubic, 'alpha')

    def test_monoclinic_beta_free(self):
        desc = lookup('simple-monoclinic')
        assert not is_locked(desc, 'beta')
        assert is_locked(desc, 'gamma')

    def test_triclinic_nothing_locked(self):
        desc = lookup('triclinic')
        assert not any(is_locked(desc, name) for name in PARAMETER_NAMES)

    def test_is_locked_unknown_parameter(self):
        with pytest.raises(UnknownParameter):
            is_locked(lookup('triclinic'), 'delta')
