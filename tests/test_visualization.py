"""
Tests for the Plotly visualization helpers in app/visualization.py.
"""

import numpy as np
import plotly.graph_objects as go
import pytest

from bravais_engine import BravaisLattice, atom_positions_array, compute_basis_vectors, lookup

from visualization import (
    RenderConfig,
    add_unit_cell_edges,
    atoms_to_dataframe,
    basis_to_dataframe,
    create_lattice_figure,
    infer_bonds,
    render_payload,
)


@pytest.fixture
def cubic_render():
    return BravaisLattice('simple-cubic').generate_lattice(2).value


class TestInferBonds:
    """Test nearest-neighbour bond inference."""

    def test_cube_of_eight_points(self, cubic_render):
        bonds = infer_bonds(atom_positions_array(cubic_render.atoms))
        assert len(bonds) == 12
        assert all(i < j for i, j in bonds)
        assert bonds == sorted(bonds)

    def test_bcc_bonds_body_diagonals(self):
        render = BravaisLattice('body-centered-cubic').generate_lattice(1).value
        positions = atom_positions_array(render.atoms)
        assert infer_bonds(positions) == [(0, 1)]

    def test_too_few_points(self):
        assert infer_bonds(np.zeros((1, 3))) == []
        assert infer_bonds(np.zeros((0, 3))) == []

    def test_payload_bonds(self, cubic_render):
        payload = render_payload(cubic_render)
        assert len(payload['bonds']) == 12
        first = payload['bonds'][0]
        assert set(first) == {'start', 'end'}
        assert np.linalg.norm(np.subtract(first['end'], first['start'])) == pytest.approx(1.0)


class TestFigure:
    """Test figure construction."""

    def test_default_traces(self, cubic_render):
        fig = create_lattice_figure(cubic_render)
        assert isinstance(fig, go.Figure)
        # atoms, bonds, one unit cell
        assert len(fig.data) == 3
        assert len(fig.data[0].x) == 8

    def test_hidden_bonds(self, cubic_render):
        fig = create_lattice_figure(cubic_render, RenderConfig(show_bonds=False))
        assert len(fig.data) == 2

    def test_all_cells_outlined(self, cubic_render):
        fig = create_lattice_figure(cubic_render, RenderConfig(show_bonds=False, all_cells=True))
        assert len(fig.data) == 1 + 8

    def test_explicit_bonds(self, cubic_render):
        fig = create_lattice_figure(cubic_render, RenderConfig(show_unit_cell=False), bonds=[(0, 1)])
        assert len(fig.data) == 2
        xs = list(fig.data[1].x)
        assert xs[:2] == pytest.approx([0.0, 0.0], abs=1e-9)
        assert xs[2] is None

    def test_empty_lattice(self):
        render = BravaisLattice().generate_lattice(0).value
        fig = create_lattice_figure(render)
        assert len(fig.data) == 1

    def test_unit_cell_edges_trace(self):
        fig = go.Figure()
        add_unit_cell_edges(fig, compute_basis_vectors(lookup('triclinic').default_parameters))
        assert len(fig.data) == 1
        assert len(fig.data[0].x) == 12 * 3


class TestDataFrames:
    """Test tabular views."""

    def test_atoms_dataframe(self, cubic_render):
        df = atoms_to_dataframe(cubic_render.atoms)
        assert list(df.columns) == ['i', 'j', 'k', 'x', 'y', 'z']
        assert len(df) == 8
        assert df.iloc[-1][['i', 'j', 'k']].tolist() == [1, 1, 1]

    def test_empty_atoms_dataframe(self):
        assert len(atoms_to_dataframe([])) == 0

    def test_basis_dataframe(self, cubic_render):
        df = basis_to_dataframe(cubic_render.unit_cell_vectors)
        assert list(df.index) == ['a', 'b', 'c']
        assert df.loc['b', 'y'] == pytest.approx(1.0)
