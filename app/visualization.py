"""
Visualization utilities for Bravais lattices.

This module turns the lattice engine's render data into Plotly 3D figures:
atom markers, nearest-neighbour bonds and unit cell edges.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import plotly.graph_objects as go
from scipy.spatial import cKDTree

from bravais_engine import (
    UNIT_CELL_EDGES,
    Atom,
    LatticeRenderData,
    atom_positions_array,
    unit_cell_vertices,
)


# Default colors for lattice elements
COLORS = {
    'atom': '#0088ff',       # Blue for lattice points
    'bond': '#cccccc',       # Light gray for bonds
    'unit_cell': '#333333',  # Dark gray for unit cell edges
    'background': '#f0f0f0',
}

SIZES = {
    'atom': 12,
    'bond': 4,
    'unit_cell': 2,
}


@dataclass
class RenderConfig:
    """Display options for a lattice figure."""
    atom_size: int = SIZES['atom']
    bond_width: int = SIZES['bond']
    cell_width: int = SIZES['unit_cell']
    atom_color: str = COLORS['atom']
    bond_color: str = COLORS['bond']
    cell_color: str = COLORS['unit_cell']
    background_color: str = COLORS['background']
    show_atoms: bool = True
    show_bonds: bool = True
    show_unit_cell: bool = True
    show_axes: bool = True
    all_cells: bool = False       # outline every cell, not just the origin cell
    bond_tolerance: float = 1.05  # bond length cutoff as a multiple of the shortest distance


def infer_bonds(positions: np.ndarray, tolerance: float = 1.05) -> List[Tuple[int, int]]:
    """
    Find nearest-neighbour bonds between lattice points.

    Two points are bonded when their distance is within tolerance times
    the shortest distance between any two points.

    Parameters
    ----------
    positions : np.ndarray
        Point positions, shape (N, 3).
    tolerance : float, optional
        Cutoff factor relative to the shortest distance (>= 1).

    Returns
    -------
    list of tuple
        Sorted (i, j) index pairs with i < j.
    """
    positions = np.asarray(positions, dtype=np.float64)
    if len(positions) < 2:
        return []

    tree = cKDTree(positions)
    distances, _ = tree.query(positions, k=2)
    nearest = distances[:, 1].min()
    if nearest <= 1e-9:
        return []

    pairs = tree.query_pairs(nearest * tolerance)
    return sorted(pairs)


def bonds_to_segments(positions: np.ndarray,
                      bonds: Sequence[Tuple[int, int]]) -> List[Dict[str, List[float]]]:
    """Convert bond index pairs into {start, end} coordinate records."""
    positions = np.asarray(positions, dtype=np.float64)
    return [
        {'start': positions[i].tolist(), 'end': positions[j].tolist()}
        for i, j in bonds
    ]


def render_payload(render_data: LatticeRenderData,
                   tolerance: float = 1.05) -> Dict[str, Any]:
    """Render contract dict with inferred bonds added."""
    payload = render_data.to_dict()
    positions = atom_positions_array(render_data.atoms)
    payload['bonds'] = bonds_to_segments(positions, infer_bonds(positions, tolerance))
    return payload


def add_unit_cell_edges(fig: go.Figure, basis: np.ndarray,
                        cell_index: Tuple[int, int, int] = (0, 0, 0),
                        color: str = COLORS['unit_cell'],
                        width: int = SIZES['unit_cell']) -> None:
    """
    Add the 12 edges of one unit cell to a 3D plot.

    Parameters
    ----------
    fig : go.Figure
        Plotly figure to add edges to.
    basis : np.ndarray
        3x3 matrix of basis vectors.
    cell_index : tuple of int, optional
        Cell to outline.
    color : str, optional
        Edge color.
    width : int, optional
        Edge line width.
    """
    corners = unit_cell_vertices(basis, cell_index)

    # One trace per cell; None breaks the line between edges
    xs, ys, zs = [], [], []
    for start, end in UNIT_CELL_EDGES:
        for axis, coords in enumerate((xs, ys, zs)):
            coords.extend([corners[start, axis], corners[end, axis], None])

    fig.add_trace(go.Scatter3d(
        x=xs,
        y=ys,
        z=zs,
        mode='lines',
        line=dict(color=color, width=width),
        showlegend=False,
        hoverinfo='skip'
    ))


def create_lattice_figure(render_data: LatticeRenderData,
                          config: Optional[RenderConfig] = None,
                          bonds: Optional[List[Tuple[int, int]]] = None,
                          title: Optional[str] = None) -> go.Figure:
    """
    Create a Plotly 3D figure of a generated lattice.

    Parameters
    ----------
    render_data : LatticeRenderData
        Output of BravaisLattice.generate_lattice().
    config : RenderConfig, optional
        Display options.
    bonds : list of tuple, optional
        (i, j) atom index pairs. Inferred from nearest neighbours when
        omitted and bonds are shown.
    title : str, optional
        Plot title.

    Returns
    -------
    go.Figure
        Plotly figure object.
    """
    config = config or RenderConfig()
    positions = atom_positions_array(render_data.atoms)
    basis = render_data.unit_cell_vectors
    fig = go.Figure()

    if config.show_atoms and len(positions):
        fig.add_trace(go.Scatter3d(
            x=positions[:, 0],
            y=positions[:, 1],
            z=positions[:, 2],
            mode='markers',
            marker=dict(
                size=config.atom_size,
                color=config.atom_color,
                symbol='circle',
                line=dict(color='white', width=1)
            ),
            customdata=[list(atom.unit_cell) for atom in render_data.atoms],
            name=f'Atoms ({len(positions)})',
            hovertemplate=('x: %{x:.3f}<br>y: %{y:.3f}<br>z: %{z:.3f}'
                           '<br>cell: %{customdata}<extra></extra>')
        ))

    if config.show_bonds:
        if bonds is None:
            bonds = infer_bonds(positions, config.bond_tolerance)
        if bonds:
            xs, ys, zs = [], [], []
            for i, j in bonds:
                for axis, coords in enumerate((xs, ys, zs)):
                    coords.extend([positions[i, axis], positions[j, axis], None])
            fig.add_trace(go.Scatter3d(
                x=xs,
                y=ys,
                z=zs,
                mode='lines',
                line=dict(color=config.bond_color, width=config.bond_width),
                name=f'Bonds ({len(bonds)})',
                hoverinfo='skip'
            ))

    if config.show_unit_cell:
        if config.all_cells:
            n = render_data.repeats
            cells = [(i, j, k) for i in range(n) for j in range(n) for k in range(n)]
        else:
            cells = [(0, 0, 0)]
        for cell in cells:
            add_unit_cell_edges(fig, basis, cell, config.cell_color, config.cell_width)

    axis_style = dict(visible=config.show_axes, backgroundcolor=config.background_color)
    fig.update_layout(
        title=title or f"{render_data.type_id} ({len(positions)} atoms)",
        paper_bgcolor=config.background_color,
        scene=dict(
            xaxis=dict(title='x', **axis_style),
            yaxis=dict(title='y', **axis_style),
            zaxis=dict(title='z', **axis_style),
            aspectmode='data',
        ),
        margin=dict(l=0, r=0, t=40, b=0),
        legend=dict(
            yanchor="top",
            y=0.99,
            xanchor="left",
            x=0.01
        )
    )

    return fig


def atoms_to_dataframe(atoms: Sequence[Atom]) -> pd.DataFrame:
    """
    Convert atoms to a pandas DataFrame for display.

    Columns: i, j, k (cell index) and x, y, z (Cartesian position).
    """
    columns = ['i', 'j', 'k', 'x', 'y', 'z']
    rows = [(*atom.unit_cell, *atom.position) for atom in atoms]
    return pd.DataFrame(rows, columns=columns)


def basis_to_dataframe(basis: np.ndarray) -> pd.DataFrame:
    """Basis vectors as a 3x3 DataFrame indexed a, b, c."""
    return pd.DataFrame(
        np.asarray(basis),
        columns=['x', 'y', 'z'],
        index=['a', 'b', 'c']
    )
