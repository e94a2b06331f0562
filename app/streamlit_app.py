"""
Bravais Lattice Explorer - Streamlit Application

Interactive page for exploring the 14 Bravais lattices: pick a lattice
type, adjust its parameters and view the resulting unit cell and atoms.

Run with:
    streamlit run app/streamlit_app.py
"""

import logging

import streamlit as st

from bravais_engine import (
    PARAMETER_NAMES,
    BravaisLattice,
    cell_volume,
    get_catalog,
    lattice_types_by_system,
)
from bravais_engine.lattices.constraints import is_locked
from visualization import (
    COLORS,
    RenderConfig,
    atoms_to_dataframe,
    basis_to_dataframe,
    create_lattice_figure,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Input ranges: (min, max, step)
LENGTH_RANGE = (0.5, 3.0, 0.1)
ANGLE_RANGE = (60.0, 120.0, 1.0)
REPEAT_RANGE = (1, 4)

PARAMETER_LABELS = {
    'a': 'a', 'b': 'b', 'c': 'c',
    'alpha': 'α (°)', 'beta': 'β (°)', 'gamma': 'γ (°)',
}

# Page configuration
st.set_page_config(
    page_title="Bravais Lattice Explorer",
    page_icon="💎",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Initialize session state
if 'lattice' not in st.session_state:
    st.session_state.lattice = BravaisLattice()


# =============================================================================
# Helper Functions
# =============================================================================

def select_lattice_type(lattice: BravaisLattice) -> None:
    """Lattice type selector, grouped by crystal system."""
    catalog = get_catalog()
    options = [tid for ids in lattice_types_by_system(catalog).values() for tid in ids]

    selected = st.sidebar.selectbox(
        "Lattice Type",
        options,
        index=options.index(lattice.type_id),
        format_func=lambda tid: f"{catalog[tid].crystal_system}: {catalog[tid].name}",
        help="Select a Bravais lattice type"
    )

    if selected != lattice.type_id:
        result = lattice.set_lattice_type(selected)
        if not result:
            st.sidebar.error(str(result.error))


def edit_parameters(lattice: BravaisLattice) -> None:
    """Parameter inputs; constrained parameters are disabled unless free editing is on."""
    st.sidebar.header("Lattice Parameters")
    free_editing = st.sidebar.checkbox(
        "Free editing",
        value=False,
        help="Allow fixed angles and mirrored lengths to be changed directly"
    )

    descriptor = lattice.descriptor
    params = lattice.parameters

    for name in PARAMETER_NAMES:
        lo, hi, step = ANGLE_RANGE if name in ('alpha', 'beta', 'gamma') else LENGTH_RANGE
        current = float(params[name])
        value = st.sidebar.slider(
            PARAMETER_LABELS[name],
            min_value=min(lo, current),
            max_value=max(hi, current),
            value=current,
            step=step,
            disabled=is_locked(descriptor, name) and not free_editing,
            key=_widget_key(lattice.type_id, name)
        )
        if value != current:
            result = lattice.set_parameter(name, value)
            if not result:
                st.sidebar.error(f"{PARAMETER_LABELS[name]}: {result.error}")
                # Snap the slider back to the kept value on the next run
                st.session_state.pop(_widget_key(lattice.type_id, name), None)
            else:
                # Mirrored parameters changed too; rebuild every slider from the model
                _clear_parameter_widgets(lattice.type_id)
                st.rerun()

    if st.sidebar.button("Reset to Default"):
        lattice.reset_parameters()
        _clear_parameter_widgets(lattice.type_id)
        st.rerun()


def _widget_key(type_id: str, name: str) -> str:
    return f"param_{type_id}_{name}"


def _clear_parameter_widgets(type_id: str) -> None:
    for name in PARAMETER_NAMES:
        st.session_state.pop(_widget_key(type_id, name), None)


def display_options() -> RenderConfig:
    """Display checkboxes and color pickers."""
    st.sidebar.header("Display")
    return RenderConfig(
        show_atoms=st.sidebar.checkbox("Show Atoms", value=True),
        show_bonds=st.sidebar.checkbox("Show Bonds", value=True),
        show_unit_cell=st.sidebar.checkbox("Show Unit Cell", value=True),
        show_axes=st.sidebar.checkbox("Show Axes", value=True),
        all_cells=st.sidebar.checkbox("Outline All Cells", value=False),
        atom_color=st.sidebar.color_picker("Atom Color", COLORS['atom']),
        bond_color=st.sidebar.color_picker("Bond Color", COLORS['bond']),
        cell_color=st.sidebar.color_picker("Cell Color", COLORS['unit_cell']),
        background_color=st.sidebar.color_picker("Background Color", COLORS['background']),
    )


# =============================================================================
# Page
# =============================================================================

def page_lattice_explorer():
    """Visualize a Bravais lattice and its unit cell."""
    st.title("💎 Bravais Lattice Explorer")
    st.markdown("Explore the 14 Bravais lattices and how their parameters shape the unit cell.")

    lattice = st.session_state.lattice

    select_lattice_type(lattice)
    edit_parameters(lattice)
    repeats = st.sidebar.slider("Unit cells per axis", *REPEAT_RANGE, 1,
                                help="Number of unit cells in each direction")
    config = display_options()

    result = lattice.generate_lattice(repeats)
    if not result:
        st.error(f"Error generating lattice: {result.error}")
        return
    render = result.value

    col1, col2 = st.columns([2, 1])

    with col1:
        st.subheader("3D Visualization")
        fig = create_lattice_figure(render, config, title=lattice.descriptor.name)
        st.plotly_chart(fig, use_container_width=True)

    with col2:
        info = lattice.info()
        st.subheader("Lattice Information")
        st.metric("Crystal System", info['crystal_system'])
        st.metric("Atoms per Unit Cell", info['atoms_per_cell'])
        st.metric("Total Atoms", len(render.atoms))
        st.metric("Unit Cell Volume", f"{cell_volume(render.unit_cell_vectors):.4f}")

        st.subheader("Basis Vectors")
        st.dataframe(basis_to_dataframe(render.unit_cell_vectors).style.format("{:.4f}"))

        for message in lattice.constraint_violations():
            st.warning(f"Symmetry relaxed: {message}")

    with st.expander("📚 Description"):
        st.write(info['description'])
        if info['examples']:
            st.write(f"**Examples:** {', '.join(info['examples'])}")

    with st.expander("📋 Atom Positions"):
        st.dataframe(atoms_to_dataframe(render.atoms).round(4), use_container_width=True)

    logger.debug("Rendered %s with %d atoms", lattice.type_id, len(render.atoms))


def main():
    """Main application entry point."""
    page_lattice_explorer()


if __name__ == "__main__":
    main()
