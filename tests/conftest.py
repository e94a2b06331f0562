"""
Pytest configuration.

Adds app/ to sys.path so the visualization module can be imported the way
Streamlit imports it, and provides shared fixtures.
"""

import json
import sys
from pathlib import Path

import pytest

from bravais_engine import get_catalog


APP_DIR = Path(__file__).parent.parent / "app"
if str(APP_DIR) not in sys.path:
    sys.path.insert(0, str(APP_DIR))


@pytest.fixture
def catalog():
    return get_catalog()


@pytest.fixture
def tetragonal_entry():
    """A minimal valid catalog entry."""
    return {
        "name": "Test Tetragonal",
        "crystal_system": "Tetragonal",
        "centering": "Primitive",
        "parameters": {"a": 2, "b": 2, "c": 3, "alpha": 90, "beta": 90, "gamma": 90},
        "constraints": {
            "a": {"equals": ["b"]},
            "gamma": {"fixed": 90},
        },
        "atom_positions": [[0, 0, 0], ["1/2", "1/2", "1/2"]],
    }


@pytest.fixture
def write_catalog(tmp_path):
    """Write {id: entry} to a catalog JSON file and return its path."""
    def _write(entries):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"lattice_types": entries}), encoding="utf-8")
        return path
    return _write
