# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "slider" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from slider.domains.grid import Grid  # noqa: E402


def replay(grid, path):
    """Apply path to a copy of grid; every step must be legal."""
    g = grid.copy()
    for pos in path:
        assert g.apply_move(pos), f"illegal move {pos} in\n{g}"
    return g


@pytest.fixture
def solved3():
    return Grid(3)


@pytest.fixture
def solved4():
    return Grid(4)
