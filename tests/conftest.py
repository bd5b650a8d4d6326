"""Shared fixtures for the board generation tests."""

import pytest

from py_delphi.core.alea_prng import AleaPRNG
from py_delphi.core.hex_grid import HexGrid
from py_delphi.core.terrain import Terrain


@pytest.fixture
def prng():
    return AleaPRNG("test-seed")


@pytest.fixture
def shallow_grid():
    """Full-size board where every cell is shallow."""
    return HexGrid(6, terrain=Terrain.SHALLOW)
