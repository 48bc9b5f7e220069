"""Shared fixtures for the tile puzzle tests."""

from __future__ import annotations

from pathlib import Path
from typing import List

import numpy as np
import pytest

from tilejigsaw.catalog import TileCatalog
from tilejigsaw.graph import AdjacencyGraph
from tilejigsaw.reader import load_tiles
from tilejigsaw.tile import Tile
from tilejigsaw.utils import parse_grid

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture
def sample_tiles() -> List[Tile]:
    return load_tiles(DATA_DIR / "sample_tiles.txt")


@pytest.fixture
def sample_catalog(sample_tiles: List[Tile]) -> TileCatalog:
    return TileCatalog(sample_tiles)


@pytest.fixture
def sample_graph(sample_catalog: TileCatalog) -> AdjacencyGraph:
    return AdjacencyGraph.build(sample_catalog)


@pytest.fixture
def sample_image() -> np.ndarray:
    """The assembled sample picture in the orientation the tiles were cut from."""
    return parse_grid((DATA_DIR / "sample_image.txt").read_text())


@pytest.fixture
def oriented_image() -> np.ndarray:
    """The sample picture turned so that both sea monsters read as drawn."""
    return parse_grid((DATA_DIR / "sample_image_oriented.txt").read_text())
