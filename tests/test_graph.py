"""Tests for border-signature adjacency."""

from __future__ import annotations

from typing import List

import pytest

from tilejigsaw.catalog import TileCatalog
from tilejigsaw.errors import InconsistentPuzzleError, UnsolvablePuzzleError
from tilejigsaw.graph import AdjacencyGraph
from tilejigsaw.tile import Tile
from tilejigsaw.utils import generate_puzzle


def test_sample_corners_and_product(sample_graph: AdjacencyGraph) -> None:
    """The four corner ids multiply to the known product."""
    assert sample_graph.corners() == [1171, 1951, 2971, 3079]
    assert sample_graph.corner_product() == 20899048083289


def test_sample_degree_classes(sample_graph: AdjacencyGraph) -> None:
    assert sample_graph.edges() == [1489, 2311, 2473, 2729]
    assert sample_graph.interiors() == [1427]
    assert sample_graph.degree(1427) == 4
    sample_graph.validate_degrees()


def test_neighbors_are_symmetric(sample_graph: AdjacencyGraph) -> None:
    for tile_id in sample_graph.catalog.ids:
        for other in sample_graph.neighbors(tile_id):
            assert tile_id in sample_graph.neighbors(other)
        assert tile_id not in sample_graph.neighbors(tile_id)


def test_tiles_with_signature(sample_graph: AdjacencyGraph) -> None:
    """Boundary signatures belong to one tile, shared ones to two."""
    owners = [sample_graph.tiles_with(sig) for sig in sample_graph.catalog.signatures(1427)]
    assert all(len(ids) == 2 for ids in owners)
    assert sample_graph.tiles_with(-1) == frozenset()


def test_signature_on_three_tiles_is_inconsistent(sample_tiles: List[Tile]) -> None:
    """A copy of a tile under a new id makes its shared borders ambiguous."""
    source = next(tile for tile in sample_tiles if tile.id == 2311)
    tiles = sample_tiles + [Tile(9999, source.cells)]
    with pytest.raises(InconsistentPuzzleError) as info:
        AdjacencyGraph.build(TileCatalog(tiles))
    assert len(info.value.tile_ids) == 3
    assert {2311, 9999} <= set(info.value.tile_ids)


def test_row_of_tiles_has_no_four_corners(sample_tiles: List[Tile]) -> None:
    """A single row of three tiles cannot form a square."""
    row = [tile for tile in sample_tiles if tile.id in (1951, 2311, 3079)]
    graph = AdjacencyGraph.build(TileCatalog(row))
    assert graph.degree(2311) == 2
    with pytest.raises(UnsolvablePuzzleError):
        graph.corners()
    with pytest.raises(UnsolvablePuzzleError) as info:
        graph.validate_degrees()
    assert info.value.tile_ids == (1951,)


def test_single_tile_has_no_corners(sample_tiles: List[Tile]) -> None:
    graph = AdjacencyGraph.build(TileCatalog(sample_tiles[:1]))
    with pytest.raises(UnsolvablePuzzleError):
        graph.corner_product()


@pytest.mark.parametrize("dimension, seed", [(2, 1), (3, 7), (5, 11)])
def test_generated_puzzle_corners(dimension: int, seed: int) -> None:
    """Corners of a generated puzzle are the tiles cut from the canvas corners."""
    puzzle = generate_puzzle(dimension, seed=seed)
    graph = AdjacencyGraph.build(TileCatalog(puzzle.tiles))
    graph.validate_degrees()
    assert graph.corners() == puzzle.corner_ids
    assert len(graph.edges()) == 4 * (dimension - 2)
    assert len(graph.interiors()) == (dimension - 2) ** 2
