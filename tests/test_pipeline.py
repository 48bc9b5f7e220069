"""End-to-end tests for solving whole puzzles."""

from __future__ import annotations

import math
from pathlib import Path
from typing import List

import numpy as np
import pytest

from tilejigsaw.assembler import AssemblerConfig
from tilejigsaw.catalog import TileCatalog
from tilejigsaw.errors import AssemblyConflictError, FormatError, InconsistentPuzzleError, PuzzleError
from tilejigsaw.orientation import dihedral_orientations
from tilejigsaw.pattern import MatcherConfig, Pattern
from tilejigsaw.pipeline import solve_puzzle
from tilejigsaw.reader import load_tiles
from tilejigsaw.tile import Tile
from tilejigsaw.utils import generate_puzzle, parse_grid, render_grid

DATA_DIR = Path(__file__).resolve().parent / "data"


def test_solve_sample(sample_tiles: List[Tile]) -> None:
    """The sample yields its known corner product and roughness."""
    solution = solve_puzzle(sample_tiles)
    assert solution.corner_product == 20899048083289
    assert solution.matches == 2
    assert solution.roughness == 273
    assert solution.assembled.image.shape == (24, 24)


def test_solve_accepts_catalog_and_configs(sample_catalog: TileCatalog) -> None:
    solution = solve_puzzle(
        sample_catalog,
        assembler_config=AssemblerConfig(lifo=True),
        matcher_config=MatcherConfig(workers=2),
    )
    assert solution.roughness == 273
    assert solution.report.counts[solution.report.best_orientation] == 2


def test_solve_generated_puzzle_with_custom_pattern() -> None:
    """A pattern cut from the source picture is found in the assembled one."""
    puzzle = generate_puzzle(4, tile_size=10, seed=5)
    pattern = Pattern(puzzle.image[3:9, 4:12], name="patch")
    solution = solve_puzzle(puzzle.tiles, pattern=pattern)
    assert solution.corner_product == math.prod(puzzle.corner_ids)
    assert solution.matches >= 1
    assert any(np.array_equal(solution.assembled.image, view) for view in dihedral_orientations(puzzle.image))


def test_solve_rejects_non_square_tile_count(sample_tiles: List[Tile]) -> None:
    with pytest.raises(FormatError):
        solve_puzzle(sample_tiles[:5])


def test_solve_rejects_ambiguous_borders(sample_tiles: List[Tile]) -> None:
    copies = [Tile(9000 + i, tile.cells) for i, tile in enumerate(sample_tiles[:7])]
    with pytest.raises(InconsistentPuzzleError):
        solve_puzzle(sample_tiles + copies)


def test_solve_reports_geometric_conflict() -> None:
    with pytest.raises(AssemblyConflictError):
        solve_puzzle(load_tiles(DATA_DIR / "conflict_tiles.txt"))


def test_all_failures_share_a_base_class(sample_tiles: List[Tile]) -> None:
    with pytest.raises(PuzzleError):
        solve_puzzle(sample_tiles[:3])


def test_render_and_parse_grid_agree(sample_tiles: List[Tile]) -> None:
    image = solve_puzzle(sample_tiles).assembled.image
    np.testing.assert_array_equal(parse_grid(render_grid(image)), image)
