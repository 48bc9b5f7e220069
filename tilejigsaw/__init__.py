"""Square tile puzzle assembly and pattern search package."""

from .assembler import AssembledImage, Assembler, AssemblerConfig, PlacementTask, assemble, grid_dimension
from .catalog import TileCatalog
from .errors import (
    AssemblyConflictError,
    FormatError,
    InconsistentPuzzleError,
    PuzzleError,
    UnsolvablePuzzleError,
)
from .graph import AdjacencyGraph
from .orientation import (
    align_mirror,
    border_signature,
    dihedral_orientations,
    flip_horizontal,
    flip_vertical,
    needs_mirror,
    orient,
    orient_and_align,
    rotate_clockwise,
    turns,
)
from .pattern import SEA_MONSTER, MatcherConfig, MatchReport, Pattern, PatternMatcher
from .pipeline import PuzzleSolution, solve_puzzle
from .reader import load_tiles, parse_tiles
from .tile import Direction, Side, Tile, all_sides, all_signatures, decode_border, encode_border

__all__ = [
    "Direction",
    "Side",
    "Tile",
    "encode_border",
    "decode_border",
    "all_sides",
    "all_signatures",
    "TileCatalog",
    "parse_tiles",
    "load_tiles",
    "rotate_clockwise",
    "flip_horizontal",
    "flip_vertical",
    "turns",
    "orient",
    "needs_mirror",
    "align_mirror",
    "orient_and_align",
    "border_signature",
    "dihedral_orientations",
    "AdjacencyGraph",
    "AssemblerConfig",
    "PlacementTask",
    "AssembledImage",
    "Assembler",
    "assemble",
    "grid_dimension",
    "Pattern",
    "SEA_MONSTER",
    "MatcherConfig",
    "MatchReport",
    "PatternMatcher",
    "PuzzleSolution",
    "solve_puzzle",
    "PuzzleError",
    "FormatError",
    "InconsistentPuzzleError",
    "UnsolvablePuzzleError",
    "AssemblyConflictError",
]
