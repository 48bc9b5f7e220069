"""End-to-end solve: adjacency, corner product, assembly and roughness."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Union

import numpy as np

from .assembler import AssembledImage, Assembler, AssemblerConfig, grid_dimension
from .catalog import TileCatalog
from .graph import AdjacencyGraph
from .pattern import SEA_MONSTER, MatcherConfig, MatchReport, Pattern, PatternMatcher
from .tile import Tile

logger = logging.getLogger(__name__)


@dataclass
class PuzzleSolution:
    """Container for the results of one puzzle."""

    corner_product: int
    roughness: int
    matches: int
    assembled: AssembledImage
    report: MatchReport

    @property
    def image(self) -> np.ndarray:
        return self.assembled.image


def solve_puzzle(
    tiles: Union[TileCatalog, Iterable[Tile]],
    pattern: Pattern = SEA_MONSTER,
    assembler_config: Optional[AssemblerConfig] = None,
    matcher_config: Optional[MatcherConfig] = None,
) -> PuzzleSolution:
    """Run the whole pipeline on a complete tile set."""
    catalog = tiles if isinstance(tiles, TileCatalog) else TileCatalog(tiles)
    grid_dimension(len(catalog))
    logger.info("solving puzzle of %d tiles (%dx%d cells each)", len(catalog), catalog.tile_size, catalog.tile_size)

    graph = AdjacencyGraph.build(catalog)
    graph.validate_degrees()
    corner_product = graph.corner_product()
    logger.info("corners %s, product %d", graph.corners(), corner_product)

    assembled = Assembler(assembler_config).assemble(graph)
    report = PatternMatcher(matcher_config).scan(assembled.image, pattern)
    return PuzzleSolution(
        corner_product=corner_product,
        roughness=report.roughness,
        matches=report.matches,
        assembled=assembled,
        report=report,
    )
