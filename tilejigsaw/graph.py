"""Tile adjacency discovered from shared border signatures."""

from __future__ import annotations

import logging
from math import prod
from typing import Dict, FrozenSet, List, Set

from .catalog import TileCatalog
from .errors import InconsistentPuzzleError, UnsolvablePuzzleError

logger = logging.getLogger(__name__)


class AdjacencyGraph:
    """Map signatures to the tiles exposing them, and tiles to their neighbours.

    Two tiles are neighbours when they expose a common signature. A signature
    exposed by a single tile lies on the outer boundary of the puzzle; one
    exposed by three or more tiles makes the puzzle ambiguous.
    """

    def __init__(
        self,
        catalog: TileCatalog,
        signature_to_tiles: Dict[int, FrozenSet[int]],
        neighbors: Dict[int, FrozenSet[int]],
    ) -> None:
        self.catalog = catalog
        self._signature_to_tiles = signature_to_tiles
        self._neighbors = neighbors

    @classmethod
    def build(cls, catalog: TileCatalog) -> "AdjacencyGraph":
        owners: Dict[int, Set[int]] = {}
        for tile_id in catalog.ids:
            for signature in catalog.signatures(tile_id):
                owners.setdefault(signature, set()).add(tile_id)

        neighbors: Dict[int, Set[int]] = {tile_id: set() for tile_id in catalog.ids}
        for signature, tile_ids in owners.items():
            if len(tile_ids) > 2:
                raise InconsistentPuzzleError(signature, tile_ids)
            if len(tile_ids) == 2:
                a, b = sorted(tile_ids)
                neighbors[a].add(b)
                neighbors[b].add(a)

        graph = cls(
            catalog,
            {signature: frozenset(ids) for signature, ids in owners.items()},
            {tile_id: frozenset(ids) for tile_id, ids in neighbors.items()},
        )
        logger.info(
            "adjacency graph: %d tiles, %d signatures, %d links",
            len(catalog),
            len(owners),
            sum(len(ids) for ids in neighbors.values()) // 2,
        )
        return graph

    def tiles_with(self, signature: int) -> FrozenSet[int]:
        return self._signature_to_tiles.get(signature, frozenset())

    def neighbors(self, tile_id: int) -> FrozenSet[int]:
        return self._neighbors[tile_id]

    def degree(self, tile_id: int) -> int:
        return len(self._neighbors[tile_id])

    def _with_degree(self, degree: int) -> List[int]:
        return sorted(tile_id for tile_id, ids in self._neighbors.items() if len(ids) == degree)

    def corners(self) -> List[int]:
        """Ids of the 4 tiles with exactly two neighbours."""
        corners = self._with_degree(2)
        if len(corners) != 4:
            raise UnsolvablePuzzleError(
                f"expected 4 corner tiles, found {len(corners)}", tile_ids=corners
            )
        return corners

    def edges(self) -> List[int]:
        return self._with_degree(3)

    def interiors(self) -> List[int]:
        return self._with_degree(4)

    def corner_product(self) -> int:
        return prod(self.corners())

    def validate_degrees(self) -> None:
        """Check that every tile can sit in a square arrangement."""
        for tile_id, ids in sorted(self._neighbors.items()):
            if len(ids) not in (2, 3, 4):
                raise UnsolvablePuzzleError(
                    f"tile {tile_id} has {len(ids)} neighbours", tile_ids=[tile_id]
                )
