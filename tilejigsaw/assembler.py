"""Place every tile into one image with a globally consistent orientation."""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Tuple

import numpy as np

from .errors import AssemblyConflictError, FormatError, UnsolvablePuzzleError
from .graph import AdjacencyGraph
from .orientation import border_signature, needs_mirror, orient_and_align
from .tile import Direction, Side, Tile

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass
class AssemblerConfig:
    """Configuration for the tile assembler."""

    lifo: bool = False
    verify_seams: bool = True


@dataclass(frozen=True)
class PlacementTask:
    """Put `tile_id` at (`row`, `col`) with `side` turned to face `target`."""

    row: int
    col: int
    tile_id: int
    side: Side
    target: Direction


@dataclass(frozen=True, eq=False)
class AssembledImage:
    """The assembled picture, the tile id at each grid position and the placement order."""

    image: np.ndarray
    layout: np.ndarray
    placement_order: Tuple[Tuple[int, int, int], ...]

    @property
    def dimension(self) -> int:
        return int(self.layout.shape[0])


@dataclass
class _AssemblyState:
    image: np.ndarray
    layout: np.ndarray
    claims: Dict[Position, int] = field(default_factory=dict)
    positions: Dict[int, Position] = field(default_factory=dict)
    oriented: Dict[Position, Tile] = field(default_factory=dict)
    order: List[Tuple[int, int, int]] = field(default_factory=list)


def grid_dimension(tile_count: int) -> int:
    """Side length of the square grid formed by `tile_count` tiles."""
    dimension = math.isqrt(tile_count)
    if tile_count <= 0 or dimension * dimension != tile_count:
        raise FormatError(f"{tile_count} tiles cannot form a square grid")
    return dimension


class Assembler:
    """Reconstruct the full image by propagating placements from one corner."""

    def __init__(self, config: Optional[AssemblerConfig] = None) -> None:
        self.config = config if config is not None else AssemblerConfig()

    def assemble(self, graph: AdjacencyGraph) -> AssembledImage:
        catalog = graph.catalog
        dimension = grid_dimension(len(catalog))
        inner = catalog.tile_size - 2
        state = _AssemblyState(
            image=np.zeros((dimension * inner, dimension * inner), dtype=bool),
            layout=np.full((dimension, dimension), -1, dtype=np.int64),
        )

        self._run_queue(graph, state, dimension)
        if len(state.order) != len(catalog):
            missing = sorted(set(catalog.ids) - {tile_id for _, _, tile_id in state.order})
            raise AssemblyConflictError(
                f"placement stopped with {len(missing)} tiles left: {missing}"
            )
        if self.config.verify_seams:
            self._verify_seams(state)

        state.image.setflags(write=False)
        state.layout.setflags(write=False)
        logger.info("assembled %dx%d image from %d tiles", *state.image.shape, len(catalog))
        return AssembledImage(
            image=state.image, layout=state.layout, placement_order=tuple(state.order)
        )

    def _run_queue(self, graph: AdjacencyGraph, state: _AssemblyState, dimension: int) -> None:
        catalog = graph.catalog
        seed = self._seed_task(graph)
        logger.info(
            "assembling %d tiles on a %dx%d grid from corner %d",
            len(catalog),
            dimension,
            dimension,
            seed.tile_id,
        )

        queue: Deque[PlacementTask] = deque()
        self._claim(state, seed)
        queue.append(seed)
        while queue:
            task = queue.pop() if self.config.lifo else queue.popleft()
            tile = orient_and_align(catalog[task.tile_id], task.side, task.target)

            if task.col < dimension - 1:
                follow = self._neighbor_task(graph, tile, task, Direction.RIGHT)
                if self._claim(state, follow):
                    queue.append(follow)
            if task.row < dimension - 1:
                follow = self._neighbor_task(graph, tile, task, Direction.BOTTOM)
                if self._claim(state, follow):
                    queue.append(follow)

            self._place(state, tile, task.row, task.col)

    def _seed_task(self, graph: AdjacencyGraph) -> PlacementTask:
        """Orient the smallest corner so its two neighbours lie to the right and below."""
        catalog = graph.catalog
        corner = graph.corners()[0]
        shared = [
            side
            for side in catalog.sides(corner)
            if len(graph.tiles_with(side.signature)) == 2
        ]
        directions = sorted({side.direction for side in shared})
        if len(directions) != 2:
            raise UnsolvablePuzzleError(
                f"corner tile {corner} has neighbours on {len(directions)} borders",
                tile_ids=[corner],
            )

        first, second = directions
        if first.clockwise() == second:
            right = first
        elif second.clockwise() == first:
            right = second
        else:
            raise UnsolvablePuzzleError(
                f"corner tile {corner} has neighbours on opposite borders", tile_ids=[corner]
            )

        # Of the two readings of that border, take the one that needs no mirror.
        side = next(
            side
            for side in shared
            if side.direction == right and not needs_mirror(side, Direction.RIGHT)
        )
        return PlacementTask(0, 0, corner, side, Direction.RIGHT)

    def _neighbor_task(
        self, graph: AdjacencyGraph, tile: Tile, task: PlacementTask, facing: Direction
    ) -> PlacementTask:
        """Find the tile across the border of `tile` facing `facing` and how to place it."""
        signature = border_signature(tile, facing)
        candidates = graph.tiles_with(signature) - {tile.id}
        if len(candidates) != 1:
            raise AssemblyConflictError(
                f"{len(candidates)} tiles match the {facing.name.lower()} border "
                f"(signature {signature})",
                tile_id=tile.id,
                position=(task.row, task.col),
            )
        neighbor = next(iter(candidates))
        side = graph.catalog.side_for(neighbor, signature)
        if facing == Direction.RIGHT:
            row, col = task.row, task.col + 1
        else:
            row, col = task.row + 1, task.col
        return PlacementTask(row, col, neighbor, side, facing.opposite())

    def _claim(self, state: _AssemblyState, task: PlacementTask) -> bool:
        """Reserve the task's position; False when the same tile already holds it."""
        position = (task.row, task.col)
        holder = state.claims.get(position)
        if holder is not None:
            if holder != task.tile_id:
                raise AssemblyConflictError(
                    f"position already claimed by tile {holder}",
                    tile_id=task.tile_id,
                    position=position,
                )
            return False

        known = state.positions.get(task.tile_id)
        if known is not None:
            raise AssemblyConflictError(
                f"tile already claimed position {known}", tile_id=task.tile_id, position=position
            )
        state.claims[position] = task.tile_id
        state.positions[task.tile_id] = position
        logger.debug("claimed %s for tile %d", position, task.tile_id)
        return True

    def _place(self, state: _AssemblyState, tile: Tile, row: int, col: int) -> None:
        """Copy the interior of an oriented tile into its image block."""
        if state.layout[row, col] != -1:
            raise AssemblyConflictError(
                f"image block already filled by tile {int(state.layout[row, col])}",
                tile_id=tile.id,
                position=(row, col),
            )
        inner = tile.size - 2
        y0 = row * inner
        x0 = col * inner
        state.image[y0 : y0 + inner, x0 : x0 + inner] = tile.interior()
        state.layout[row, col] = tile.id
        state.oriented[(row, col)] = tile
        state.order.append((row, col, tile.id))

    def _verify_seams(self, state: _AssemblyState) -> None:
        """Check that every pair of placed neighbours shares identical borders."""
        for (row, col), tile in state.oriented.items():
            right = state.oriented.get((row, col + 1))
            if right is not None and not np.array_equal(
                tile.border(Direction.RIGHT), right.border(Direction.LEFT)
            ):
                raise AssemblyConflictError(
                    f"right seam does not match tile {right.id}", tile_id=tile.id, position=(row, col)
                )
            below = state.oriented.get((row + 1, col))
            if below is not None and not np.array_equal(
                tile.border(Direction.BOTTOM), below.border(Direction.TOP)
            ):
                raise AssemblyConflictError(
                    f"bottom seam does not match tile {below.id}", tile_id=tile.id, position=(row, col)
                )


def assemble(graph: AdjacencyGraph, config: Optional[AssemblerConfig] = None) -> AssembledImage:
    return Assembler(config).assemble(graph)
