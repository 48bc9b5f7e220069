"""Rotations, reflections and border alignment of square grids and tiles.

Every function is pure: grids are never modified in place and tile
transforms return new `Tile` values.
"""

from __future__ import annotations

from typing import Callable, Iterator, Tuple

import numpy as np

from .tile import Direction, Side, Tile, encode_border

GridTransform = Callable[[np.ndarray], np.ndarray]


def rotate_grid(grid: np.ndarray) -> np.ndarray:
    """Rotate 90 degrees clockwise: the top row becomes the right column."""
    return np.rot90(grid, k=-1).copy()


def flip_grid_horizontal(grid: np.ndarray) -> np.ndarray:
    """Mirror left to right."""
    return grid[:, ::-1].copy()


def flip_grid_vertical(grid: np.ndarray) -> np.ndarray:
    """Mirror top to bottom."""
    return grid[::-1, :].copy()


# Visits the 4 rotations of the grid and then the 4 rotations of its mirror.
DIHEDRAL_SEQUENCE: Tuple[GridTransform, ...] = (
    rotate_grid,
    rotate_grid,
    rotate_grid,
    flip_grid_horizontal,
    rotate_grid,
    rotate_grid,
    rotate_grid,
)


def dihedral_orientations(grid: np.ndarray) -> Iterator[np.ndarray]:
    """Yield the 8 orientations of `grid`, starting with `grid` itself."""
    current = np.asarray(grid)
    yield current
    for transform in DIHEDRAL_SEQUENCE:
        current = transform(current)
        yield current


def rotate_clockwise(tile: Tile) -> Tile:
    return tile.with_cells(rotate_grid(tile.cells))


def flip_horizontal(tile: Tile) -> Tile:
    return tile.with_cells(flip_grid_horizontal(tile.cells))


def flip_vertical(tile: Tile) -> Tile:
    return tile.with_cells(flip_grid_vertical(tile.cells))


def turns(source: Direction, target: Direction) -> int:
    """Clockwise quarter turns that bring `source` round to `target`."""
    return (int(target) - int(source) + 4) % 4


def border_signature(tile: Tile, direction: Direction) -> int:
    """Signature of the border currently facing `direction`, read canonically."""
    return encode_border(tile.border(direction))


def orient(tile: Tile, side: Side, target: Direction) -> Tile:
    """Rotate `tile` until `side` faces `target`."""
    cells = tile.cells
    for _ in range(turns(side.direction, target)):
        cells = rotate_grid(cells)
    return tile.with_cells(cells)


def needs_mirror(side: Side, target: Direction) -> bool:
    """Whether `side`, once rotated to face `target`, reads against its signature.

    Rotation keeps the clockwise reading of a border. The canonical reading of
    the target border agrees with the side's signature only when the side's
    flip flag matches the change of clockwise sense between the two facings.
    """
    return side.flipped == (side.direction.reads_clockwise == target.reads_clockwise)


def align_mirror(tile: Tile, side: Side, target: Direction) -> Tile:
    """Mirror an oriented tile so the border facing `target` reads as `side.signature`.

    The mirror keeps that border in place: a vertical flip for Left/Right, a
    horizontal flip for Top/Bottom.
    """
    if not needs_mirror(side, target):
        return tile
    if target.is_horizontal:
        return flip_vertical(tile)
    return flip_horizontal(tile)


def orient_and_align(tile: Tile, side: Side, target: Direction) -> Tile:
    return align_mirror(orient(tile, side, target), side, target)
