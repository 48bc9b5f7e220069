"""Immutable square tiles and their border signatures."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import IntEnum
from typing import FrozenSet, Iterable, List, Sequence

import numpy as np

from .errors import FormatError

MARKED = "#"
UNMARKED = "."


class Direction(IntEnum):
    """Tile facings, numbered clockwise from the top."""

    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3

    def clockwise(self) -> "Direction":
        """Return the facing reached by one clockwise quarter turn."""
        return Direction((self + 1) % 4)

    def opposite(self) -> "Direction":
        return Direction((self + 2) % 4)

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    @property
    def reads_clockwise(self) -> bool:
        """Whether the canonical reading of this border follows a clockwise walk.

        Top (left to right) and Right (top to bottom) do; Bottom (left to right)
        and Left (top to bottom) run against it.
        """
        return self in (Direction.TOP, Direction.RIGHT)


@dataclass(frozen=True)
class Side:
    """One border of a tile read in one direction."""

    signature: int
    direction: Direction
    flipped: bool


def _is_marked(cell: object) -> bool:
    if isinstance(cell, str):
        if cell not in (MARKED, UNMARKED):
            raise FormatError(f"invalid cell character {cell!r}")
        return cell == MARKED
    return bool(cell)


def encode_border(cells: Iterable[object]) -> int:
    """Encode a border as an integer, first cell in the most significant bit."""
    signature = 0
    for cell in cells:
        signature = (signature << 1) | int(_is_marked(cell))
    return signature


def decode_border(signature: int, width: int) -> str:
    """Return the ``#``/``.`` string that `encode_border` maps to `signature`."""
    if width <= 0 or not 0 <= signature < (1 << width):
        raise ValueError(f"signature {signature} does not fit in {width} cells")
    return "".join(
        MARKED if (signature >> (width - 1 - i)) & 1 else UNMARKED for i in range(width)
    )


@dataclass(frozen=True, eq=False)
class Tile:
    """A numbered square grid of marked/unmarked cells."""

    id: int
    cells: np.ndarray

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, (int, np.integer)) or self.id <= 0:
            raise FormatError(f"tile id must be a positive integer, got {self.id!r}")
        cells = np.asarray(self.cells)
        if cells.dtype != np.bool_:
            raise FormatError(f"tile cells must be boolean, got {cells.dtype}", tile_id=int(self.id))
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise FormatError(f"tile must be square, got shape {cells.shape}", tile_id=int(self.id))
        if cells.shape[0] < 3:
            raise FormatError("tile must be at least 3x3", tile_id=int(self.id))
        cells = cells.copy()
        cells.setflags(write=False)
        object.__setattr__(self, "id", int(self.id))
        object.__setattr__(self, "cells", cells)

    @classmethod
    def from_rows(cls, tile_id: int, rows: Sequence[str]) -> "Tile":
        """Build a tile from rows of ``#`` and ``.`` characters."""
        width = len(rows)
        values: List[List[bool]] = []
        for row in rows:
            if len(row) != width:
                raise FormatError(
                    f"expected {width} cells per row, got {len(row)}", tile_id=tile_id
                )
            values.append([_is_marked(cell) for cell in row])
        return cls(id=tile_id, cells=np.array(values, dtype=bool).reshape(width, width))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self.id == other.id and np.array_equal(self.cells, other.cells)

    def __hash__(self) -> int:
        return hash((self.id, self.cells.tobytes()))

    def __repr__(self) -> str:
        return f"Tile(id={self.id}, size={self.size})"

    @property
    def size(self) -> int:
        return int(self.cells.shape[0])

    def with_cells(self, cells: np.ndarray) -> "Tile":
        """Return a tile with the same id and new cells."""
        return dataclasses.replace(self, cells=cells)

    def border(self, direction: Direction) -> np.ndarray:
        """Canonical reading of one border: rows left to right, columns top to bottom."""
        if direction == Direction.TOP:
            return self.cells[0, :]
        if direction == Direction.BOTTOM:
            return self.cells[-1, :]
        if direction == Direction.LEFT:
            return self.cells[:, 0]
        if direction == Direction.RIGHT:
            return self.cells[:, -1]
        raise ValueError(f"Unsupported direction: {direction}")

    def sides(self) -> List[Side]:
        """All 8 sides: each border in canonical and reversed reading."""
        sides: List[Side] = []
        for direction in (Direction.TOP, Direction.BOTTOM, Direction.LEFT, Direction.RIGHT):
            cells = self.border(direction)
            sides.append(Side(encode_border(cells), direction, False))
            sides.append(Side(encode_border(cells[::-1]), direction, True))
        return sides

    def signatures(self) -> FrozenSet[int]:
        return frozenset(side.signature for side in self.sides())

    def interior(self) -> np.ndarray:
        """Cells without the outer border ring."""
        return self.cells[1:-1, 1:-1]

    def to_rows(self) -> List[str]:
        return ["".join(MARKED if cell else UNMARKED for cell in row) for row in self.cells]


def all_sides(tile: Tile) -> List[Side]:
    return tile.sides()


def all_signatures(tile: Tile) -> FrozenSet[int]:
    return tile.signatures()
