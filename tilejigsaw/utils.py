"""Helpers for synthetic puzzles and text rendering of grids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Set, Tuple, Union

import numpy as np

from .errors import FormatError
from .orientation import dihedral_orientations
from .tile import MARKED, UNMARKED, Tile, encode_border


@dataclass(frozen=True, eq=False)
class GeneratedPuzzle:
    """Shuffled, randomly oriented tiles cut from a known picture."""

    tiles: List[Tile]
    image: np.ndarray
    layout: np.ndarray

    @property
    def corner_ids(self) -> List[int]:
        return sorted(
            int(self.layout[r, c]) for r in (0, -1) for c in (0, -1)
        )


def set_random_seed(seed: int = 42) -> np.random.Generator:
    """Create a deterministic numpy random generator."""
    return np.random.default_rng(seed)


def shuffle_tiles(tiles: List[Tile], seed: int = 42) -> Tuple[List[Tile], np.ndarray]:
    """Return a shuffled copy of tiles and the applied permutation."""
    rng = set_random_seed(seed)
    order = rng.permutation(len(tiles))
    return [tiles[i] for i in order], order


def parse_grid(text: Union[str, Sequence[str]]) -> np.ndarray:
    """Parse rows of ``#``/``.`` into a boolean array."""
    rows = [row.rstrip() for row in (text.splitlines() if isinstance(text, str) else text)]
    rows = [row for row in rows if row]
    if not rows:
        raise FormatError("grid is empty")
    width = len(rows[0])
    for number, row in enumerate(rows, start=1):
        if len(row) != width:
            raise FormatError(f"row has {len(row)} cells, expected {width}", line=number)
        if set(row) - {MARKED, UNMARKED}:
            raise FormatError(f"invalid characters in {row!r}", line=number)
    return np.array([[cell == MARKED for cell in row] for row in rows], dtype=bool)


def render_grid(grid: np.ndarray) -> str:
    """Render a boolean grid as ``#``/``.`` rows."""
    return "\n".join("".join(MARKED if cell else UNMARKED for cell in row) for row in grid)


def _redraw_until_unique(
    rng: np.random.Generator,
    segment: np.ndarray,
    seen: Set[int],
    density: float,
    max_attempts: int,
) -> None:
    """Redraw the inner cells of a border segment until both readings are new.

    The end cells are shared with the crossing borders and stay fixed.
    """
    for _ in range(max_attempts):
        forward = encode_border(segment)
        backward = encode_border(segment[::-1])
        if forward != backward and forward not in seen and backward not in seen:
            seen.update((forward, backward))
            return
        segment[1:-1] = rng.random(segment.shape[0] - 2) < density
    raise ValueError("could not draw a unique border; use larger tiles or a smaller grid")


def generate_puzzle(
    dimension: int,
    tile_size: int = 10,
    seed: int = 42,
    density: float = 0.5,
    max_attempts: int = 1000,
) -> GeneratedPuzzle:
    """Cut a random picture into `dimension` x `dimension` matching tiles.

    Neighbouring tiles share their border row or column, every border is
    unique and not a palindrome, and each tile is randomly rotated or
    reflected before the whole set is shuffled.
    """
    if dimension <= 0:
        raise ValueError("dimension must be a positive integer")
    if tile_size < 3:
        raise ValueError("tile_size must be at least 3")

    rng = set_random_seed(seed)
    step = tile_size - 1
    side = dimension * step + 1
    canvas = rng.random((side, side)) < density

    seen: Set[int] = set()
    for line in range(0, side, step):
        for block in range(dimension):
            start = block * step
            _redraw_until_unique(rng, canvas[line, start : start + tile_size], seen, density, max_attempts)
            _redraw_until_unique(rng, canvas[start : start + tile_size, line], seen, density, max_attempts)

    ids = rng.choice(np.arange(1000, 10000), size=dimension * dimension, replace=False)
    layout = ids.reshape(dimension, dimension).astype(np.int64)

    tiles: List[Tile] = []
    for r in range(dimension):
        for c in range(dimension):
            cells = canvas[r * step : r * step + tile_size, c * step : c * step + tile_size]
            orientation = int(rng.integers(0, 8))
            oriented = list(dihedral_orientations(cells))[orientation]
            tiles.append(Tile(int(layout[r, c]), oriented))

    keep = np.ones(side, dtype=bool)
    keep[::step] = False
    image = canvas[keep][:, keep]
    shuffled, _ = shuffle_tiles(tiles, seed=seed)
    return GeneratedPuzzle(tiles=shuffled, image=image, layout=layout)
