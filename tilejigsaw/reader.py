"""Parse ``Tile <id>:`` blocks of ``#``/``.`` rows into tiles."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from .errors import FormatError
from .tile import MARKED, UNMARKED, Tile

logger = logging.getLogger(__name__)

_HEADER = re.compile(r"^Tile\s+(\d+):$")
_CELLS = frozenset((MARKED, UNMARKED))


def parse_tiles(text: str, tile_size: Optional[int] = None) -> List[Tile]:
    """Parse every tile block in `text`.

    Blocks are separated by blank lines. Every tile must be square and, when
    `tile_size` is omitted, as large as the first tile of the input.
    """
    lines = [line.rstrip() for line in text.splitlines()]
    tiles: List[Tile] = []
    index = 0
    while index < len(lines):
        if not lines[index]:
            index += 1
            continue

        header_line = index + 1
        match = _HEADER.match(lines[index])
        if match is None:
            raise FormatError(f"expected 'Tile <id>:' header, got {lines[index]!r}", line=header_line)
        tile_id = int(match.group(1))
        index += 1

        rows: List[str] = []
        while index < len(lines) and lines[index] and not _HEADER.match(lines[index]):
            row = lines[index]
            bad = set(row) - _CELLS
            if bad:
                raise FormatError(
                    f"invalid characters {sorted(bad)} in tile {tile_id}",
                    line=index + 1,
                    tile_id=tile_id,
                )
            if rows and len(row) != len(rows[0]):
                raise FormatError(
                    f"row has {len(row)} cells, expected {len(rows[0])}",
                    line=index + 1,
                    tile_id=tile_id,
                )
            rows.append(row)
            index += 1

        if not rows or len(rows) != len(rows[0]):
            width = len(rows[0]) if rows else 0
            raise FormatError(
                f"tile {tile_id} is {len(rows)}x{width}, expected a square block",
                line=header_line,
                tile_id=tile_id,
            )
        expected = tile_size if tile_size is not None else (tiles[0].size if tiles else None)
        if expected is not None and len(rows) != expected:
            raise FormatError(
                f"tile {tile_id} has size {len(rows)}, expected {expected}",
                line=header_line,
                tile_id=tile_id,
            )
        tiles.append(Tile.from_rows(tile_id, rows))

    logger.debug("parsed %d tiles", len(tiles))
    return tiles


def load_tiles(path: Union[str, Path], tile_size: Optional[int] = None) -> List[Tile]:
    """Read and parse a tile file."""
    return parse_tiles(Path(path).read_text(), tile_size=tile_size)
