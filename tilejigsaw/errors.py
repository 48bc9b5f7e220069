"""Typed failures raised while reading, linking and assembling tiles."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple


class PuzzleError(Exception):
    """Base class for every structural or input-integrity failure."""


class FormatError(PuzzleError, ValueError):
    """Malformed tile data: bad dimensions, characters, ids or tile count."""

    def __init__(
        self, message: str, line: Optional[int] = None, tile_id: Optional[int] = None
    ) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
        self.tile_id = tile_id


class InconsistentPuzzleError(PuzzleError):
    """A border signature is exposed by more than two tiles."""

    def __init__(self, signature: int, tile_ids: Iterable[int]) -> None:
        self.signature = signature
        self.tile_ids = tuple(sorted(tile_ids))
        super().__init__(
            f"signature {signature} is shared by {len(self.tile_ids)} tiles: {self.tile_ids}"
        )


class UnsolvablePuzzleError(PuzzleError):
    """The adjacency structure cannot form a square arrangement."""

    def __init__(self, message: str, tile_ids: Iterable[int] = ()) -> None:
        super().__init__(message)
        self.tile_ids = tuple(sorted(tile_ids))


class AssemblyConflictError(PuzzleError):
    """Placement wrote a cell twice, lost a tile, or found mismatching seams."""

    def __init__(
        self,
        message: str,
        tile_id: Optional[int] = None,
        position: Optional[Tuple[int, int]] = None,
    ) -> None:
        details = []
        if tile_id is not None:
            details.append(f"tile={tile_id}")
        if position is not None:
            details.append(f"position={position}")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)
        self.tile_id = tile_id
        self.position = position
