"""Indexed, validated collection of the tiles of one puzzle."""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Iterator, List

from .errors import FormatError
from .tile import Side, Tile


class TileCatalog:
    """Hold the raw tiles of a puzzle and their precomputed sides."""

    def __init__(self, tiles: Iterable[Tile]) -> None:
        self._tiles: Dict[int, Tile] = {}
        for tile in tiles:
            if tile.id in self._tiles:
                raise FormatError(f"duplicate tile id {tile.id}", tile_id=tile.id)
            self._tiles[tile.id] = tile
        if not self._tiles:
            raise FormatError("puzzle contains no tiles")

        sizes = {tile.size for tile in self._tiles.values()}
        if len(sizes) != 1:
            raise FormatError(f"tiles have mixed sizes: {sorted(sizes)}")
        self.tile_size = sizes.pop()
        self._sides: Dict[int, List[Side]] = {
            tile_id: tile.sides() for tile_id, tile in self._tiles.items()
        }

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles.values())

    def __contains__(self, tile_id: object) -> bool:
        return tile_id in self._tiles

    def __getitem__(self, tile_id: int) -> Tile:
        return self._tiles[tile_id]

    @property
    def ids(self) -> List[int]:
        return sorted(self._tiles)

    def sides(self, tile_id: int) -> List[Side]:
        return list(self._sides[tile_id])

    def signatures(self, tile_id: int) -> FrozenSet[int]:
        return frozenset(side.signature for side in self._sides[tile_id])

    def side_for(self, tile_id: int, signature: int) -> Side:
        """Return the first side of a tile that carries `signature`."""
        for side in self._sides[tile_id]:
            if side.signature == signature:
                return side
        raise KeyError(f"tile {tile_id} has no side with signature {signature}")
