"""Search an assembled image for a fixed pattern in all 8 orientations."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import FormatError
from .orientation import dihedral_orientations
from .tile import MARKED, UNMARKED

logger = logging.getLogger(__name__)

WILDCARDS = frozenset((" ", UNMARKED))


@dataclass(frozen=True, eq=False)
class Pattern:
    """Boolean mask: True cells must be marked, False cells match anything."""

    mask: np.ndarray
    name: str = "pattern"

    def __post_init__(self) -> None:
        mask = np.asarray(self.mask)
        if mask.dtype != np.bool_ or mask.ndim != 2:
            raise FormatError(f"pattern mask must be a 2-D boolean array, got {mask.dtype} {mask.shape}")
        if not mask.any():
            raise FormatError("pattern has no marked cells")
        mask = mask.copy()
        mask.setflags(write=False)
        object.__setattr__(self, "mask", mask)

    @classmethod
    def from_text(cls, text: Union[str, Sequence[str]], name: str = "pattern") -> "Pattern":
        """Parse ``#`` (must match) and space or ``.`` (wildcard) rows.

        Rows shorter than the widest one are padded with wildcards.
        """
        rows = list(text.split("\n") if isinstance(text, str) else text)
        while rows and not rows[0]:
            rows.pop(0)
        while rows and not rows[-1]:
            rows.pop()
        if not rows:
            raise FormatError("pattern is empty")

        width = max(len(row) for row in rows)
        mask = np.zeros((len(rows), width), dtype=bool)
        for r, row in enumerate(rows):
            for c, cell in enumerate(row):
                if cell == MARKED:
                    mask[r, c] = True
                elif cell not in WILDCARDS:
                    raise FormatError(f"invalid pattern character {cell!r}", line=r + 1)
        return cls(mask=mask, name=name)

    @property
    def shape(self) -> Tuple[int, int]:
        return int(self.mask.shape[0]), int(self.mask.shape[1])

    @property
    def marked_count(self) -> int:
        return int(np.count_nonzero(self.mask))

    @property
    def offsets(self) -> List[Tuple[int, int]]:
        return [(int(r), int(c)) for r, c in np.argwhere(self.mask)]


SEA_MONSTER = Pattern.from_text(
    (
        "                  # ",
        "#    ##    ##    ###",
        " #  #  #  #  #  #   ",
    ),
    name="sea monster",
)


@dataclass
class MatcherConfig:
    """Configuration for the orientation search."""

    workers: int = 1


@dataclass(frozen=True)
class MatchReport:
    """Pattern occurrences per orientation and the derived roughness."""

    counts: Tuple[int, ...]
    best_orientation: int
    matches: int
    marked_cells: int
    roughness: int


class PatternMatcher:
    """Count pattern occurrences in an image and its 7 other orientations."""

    def __init__(self, config: Optional[MatcherConfig] = None) -> None:
        self.config = config if config is not None else MatcherConfig()

    @staticmethod
    def _anchor_hits(image: np.ndarray, pattern: Pattern) -> np.ndarray:
        """Boolean grid of top-left anchors where every marked pattern cell is marked."""
        grid = np.asarray(image, dtype=bool)
        height, width = grid.shape
        pattern_h, pattern_w = pattern.shape
        if pattern_h > height or pattern_w > width:
            return np.zeros((0, 0), dtype=bool)

        rows = height - pattern_h + 1
        cols = width - pattern_w + 1
        hits = np.ones((rows, cols), dtype=bool)
        for dr, dc in pattern.offsets:
            hits &= grid[dr : dr + rows, dc : dc + cols]
        return hits

    def count_matches(self, image: np.ndarray, pattern: Pattern) -> int:
        return int(np.count_nonzero(self._anchor_hits(image, pattern)))

    def locate(self, image: np.ndarray, pattern: Pattern) -> List[Tuple[int, int]]:
        """Anchor (row, col) of every occurrence in the image as given."""
        return [(int(r), int(c)) for r, c in np.argwhere(self._anchor_hits(image, pattern))]

    def scan(self, image: np.ndarray, pattern: Pattern) -> MatchReport:
        orientations = list(dihedral_orientations(np.asarray(image, dtype=bool)))
        if self.config.workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
                counts = list(executor.map(lambda grid: self.count_matches(grid, pattern), orientations))
        else:
            counts = [self.count_matches(grid, pattern) for grid in orientations]

        best = int(np.argmax(counts))
        matches = counts[best]
        marked = int(np.count_nonzero(image))
        if matches == 0:
            logger.warning("no %s found in any of the 8 orientations", pattern.name)
        else:
            logger.info("found %d x %s in orientation %d", matches, pattern.name, best)
        return MatchReport(
            counts=tuple(counts),
            best_orientation=best,
            matches=matches,
            marked_cells=marked,
            roughness=marked - matches * pattern.marked_count,
        )

    def best_orientation_matches(self, image: np.ndarray, pattern: Pattern) -> int:
        return self.scan(image, pattern).matches

    def roughness(self, image: np.ndarray, pattern: Pattern) -> int:
        """Marked cells not covered by the pattern occurrences of the best orientation."""
        return self.scan(image, pattern).roughness


def count_matches(image: np.ndarray, pattern: Pattern = SEA_MONSTER) -> int:
    return PatternMatcher().count_matches(image, pattern)


def best_orientation_matches(image: np.ndarray, pattern: Pattern = SEA_MONSTER) -> int:
    return PatternMatcher().best_orientation_matches(image, pattern)


def roughness(image: np.ndarray, pattern: Pattern = SEA_MONSTER) -> int:
    return PatternMatcher().roughness(image, pattern)
