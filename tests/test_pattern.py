"""Tests for pattern search and roughness."""

from __future__ import annotations

import numpy as np
import pytest

from tilejigsaw.errors import FormatError
from tilejigsaw.pattern import (
    SEA_MONSTER,
    MatcherConfig,
    Pattern,
    PatternMatcher,
    best_orientation_matches,
    count_matches,
    roughness,
)


def test_sea_monster_shape() -> None:
    assert SEA_MONSTER.shape == (3, 20)
    assert SEA_MONSTER.marked_count == 15
    assert SEA_MONSTER.offsets[0] == (0, 18)


def test_count_matches_in_oriented_sample(oriented_image: np.ndarray) -> None:
    """Two sea monsters appear in the correctly turned sample image."""
    assert count_matches(oriented_image) == 2
    assert PatternMatcher().locate(oriented_image, SEA_MONSTER) == [(2, 2), (16, 1)]


def test_best_orientation_finds_monsters(sample_image: np.ndarray) -> None:
    assert best_orientation_matches(sample_image) == 2


def test_sample_roughness(sample_image: np.ndarray, oriented_image: np.ndarray) -> None:
    """Roughness does not depend on the orientation the image is given in."""
    assert int(np.count_nonzero(sample_image)) == 303
    assert roughness(sample_image) == 273
    assert roughness(oriented_image) == 273


def test_scan_report(oriented_image: np.ndarray) -> None:
    report = PatternMatcher().scan(oriented_image, SEA_MONSTER)
    assert len(report.counts) == 8
    assert report.counts[0] == 2
    assert report.best_orientation == 0
    assert report.matches == 2
    assert report.marked_cells == 303
    assert report.roughness == 273


def test_threaded_scan_matches_sequential(sample_image: np.ndarray) -> None:
    sequential = PatternMatcher().scan(sample_image, SEA_MONSTER)
    threaded = PatternMatcher(MatcherConfig(workers=4)).scan(sample_image, SEA_MONSTER)
    assert threaded == sequential


def test_no_match_leaves_every_marked_cell_rough() -> None:
    image = np.zeros((30, 30), dtype=bool)
    image[::3, ::2] = True
    report = PatternMatcher().scan(image, SEA_MONSTER)
    assert report.matches == 0
    assert report.roughness == int(np.count_nonzero(image))


def test_image_smaller_than_pattern() -> None:
    image = np.ones((2, 2), dtype=bool)
    assert count_matches(image) == 0
    assert roughness(image) == 4


def test_overlapping_occurrences_are_counted() -> None:
    """A fully marked strip holds the pattern at every anchor that fits."""
    image = np.ones((3, 21), dtype=bool)
    report = PatternMatcher().scan(image, SEA_MONSTER)
    assert report.counts[0] == 2
    assert report.matches == 2
    assert report.roughness == 63 - 2 * 15


def test_wildcards_match_anything() -> None:
    """Unmarked pattern cells accept marked image cells."""
    pattern = Pattern.from_text("#.\n.#", name="diagonal")
    image = np.ones((2, 2), dtype=bool)
    assert PatternMatcher().count_matches(image, pattern) == 1


def test_from_text_pads_short_rows() -> None:
    pattern = Pattern.from_text(["  #", "#"])
    assert pattern.shape == (2, 3)
    assert pattern.offsets == [(0, 2), (1, 0)]


@pytest.mark.parametrize("text", ["", "   \n   ", "#x#"])
def test_from_text_rejects_invalid_patterns(text: str) -> None:
    with pytest.raises(FormatError):
        Pattern.from_text(text)


def test_pattern_mask_must_be_boolean() -> None:
    with pytest.raises(FormatError):
        Pattern(np.ones((2, 2), dtype=np.int64))
