"""Tests for the solve.py command line."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

import solve

DATA_DIR = Path(__file__).resolve().parent / "data"


def test_cli_solves_tile_file(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture, tmp_path: Path) -> None:
    output = tmp_path / "image.txt"
    monkeypatch.setattr(
        sys, "argv", ["solve.py", "--tiles", str(DATA_DIR / "sample_tiles.txt"), "--output", str(output)]
    )
    assert solve.main() == 0
    out = capsys.readouterr().out
    assert "Corner product: 20899048083289" in out
    assert "Roughness: 273" in out
    assert len(output.read_text().splitlines()) == 24


def test_cli_generated_puzzle(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    monkeypatch.setattr(sys, "argv", ["solve.py", "--generate", "3", "--seed", "7", "--lifo", "--workers", "2"])
    assert solve.main() == 0
    assert "Grid: 3x3" in capsys.readouterr().out


def test_cli_reports_puzzle_errors(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    monkeypatch.setattr(sys, "argv", ["solve.py", "--tiles", str(DATA_DIR / "conflict_tiles.txt")])
    assert solve.main() == 1
    assert "error:" in capsys.readouterr().err
