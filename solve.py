"""Assemble a tile puzzle and report its corner product and roughness."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from tilejigsaw.assembler import AssemblerConfig
from tilejigsaw.errors import PuzzleError
from tilejigsaw.orientation import dihedral_orientations
from tilejigsaw.pattern import SEA_MONSTER, MatcherConfig, Pattern, PatternMatcher
from tilejigsaw.pipeline import PuzzleSolution, solve_puzzle
from tilejigsaw.reader import load_tiles
from tilejigsaw.utils import generate_puzzle, render_grid


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Assemble a tile puzzle and search it for a pattern.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--tiles", default=None, help="Path to a file of 'Tile <id>:' blocks")
    source.add_argument(
        "--generate",
        type=int,
        default=3,
        metavar="K",
        help="Solve a generated KxK puzzle when no --tiles file is given (default: 3)",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed for --generate (default: 42)")
    parser.add_argument(
        "--pattern",
        default=None,
        help="Optional pattern file ('#' must match, ' ' or '.' wildcard); default: sea monster",
    )
    parser.add_argument("--output", default=None, help="Optional path to save the assembled image as text")
    parser.add_argument("--workers", type=int, default=1, help="Threads for the orientation search (default: 1)")
    parser.add_argument("--lifo", action="store_true", help="Process placements depth-first")
    parser.add_argument("--show", action="store_true", help="Display the assembled image with matches highlighted")
    parser.add_argument("--verbose", action="store_true", help="Log every placement")
    return parser.parse_args()


def show_solution(solution: PuzzleSolution, pattern: Pattern) -> None:
    """Plot the image in its best orientation with pattern cells in red."""
    import matplotlib.pyplot as plt

    oriented = list(dihedral_orientations(solution.assembled.image))[solution.report.best_orientation]
    overlay = np.zeros(oriented.shape + (3,), dtype=np.float32)
    overlay[oriented] = (0.2, 0.4, 0.9)
    pattern_h, pattern_w = pattern.shape
    for r, c in PatternMatcher().locate(oriented, pattern):
        cells = overlay[r : r + pattern_h, c : c + pattern_w]
        cells[pattern.mask] = (0.9, 0.1, 0.1)

    fig, ax = plt.subplots(figsize=(6, 6))
    ax.imshow(overlay, interpolation="nearest")
    ax.set_title(f"{solution.matches} x {pattern.name}, roughness {solution.roughness}")
    ax.axis("off")
    plt.tight_layout()
    plt.show()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pattern = SEA_MONSTER
    if args.pattern:
        pattern = Pattern.from_text(Path(args.pattern).read_text(), name=Path(args.pattern).stem)

    try:
        if args.tiles:
            tiles = load_tiles(args.tiles)
            source = args.tiles
        else:
            tiles = generate_puzzle(args.generate, seed=args.seed).tiles
            source = f"generated {args.generate}x{args.generate} (seed={args.seed})"
        solution = solve_puzzle(
            tiles,
            pattern=pattern,
            assembler_config=AssemblerConfig(lifo=args.lifo),
            matcher_config=MatcherConfig(workers=args.workers),
        )
    except PuzzleError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    image = solution.assembled.image
    print(f"Tiles: {source}")
    print(f"Grid: {solution.assembled.dimension}x{solution.assembled.dimension}")
    print(f"Image size: {image.shape[0]}x{image.shape[1]}")
    print(f"Corner product: {solution.corner_product}")
    print(f"Pattern matches: {solution.matches}")
    print(f"Roughness: {solution.roughness}")

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(render_grid(image) + "\n")
        print(f"Output image: {output_path.resolve()}")

    if args.show:
        show_solution(solution, pattern)
    return 0


if __name__ == "__main__":
    sys.exit(main())
