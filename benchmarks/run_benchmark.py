"""Benchmark assembly and pattern search across puzzle sizes."""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List

import sys
import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tilejigsaw.assembler import Assembler, AssemblerConfig
from tilejigsaw.catalog import TileCatalog
from tilejigsaw.graph import AdjacencyGraph
from tilejigsaw.orientation import dihedral_orientations
from tilejigsaw.pattern import SEA_MONSTER, MatcherConfig, PatternMatcher
from tilejigsaw.utils import generate_puzzle


@dataclass
class BenchmarkRow:
    grid: str
    seeds: int
    exact: float
    graph_sec: float
    assemble_sec: float
    scan_sec: float


def run_case(grid_size: int, tile_size: int, seed: int, workers: int, lifo: bool):
    puzzle = generate_puzzle(grid_size, tile_size=tile_size, seed=seed)

    t0 = time.perf_counter()
    graph = AdjacencyGraph.build(TileCatalog(puzzle.tiles))
    t1 = time.perf_counter()
    assembled = Assembler(AssemblerConfig(lifo=lifo)).assemble(graph)
    t2 = time.perf_counter()
    PatternMatcher(MatcherConfig(workers=workers)).scan(assembled.image, SEA_MONSTER)
    t3 = time.perf_counter()

    exact = any(np.array_equal(assembled.image, view) for view in dihedral_orientations(puzzle.image))
    return exact, t1 - t0, t2 - t1, t3 - t2


def run_case_multi_seed(
    grid_size: int, tile_size: int, seeds: List[int], workers: int, lifo: bool
) -> BenchmarkRow:
    runs = [run_case(grid_size, tile_size, seed, workers, lifo) for seed in seeds]
    exact = np.array([run[0] for run in runs], dtype=np.float64)
    timings = np.array([run[1:] for run in runs], dtype=np.float64)
    return BenchmarkRow(
        grid=f"{grid_size}x{grid_size}",
        seeds=len(seeds),
        exact=float(np.mean(exact)),
        graph_sec=float(np.mean(timings[:, 0])),
        assemble_sec=float(np.mean(timings[:, 1])),
        scan_sec=float(np.mean(timings[:, 2])),
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run tile assembly benchmark on multiple grid sizes.")
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=[3, 6, 12],
        help="Grid sizes to benchmark (default: 3 6 12)",
    )
    parser.add_argument("--tile-size", type=int, default=16, help="Cells per tile side (default: 16)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument(
        "--num-seeds",
        type=int,
        default=1,
        help="Number of seeds to evaluate per grid (default: 1)",
    )
    parser.add_argument("--workers", type=int, default=1, help="Threads for the orientation search")
    parser.add_argument("--lifo", action="store_true", help="Process placements depth-first")
    return parser.parse_args()


def print_table(rows: List[BenchmarkRow]) -> None:
    header = (
        f"{'Grid':<8}{'Seeds':>7}{'Exact':>8}"
        f"{'Graph(s)':>11}{'Assemble(s)':>13}{'Scan(s)':>10}"
    )
    print(header)
    print("-" * len(header))
    for row in rows:
        print(
            f"{row.grid:<8}"
            f"{row.seeds:>7d}"
            f"{row.exact:>8.2f}"
            f"{row.graph_sec:>11.4f}"
            f"{row.assemble_sec:>13.4f}"
            f"{row.scan_sec:>10.4f}"
        )


def main() -> None:
    args = parse_args()
    seeds = [args.seed + i for i in range(args.num_seeds)]
    rows = [
        run_case_multi_seed(size, args.tile_size, seeds=seeds, workers=args.workers, lifo=args.lifo)
        for size in args.sizes
    ]
    print_table(rows)


if __name__ == "__main__":
    main()
