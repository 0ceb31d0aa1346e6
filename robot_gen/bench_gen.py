"""Benchmark robot generation speed.

Usage:
    python -m robot_gen.bench_gen                 # 1000 robots, detail 1
    python -m robot_gen.bench_gen --count 5000    # more robots
    python -m robot_gen.bench_gen --detail 3      # highest tessellation
    python -m robot_gen.bench_gen --edges         # include wireframe emission
"""

from __future__ import annotations

import argparse
import time

import numpy as np

from robot_gen.assembler import generate
from robot_gen.mesh import wireframe_segments


def bench(n_robots: int, detail: int = 1, solid: bool = False, edges: bool = False) -> dict:
    """Run the benchmark. Returns timing stats."""
    seeds = [f"bench-{i}" for i in range(n_robots)]

    gen_times: list[float] = []
    edge_times: list[float] = []
    prim_counts: list[int] = []

    for seed in seeds:
        t0 = time.perf_counter()
        root = generate(seed, detail, solid)
        t1 = time.perf_counter()
        gen_times.append(t1 - t0)
        prim_counts.append(len(root.primitives()))

        if edges:
            t2 = time.perf_counter()
            wireframe_segments(root)
            t3 = time.perf_counter()
            edge_times.append(t3 - t2)

    gen_arr = np.array(gen_times) * 1000  # ms
    prim_arr = np.array(prim_counts)

    stats = {
        "n_robots": n_robots,
        "gen_mean_ms": float(np.mean(gen_arr)),
        "gen_median_ms": float(np.median(gen_arr)),
        "gen_p95_ms": float(np.percentile(gen_arr, 95)),
        "gen_p99_ms": float(np.percentile(gen_arr, 99)),
        "gen_total_s": float(np.sum(gen_arr) / 1000),
        "prims_mean": float(np.mean(prim_arr)),
        "prims_max": int(np.max(prim_arr)),
        "robots_per_sec": n_robots / max(np.sum(gen_arr) / 1000, 1e-9),
    }

    if edge_times:
        edge_arr = np.array(edge_times) * 1000
        stats["edges_mean_ms"] = float(np.mean(edge_arr))
        stats["edges_median_ms"] = float(np.median(edge_arr))
        stats["total_mean_ms"] = stats["gen_mean_ms"] + stats["edges_mean_ms"]

    return stats


def print_stats(stats: dict):
    print(f"\n  robots:          {stats['n_robots']}")
    print(f"  prims/robot:     {stats['prims_mean']:.1f} avg, {stats['prims_max']} max")
    print(f"  gen mean:        {stats['gen_mean_ms']:.3f} ms")
    print(f"  gen median:      {stats['gen_median_ms']:.3f} ms")
    print(f"  gen p95:         {stats['gen_p95_ms']:.3f} ms")
    print(f"  gen p99:         {stats['gen_p99_ms']:.3f} ms")
    print(f"  gen total:       {stats['gen_total_s']:.2f} s")
    print(f"  robots/sec:      {stats['robots_per_sec']:.0f}")

    if "edges_mean_ms" in stats:
        print(f"  edges mean:      {stats['edges_mean_ms']:.3f} ms")
        print(f"  total mean:      {stats['total_mean_ms']:.3f} ms  (gen + edges)")


def main():
    parser = argparse.ArgumentParser(description="Benchmark robot generation")
    parser.add_argument("--count", type=int, default=1000, help="Number of robots")
    parser.add_argument("--detail", type=int, default=1, help="Detail level 1-3")
    parser.add_argument("--solid", action="store_true", help="Add solid materials")
    parser.add_argument("--edges", action="store_true", help="Also emit wireframes")
    args = parser.parse_args()

    print(f"Benchmarking {args.count} robots...")
    print_stats(bench(args.count, args.detail, args.solid, args.edges))


if __name__ == "__main__":
    main()
