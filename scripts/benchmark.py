#!/usr/bin/env python
"""
Benchmark the intersection sweep against the all-pairs check and display a
timing breakdown.

Usage:
    python scripts/benchmark.py
    python scripts/benchmark.py --segments 400 --box 1000 --max-size 10
    python scripts/benchmark.py --mode first --iterations 5
    python scripts/benchmark.py --input segments.txt
    python scripts/benchmark.py --no-naive --no-hierarchy

Input files hold whitespace separated "x1 y1 x2 y2" groups; fractions such
as 1/3 are accepted.
"""

import argparse
import statistics
import sys
import time
from pathlib import Path
from typing import Dict, List

import numpy as np

# Add project paths for development
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from ratsweep import RatsweepParsingUtils, Segment, SweepConfig, run
from tests.test_fixtures.segments import random_segments


# ANSI colors for output
RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
CYAN = "\033[36m"
GRAY = "\033[90m"


def time_runs(segments: List[Segment], config: SweepConfig, iterations: int, warmup: bool):
    """Run the query repeatedly; returns (times_ms, last_result)."""
    if warmup:
        run(segments, config=config)

    times = []
    result = None
    for _ in range(iterations):
        t0 = time.perf_counter()
        result = run(segments, config=config)
        times.append((time.perf_counter() - t0) * 1000)
    return times, result


def print_hierarchy(timings: Dict[str, Dict], show_hierarchy: bool = True):
    """Print marker timings, nested under their most frequent parent."""
    if not timings:
        print(f"  {DIM}(no markers recorded; profiling compiled out?){RESET}")
        return

    def parent_of(name):
        parents = timings[name].get('parents') or {}
        return max(parents, key=parents.get) if parents else None

    children: Dict[str, List[str]] = {}
    roots = []
    for name in timings:
        parent = parent_of(name) if show_hierarchy else None
        if parent is None or parent not in timings:
            roots.append(name)
        else:
            children.setdefault(parent, []).append(name)

    def emit(name, depth):
        m = timings[name]
        total = m['total_ms']
        color = YELLOW if total >= 100 else CYAN if total >= 10 else GRAY
        label = ("  " * depth + name).ljust(36)
        print(f"  {color}{label}{RESET} {total:>10.2f}ms  x{m['count']:<6} avg {m['avg_ms']:.3f}ms")
        for child in sorted(children.get(name, []), key=lambda n: -timings[n]['total_ms']):
            emit(child, depth + 1)

    for root in sorted(roots, key=lambda n: -timings[n]['total_ms']):
        emit(root, 0)


def summarize(label: str, times: List[float]) -> float:
    median = statistics.median(times)
    std = statistics.stdev(times) if len(times) > 1 else 0.0
    print(f"  {BOLD}{label:<8}{RESET} median {median:>9.1f}ms  "
          f"mean {statistics.mean(times):>9.1f}ms (±{std:.1f})  "
          f"range {min(times):.1f}-{max(times):.1f}ms")
    return median


def run_benchmark(segments: List[Segment], mode: str, iterations: int, warmup: bool,
                  compare_naive: bool, show_hierarchy: bool) -> int:
    print()
    print("=" * 70)
    print(f"BENCHMARK: {len(segments)} segments, mode={mode}")
    print("=" * 70)
    print()

    sweep_times, sweep_result = time_runs(
        segments, SweepConfig(mode=mode, method='sweep'), iterations, warmup)
    sweep_median = summarize("sweep", sweep_times)

    if compare_naive:
        naive_times, naive_result = time_runs(
            segments, SweepConfig(mode=mode, method='naive'), iterations, warmup)
        naive_median = summarize("naive", naive_times)
        if sweep_median > 0:
            print(f"  {GREEN}speedup  {naive_median / sweep_median:.2f}x{RESET}")

        if mode == 'all' and sweep_result.points != naive_result.points:
            print(f"\n  {YELLOW}Mismatch: sweep found {len(sweep_result.points)} points, "
                  f"naive found {len(naive_result.points)}{RESET}")
            return 1

    print()
    for key, value in (sweep_result.stats or {}).items():
        print(f"  {DIM}{key:<20}{RESET} {value}")
    if mode == 'first':
        print(f"  {DIM}{'point':<20}{RESET} {sweep_result.point}")

    # One profiled run for the breakdown
    profiled = run(segments, config=SweepConfig(mode=mode, profile=True))
    print()
    print("─" * 70)
    print("MARKERS (single profiled run)")
    print("─" * 70)
    print_hierarchy(profiled.timings, show_hierarchy)
    print()
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark the intersection sweep and display a timing breakdown.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/benchmark.py --segments 400
    python scripts/benchmark.py --segments 100 --box 100 --max-size 20
    python scripts/benchmark.py --input segments.txt --mode first
        """
    )

    parser.add_argument("--input", type=Path, help="Read segments from a text file instead of generating them")
    parser.add_argument("-n", "--segments", type=int, default=200, help="Number of random segments (default: 200)")
    parser.add_argument("--box", type=int, default=1000, help="Side of the box holding segment starts (default: 1000)")
    parser.add_argument("--max-size", type=int, default=10, help="Largest x/y extent of a segment (default: 10)")
    parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")
    parser.add_argument("-m", "--mode", choices=["all", "first"], default="all", help="Query mode (default: all)")
    parser.add_argument("-i", "--iterations", type=int, default=3, help="Number of timed iterations (default: 3)")
    parser.add_argument("--no-warmup", action="store_true", help="Skip warmup iteration")
    parser.add_argument("--no-naive", action="store_true", help="Skip the all-pairs comparison")
    parser.add_argument("--no-hierarchy", action="store_true", help="Show flat list instead of tree")

    args = parser.parse_args()

    if args.input is not None:
        if not args.input.exists():
            print(f"Error: File not found: {args.input}")
            return 1
        segments = RatsweepParsingUtils.parse_segments(args.input.read_text(encoding='utf-8'))
    else:
        rng = np.random.default_rng(args.seed)
        segments = random_segments(rng, args.segments, args.box, args.max_size)

    try:
        return run_benchmark(
            segments,
            mode=args.mode,
            iterations=args.iterations,
            warmup=not args.no_warmup,
            compare_naive=not args.no_naive,
            show_hierarchy=not args.no_hierarchy,
        )
    except Exception as e:
        print(f"Error: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
