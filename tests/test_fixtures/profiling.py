"""
Profiling utilities for ratsweep performance tests.

This module provides shared timing, benchmarking, and reporting utilities
for performance regression testing. For CLI benchmarking use
scripts/benchmark.py instead.
"""
import statistics
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ratsweep import Segment, SweepConfig, run


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class TimingResult:
    """Stores timing results for a single query."""
    method: str
    total_ms: float = 0.0
    # Sweep breakdown
    prepare_ms: float = 0.0
    queue_init_ms: float = 0.0
    handle_ms: float = 0.0
    # Stats
    segment_count: int = 0
    intersection_count: int = 0
    # Raw marker data
    raw_markers: Dict[str, Any] = field(default_factory=dict)

    def breakdown_str(self) -> str:
        """Return a formatted string showing the timing breakdown."""
        lines = [
            f"  Prepare:            {self.prepare_ms:>7.1f}ms",
            f"  Event queue:        {self.queue_init_ms:>7.1f}ms",
            f"  Event handling:     {self.handle_ms:>7.1f}ms",
            f"  Total:              {self.total_ms:>7.1f}ms",
        ]
        return "\n".join(lines)


@dataclass
class BenchmarkResult:
    """Aggregated benchmark results from multiple runs."""
    method: str
    iterations: int
    median_ms: float
    mean_ms: float
    min_ms: float
    max_ms: float
    std_ms: float
    all_results: List[TimingResult] = field(default_factory=list)

    @property
    def segment_count(self) -> int:
        return self.all_results[0].segment_count if self.all_results else 0

    @property
    def intersection_count(self) -> int:
        return self.all_results[0].intersection_count if self.all_results else 0


# =============================================================================
# Query Runner
# =============================================================================

def run_query(segments: List[Segment], method: str = 'sweep', mode: str = 'all') -> TimingResult:
    """
    Run one profiled query through ratsweep.run().

    Args:
        segments: Input segments
        method: 'sweep' or 'naive'
        mode: 'all' or 'first'

    Returns:
        TimingResult with the marker breakdown and result counts
    """
    config = SweepConfig(mode=mode, method=method, profile=True)

    t_start = time.perf_counter()
    sweep_result = run(segments, config=config)
    total_ms = (time.perf_counter() - t_start) * 1000

    def get_ms(name: str) -> float:
        if sweep_result.timings and name in sweep_result.timings:
            return sweep_result.timings[name].get('total_ms', 0.0)
        return 0.0

    result = TimingResult(method=method, total_ms=total_ms)
    result.prepare_ms = get_ms('prepare')
    result.queue_init_ms = get_ms('event_queue_init')
    result.handle_ms = get_ms('sweep_handle')
    result.raw_markers = sweep_result.timings or {}

    if sweep_result.stats:
        result.segment_count = sweep_result.stats.get('segment_count', 0)
        result.intersection_count = sweep_result.stats.get('intersection_count', 0)

    return result


def run_benchmark(
    segments: List[Segment],
    method: str = 'sweep',
    mode: str = 'all',
    warmup: int = 1,
    iterations: int = 3
) -> BenchmarkResult:
    """
    Run a full benchmark with warmup and multiple iterations.

    Args:
        segments: Segments to benchmark
        method: 'sweep' or 'naive'
        mode: 'all' or 'first'
        warmup: Number of warmup runs
        iterations: Number of timed runs

    Returns:
        BenchmarkResult with aggregated statistics
    """
    for _ in range(warmup):
        run_query(segments, method, mode)

    results = [run_query(segments, method, mode) for _ in range(iterations)]
    times = [r.total_ms for r in results]

    return BenchmarkResult(
        method=method,
        iterations=iterations,
        median_ms=statistics.median(times),
        mean_ms=statistics.mean(times),
        min_ms=min(times),
        max_ms=max(times),
        std_ms=statistics.stdev(times) if len(times) > 1 else 0,
        all_results=results,
    )


# =============================================================================
# Assertion Helpers
# =============================================================================

def assert_performance(
    result: BenchmarkResult,
    baseline_ms: float,
    threshold: float = 1.2,
    label: str = ""
) -> None:
    """
    Assert that benchmark performance is within acceptable limits.

    Args:
        result: Benchmark result to check
        baseline_ms: Expected baseline in milliseconds
        threshold: Multiplier for regression threshold (default 1.2 = 20%)
        label: Optional label for error messages

    Raises:
        AssertionError if performance exceeds baseline * threshold
    """
    max_allowed_ms = baseline_ms * threshold

    assert result.median_ms < max_allowed_ms, (
        f"Performance regression detected{' for ' + label if label else ''}!\n"
        f"  Method:      {result.method}\n"
        f"  Median time: {result.median_ms:.1f}ms\n"
        f"  Baseline:    {baseline_ms}ms\n"
        f"  Max allowed: {max_allowed_ms:.1f}ms (baseline × {threshold})\n"
        f"  Regression:  {result.median_ms / baseline_ms:.2f}x baseline"
    )


# =============================================================================
# Printing Utilities
# =============================================================================

def print_benchmark_result(result: BenchmarkResult, verbose: bool = False):
    """Print a single benchmark result."""
    print(f"\n--- {result.method.upper()} ---")
    print(f"  Median: {result.median_ms:.1f}ms")
    print(f"  Mean:   {result.mean_ms:.1f}ms (±{result.std_ms:.1f}ms)")
    print(f"  Range:  {result.min_ms:.1f}ms - {result.max_ms:.1f}ms")

    if verbose and result.all_results:
        r = result.all_results[0]
        print("\n  Breakdown (first run):")
        print(r.breakdown_str())
        print("\n  Stats:")
        print(f"    Segments: {r.segment_count}")
        print(f"    Intersections: {r.intersection_count}")


def print_comparison_table(results: Dict[str, BenchmarkResult]):
    """Print a comparison table of multiple method results."""
    if not results:
        return

    methods = list(results.keys())
    first = results[methods[0]]

    print(f"\n{'='*60}")
    print(f"BENCHMARK COMPARISON ({first.iterations} iterations)")
    print(f"{'='*60}")

    header = f"{'Metric':<15}"
    for m in methods:
        header += f"{m.upper():>12}"
    if len(methods) >= 2:
        header += f"{'Speedup':>12}"
    print(header)
    print("-" * 60)

    row = f"{'Median':<15}"
    values = []
    for m in methods:
        val = results[m].median_ms
        values.append(val)
        row += f"{val:>10.1f}ms"
    if len(values) >= 2 and values[0] > 0:
        row += f"{values[-1] / values[0]:>11.2f}x"
    print(row)

    if first.segment_count:
        print(f"\n  Segments: {first.segment_count}")
        print(f"  Intersections: {first.intersection_count}")
