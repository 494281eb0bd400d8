"""Benchmark the track comparison pipeline with large point counts."""

from __future__ import annotations

import argparse
import statistics
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Late imports rely on the adjusted sys.path above.
from track_overlap.config import (  # noqa: E402
    OVERLAP_ENTER_THRESHOLD_M,
    OVERLAP_EXIT_THRESHOLD_M,
    OVERLAP_RESAMPLE_STEP_M,
)
from track_overlap.geometry.resampling import resample_track  # noqa: E402
from track_overlap.models import Track  # noqa: E402
from track_overlap.overlap.aggregation import aggregate  # noqa: E402
from track_overlap.overlap.classifier import OverlapClassifier  # noqa: E402
from track_overlap.overlap.compare import _sample_distances, select_probe  # noqa: E402


@dataclass(slots=True)
class StageDurations:
    """Timing measurements (in seconds) for the comparison pipeline."""

    resample: float
    distances: float
    classify: float
    aggregate: float

    @property
    def total(self) -> float:
        return self.resample + self.distances + self.classify + self.aggregate


@dataclass(slots=True)
class BenchmarkSummary:
    """Aggregated statistics for multiple benchmark iterations."""

    point_count: int
    sample_count: int
    iterations: int
    workers: int
    mean_resample_ms: float
    mean_distances_ms: float
    mean_classify_ms: float
    mean_aggregate_ms: float
    mean_total_ms: float
    worst_total_ms: float


def _build_track(name: str, point_count: int, lon_offset: float = 0.0) -> Track:
    """Generate a straight track with evenly spaced points heading north."""

    base_lat = 37.0
    base_lon = -122.0 + lon_offset
    step_deg = 1.2e-5
    points = [(base_lat + idx * step_deg, base_lon) for idx in range(point_count)]
    return Track.from_points(name, points)


def _run_iteration(
    track_a: Track, track_b: Track, workers: int
) -> tuple[StageDurations, int]:
    """Execute one benchmark iteration and capture per-stage timings."""

    probe, reference = select_probe(track_a, track_b)

    start = time.perf_counter()
    samples = resample_track(probe, OVERLAP_RESAMPLE_STEP_M)
    resample_dur = time.perf_counter() - start

    start = time.perf_counter()
    distances = _sample_distances(reference.polyline, samples, workers)
    distances_dur = time.perf_counter() - start

    start = time.perf_counter()
    classifier = OverlapClassifier(OVERLAP_ENTER_THRESHOLD_M, OVERLAP_EXIT_THRESHOLD_M)
    _, segments = classifier.classify(samples, distances)
    classify_dur = time.perf_counter() - start

    start = time.perf_counter()
    totals = aggregate(segments, track_a, track_b)
    aggregate_dur = time.perf_counter() - start
    if totals.overlap_length_m <= 0.0:
        raise RuntimeError("Synthetic tracks failed to overlap")

    durations = StageDurations(
        resample=resample_dur,
        distances=distances_dur,
        classify=classify_dur,
        aggregate=aggregate_dur,
    )
    return durations, len(samples)


def run_benchmark(point_count: int, iterations: int, workers: int = 1) -> BenchmarkSummary:
    """Benchmark the comparison pipeline and return aggregated timings."""

    if point_count < 1000:
        raise ValueError("point_count must be at least 1,000")
    if iterations <= 0:
        raise ValueError("iterations must be positive")

    # The second track runs ~5 m east of the first and is 20% longer.
    track_a = _build_track("A", point_count)
    track_b = _build_track("B", int(point_count * 1.2), lon_offset=5.6e-5)

    durations: List[StageDurations] = []
    sample_count = 0
    for _ in range(iterations):
        item, sample_count = _run_iteration(track_a, track_b, workers)
        durations.append(item)

    return BenchmarkSummary(
        point_count=point_count,
        sample_count=sample_count,
        iterations=iterations,
        workers=workers,
        mean_resample_ms=statistics.fmean(d.resample for d in durations) * 1000.0,
        mean_distances_ms=statistics.fmean(d.distances for d in durations) * 1000.0,
        mean_classify_ms=statistics.fmean(d.classify for d in durations) * 1000.0,
        mean_aggregate_ms=statistics.fmean(d.aggregate for d in durations) * 1000.0,
        mean_total_ms=statistics.fmean(d.total for d in durations) * 1000.0,
        worst_total_ms=max(d.total for d in durations) * 1000.0,
    )


def _format_summary(summary: BenchmarkSummary) -> Dict[str, float]:
    """Return a JSON-friendly representation of the benchmark summary."""

    return {
        "point_count": summary.point_count,
        "sample_count": summary.sample_count,
        "iterations": summary.iterations,
        "workers": summary.workers,
        "mean_resample_ms": summary.mean_resample_ms,
        "mean_distances_ms": summary.mean_distances_ms,
        "mean_classify_ms": summary.mean_classify_ms,
        "mean_aggregate_ms": summary.mean_aggregate_ms,
        "mean_total_ms": summary.mean_total_ms,
        "worst_total_ms": summary.worst_total_ms,
    }


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the benchmark utility."""

    parser = argparse.ArgumentParser(
        description="Benchmark the track comparison pipeline with long tracks",
    )
    parser.add_argument(
        "--points",
        type=int,
        default=5000,
        help="Number of points in the shorter synthetic track",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=5,
        help="Number of repetitions for averaging",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Threads used for the distance stage",
    )
    return parser.parse_args()


def main() -> None:
    """Entry point when running the module as a script."""

    args = _parse_args()
    summary = run_benchmark(args.points, args.iterations, args.workers)
    for key, value in _format_summary(summary).items():
        if key in {"point_count", "sample_count", "iterations", "workers"}:
            print(f"{key}: {value}")
        else:
            print(f"{key}: {value:.3f}")


if __name__ == "__main__":
    main()
