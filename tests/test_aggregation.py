"""Tests for overlap length and unique distance aggregation."""

from __future__ import annotations

import pytest

from track_overlap.models import OverlapSegment, Sample, Track
from track_overlap.overlap.aggregation import (
    aggregate,
    overlap_length,
    unique_distance,
)


def _segment(point_factory, start_m: float, end_m: float, step_m: float = 10.0) -> OverlapSegment:
    samples = []
    offset = start_m
    while offset < end_m:
        samples.append(Sample(point_factory(offset, 0.0), offset))
        offset += step_m
    samples.append(Sample(point_factory(end_m, 0.0), end_m))
    return OverlapSegment(tuple(samples))


def test_overlap_length_sums_segments(point_factory) -> None:
    segments = [_segment(point_factory, 0.0, 100.0), _segment(point_factory, 300.0, 350.0)]
    assert overlap_length(segments) == pytest.approx(150.0, abs=1e-6)


def test_overlap_length_of_nothing_is_zero() -> None:
    assert overlap_length([]) == 0.0


def test_unique_distance_never_negative() -> None:
    assert unique_distance(1000.0, 400.0) == pytest.approx(600.0)
    assert unique_distance(1000.0, 1000.0000001) == 0.0


def test_aggregate_reports_three_figures(
    point_factory, straight_track: Track, branching_track: Track
) -> None:
    segments = [_segment(point_factory, 0.0, 500.0)]
    totals = aggregate(segments, straight_track, branching_track)
    assert totals.overlap_length_m == pytest.approx(500.0, abs=1e-6)
    assert totals.unique_a_m == pytest.approx(straight_track.length_m - 500.0, abs=1e-6)
    assert totals.unique_b_m == pytest.approx(branching_track.length_m - 500.0, abs=1e-6)


def test_overlap_length_matches_segment_lengths(point_factory) -> None:
    segments = [_segment(point_factory, 0.0, 95.0), _segment(point_factory, 200.0, 233.0)]
    assert overlap_length(segments) == sum(seg.length_m for seg in segments)
