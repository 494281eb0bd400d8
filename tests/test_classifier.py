"""Tests for the hysteresis overlap classifier."""

from __future__ import annotations

from typing import List

import pytest

from track_overlap.models import GeoPoint, Sample
from track_overlap.overlap.classifier import (
    ClassifierState,
    OverlapClassifier,
    classify_distances,
)


def _samples(count: int) -> List[Sample]:
    return [Sample(GeoPoint(0.0001 * i, 0.0), 11.0 * i) for i in range(count)]


def test_excursion_within_exit_threshold_keeps_segment() -> None:
    assert classify_distances([5, 5, 22, 5, 5], 20.0, 25.0) == [(0, 4)]


def test_excursion_beyond_exit_threshold_splits_segment() -> None:
    assert classify_distances([5, 5, 30, 5, 5], 20.0, 25.0) == [(0, 1), (3, 4)]


def test_single_sample_runs_are_dropped() -> None:
    assert classify_distances([30, 5, 30], 20.0, 25.0) == []


def test_between_thresholds_does_not_open_segment() -> None:
    assert classify_distances([22, 22, 22], 20.0, 25.0) == []
    assert classify_distances([22, 19, 22, 24], 20.0, 25.0) == [(1, 3)]


def test_thresholds_are_inclusive() -> None:
    assert classify_distances([20, 25, 25.0001], 20.0, 25.0) == [(0, 1)]


def test_open_segment_emitted_at_end_of_stream() -> None:
    assert classify_distances([40, 40, 3, 4], 20.0, 25.0) == [(2, 3)]


def test_empty_stream() -> None:
    assert classify_distances([], 20.0, 25.0) == []


@pytest.mark.parametrize(
    "enter, exit_",
    [
        (25.0, 20.0),
        (20.0, 20.0),
        (-1.0, 5.0),
        (float("nan"), 25.0),
        (20.0, float("nan")),
        (20.0, float("inf")),
    ],
)
def test_invalid_thresholds_rejected(enter: float, exit_: float) -> None:
    with pytest.raises(ValueError):
        OverlapClassifier(enter, exit_)


def test_feed_tracks_state_and_flags() -> None:
    classifier = OverlapClassifier(20.0, 25.0)
    samples = _samples(3)
    assert classifier.state is ClassifierState.OUTSIDE

    item, closed = classifier.feed(samples[0], 30.0)
    assert not item.inside and closed is None
    item, closed = classifier.feed(samples[1], 5.0)
    assert item.inside and closed is None
    assert classifier.state is ClassifierState.INSIDE
    item, closed = classifier.feed(samples[2], 30.0)
    assert not item.inside
    assert closed is None, "single-sample run must be discarded"
    assert classifier.discarded == 1


def test_classify_returns_segments_of_samples() -> None:
    classifier = OverlapClassifier(20.0, 25.0)
    samples = _samples(5)
    classified, segments = classifier.classify(samples, [5, 5, 30, 5, 5])

    assert [c.inside for c in classified] == [True, True, False, True, True]
    assert [c.distance_m for c in classified] == [5, 5, 30, 5, 5]
    assert len(segments) == 2
    assert segments[0].samples == tuple(samples[:2])
    assert segments[1].samples == tuple(samples[3:])
    assert segments[0].end_offset_m < segments[1].start_offset_m


def test_classify_resets_between_runs() -> None:
    classifier = OverlapClassifier(20.0, 25.0)
    samples = _samples(2)
    classifier.classify(samples, [5, 5])
    _, segments = classifier.classify(samples, [30, 5])
    assert segments == []
    assert classifier.state is ClassifierState.OUTSIDE


def test_classify_rejects_mismatched_lengths() -> None:
    with pytest.raises(ValueError):
        OverlapClassifier(20.0, 25.0).classify(_samples(3), [1.0, 2.0])


def test_reset_drops_open_segment() -> None:
    classifier = OverlapClassifier(20.0, 25.0)
    for sample in _samples(3):
        classifier.feed(sample, 5.0)
    assert classifier.state is ClassifierState.INSIDE

    classifier.reset()

    assert classifier.state is ClassifierState.OUTSIDE
    assert classifier.finish() is None
