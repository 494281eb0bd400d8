"""Pairwise track comparison entry point."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..config import OVERLAP_DISTANCE_CHUNK_SIZE
from ..errors import InvalidTrack
from ..geometry.polyline import Polyline
from ..geometry.resampling import resample_track
from ..models import CompareConfig, GeoPoint, OverlapResult, Sample, Track
from .aggregation import aggregate
from .classifier import OverlapClassifier

LOGGER = logging.getLogger(__name__)


def compare(
    track_a: Track,
    track_b: Track,
    config: Optional[CompareConfig] = None,
) -> OverlapResult:
    """Find the stretches two tracks share and measure them.

    The shorter track is resampled and every sample is measured against the
    longer one, so the argument order never changes the outcome. A pair with
    nothing in common yields an empty result rather than an error.

    Args:
        track_a: First track; its unique distance is reported as ``unique_a_m``.
        track_b: Second track; its unique distance is reported as ``unique_b_m``.
        config: Thresholds and resample step. Defaults come from
            :mod:`track_overlap.config`.

    Returns:
        An :class:`OverlapResult` referencing both input tracks.

    Raises:
        InvalidTrack: If either argument is not a usable :class:`Track`.
    """

    config = config or CompareConfig()
    for label, track in (("track_a", track_a), ("track_b", track_b)):
        if not isinstance(track, Track):
            raise InvalidTrack(f"{label} must be a Track, got {type(track).__name__}")

    probe, reference = select_probe(track_a, track_b)
    samples = resample_track(probe, config.resample_step_m)
    distances = _sample_distances(reference.polyline, samples, config.max_workers)

    classifier = OverlapClassifier(config.enter_threshold_m, config.exit_threshold_m)
    classified, segments = classifier.classify(samples, distances)
    totals = aggregate(segments, track_a, track_b)

    LOGGER.debug(
        "Compared probe=%r against reference=%r: %d samples, %d segments, %.1f m shared",
        probe.name,
        reference.name,
        len(samples),
        len(segments),
        totals.overlap_length_m,
    )
    return OverlapResult(
        track_a=track_a,
        track_b=track_b,
        probe=probe,
        reference=reference,
        segments=tuple(segments),
        overlap_length_m=totals.overlap_length_m,
        unique_a_m=totals.unique_a_m,
        unique_b_m=totals.unique_b_m,
        samples=tuple(classified),
        config=config,
    )


def select_probe(track_a: Track, track_b: Track) -> Tuple[Track, Track]:
    """Return ``(probe, reference)``: the shorter track first.

    Equal lengths fall back to ordering the coordinates so swapping the
    arguments picks the same probe.
    """

    if track_a.length_m < track_b.length_m:
        return track_a, track_b
    if track_b.length_m < track_a.length_m:
        return track_b, track_a
    if _coordinate_key(track_b.points) < _coordinate_key(track_a.points):
        return track_b, track_a
    return track_a, track_b


def _coordinate_key(points: Sequence[GeoPoint]) -> List[Tuple[float, float]]:
    return [(p.lat, p.lon) for p in points]


def _sample_distances(
    reference: Polyline,
    samples: Sequence[Sample],
    max_workers: int,
    chunk_size: int = OVERLAP_DISTANCE_CHUNK_SIZE,
) -> List[float]:
    """Measure each sample against the reference, optionally across threads."""

    points = [s.point for s in samples]
    chunk_size = max(1, chunk_size)
    if max_workers <= 1 or len(points) <= chunk_size:
        return reference.distances_to(points).tolist()

    # Warm the lazily built offsets before worker threads share the polyline.
    reference.cumulative_distances()
    chunks = [points[i : i + chunk_size] for i in range(0, len(points), chunk_size)]
    with ThreadPoolExecutor(max_workers=min(max_workers, len(chunks))) as executor:
        results = list(executor.map(reference.distances_to, chunks))
    return np.concatenate(results).tolist()


__all__ = ["compare", "select_probe"]
