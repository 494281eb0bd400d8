"""Fixed-step resampling of a polyline into arc-length tagged samples."""

from __future__ import annotations

import math
from typing import List

from ..models import Sample, Track
from .polyline import Polyline

# Offsets this close to the end collapse into the closing sample.
_END_TOLERANCE_M = 1e-6


def resample(polyline: Polyline, step_m: float) -> List[Sample]:
    """Return samples every ``step_m`` metres, always ending on the last point."""

    if not math.isfinite(step_m) or step_m <= 0:
        raise ValueError("step_m must be greater than zero")
    total_length = polyline.total_length()
    samples = [Sample(point=polyline.points[0], offset_m=0.0)]
    for offset in _build_target_distances(total_length, step_m):
        samples.append(Sample(point=polyline.point_at_distance(offset), offset_m=offset))
    samples.append(Sample(point=polyline.points[-1], offset_m=total_length))
    return samples


def resample_track(track: Track, step_m: float) -> List[Sample]:
    """Resample ``track`` along its own polyline."""

    return resample(track.polyline, step_m)


def _build_target_distances(total_length: float, step_m: float) -> List[float]:
    """Return interior offsets ``step, 2*step, ...`` strictly short of the end."""

    distances: List[float] = []
    index = 1
    offset = step_m
    while offset < total_length - _END_TOLERANCE_M:
        distances.append(offset)
        index += 1
        offset = index * step_m
    return distances


__all__ = ["resample", "resample_track"]
