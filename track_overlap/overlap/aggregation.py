"""Summing overlap segments into shared and unique distances.

Kept free of resampling and classification concerns so the arithmetic can be
tested on hand-built segments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..models import OverlapSegment, Track


@dataclass(frozen=True, slots=True)
class OverlapTotals:
    """The three figures a comparison reports."""

    overlap_length_m: float
    unique_a_m: float
    unique_b_m: float


def overlap_length(segments: Iterable[OverlapSegment]) -> float:
    """Return the summed polyline length of ``segments`` in metres."""

    return float(sum(seg.length_m for seg in segments))


def unique_distance(track_length_m: float, overlap_length_m: float) -> float:
    """Return the part of a track not shared, never below zero."""

    return max(0.0, track_length_m - overlap_length_m)


def aggregate(
    segments: Iterable[OverlapSegment],
    track_a: Track,
    track_b: Track,
) -> OverlapTotals:
    """Sum the segments and derive what each track does not share."""

    shared = overlap_length(segments)
    return OverlapTotals(
        overlap_length_m=shared,
        unique_a_m=unique_distance(track_a.length_m, shared),
        unique_b_m=unique_distance(track_b.length_m, shared),
    )


__all__ = ["OverlapTotals", "aggregate", "overlap_length", "unique_distance"]
