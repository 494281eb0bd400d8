"""Central error types used across the package."""

from __future__ import annotations


class TrackOverlapError(RuntimeError):
    """Base error for track comparison failures."""


class InvalidTrack(TrackOverlapError, ValueError):
    """Raised when a track or polyline is built from fewer than two points."""


class TrackFormatError(TrackOverlapError):
    """Raised when a GPX document or encoded polyline cannot be decoded."""


__all__ = [
    "TrackOverlapError",
    "InvalidTrack",
    "TrackFormatError",
]
