"""Pairwise GPS track overlap detection."""

from .errors import InvalidTrack, TrackFormatError, TrackOverlapError
from .models import (
    ClassifiedSample,
    CompareConfig,
    GeoPoint,
    OverlapResult,
    OverlapSegment,
    Sample,
    Track,
)
from .geometry.polyline import Polyline
from .geometry.resampling import resample
from .overlap import OverlapClassifier, compare

__all__ = [
    "ClassifiedSample",
    "CompareConfig",
    "GeoPoint",
    "InvalidTrack",
    "OverlapClassifier",
    "OverlapResult",
    "OverlapSegment",
    "Polyline",
    "Sample",
    "Track",
    "TrackFormatError",
    "TrackOverlapError",
    "compare",
    "resample",
]
