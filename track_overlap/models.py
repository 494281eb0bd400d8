"""Dataclasses describing tracks, samples and comparison results."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
import math
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Sequence, Tuple
import uuid

from .config import (
    OVERLAP_ENTER_THRESHOLD_M,
    OVERLAP_EXIT_THRESHOLD_M,
    OVERLAP_MAX_WORKERS,
    OVERLAP_RESAMPLE_STEP_M,
)
from .errors import InvalidTrack
from .geometry.distance import path_length

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .geometry.polyline import Polyline


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A WGS84 coordinate with an optional elevation in metres."""

    lat: float
    lon: float
    elevation: Optional[float] = None

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lat) and -90.0 <= self.lat <= 90.0):
            raise ValueError(f"Latitude out of range: {self.lat!r}")
        if not (math.isfinite(self.lon) and -180.0 <= self.lon <= 180.0):
            raise ValueError(f"Longitude out of range: {self.lon!r}")
        if self.elevation is not None and not math.isfinite(self.elevation):
            raise ValueError(f"Elevation must be finite: {self.elevation!r}")

    @classmethod
    def coerce(cls, value: Any) -> "GeoPoint":
        """Build a point from a GeoPoint, a tuple, or a lat/lon mapping."""

        if isinstance(value, GeoPoint):
            return value
        if isinstance(value, Mapping):
            lat = value.get("lat")
            lon = value.get("lon", value.get("lng"))
            elevation = value.get("elevation", value.get("ele"))
            if lat is None or lon is None:
                raise ValueError(f"Point mapping lacks lat/lon: {value!r}")
            return cls(
                float(lat),
                float(lon),
                float(elevation) if elevation is not None else None,
            )
        if isinstance(value, Sequence) and not isinstance(value, str):
            if len(value) not in (2, 3):
                raise ValueError(f"Expected (lat, lon[, elevation]), got {value!r}")
            elevation = value[2] if len(value) == 3 else None
            return cls(
                float(value[0]),
                float(value[1]),
                float(elevation) if elevation is not None else None,
            )
        raise TypeError(f"Cannot interpret {type(value).__name__} as a GeoPoint")


@dataclass(frozen=True, eq=False)
class Track:
    """An immutable recorded path of at least two points.

    Tracks compare by identity so results can refer back to the exact values
    that were compared.
    """

    name: str
    points: Tuple[GeoPoint, ...]
    track_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        points = tuple(GeoPoint.coerce(p) for p in self.points)
        if len(points) < 2:
            raise InvalidTrack(
                f"Track '{self.name}' needs at least 2 points, got {len(points)}"
            )
        object.__setattr__(self, "points", points)

    @classmethod
    def from_points(
        cls,
        name: str,
        points: Iterable[Any],
        track_id: Optional[str] = None,
    ) -> "Track":
        """Build a track from any iterable of point-like values."""

        if track_id is None:
            return cls(name=name, points=tuple(points))
        return cls(name=name, points=tuple(points), track_id=track_id)

    @cached_property
    def length_m(self) -> float:
        """Total geodesic length in metres."""

        return path_length(self.points)

    @cached_property
    def polyline(self) -> "Polyline":
        """Polyline view over the track's points."""

        from .geometry.polyline import Polyline

        return Polyline(self.points)

    def __len__(self) -> int:
        return len(self.points)

    def __repr__(self) -> str:
        return (
            f"Track(name={self.name!r}, track_id={self.track_id!r}, "
            f"points={len(self.points)})"
        )


@dataclass(frozen=True, slots=True)
class Sample:
    """A resampled point tagged with its arc-length offset along the source."""

    point: GeoPoint
    offset_m: float


@dataclass(frozen=True, slots=True)
class ClassifiedSample:
    """A sample annotated with its distance to the reference track."""

    sample: Sample
    distance_m: float
    inside: bool


@dataclass(frozen=True, slots=True)
class OverlapSegment:
    """A contiguous run of probe samples lying along the reference track."""

    samples: Tuple[Sample, ...]

    def __post_init__(self) -> None:
        if len(self.samples) < 2:
            raise ValueError("An overlap segment needs at least 2 samples")

    @property
    def points(self) -> Tuple[GeoPoint, ...]:
        return tuple(s.point for s in self.samples)

    @property
    def start_offset_m(self) -> float:
        return self.samples[0].offset_m

    @property
    def end_offset_m(self) -> float:
        return self.samples[-1].offset_m

    @property
    def length_m(self) -> float:
        return path_length(self.points)


def check_thresholds(enter_threshold_m: float, exit_threshold_m: float) -> None:
    """Raise ``ValueError`` unless ``0 <= enter < exit`` and both are finite."""

    if not (math.isfinite(enter_threshold_m) and math.isfinite(exit_threshold_m)):
        raise ValueError("overlap thresholds must be finite")
    if enter_threshold_m < 0:
        raise ValueError("enter_threshold_m must not be negative")
    if exit_threshold_m <= enter_threshold_m:
        raise ValueError("exit_threshold_m must be greater than enter_threshold_m")


@dataclass(frozen=True, slots=True)
class CompareConfig:
    """Tunable thresholds for a comparison run."""

    enter_threshold_m: float = OVERLAP_ENTER_THRESHOLD_M
    exit_threshold_m: float = OVERLAP_EXIT_THRESHOLD_M
    resample_step_m: float = OVERLAP_RESAMPLE_STEP_M
    max_workers: int = OVERLAP_MAX_WORKERS

    def __post_init__(self) -> None:
        check_thresholds(self.enter_threshold_m, self.exit_threshold_m)
        if not (math.isfinite(self.resample_step_m) and self.resample_step_m > 0):
            raise ValueError("resample_step_m must be greater than zero")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")


@dataclass(frozen=True, slots=True)
class OverlapResult:
    """Outcome of comparing two tracks.

    ``track_a`` and ``track_b`` keep the caller's argument order; ``probe`` and
    ``reference`` record which of them was resampled and which was queried.
    """

    track_a: Track
    track_b: Track
    probe: Track
    reference: Track
    segments: Tuple[OverlapSegment, ...]
    overlap_length_m: float
    unique_a_m: float
    unique_b_m: float
    samples: Tuple[ClassifiedSample, ...] = ()
    config: CompareConfig = field(default_factory=CompareConfig)

    @property
    def has_overlap(self) -> bool:
        return bool(self.segments)


__all__ = [
    "ClassifiedSample",
    "CompareConfig",
    "GeoPoint",
    "OverlapResult",
    "OverlapSegment",
    "Sample",
    "Track",
    "check_thresholds",
]
