"""Arc-length and nearest-point queries over a sequence of GeoPoints."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from ..errors import InvalidTrack
from ..models import GeoPoint
from .distance import haversine_array

MetricArray = NDArray[np.float64]


@dataclass(frozen=True, slots=True)
class NearestPoint:
    """Closest location on a polyline to a query point."""

    distance_m: float
    point: GeoPoint
    offset_m: float
    segment_index: int


class Polyline:
    """A connected path through two or more points.

    Lengths use the haversine metric. Nearest-point queries find the
    projection parameter in a local equirectangular frame per segment, then
    measure the haversine distance to the interpolated point so reported
    distances stay consistent with resampling and track lengths.
    """

    def __init__(self, points: Iterable[GeoPoint]) -> None:
        pts = tuple(points)
        if len(pts) < 2:
            raise InvalidTrack(f"A polyline needs at least 2 points, got {len(pts)}")
        self._points = pts
        self._lats = np.asarray([p.lat for p in pts], dtype=float)
        self._lons = np.asarray([p.lon for p in pts], dtype=float)
        self._cumulative: Optional[MetricArray] = None

    @property
    def points(self) -> Sequence[GeoPoint]:
        return self._points

    def __len__(self) -> int:
        return len(self._points)

    def segment_lengths(self) -> MetricArray:
        """Return the geodesic length of each consecutive pair."""

        return np.diff(self.cumulative_distances())

    def cumulative_distances(self) -> MetricArray:
        """Return the arc-length offset of every vertex, starting at 0."""

        if self._cumulative is None:
            lengths = haversine_array(
                self._lats[:-1], self._lons[:-1], self._lats[1:], self._lons[1:]
            )
            cumulative = np.concatenate(([0.0], np.cumsum(lengths)))
            cumulative.flags.writeable = False
            self._cumulative = cumulative
        return self._cumulative

    def total_length(self) -> float:
        return float(self.cumulative_distances()[-1])

    def point_at_distance(self, distance_m: float) -> GeoPoint:
        """Return the point ``distance_m`` metres along the path.

        The distance is clamped to ``[0, total_length()]``. Both ends return
        the literal first/last vertex rather than interpolated values.
        """

        if math.isnan(distance_m):
            raise ValueError("distance_m must be a number")
        total = self.total_length()
        if distance_m <= 0.0:
            return self._points[0]
        if distance_m >= total:
            return self._points[-1]
        cumulative = self.cumulative_distances()
        # cumulative[index] <= d < cumulative[index + 1], so the bracket has length.
        index = int(np.searchsorted(cumulative, distance_m, side="right")) - 1
        start = float(cumulative[index])
        seg_len = float(cumulative[index + 1]) - start
        fraction = (distance_m - start) / seg_len
        return _blend(self._points[index], self._points[index + 1], fraction)

    def min_distance_to(self, point: GeoPoint) -> float:
        """Return the distance in metres from ``point`` to the closest segment."""

        return self.nearest_point(point).distance_m

    def distances_to(self, points: Iterable[GeoPoint]) -> MetricArray:
        """Return :meth:`min_distance_to` for each point, in order."""

        return np.asarray([self.min_distance_to(p) for p in points], dtype=float)

    def nearest_point(self, point: GeoPoint) -> NearestPoint:
        """Return the closest location on the polyline to ``point``."""

        a_lat = self._lats[:-1]
        a_lon = self._lons[:-1]
        d_lat = np.diff(self._lats)
        d_lon = _wrap_degrees(np.diff(self._lons))

        scale = np.cos(np.radians((a_lat + self._lats[1:]) / 2.0))
        ax = _wrap_degrees(a_lon - point.lon) * scale
        ay = a_lat - point.lat
        dx = d_lon * scale
        dy = d_lat
        seg_sq = dx * dx + dy * dy
        # Zero-length segments project onto their shared vertex.
        with np.errstate(divide="ignore", invalid="ignore"):
            t = np.where(seg_sq > 0.0, -(ax * dx + ay * dy) / seg_sq, 0.0)
        t = np.clip(np.nan_to_num(t, nan=0.0), 0.0, 1.0)

        near_lat = a_lat + t * d_lat
        near_lon = _wrap_degrees(a_lon + t * d_lon)
        distances = haversine_array(point.lat, point.lon, near_lat, near_lon)
        index = int(np.argmin(distances))

        fraction = float(t[index])
        nearest = _blend(self._points[index], self._points[index + 1], fraction)
        cumulative = self.cumulative_distances()
        seg_len = float(cumulative[index + 1] - cumulative[index])
        return NearestPoint(
            distance_m=float(distances[index]),
            point=nearest,
            offset_m=float(cumulative[index]) + fraction * seg_len,
            segment_index=index,
        )


def _wrap_degrees(values):
    """Wrap longitude differences into [-180, 180)."""

    return (np.asarray(values, dtype=float) + 180.0) % 360.0 - 180.0


def _blend(start: GeoPoint, end: GeoPoint, fraction: float) -> GeoPoint:
    """Linearly interpolate between two points, crossing the antimeridian if shorter."""

    if fraction <= 0.0:
        return start
    if fraction >= 1.0:
        return end
    lat = start.lat + (end.lat - start.lat) * fraction
    d_lon = (end.lon - start.lon + 180.0) % 360.0 - 180.0
    lon = start.lon + d_lon * fraction
    if lon > 180.0:
        lon -= 360.0
    elif lon < -180.0:
        lon += 360.0
    elevation = None
    if start.elevation is not None and end.elevation is not None:
        elevation = start.elevation + (end.elevation - start.elevation) * fraction
    return GeoPoint(lat, lon, elevation)


__all__ = ["NearestPoint", "Polyline"]
