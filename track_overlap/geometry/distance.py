"""Great-circle distance helpers shared by every geometry query."""

from __future__ import annotations

import math
from typing import Iterable, Protocol

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..config import EARTH_RADIUS_M

MetricArray = NDArray[np.float64]


class _HasLatLon(Protocol):
    lat: float
    lon: float


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the haversine distance in metres between two lat/lon pairs."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = phi2 - phi1
    dlmb = math.radians(lon2 - lon1)
    a = (
        math.sin(dphi / 2.0) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2.0) ** 2
    )
    # Rounding can push ``a`` just outside [0, 1] for antipodal or identical points.
    a = min(max(a, 0.0), 1.0)
    return 2.0 * EARTH_RADIUS_M * math.asin(math.sqrt(a))


def distance(p1: _HasLatLon, p2: _HasLatLon) -> float:
    """Return the geodesic distance in metres between two points."""

    return haversine_m(p1.lat, p1.lon, p2.lat, p2.lon)


def haversine_array(
    lat1: ArrayLike, lon1: ArrayLike, lat2: ArrayLike, lon2: ArrayLike
) -> MetricArray:
    """Vectorised :func:`haversine_m` over broadcastable degree arrays."""

    phi1 = np.radians(np.asarray(lat1, dtype=float))
    phi2 = np.radians(np.asarray(lat2, dtype=float))
    dphi = phi2 - phi1
    dlmb = np.radians(np.asarray(lon2, dtype=float) - np.asarray(lon1, dtype=float))
    a = np.sin(dphi / 2.0) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(dlmb / 2.0) ** 2
    a = np.clip(a, 0.0, 1.0)
    return 2.0 * EARTH_RADIUS_M * np.arcsin(np.sqrt(a))


def path_length(points: Iterable[_HasLatLon]) -> float:
    """Return the summed consecutive distances along ``points``."""

    total = 0.0
    previous = None
    for point in points:
        if previous is not None:
            total += distance(previous, point)
        previous = point
    return total


__all__ = ["distance", "haversine_array", "haversine_m", "path_length"]
