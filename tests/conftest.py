"""Global pytest fixtures & helpers.

Adds project root to path and provides factories that build tracks from
metre offsets so tests can reason about distances directly.
"""
from __future__ import annotations

import math
import os
import sys
from typing import Callable, List, Optional, Sequence, Tuple

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from track_overlap.config import EARTH_RADIUS_M
from track_overlap.models import GeoPoint, Track

ORIGIN = GeoPoint(45.0, 7.0)
METRES_PER_DEGREE = EARTH_RADIUS_M * math.pi / 180.0

Waypoint = Tuple[float, float]


# --- Factory helpers -------------------------------------------------
def offset_point(
    north_m: float,
    east_m: float,
    origin: GeoPoint = ORIGIN,
    elevation: Optional[float] = None,
) -> GeoPoint:
    lat = origin.lat + north_m / METRES_PER_DEGREE
    lon = origin.lon + east_m / (METRES_PER_DEGREE * math.cos(math.radians(origin.lat)))
    return GeoPoint(lat, lon, elevation)


def build_track(
    name: str,
    waypoints: Sequence[Waypoint],
    spacing_m: float = 50.0,
    origin: GeoPoint = ORIGIN,
) -> Track:
    """Join ``(north_m, east_m)`` waypoints with points every ``spacing_m``."""

    points: List[GeoPoint] = [offset_point(*waypoints[0], origin=origin)]
    for (n0, e0), (n1, e1) in zip(waypoints[:-1], waypoints[1:]):
        leg = math.hypot(n1 - n0, e1 - e0)
        steps = max(1, int(math.ceil(leg / spacing_m)))
        for i in range(1, steps + 1):
            f = i / steps
            points.append(offset_point(n0 + (n1 - n0) * f, e0 + (e1 - e0) * f, origin=origin))
    return Track.from_points(name, points)


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def track_factory() -> Callable[..., Track]:
    return build_track


@pytest.fixture
def point_factory() -> Callable[..., GeoPoint]:
    return offset_point


@pytest.fixture
def straight_track() -> Track:
    """A 1 km track heading due north."""

    return build_track("Straight", [(0.0, 0.0), (1000.0, 0.0)])


@pytest.fixture
def branching_track() -> Track:
    """Follows ``straight_track`` for 500 m, then turns east for 700 m."""

    return build_track("Branch", [(0.0, 0.0), (500.0, 0.0), (500.0, 700.0)])


@pytest.fixture
def detour_track() -> Track:
    """Follows ``straight_track`` except for a 100 m eastward detour mid-way."""

    return build_track(
        "Detour",
        [
            (0.0, 0.0),
            (400.0, 0.0),
            (400.0, 100.0),
            (600.0, 100.0),
            (600.0, 0.0),
            (1000.0, 0.0),
        ],
    )


@pytest.fixture
def parallel_track() -> Track:
    """Runs alongside ``straight_track`` 200 m to the east."""

    return build_track("Parallel", [(0.0, 200.0), (1000.0, 200.0)])
