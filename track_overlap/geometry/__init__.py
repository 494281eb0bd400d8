"""Geodesic geometry primitives: distances, polyline queries and resampling.

Only the distance helpers are re-exported here; :mod:`.polyline` and
:mod:`.resampling` depend on :mod:`track_overlap.models` and are imported
directly from their modules.
"""

from .distance import distance, haversine_array, haversine_m, path_length

__all__ = [
    "distance",
    "haversine_array",
    "haversine_m",
    "path_length",
]
