"""Render a comparison result as an interactive Leaflet map."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import folium  # Using folium to build an interactive Leaflet map.

from .config import OVERLAP_COLOR, TRACK_COLORS
from .models import GeoPoint, OverlapResult, Track

LatLon = Tuple[float, float]
PathLike = Union[str, Path]


def _latlon(points: Sequence[GeoPoint]) -> List[LatLon]:
    return [(p.lat, p.lon) for p in points]


def _bounds(tracks: Sequence[Track]) -> List[LatLon]:
    """Return the south-west and north-east corners covering ``tracks``."""

    lats = [p.lat for track in tracks for p in track.points]
    lons = [p.lon for track in tracks for p in track.points]
    return [(min(lats), min(lons)), (max(lats), max(lons))]


def _track_tooltip(track: Track) -> str:
    return f"{track.name} ({track.length_m / 1000.0:.2f} km)"


def create_overlap_map(
    result: OverlapResult,
    *,
    colors: Optional[Sequence[str]] = None,
    overlap_color: str = OVERLAP_COLOR,
    output_html_path: Optional[PathLike] = None,
) -> folium.Map:
    """Create a map showing both tracks with their shared sections highlighted.

    Args:
        result: Comparison returned by :func:`track_overlap.compare`.
        colors: Line colours for ``track_a`` and ``track_b``.
        overlap_color: Colour of the wide band drawn under shared sections.
        output_html_path: Optional path to persist the map as an HTML file.

    Returns:
        A :class:`folium.Map` instance containing the overlay.
    """

    palette = list(colors or TRACK_COLORS)
    if len(palette) < 2:
        raise ValueError("Two track colours are required")

    tracks = [result.track_a, result.track_b]
    start = tracks[0].points[0]
    folium_map = folium.Map(
        location=(start.lat, start.lon), zoom_start=14, control_scale=True
    )

    # Overlap first so the track lines stay visible on top of the band.
    for number, segment in enumerate(result.segments, start=1):
        folium.PolyLine(
            _latlon(segment.points),
            color=overlap_color,
            weight=8,
            opacity=0.75,
            tooltip=f"Shared section {number} ({segment.length_m / 1000.0:.2f} km)",
        ).add_to(folium_map)

    for track, color in zip(tracks, palette):
        folium.PolyLine(
            _latlon(track.points),
            color=color,
            weight=4,
            opacity=0.8,
            tooltip=_track_tooltip(track),
        ).add_to(folium_map)

    popup = folium.Popup(
        html=(
            f"<strong>Shared distance:</strong> "
            f"{result.overlap_length_m / 1000.0:.2f} km"
        ),
        max_width=300,
    )
    probe_start = result.probe.points[0]
    folium.Marker(
        location=(probe_start.lat, probe_start.lon),
        tooltip="Comparison summary",
        popup=popup,
    ).add_to(folium_map)

    folium_map.fit_bounds(_bounds(tracks))

    if output_html_path is not None:
        output_path = Path(output_html_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        folium_map.save(str(output_path))

    return folium_map


__all__ = ["create_overlap_map"]
