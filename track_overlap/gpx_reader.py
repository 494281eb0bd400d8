"""Build :class:`Track` values from GPX documents and encoded polylines."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Union
from xml.etree.ElementTree import Element, ParseError

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as ET
from polyline import decode as polyline_decode

from .errors import InvalidTrack, TrackFormatError
from .models import GeoPoint, Track

PathLike = Union[str, Path]

LOGGER = logging.getLogger(__name__)


def read_gpx(path: PathLike, track_index: int = 0) -> Track:
    """Load one track from a GPX file.

    Args:
        path: GPX file location.
        track_index: Which ``<trk>`` to read when the file holds several.

    Raises:
        TrackFormatError: If the file is not a readable GPX document or holds
            no track or route with that index.
        InvalidTrack: If the selected track has fewer than two points.
    """

    path = Path(path)
    track = parse_gpx(
        path.read_bytes(), default_name=path.stem, track_index=track_index
    )
    LOGGER.info(
        "Loaded track '%s' from %s (%d points, %.2f km)",
        track.name,
        path,
        len(track.points),
        track.length_m / 1000.0,
    )
    return track


def parse_gpx(
    text: Union[str, bytes],
    default_name: str = "Track",
    track_index: int = 0,
) -> Track:
    """Parse GPX text into a :class:`Track`.

    Track points from every ``<trkseg>`` of the selected ``<trk>`` are joined
    in document order. Files without tracks fall back to ``<rte>`` points.
    """

    try:
        root = ET.fromstring(text)
    except (ParseError, DefusedXmlException) as exc:
        raise TrackFormatError(f"Unable to parse GPX document: {exc}") from exc
    if _local(root.tag) != "gpx":
        raise TrackFormatError(f"Expected a <gpx> root element, got <{_local(root.tag)}>")

    containers = _children(root, "trk")
    point_tag = "trkpt"
    if not containers:
        containers = _children(root, "rte")
        point_tag = "rtept"
    if not containers:
        raise TrackFormatError("GPX document contains no <trk> or <rte> element")
    if not 0 <= track_index < len(containers):
        raise TrackFormatError(
            f"Track index {track_index} out of range ({len(containers)} available)"
        )

    container = containers[track_index]
    points = [_parse_point(el) for el in _descendants(container, point_tag)]
    name = _text(container, "name") or _metadata_name(root) or default_name
    if len(points) < 2:
        raise InvalidTrack(f"Track '{name}' needs at least 2 points, got {len(points)}")
    return Track.from_points(name, points)


def track_from_polyline(encoded: str, name: str, precision: int = 5) -> Track:
    """Decode a Google/Strava encoded polyline into a :class:`Track`."""

    if not encoded:
        raise InvalidTrack(f"Track '{name}' has an empty polyline")
    try:
        decoded = polyline_decode(encoded, precision)
    except (ValueError, TypeError, IndexError) as exc:
        raise TrackFormatError("Unable to decode polyline") from exc
    return Track.from_points(name, [(float(lat), float(lon)) for lat, lon in decoded])


def _parse_point(element: Element) -> GeoPoint:
    try:
        lat = float(element.attrib["lat"])
        lon = float(element.attrib["lon"])
    except (KeyError, ValueError) as exc:
        raise TrackFormatError(
            f"<{_local(element.tag)}> is missing a valid lat/lon attribute"
        ) from exc
    elevation: Optional[float] = None
    ele_text = _text(element, "ele")
    if ele_text:
        try:
            elevation = float(ele_text)
        except ValueError:
            LOGGER.debug("Ignoring unparsable elevation %r", ele_text)
    try:
        return GeoPoint(lat, lon, elevation)
    except ValueError as exc:
        raise TrackFormatError(str(exc)) from exc


def _metadata_name(root: Element) -> Optional[str]:
    for metadata in _children(root, "metadata"):
        name = _text(metadata, "name")
        if name:
            return name
    return None


def _local(tag: str) -> str:
    """Strip a ``{namespace}`` prefix so GPX 1.0 and 1.1 read the same."""

    return tag.rsplit("}", 1)[-1]


def _children(element: Element, name: str) -> List[Element]:
    return [child for child in element if _local(child.tag) == name]


def _descendants(element: Element, name: str) -> Iterator[Element]:
    return (el for el in element.iter() if _local(el.tag) == name)


def _text(element: Element, name: str) -> Optional[str]:
    for child in _children(element, name):
        if child.text and child.text.strip():
            return child.text.strip()
    return None


__all__ = ["parse_gpx", "read_gpx", "track_from_polyline"]
