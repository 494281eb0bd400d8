"""Tabular and text summaries of a comparison result.

Everything here converts metres to kilometres for display; the comparison
itself always works in metres.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import List, Union

import numpy as np
import pandas as pd

from .config import REPORT_KM_DECIMALS
from .models import OverlapResult, Track

PathLike = Union[str, Path]

LOGGER = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "Track",
    "Role",
    "Points",
    "Total Distance (km)",
    "Shared Distance (km)",
    "Unique Distance (km)",
]

SEGMENT_COLUMNS = [
    "Segment",
    "Start (km)",
    "End (km)",
    "Length (km)",
    "Samples",
]

PROFILE_COLUMNS = ["Distance (km)", "Elevation (m)"]


@dataclass(slots=True)
class OverlapStats:
    """Headline figures of a comparison, in kilometres."""

    overlap_km: float
    track_a_name: str
    track_a_km: float
    unique_a_km: float
    track_b_name: str
    track_b_km: float
    unique_b_km: float
    segment_count: int


def build_stats(result: OverlapResult) -> OverlapStats:
    return OverlapStats(
        overlap_km=result.overlap_length_m / 1000.0,
        track_a_name=result.track_a.name,
        track_a_km=result.track_a.length_m / 1000.0,
        unique_a_km=result.unique_a_m / 1000.0,
        track_b_name=result.track_b.name,
        track_b_km=result.track_b.length_m / 1000.0,
        unique_b_km=result.unique_b_m / 1000.0,
        segment_count=len(result.segments),
    )


def format_stats(stats: OverlapStats, decimals: int = REPORT_KM_DECIMALS) -> List[str]:
    """Return display lines such as ``Shared distance: 1.23 km``."""

    def km(value: float) -> str:
        return f"{value:.{decimals}f} km"

    return [
        f"Shared distance: {km(stats.overlap_km)}",
        f"{stats.track_a_name} total: {km(stats.track_a_km)}",
        f"{stats.track_a_name} difference: {km(stats.unique_a_km)}",
        f"{stats.track_b_name} total: {km(stats.track_b_km)}",
        f"{stats.track_b_name} difference: {km(stats.unique_b_km)}",
        f"Overlap segments: {stats.segment_count}",
    ]


def summary_frame(result: OverlapResult) -> pd.DataFrame:
    """Return one row per compared track with total, shared and unique km."""

    rows = []
    for track, unique_m in (
        (result.track_a, result.unique_a_m),
        (result.track_b, result.unique_b_m),
    ):
        rows.append(
            {
                "Track": track.name,
                "Role": "probe" if track is result.probe else "reference",
                "Points": len(track.points),
                "Total Distance (km)": track.length_m / 1000.0,
                "Shared Distance (km)": result.overlap_length_m / 1000.0,
                "Unique Distance (km)": unique_m / 1000.0,
            }
        )
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def segments_frame(result: OverlapResult) -> pd.DataFrame:
    """Return one row per overlap segment, positioned along the probe track."""

    rows = [
        {
            "Segment": number,
            "Start (km)": segment.start_offset_m / 1000.0,
            "End (km)": segment.end_offset_m / 1000.0,
            "Length (km)": segment.length_m / 1000.0,
            "Samples": len(segment.samples),
        }
        for number, segment in enumerate(result.segments, start=1)
    ]
    return pd.DataFrame(rows, columns=SEGMENT_COLUMNS)


def elevation_profile(track: Track) -> pd.DataFrame:
    """Return cumulative distance against elevation for charting.

    Points without an elevation appear as ``NaN`` so the distance axis keeps
    every vertex.
    """

    cumulative = track.polyline.cumulative_distances()
    elevations = [
        p.elevation if p.elevation is not None else np.nan for p in track.points
    ]
    return pd.DataFrame(
        {
            "Distance (km)": cumulative / 1000.0,
            "Elevation (m)": np.asarray(elevations, dtype=float),
        },
        columns=PROFILE_COLUMNS,
    )


def profiles_frame(result: OverlapResult) -> pd.DataFrame:
    """Stack the elevation profiles of both tracks, labelled by track name."""

    frames = []
    for track in (result.track_a, result.track_b):
        profile = elevation_profile(track)
        profile.insert(0, "Track", track.name)
        frames.append(profile)
    return pd.concat(frames, ignore_index=True)


def _write_frame(frame: pd.DataFrame, path: PathLike, label: str) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output_path, index=False)
    LOGGER.info("%s written to %s", label, output_path)
    return output_path


def write_summary_csv(result: OverlapResult, path: PathLike) -> Path:
    """Write :func:`summary_frame` to ``path`` and return the resolved path."""

    return _write_frame(summary_frame(result), path, "Summary")


def write_segments_csv(result: OverlapResult, path: PathLike) -> Path:
    """Write :func:`segments_frame` to ``path``; a header-only file when empty."""

    return _write_frame(segments_frame(result), path, "Overlap segments")


def write_profile_csv(result: OverlapResult, path: PathLike) -> Path:
    """Write :func:`profiles_frame` to ``path``."""

    return _write_frame(profiles_frame(result), path, "Elevation profiles")


__all__ = [
    "OverlapStats",
    "build_stats",
    "elevation_profile",
    "format_stats",
    "profiles_frame",
    "segments_frame",
    "summary_frame",
    "write_profile_csv",
    "write_segments_csv",
    "write_summary_csv",
]
