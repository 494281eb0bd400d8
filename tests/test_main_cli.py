"""Tests for the command-line comparison tool."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd
import pytest

from track_overlap.main import main
from track_overlap.models import Track


def _write_gpx(path: Path, track: Track) -> Path:
    points = "\n".join(
        f'      <trkpt lat="{p.lat:.9f}" lon="{p.lon:.9f}"/>' for p in track.points
    )
    path.write_text(
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<gpx version="1.1" xmlns="http://www.topografix.com/GPX/1/1">\n'
        f"  <trk>\n    <name>{track.name}</name>\n    <trkseg>\n{points}\n"
        "    </trkseg>\n  </trk>\n</gpx>\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def gpx_pair(tmp_path: Path, straight_track: Track, branching_track: Track) -> Sequence[Path]:
    return (
        _write_gpx(tmp_path / "a.gpx", straight_track),
        _write_gpx(tmp_path / "b.gpx", branching_track),
    )


def test_main_prints_stats_and_writes_outputs(
    gpx_pair: Sequence[Path], tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    map_path = tmp_path / "maps" / "overlap.html"
    csv_path = tmp_path / "summary.csv"
    code = main(
        [str(gpx_pair[0]), str(gpx_pair[1]), "--map", str(map_path), "--csv", str(csv_path)]
    )

    assert code == 0
    out = capsys.readouterr().out
    assert "Shared distance: 0.52 km" in out
    assert "Straight difference" in out
    assert map_path.exists()
    assert csv_path.exists()


def test_main_missing_file_returns_error(tmp_path: Path, gpx_pair: Sequence[Path]) -> None:
    assert main([str(gpx_pair[0]), str(tmp_path / "missing.gpx")]) == 1


def test_main_invalid_thresholds(gpx_pair: Sequence[Path]) -> None:
    code = main(
        [
            str(gpx_pair[0]),
            str(gpx_pair[1]),
            "--enter-threshold-m",
            "30",
            "--exit-threshold-m",
            "10",
        ]
    )
    assert code == 2


def test_main_writes_segment_and_profile_tables(
    gpx_pair: Sequence[Path],
    tmp_path: Path,
    straight_track: Track,
    branching_track: Track,
) -> None:
    segments_path = tmp_path / "segments.csv"
    profile_path = tmp_path / "profile.csv"
    code = main(
        [
            str(gpx_pair[0]),
            str(gpx_pair[1]),
            "--segments-csv",
            str(segments_path),
            "--profile-csv",
            str(profile_path),
        ]
    )

    assert code == 0
    segments = pd.read_csv(segments_path)
    assert list(segments["Segment"]) == [1]
    profile = pd.read_csv(profile_path)
    assert set(profile["Track"]) == {"Straight", "Branch"}
    assert len(profile) == len(straight_track.points) + len(branching_track.points)
