"""Command-line entry point comparing two GPX tracks."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence
import webbrowser

from .config import (
    MAP_OPEN_IN_BROWSER,
    MAP_OUTPUT_FILE,
    OVERLAP_ENTER_THRESHOLD_M,
    OVERLAP_EXIT_THRESHOLD_M,
    OVERLAP_MAX_WORKERS,
    OVERLAP_RESAMPLE_STEP_M,
)
from .errors import InvalidTrack, TrackFormatError
from .gpx_reader import read_gpx
from .models import CompareConfig
from .overlap import compare
from .report import (
    build_stats,
    format_stats,
    write_profile_csv,
    write_segments_csv,
    write_summary_csv,
)
from .visualization import create_overlap_map


def _setup_logging(verbose: bool = False) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


def _build_parser() -> argparse.ArgumentParser:
    """Return the CLI argument parser for the comparison tool."""

    parser = argparse.ArgumentParser(
        description=(
            "Compare two GPX tracks and report the distance they share and the"
            " distance unique to each."
        )
    )
    parser.add_argument("track_a", type=Path, help="First GPX file")
    parser.add_argument("track_b", type=Path, help="Second GPX file")
    parser.add_argument(
        "--enter-threshold-m",
        type=float,
        default=OVERLAP_ENTER_THRESHOLD_M,
        help="Distance (metres) at which a shared section starts (default: %(default)s)",
    )
    parser.add_argument(
        "--exit-threshold-m",
        type=float,
        default=OVERLAP_EXIT_THRESHOLD_M,
        help="Distance (metres) beyond which a shared section ends (default: %(default)s)",
    )
    parser.add_argument(
        "--step-m",
        type=float,
        default=OVERLAP_RESAMPLE_STEP_M,
        help="Resample spacing (metres) along the shorter track (default: %(default)s)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=OVERLAP_MAX_WORKERS,
        help="Threads used for distance queries (default: %(default)s)",
    )
    parser.add_argument(
        "--map",
        type=Path,
        nargs="?",
        const=Path(MAP_OUTPUT_FILE),
        help=f"Write an HTML overlap map (default path: {MAP_OUTPUT_FILE})",
    )
    parser.add_argument(
        "--open",
        action="store_true",
        default=MAP_OPEN_IN_BROWSER,
        help="Open the written map in the default browser",
    )
    parser.add_argument("--csv", type=Path, help="Write a per-track summary CSV")
    parser.add_argument(
        "--segments-csv",
        type=Path,
        help="Write one row per shared section, positioned along the shorter track",
    )
    parser.add_argument(
        "--profile-csv",
        type=Path,
        help="Write distance against elevation for both tracks",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point used via ``python -m track_overlap``."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = CompareConfig(
            enter_threshold_m=args.enter_threshold_m,
            exit_threshold_m=args.exit_threshold_m,
            resample_step_m=args.step_m,
            max_workers=args.workers,
        )
    except ValueError as exc:
        logging.error("Invalid settings: %s", exc)
        return 2

    try:
        track_a = read_gpx(args.track_a)
        track_b = read_gpx(args.track_b)
    except (TrackFormatError, InvalidTrack, OSError) as exc:
        logging.error("Failed to load tracks: %s", exc)
        return 1

    result = compare(track_a, track_b, config)
    if not result.has_overlap:
        logging.info("No shared sections found")
    for line in format_stats(build_stats(result)):
        print(line)

    if args.csv is not None:
        write_summary_csv(result, args.csv)
    if args.segments_csv is not None:
        write_segments_csv(result, args.segments_csv)
    if args.profile_csv is not None:
        write_profile_csv(result, args.profile_csv)

    if args.map is not None:
        create_overlap_map(result, output_html_path=args.map)
        logging.info("Overlap map written to %s", args.map)
        if args.open:
            webbrowser.open(args.map.resolve().as_uri())
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
