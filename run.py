#!/usr/bin/env python3
"""Convenience runner for the track overlap comparator.

Usage:
    python run.py first.gpx second.gpx [--map] [--csv summary.csv]
"""
import logging
from track_overlap.main import main

if __name__ == "__main__":
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    raise SystemExit(main())
