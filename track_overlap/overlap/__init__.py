"""Overlap detection: hysteresis classification, aggregation and comparison."""

from .aggregation import OverlapTotals, aggregate, overlap_length, unique_distance
from .classifier import ClassifierState, OverlapClassifier, classify_distances
from .compare import compare, select_probe

__all__ = [
    "ClassifierState",
    "OverlapClassifier",
    "OverlapTotals",
    "aggregate",
    "classify_distances",
    "compare",
    "overlap_length",
    "select_probe",
    "unique_distance",
]
