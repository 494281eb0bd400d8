"""Hysteresis classification of per-sample distances into overlap segments."""

from __future__ import annotations

from enum import Enum
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..models import (
    ClassifiedSample,
    GeoPoint,
    OverlapSegment,
    Sample,
    check_thresholds,
)

LOGGER = logging.getLogger(__name__)


class ClassifierState(Enum):
    OUTSIDE = "outside"
    INSIDE = "inside"


class OverlapClassifier:
    """Two-state machine turning a noisy near/far signal into segments.

    A sample at or below ``enter_threshold_m`` opens a segment. The segment
    stays open while samples remain at or below ``exit_threshold_m`` and is
    closed by the first sample beyond it. Segments holding a single sample are
    dropped since they carry no length.
    """

    def __init__(self, enter_threshold_m: float, exit_threshold_m: float) -> None:
        check_thresholds(enter_threshold_m, exit_threshold_m)
        self.enter_threshold_m = float(enter_threshold_m)
        self.exit_threshold_m = float(exit_threshold_m)
        self._state = ClassifierState.OUTSIDE
        self._open: List[Sample] = []
        self.discarded = 0

    @property
    def state(self) -> ClassifierState:
        return self._state

    def reset(self) -> None:
        """Return to the initial OUTSIDE state, dropping any open segment."""

        self._state = ClassifierState.OUTSIDE
        self._open = []
        self.discarded = 0

    def feed(
        self, sample: Sample, distance_m: float
    ) -> Tuple[ClassifiedSample, Optional[OverlapSegment]]:
        """Advance the machine by one sample.

        Returns the classified sample and the segment closed by it, if any.
        """

        closed: Optional[OverlapSegment] = None
        if self._state is ClassifierState.OUTSIDE:
            if distance_m <= self.enter_threshold_m:
                self._state = ClassifierState.INSIDE
                self._open = [sample]
        elif distance_m <= self.exit_threshold_m:
            self._open.append(sample)
        else:
            self._state = ClassifierState.OUTSIDE
            closed = self._close()
        inside = self._state is ClassifierState.INSIDE
        return ClassifiedSample(sample, float(distance_m), inside), closed

    def finish(self) -> Optional[OverlapSegment]:
        """Close the stream, emitting the open segment when it is long enough."""

        closed = self._close() if self._state is ClassifierState.INSIDE else None
        self._state = ClassifierState.OUTSIDE
        return closed

    def classify(
        self,
        samples: Sequence[Sample],
        distances: Iterable[float],
    ) -> Tuple[List[ClassifiedSample], List[OverlapSegment]]:
        """Classify a whole stream from a fresh state."""

        distances = list(distances)
        if len(distances) != len(samples):
            raise ValueError("samples and distances must be the same length")
        self.reset()
        classified: List[ClassifiedSample] = []
        segments: List[OverlapSegment] = []
        for sample, distance_m in zip(samples, distances):
            item, closed = self.feed(sample, distance_m)
            classified.append(item)
            if closed is not None:
                segments.append(closed)
        tail = self.finish()
        if tail is not None:
            segments.append(tail)
        if self.discarded:
            LOGGER.debug("Dropped %d single-sample overlap runs", self.discarded)
        return classified, segments

    def _close(self) -> Optional[OverlapSegment]:
        run, self._open = self._open, []
        if len(run) < 2:
            if run:
                self.discarded += 1
            return None
        return OverlapSegment(tuple(run))


def classify_distances(
    distances: Iterable[float],
    enter_threshold_m: float,
    exit_threshold_m: float,
) -> List[Tuple[int, int]]:
    """Return inclusive index ranges of the segments found in ``distances``."""

    values = list(distances)
    # Sample offsets carry the stream index; the geometry is irrelevant here.
    samples = [Sample(point=_ORIGIN, offset_m=float(i)) for i in range(len(values))]
    classifier = OverlapClassifier(enter_threshold_m, exit_threshold_m)
    _, segments = classifier.classify(samples, values)
    return [(int(seg.start_offset_m), int(seg.end_offset_m)) for seg in segments]


_ORIGIN = GeoPoint(0.0, 0.0)


__all__ = ["ClassifierState", "OverlapClassifier", "classify_distances"]
