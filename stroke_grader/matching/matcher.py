"""Drawn-to-reference stroke matching.

Pairs each drawn stroke with a reference stroke, scores the spatial accuracy
of every pair and decides whether the strokes were drawn in canonical order.

Matching is greedy in drawing order: each drawn stroke takes the cheapest
reference stroke not yet taken, ties going to the lowest reference index.
Strokes drawn first get first pick, so a drawing made out of order is
assigned out of order and the order flag reports it. An optimal bipartite
assignment would quietly repair such drawings.

Pair cost (dimensionless, lower is better)::

    0.4 * |drawn start - ref start| / canvas
  + 0.3 * |drawn end - ref end| / canvas
  + 0.3 * ring_distance(drawn octant, ref direction) / 4

Reference geometry lives in the reference viewBox and is scaled by
``canvas_size / viewbox_size`` before comparison with drawn pixels.

Example usage:
    Match strokes for a character::

        from stroke_grader.matching import StrokeMatcher

        matcher = StrokeMatcher()
        assignment = matcher.match(drawn_strokes, character.strokes, canvas_size=300)
        assignment.matched_indices       # e.g. [0, 2, 1]
        assignment.stroke_order_correct  # False
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from ..analysis.directions import MAX_RING_DISTANCE, detect_straight_direction, direction_distance
from ..analysis.path_parser import parse_path_with_waypoints
from ..config import DEFAULT_CONFIG, GradingConfig, VIEWBOX_SIZE
from ..domain.reference import Direction, ReferenceStroke
from ..domain.results import MatchAssignment
from ..utils.dtw import dtw_distance
from ..utils.geometry import resample_path, scale_polyline, to_xy_array

logger = logging.getLogger(__name__)

UNMATCHED = -1


@dataclass(frozen=True)
class PreparedReference:
    """Reference stroke geometry scaled to drawing-canvas pixels.

    Attributes:
        start: Start point as a length-2 array.
        end: End point as a length-2 array.
        polyline: ``(N, 2)`` waypoint polyline.
        direction: Reference direction (possibly curved).
    """
    start: np.ndarray
    end: np.ndarray
    polyline: np.ndarray
    direction: Direction

    @classmethod
    def from_stroke(cls, stroke: ReferenceStroke, scale: float) -> PreparedReference:
        analysis = parse_path_with_waypoints(stroke.path)
        return cls(
            start=np.array([analysis.start_x, analysis.start_y]) * scale,
            end=np.array([analysis.end_x, analysis.end_y]) * scale,
            polyline=scale_polyline(analysis.waypoints, scale),
            direction=stroke.direction,
        )


def spatial_accuracy(distance: float, canvas_size: float) -> float:
    """Convert an average DTW step cost to an accuracy in [0, 1].

    Deviations of a quarter canvas or more score 0.
    """
    max_reasonable = canvas_size / 4
    if max_reasonable <= 0 or math.isinf(distance):
        return 0.0
    return max(0.0, 1.0 - distance / max_reasonable)


def is_strictly_increasing(indices: Sequence[int]) -> bool:
    """True if every index is greater than the one before it."""
    return all(b > a for a, b in zip(indices, indices[1:]))


class StrokeMatcher:
    """Greedy stroke matcher with DTW spatial scoring.

    Attributes:
        config: Grading thresholds and cost weights.
    """

    def __init__(self, config: Optional[GradingConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def pair_cost(self, drawn: np.ndarray, reference: PreparedReference,
                  canvas_size: float) -> float:
        """Cost of pairing one drawn stroke (>= 2 points) with one reference."""
        cfg = self.config
        start_dist = float(np.hypot(*(drawn[0] - reference.start))) / canvas_size
        end_dist = float(np.hypot(*(drawn[-1] - reference.end))) / canvas_size

        drawn_dir = detect_straight_direction(drawn)
        dir_cost = direction_distance(drawn_dir, reference.direction) / MAX_RING_DISTANCE

        return (start_dist * cfg.start_weight
                + end_dist * cfg.end_weight
                + dir_cost * cfg.direction_weight)

    def stroke_accuracy(self, drawn: np.ndarray, reference: PreparedReference,
                        canvas_size: float) -> float:
        """DTW-based spatial accuracy of a matched pair."""
        n = self.config.sample_count
        distance = dtw_distance(resample_path(drawn, n), resample_path(reference.polyline, n))
        return spatial_accuracy(distance, canvas_size)

    def match(self, drawn_strokes: Sequence[Sequence], references: Sequence[ReferenceStroke],
              canvas_size: float, viewbox_size: float = VIEWBOX_SIZE) -> MatchAssignment:
        """Assign drawn strokes to reference strokes and score each pair.

        Args:
            drawn_strokes: Drawn point sequences in drawing order.
            references: Reference strokes in canonical order.
            canvas_size: Drawing canvas size in pixels.
            viewbox_size: Logical size of the reference canvas.

        Returns:
            MatchAssignment with one entry per drawn stroke.
        """
        canvas_size = float(canvas_size)
        if canvas_size <= 0 or viewbox_size <= 0:
            # Nothing can be compared on a zero-sized canvas
            return MatchAssignment(
                matched_indices=[UNMATCHED] * len(drawn_strokes),
                spatial_accuracies=[0.0] * len(drawn_strokes),
                stroke_order_correct=True,
            )

        scale = canvas_size / viewbox_size
        prepared = [PreparedReference.from_stroke(ref, scale) for ref in references]
        used = set()

        matched: List[int] = []
        accuracies: List[float] = []
        for drawn_idx, points in enumerate(drawn_strokes):
            drawn = to_xy_array(points)
            if len(drawn) < 2:
                matched.append(UNMATCHED)
                accuracies.append(0.0)
                continue

            best_idx = UNMATCHED
            best_cost = math.inf
            for ref_idx, ref in enumerate(prepared):
                if ref_idx in used:
                    continue
                cost = self.pair_cost(drawn, ref, canvas_size)
                if cost < best_cost:
                    best_cost = cost
                    best_idx = ref_idx

            matched.append(best_idx)
            if best_idx == UNMATCHED:
                accuracies.append(0.0)
                continue

            used.add(best_idx)
            accuracy = self.stroke_accuracy(drawn, prepared[best_idx], canvas_size)
            accuracies.append(accuracy)
            logger.debug("Drawn stroke %d -> reference %d (cost=%.3f, accuracy=%.3f)",
                         drawn_idx, best_idx, best_cost, accuracy)

        order_correct = is_strictly_increasing([i for i in matched if i != UNMATCHED])
        return MatchAssignment(
            matched_indices=matched,
            spatial_accuracies=accuracies,
            stroke_order_correct=order_correct,
        )


def validate_stroke_order(drawn_strokes: Sequence[Sequence],
                          references: Sequence[ReferenceStroke],
                          canvas_size: float,
                          viewbox_size: float = VIEWBOX_SIZE,
                          config: Optional[GradingConfig] = None) -> MatchAssignment:
    """Functional wrapper around ``StrokeMatcher.match``."""
    return StrokeMatcher(config).match(drawn_strokes, references, canvas_size, viewbox_size)
