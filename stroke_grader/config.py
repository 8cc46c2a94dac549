"""Shared configuration for stroke grading.

This module centralizes the thresholds and weights used by:
    - analysis.metadata (reference stroke direction and curvature)
    - matching.matcher (drawn/reference pairing cost and spatial accuracy)
    - api.services (overall score and pass/fail)

Having these values in one place keeps the reference-data loader and the
grader consistent. ``GradingConfig`` bundles them for callers that need to
tune a single run without touching module globals.

Example usage:
    Grade with a stricter pass threshold::

        from stroke_grader.config import GradingConfig
        from stroke_grader.api import validate_character

        config = GradingConfig(match_threshold=0.85)
        result = validate_character(strokes, character, 300, config=config)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping

logger = logging.getLogger(__name__)

# Reference canvas: KanjiVG-style artwork is drawn in a 109x109 viewBox
VIEWBOX_SIZE = 109

# Reference stroke curvature (reference-canvas units / degrees)
WAYPOINT_MIN_DISTANCE = 5.0    # Waypoints closer than this to the last kept one are dropped
BEND_THRESHOLD_DEGREES = 50.0  # Turn between kept segments that makes a stroke "curved"

# Drawn stroke curvature (drawing-canvas pixels)
CURVE_DEVIATION_THRESHOLD = 0.15  # Max deviation / chord length ratio
CURVE_MIN_POINTS = 5              # Need more points than this before checking
CURVE_MIN_LINE_LENGTH = 10.0      # Shorter chords are never curved

# Shape comparison
DTW_SAMPLE_COUNT = 50

# Matcher cost weights (sum to 1.0)
START_WEIGHT = 0.4
END_WEIGHT = 0.3
DIRECTION_WEIGHT = 0.3

# Overall score
DIRECTION_SCORE_WEIGHT = 0.4
SPATIAL_SCORE_WEIGHT = 0.4
ORDER_BONUS = 10.0
COUNT_PENALTY = 20.0

# Minimum ratio of sequential direction matches required to pass
MATCH_THRESHOLD = 0.7


@dataclass(frozen=True)
class GradingConfig:
    """Thresholds and weights for one grading run.

    All fields default to the module constants, so ``GradingConfig()`` grades
    exactly like the module-level defaults.

    Attributes:
        viewbox_size: Logical size of the reference canvas.
        waypoint_min_distance: Minimum spacing of kept waypoints when testing
            a reference stroke for curvature.
        bend_threshold_degrees: Turn angle above which a reference stroke is
            classified as curved.
        curve_deviation_threshold: Max deviation / chord ratio above which a
            drawn stroke is classified as curved.
        curve_min_points: Drawn strokes need more points than this to be
            tested for curvature.
        curve_min_line_length: Drawn strokes with a shorter chord are never
            curved.
        sample_count: Points per polyline after resampling for DTW.
        start_weight: Matcher weight of normalized start-point distance.
        end_weight: Matcher weight of normalized end-point distance.
        direction_weight: Matcher weight of direction dissimilarity.
        direction_score_weight: Share of the direction score in the total.
        spatial_score_weight: Share of the spatial score in the total.
        order_bonus: Points added when stroke order is correct.
        count_penalty: Points removed when the stroke count is wrong.
        match_threshold: Direction-match ratio required to pass.
    """
    viewbox_size: float = VIEWBOX_SIZE
    waypoint_min_distance: float = WAYPOINT_MIN_DISTANCE
    bend_threshold_degrees: float = BEND_THRESHOLD_DEGREES
    curve_deviation_threshold: float = CURVE_DEVIATION_THRESHOLD
    curve_min_points: int = CURVE_MIN_POINTS
    curve_min_line_length: float = CURVE_MIN_LINE_LENGTH
    sample_count: int = DTW_SAMPLE_COUNT
    start_weight: float = START_WEIGHT
    end_weight: float = END_WEIGHT
    direction_weight: float = DIRECTION_WEIGHT
    direction_score_weight: float = DIRECTION_SCORE_WEIGHT
    spatial_score_weight: float = SPATIAL_SCORE_WEIGHT
    order_bonus: float = ORDER_BONUS
    count_penalty: float = COUNT_PENALTY
    match_threshold: float = MATCH_THRESHOLD

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> GradingConfig:
        """Create a config from a plain mapping, e.g. parsed JSON.

        Unknown keys are ignored and logged so a typo in a config file does
        not silently change grading.

        Args:
            values: Mapping of field name to value.

        Returns:
            GradingConfig with the given overrides applied.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(k for k in values if k not in known)
        if unknown:
            logger.warning("Ignoring unknown grading config keys: %s", ', '.join(unknown))
        return cls(**{k: v for k, v in values.items() if k in known})


DEFAULT_CONFIG = GradingConfig()
