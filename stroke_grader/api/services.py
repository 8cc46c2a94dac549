"""Validation service for drawn characters.

This module provides the entry point of the grading engine. It combines the
sequential direction check with the matcher's assignment into a single
``ValidationResult``:

    1. Stroke count: drawn count must equal reference count exactly.
    2. Sequential direction check: drawn stroke i against reference stroke i,
       independent of the matcher's assignment.
    3. Matching: order correctness and per-stroke spatial accuracy.
    4. Score: ``direction * 0.4 + spatial * 0.4 + order bonus - count
       penalty``, clamped to [0, 100] and rounded half up.
    5. Pass: stroke count matches and the direction-match ratio reaches the
       match threshold. The numeric score does not affect pass/fail.

Grading is a pure function of its inputs and never raises for degenerate
drawings: empty strokes, taps and zero-stroke characters all produce a
defined result.

Example usage:
    Grade a drawing::

        from stroke_grader.api import ValidationService

        service = ValidationService()
        result = service.validate(drawn_strokes, character, canvas_size=300)
        print(result.overall_score, result.overall_match)
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from ..analysis.directions import detect_stroke_direction, reference_direction_match
from ..config import DEFAULT_CONFIG, GradingConfig
from ..domain.reference import ReferenceCharacter
from ..domain.results import StrokeResult, ValidationResult
from ..matching.matcher import StrokeMatcher

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class ValidationService:
    """Grades drawn strokes against a reference character.

    The service holds only its configuration, so a single instance can grade
    many characters, including from several threads at once.

    Attributes:
        config: Grading thresholds and weights.
        matcher: StrokeMatcher used for order and spatial accuracy.
    """

    def __init__(self, config: Optional[GradingConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.matcher = StrokeMatcher(self.config)

    def direction_matches(self, drawn_strokes: Sequence[Sequence],
                          character: ReferenceCharacter) -> List[bool]:
        """Sequential direction check, one flag per reference stroke.

        Drawn stroke i is compared with reference stroke i. Drawn strokes with
        fewer than 2 points, and reference positions with no drawn stroke,
        are false. Extra drawn strokes are not reported.
        """
        expected = character.strokes
        shared = min(len(drawn_strokes), len(expected))

        matches: List[bool] = []
        for i in range(shared):
            points = drawn_strokes[i]
            if len(points) < 2:
                matches.append(False)
                continue
            detected = detect_stroke_direction(points, self.config)
            matches.append(reference_direction_match(detected, expected[i]))

        matches.extend([False] * (len(expected) - shared))
        return matches

    def score(self, direction_ratio: float, spatial_ratio: float,
              order_correct: bool, count_match: bool) -> int:
        """Combine the grading signals into an integer score in [0, 100]."""
        cfg = self.config
        raw = (direction_ratio * 100 * cfg.direction_score_weight
               + spatial_ratio * 100 * cfg.spatial_score_weight
               + (cfg.order_bonus if order_correct else 0.0)
               - (0.0 if count_match else cfg.count_penalty))
        if math.isnan(raw):
            return 0
        return round_half_up(clamp(raw, 0.0, 100.0))

    def validate(self, drawn_strokes: Sequence[Sequence], character: ReferenceCharacter,
                 canvas_size: float) -> ValidationResult:
        """Grade drawn strokes against a reference character.

        Args:
            drawn_strokes: One point sequence per drawn stroke, in drawing
                order. Points may be Point objects, ``{'x', 'y'}`` mappings or
                ``(x, y)`` pairs in drawing-canvas pixels.
            character: Reference character to grade against.
            canvas_size: Drawing canvas size in pixels.

        Returns:
            ValidationResult with per-stroke feedback, score and pass flag.
        """
        actual = len(drawn_strokes)
        expected = len(character.strokes)
        count_match = actual == expected

        direction_flags = self.direction_matches(drawn_strokes, character)

        assignment = self.matcher.match(
            drawn_strokes, character.strokes, canvas_size, character.viewbox_size
        )

        per_stroke = [
            StrokeResult(
                direction_match=direction_flags[i],
                spatial_accuracy=assignment.spatial_accuracies[i],
                order_correct=assignment.matched_indices[i] == i,
            )
            for i in range(min(actual, expected))
        ]

        direction_ratio = sum(direction_flags) / expected if expected else 0.0
        spatial_ratio = (sum(s.spatial_accuracy for s in per_stroke) / len(per_stroke)
                         if per_stroke else 0.0)

        overall_score = self.score(direction_ratio, spatial_ratio,
                                   assignment.stroke_order_correct, count_match)
        overall_match = count_match and direction_ratio >= self.config.match_threshold

        logger.debug("Graded %r: %d/%d strokes, score=%d, match=%s",
                     character.character, actual, expected, overall_score, overall_match)

        return ValidationResult(
            stroke_count_match=count_match,
            expected_strokes=expected,
            actual_strokes=actual,
            stroke_direction_matches=direction_flags,
            stroke_order_correct=assignment.stroke_order_correct,
            per_stroke=per_stroke,
            overall_score=overall_score,
            overall_match=overall_match,
            matched_indices=list(assignment.matched_indices),
        )


def validate_character(drawn_strokes: Sequence[Sequence], character: ReferenceCharacter,
                       canvas_size: float,
                       config: Optional[GradingConfig] = None) -> ValidationResult:
    """Grade drawn strokes against a reference character.

    Functional form of ``ValidationService.validate``.
    """
    return ValidationService(config).validate(drawn_strokes, character, canvas_size)
