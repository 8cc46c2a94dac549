"""Grading result objects.

The matcher produces a ``MatchAssignment``; the validation service folds it
together with the sequential direction check into a ``ValidationResult``.
Both are plain dataclasses with ``to_dict()`` for JSON responses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class MatchAssignment:
    """Greedy pairing of drawn strokes with reference strokes.

    Attributes:
        matched_indices: For each drawn stroke, the index of its reference
            stroke, or -1 when it was left unmatched. No reference index
            appears twice.
        spatial_accuracies: For each drawn stroke, DTW-based accuracy in
            [0, 1]; 0 for unmatched strokes.
        stroke_order_correct: True when the matched reference indices, read in
            drawing order, are strictly increasing.
    """
    matched_indices: List[int] = field(default_factory=list)
    spatial_accuracies: List[float] = field(default_factory=list)
    stroke_order_correct: bool = True

    def reference_for(self, drawn_index: int) -> Optional[int]:
        """Reference index assigned to a drawn stroke, or None."""
        idx = self.matched_indices[drawn_index]
        return idx if idx >= 0 else None


@dataclass(frozen=True)
class StrokeResult:
    """Feedback for one drawn stroke."""
    direction_match: bool
    spatial_accuracy: float
    order_correct: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'direction_match': self.direction_match,
            'spatial_accuracy': float(self.spatial_accuracy),
            'order_correct': self.order_correct,
        }


@dataclass
class ValidationResult:
    """Graded correctness report for one drawn character.

    Attributes:
        stroke_count_match: Drawn count equals reference count.
        expected_strokes: Number of reference strokes.
        actual_strokes: Number of drawn strokes.
        stroke_direction_matches: Sequential (index i vs index i) direction
            check, one entry per reference stroke.
        stroke_order_correct: Order flag from the matcher's assignment.
        per_stroke: Per-stroke feedback for the first
            ``min(actual, expected)`` drawn strokes.
        overall_score: Integer score in [0, 100].
        overall_match: Pass/fail.
        matched_indices: The matcher's assignment, -1 for unmatched strokes.
    """
    stroke_count_match: bool
    expected_strokes: int
    actual_strokes: int
    stroke_direction_matches: List[bool]
    stroke_order_correct: bool
    per_stroke: List[StrokeResult]
    overall_score: int
    overall_match: bool
    matched_indices: List[int] = field(default_factory=list)

    @property
    def direction_match_ratio(self) -> float:
        """Fraction of reference strokes whose sequential direction matched."""
        if self.expected_strokes == 0:
            return 0.0
        return sum(self.stroke_direction_matches) / self.expected_strokes

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'stroke_count_match': self.stroke_count_match,
            'expected_strokes': self.expected_strokes,
            'actual_strokes': self.actual_strokes,
            'stroke_direction_matches': list(self.stroke_direction_matches),
            'stroke_order_correct': self.stroke_order_correct,
            'per_stroke': [s.to_dict() for s in self.per_stroke],
            'overall_score': self.overall_score,
            'overall_match': self.overall_match,
            'matched_indices': list(self.matched_indices),
        }
