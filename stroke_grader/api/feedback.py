"""User-facing feedback text for validation results."""

from __future__ import annotations

from typing import List

from ..domain.results import ValidationResult

CHECK_MARK = '✓'
CROSS_MARK = '✗'


def headline(result: ValidationResult) -> str:
    return 'Great work!' if result.overall_match else 'Keep practicing'


def format_feedback(result: ValidationResult) -> List[str]:
    """Render a validation result as lines of feedback text.

    Args:
        result: Result from the validation service.

    Returns:
        Lines: headline, score, stroke count, order, then one line per
        graded stroke with its accuracy and a ``reordered`` marker when the
        stroke was not matched to its own position.

    Example:
        >>> print('\\n'.join(format_feedback(result)))
        Great work!
        Score: 90%
        Strokes: 3/3 ✓
        Order: Correct
        Stroke 1: 100%
        ...
    """
    lines = [
        headline(result),
        f"Score: {result.overall_score}%",
        f"Strokes: {result.actual_strokes}/{result.expected_strokes} "
        f"{CHECK_MARK if result.stroke_count_match else CROSS_MARK}",
        f"Order: {'Correct' if result.stroke_order_correct else 'Incorrect'}",
    ]
    for i, stroke in enumerate(result.per_stroke, start=1):
        line = f"Stroke {i}: {int(stroke.spatial_accuracy * 100 + 0.5)}%"
        if not stroke.order_correct:
            line += ' reordered'
        lines.append(line)
    return lines
