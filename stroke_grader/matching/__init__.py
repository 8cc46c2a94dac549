"""Stroke matching module.

Exports the greedy drawn-to-reference matcher and its helpers.

Example usage:
    Check stroke order::

        from stroke_grader.matching import validate_stroke_order

        assignment = validate_stroke_order(drawn, character.strokes, 300)
        print(assignment.stroke_order_correct)
"""

from .matcher import (
    UNMATCHED,
    PreparedReference,
    StrokeMatcher,
    is_strictly_increasing,
    spatial_accuracy,
    validate_stroke_order,
)

__all__ = [
    'StrokeMatcher', 'PreparedReference', 'validate_stroke_order',
    'spatial_accuracy', 'is_strictly_increasing', 'UNMATCHED',
]
