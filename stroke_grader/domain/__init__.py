"""Domain objects for stroke grading.

This module provides the value objects and data structures used throughout
the grading package: drawn points, the reference stroke vocabulary, and the
result objects returned to callers.

The module exports the following classes:

Geometry classes:
    Point: Immutable 2D point with an optional capture timestamp.

Reference classes:
    Direction: Octant directions plus ``curved``.
    ReferenceStroke: One canonical stroke with derived metadata.
    ReferenceCharacter: Ordered reference strokes for one character.

Result classes:
    MatchAssignment: Drawn-to-reference pairing from the matcher.
    StrokeResult: Per-stroke feedback.
    ValidationResult: Complete graded report.

Example usage:
    Working with points::

        from stroke_grader.domain import Point

        p1 = Point(0, 0)
        p2 = Point(3, 4, timestamp=16.0)
        distance = p1.distance_to(p2)  # 5.0
"""

from .geometry import Point, coerce_stroke
from .reference import DIRECTION_RING, Direction, ReferenceCharacter, ReferenceStroke
from .results import MatchAssignment, StrokeResult, ValidationResult

__all__ = [
    'Point', 'coerce_stroke',
    'Direction', 'DIRECTION_RING', 'ReferenceStroke', 'ReferenceCharacter',
    'MatchAssignment', 'StrokeResult', 'ValidationResult',
]
