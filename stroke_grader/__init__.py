"""Stroke Grader Package.

Grades a hand-drawn character against a reference stroke decomposition:
stroke count, per-stroke direction and shape, stroke order, and an overall
0-100 score with a pass/fail flag.

Architecture Overview:
    The grading core is a set of pure functions over plain data. Nothing
    performs I/O or holds shared mutable state, so a single reference store
    can serve concurrent grading calls.

The package is organized into the following modules:
    domain: Value objects: Point, Direction, ReferenceStroke,
        ReferenceCharacter, and the result types.
    analysis: SVG path parsing, reference stroke metadata and drawn stroke
        direction detection.
    utils: Polyline resampling and dynamic time warping.
    matching: Greedy drawn-to-reference stroke matcher.
    api: Validation service and feedback formatting.
    data: Read-only reference store loaded from JSON bundles.
    config: Thresholds and weights.

Example usage:
    Grade a drawing::

        from stroke_grader import ReferenceCharacter, validate_character

        three = ReferenceCharacter.from_paths('三', [
            'M25,25 L84,25', 'M30,54 L79,54', 'M15,85 L94,85',
        ])
        drawn = [[(25, 25), (84, 25)], [(30, 54), (79, 54)], [(15, 85), (94, 85)]]
        result = validate_character(drawn, three, canvas_size=109)
        print(result.overall_score, result.overall_match)

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

from .api import ValidationService, format_feedback, validate_character
from .config import GradingConfig
from .data import ReferenceStore
from .domain import (
    Direction,
    MatchAssignment,
    Point,
    ReferenceCharacter,
    ReferenceStroke,
    StrokeResult,
    ValidationResult,
)
from .matching import StrokeMatcher

__all__ = [
    # Domain objects
    'Point', 'Direction', 'ReferenceStroke', 'ReferenceCharacter',
    'MatchAssignment', 'StrokeResult', 'ValidationResult',
    # Services
    'ValidationService', 'validate_character', 'format_feedback',
    'StrokeMatcher', 'ReferenceStore', 'GradingConfig',
]

__version__ = '1.0.0'
