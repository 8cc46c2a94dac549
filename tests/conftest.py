"""Shared pytest fixtures for the stroke_grader test suite.

Fixtures:
    three_strokes: Reference character with three straight strokes
        (horizontal top, vertical left, horizontal bottom).
    three_strokes_drawn: Straight drawn strokes tracing three_strokes at
        1:1 scale, in reference order.
    bundle_entry: One bundle entry as the offline pipeline writes it.

Markers:
    integration: Mark test as integration test
"""

import sys
from pathlib import Path

import pytest

# Add repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from stroke_grader.domain.reference import ReferenceCharacter  # noqa: E402

THREE_STROKE_PATHS = [
    'M20,20 L89,20',   # horizontal, left to right, top
    'M20,30 L20,85',   # vertical, top to bottom, left
    'M20,90 L89,90',   # horizontal, left to right, bottom
]

THREE_STROKE_POINTS = [
    [(20.0, 20.0), (89.0, 20.0)],
    [(20.0, 30.0), (20.0, 85.0)],
    [(20.0, 90.0), (89.0, 90.0)],
]


def make_three_strokes() -> ReferenceCharacter:
    return ReferenceCharacter.from_paths('工', THREE_STROKE_PATHS)


def make_three_strokes_drawn() -> list:
    return [list(stroke) for stroke in THREE_STROKE_POINTS]


@pytest.fixture
def three_strokes():
    """Three-stroke reference character in the default 109 viewBox."""
    return make_three_strokes()


@pytest.fixture
def three_strokes_drawn():
    """Straight drawn strokes matching three_strokes exactly."""
    return make_three_strokes_drawn()


@pytest.fixture
def bundle_entry():
    """A single character entry in bundle format."""
    return {
        'character': '三',
        'meaning': 'three',
        'jlpt': 'N5',
        'grade': 1,
        'viewBox': '0 0 109 109',
        'strokes': [
            {'id': 'kvg:04e09-s1', 'path': 'M25,25 L84,25', 'length': 59},
            {'id': 'kvg:04e09-s2', 'path': 'M30,54 L79,54', 'length': 49},
            {'id': 'kvg:04e09-s3', 'path': 'M15,85 L94,85', 'length': 79},
        ],
    }
