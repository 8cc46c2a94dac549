"""Reference stroke domain objects.

This module provides the read-only data structures describing the canonical
decomposition of a character: the direction vocabulary, reference strokes
with their derived metadata, and the ordered reference character.

The module provides the following classes:
    Direction: The eight octant directions plus ``curved``.
    ReferenceStroke: One canonical stroke (path data plus metadata).
    ReferenceCharacter: Ordered reference strokes and the logical canvas size.

Reference objects are frozen. They are built once, when reference data is
loaded, and shared between grading calls.

Example usage:
    Build a character from raw path data::

        from stroke_grader.domain.reference import ReferenceCharacter

        char = ReferenceCharacter.from_paths('二', [
            'M27,35 L82,35',
            'M15,78 L94,78',
        ])
        print(char.strokes[0].direction.value)
        # 'right'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

from ..config import VIEWBOX_SIZE


class Direction(Enum):
    """Stroke direction classes.

    The eight octants are listed in ring order, clockwise in screen space
    (y grows downward) starting from rightward. ``CURVED`` marks a stroke
    with a significant bend; such strokes keep their straight-line octant as
    a separate primary direction.

    Example:
        >>> Direction('down-left')
        <Direction.DOWN_LEFT: 'down-left'>
    """
    RIGHT = 'right'
    DOWN_RIGHT = 'down-right'
    DOWN = 'down'
    DOWN_LEFT = 'down-left'
    LEFT = 'left'
    UP_LEFT = 'up-left'
    UP = 'up'
    UP_RIGHT = 'up-right'
    CURVED = 'curved'

    @property
    def is_curved(self) -> bool:
        return self is Direction.CURVED


# Octants in ring order; index * 45 degrees is the bin center
DIRECTION_RING: Tuple[Direction, ...] = (
    Direction.RIGHT,
    Direction.DOWN_RIGHT,
    Direction.DOWN,
    Direction.DOWN_LEFT,
    Direction.LEFT,
    Direction.UP_LEFT,
    Direction.UP,
    Direction.UP_RIGHT,
)


@dataclass(frozen=True)
class ReferenceStroke:
    """One canonical stroke of a reference character.

    Attributes:
        id: Stroke identifier, unique within its character.
        path: SVG-style path data in reference-canvas coordinates.
        length: Precomputed path length (reference-canvas units).
        direction: Octant of the stroke, or ``Direction.CURVED``.
        start_quadrant: Quadrant (1-4) of the start point.
        end_quadrant: Quadrant (1-4) of the end point.
        primary_direction: Straight-line octant of a curved stroke, used for
            fuzzy direction matching. None for straight strokes.
    """
    id: str
    path: str
    length: float
    direction: Direction
    start_quadrant: int
    end_quadrant: int
    primary_direction: Optional[Direction] = None

    @classmethod
    def from_path(
        cls,
        stroke_id: str,
        path: str,
        length: Optional[float] = None,
        viewbox_size: float = VIEWBOX_SIZE,
        config=None,
    ) -> ReferenceStroke:
        """Create a stroke, deriving its metadata from the path data.

        Args:
            stroke_id: Stroke identifier.
            path: SVG-style path data.
            length: Precomputed length. Estimated from the parsed waypoint
                polyline when None.
            viewbox_size: Logical reference canvas size used for quadrants.
            config: Optional GradingConfig supplying curvature thresholds.

        Returns:
            ReferenceStroke with direction and quadrants filled in.
        """
        from ..analysis.metadata import derive_stroke_metadata
        from ..analysis.path_parser import estimate_path_length

        meta = derive_stroke_metadata(path, viewbox_size, config=config)
        if length is None:
            length = estimate_path_length(path)
        return cls(
            id=stroke_id,
            path=path,
            length=float(length),
            direction=meta.direction,
            start_quadrant=meta.start_quadrant,
            end_quadrant=meta.end_quadrant,
            primary_direction=meta.primary_direction,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        d = {
            'id': self.id,
            'path': self.path,
            'length': self.length,
            'direction': self.direction.value,
            'start_quadrant': self.start_quadrant,
            'end_quadrant': self.end_quadrant,
        }
        if self.primary_direction is not None:
            d['primary_direction'] = self.primary_direction.value
        return d


@dataclass(frozen=True)
class ReferenceCharacter:
    """A character as an ordered sequence of reference strokes.

    Stroke order is the canonical drawing order. ``viewbox_size`` is the
    logical extent of the reference canvas the path data lives in.
    """
    character: str
    strokes: Tuple[ReferenceStroke, ...] = field(default_factory=tuple)
    viewbox_size: float = VIEWBOX_SIZE
    meaning: str = ''
    jlpt: Optional[str] = None
    grade: Optional[int] = None

    def __len__(self) -> int:
        return len(self.strokes)

    @classmethod
    def from_paths(
        cls,
        character: str,
        paths: Iterable[str],
        viewbox_size: float = VIEWBOX_SIZE,
        config=None,
    ) -> ReferenceCharacter:
        """Create a character from bare path strings, numbering the strokes."""
        strokes = tuple(
            ReferenceStroke.from_path(f"{character}-{i}", path,
                                      viewbox_size=viewbox_size, config=config)
            for i, path in enumerate(paths, start=1)
        )
        return cls(character=character, strokes=strokes, viewbox_size=viewbox_size)
