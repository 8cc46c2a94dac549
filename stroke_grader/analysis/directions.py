"""Direction classification and comparison.

Directions are compass octants in screen space (y grows downward), so a
stroke drawn toward the bottom of the canvas is ``down`` and 90 degrees.

The module provides the following functions:
    angle_to_direction: Bin an angle in degrees into an octant.
    derive_stroke_direction: Octant of the vector from start to end.
    direction_distance: Steps between two directions on the octant ring.
    directions_adjacent: Ring distance of at most one step.
    directions_match: Sequential-check rule including curved fuzziness.
    detect_straight_direction: Octant of a drawn stroke, ignoring bends.
    is_stroke_curved: Chord-deviation curvature test for drawn strokes.
    detect_stroke_direction: Octant or ``curved`` for a drawn stroke.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from ..config import DEFAULT_CONFIG, GradingConfig
from ..domain.geometry import Point
from ..domain.reference import DIRECTION_RING, Direction, ReferenceStroke
from ..utils.geometry import point_to_segment_distances, to_xy_array

OCTANT_WIDTH = 45.0
RING_SIZE = len(DIRECTION_RING)
MAX_RING_DISTANCE = RING_SIZE // 2


def normalize_angle(angle: float) -> float:
    """Map an angle in degrees to [0, 360)."""
    angle = angle % 360.0
    return 0.0 if angle >= 360.0 else angle


def angle_to_direction(angle: float) -> Direction:
    """Bin an angle in degrees into one of the eight octants.

    Bins are 45 degrees wide and centered on multiples of 45, with 0 degrees
    pointing right. Lower bin edges are inclusive (22.5 is ``down-right``).
    Angles that are not finite (from overflowing or NaN coordinates) fall
    back to ``right``.

    Example:
        >>> angle_to_direction(90.0)
        <Direction.DOWN: 'down'>
        >>> angle_to_direction(-30.0)
        <Direction.UP_RIGHT: 'up-right'>
    """
    if not math.isfinite(angle):
        return Direction.RIGHT
    shifted = normalize_angle(angle + OCTANT_WIDTH / 2)
    return DIRECTION_RING[int(shifted // OCTANT_WIDTH) % RING_SIZE]


def derive_stroke_direction(start_x: float, start_y: float,
                            end_x: float, end_y: float) -> Direction:
    """Octant of the straight line from start to end.

    A zero-length vector has angle 0 and classifies as ``right``.
    """
    angle = math.degrees(math.atan2(end_y - start_y, end_x - start_x))
    return angle_to_direction(angle)


def direction_distance(a: Direction, b: Direction) -> int:
    """Number of ring steps between two directions.

    Returns:
        0-4 for two octants. 1 whenever either side is ``curved``.
    """
    if a.is_curved or b.is_curved:
        return 1
    diff = abs(DIRECTION_RING.index(a) - DIRECTION_RING.index(b))
    return min(diff, RING_SIZE - diff)


def directions_adjacent(a: Direction, b: Direction) -> bool:
    """True if two octants are equal or neighbours on the ring."""
    if a.is_curved or b.is_curved:
        return False
    return direction_distance(a, b) <= 1


def directions_match(detected: Direction, expected: Direction,
                     primary: Optional[Direction] = None) -> bool:
    """Whether a drawn direction satisfies a reference direction.

    Exact equality always matches. A curved reference also accepts a curved
    drawing, or an octant adjacent to the reference's primary direction.

    Args:
        detected: Direction detected on the drawn stroke.
        expected: Reference stroke direction.
        primary: Reference primary direction, used when expected is curved.

    Returns:
        True on match.
    """
    if detected is expected:
        return True
    if expected.is_curved:
        if detected.is_curved:
            return True
        return primary is not None and directions_adjacent(detected, primary)
    return False


def reference_direction_match(detected: Direction, stroke: ReferenceStroke) -> bool:
    """``directions_match`` against a reference stroke's metadata."""
    return directions_match(detected, stroke.direction, stroke.primary_direction)


def detect_straight_direction(points: Sequence) -> Direction:
    """Octant from first to last point of a drawn stroke.

    Strokes with fewer than 2 points default to ``right``.
    """
    if len(points) < 2:
        return Direction.RIGHT
    start = Point.coerce(points[0])
    end = Point.coerce(points[-1])
    return derive_stroke_direction(start.x, start.y, end.x, end.y)


def is_stroke_curved(points: Sequence, config: GradingConfig = DEFAULT_CONFIG) -> bool:
    """Chord-deviation curvature test for drawn strokes.

    A stroke is curved when the largest distance of any point from the
    start-to-end segment exceeds ``curve_deviation_threshold`` times the
    chord length. Short strokes, by point count or by chord length, are
    never curved.

    Args:
        points: Drawn points (Point, mapping or ``(x, y)`` values).
        config: Grading thresholds.

    Returns:
        True if the stroke bows away from its chord.
    """
    if len(points) <= config.curve_min_points:
        return False

    xy = to_xy_array(points)
    chord = float(np.hypot(*(xy[-1] - xy[0])))
    if chord < config.curve_min_line_length:
        return False

    max_deviation = float(point_to_segment_distances(xy, xy[0], xy[-1]).max())
    return max_deviation / chord > config.curve_deviation_threshold


def detect_stroke_direction(points: Sequence,
                            config: GradingConfig = DEFAULT_CONFIG) -> Direction:
    """Direction of a drawn stroke, ``curved`` when it bows away from its chord."""
    if len(points) < 2:
        return Direction.RIGHT
    if is_stroke_curved(points, config):
        return Direction.CURVED
    return detect_straight_direction(points)
