"""Reference stroke metadata derivation.

Derives the qualitative properties the grader compares against from a raw
path string: the straight-line octant, whether the stroke bends enough to be
``curved``, and the canvas quadrants of its endpoints.

Curvature works on the waypoint polyline. Waypoints closer than
``waypoint_min_distance`` to the previously kept one are dropped, then every
consecutive triple of kept waypoints is checked for a turn sharper than
``bend_threshold_degrees``. Curved strokes keep their straight-line octant as
``primary_direction``.

Quadrants split the reference canvas at its midpoint::

    1 | 2
    --+--
    3 | 4

Points exactly on the midpoint fall in the right / bottom half.

Example usage:
    Derive metadata for a hook-shaped stroke::

        from stroke_grader.analysis.metadata import derive_stroke_metadata

        meta = derive_stroke_metadata('M20,20 L20,80 L40,70')
        meta.direction          # Direction.CURVED
        meta.primary_direction  # Direction.DOWN
        meta.start_quadrant     # 1
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..config import DEFAULT_CONFIG, GradingConfig, VIEWBOX_SIZE
from ..domain.geometry import Point
from ..domain.reference import Direction
from .directions import derive_stroke_direction
from .path_parser import parse_path_with_waypoints


@dataclass(frozen=True)
class StrokeMetadata:
    """Derived direction and quadrant data for one reference stroke."""
    direction: Direction
    start_quadrant: int
    end_quadrant: int
    primary_direction: Optional[Direction] = None


def derive_quadrant(x: float, y: float, viewbox_size: float = VIEWBOX_SIZE) -> int:
    """Quadrant 1-4 of a point on a square canvas.

    Example:
        >>> derive_quadrant(54.5, 10.0)
        2
    """
    mid = viewbox_size / 2
    right = x >= mid
    bottom = y >= mid
    if bottom:
        return 4 if right else 3
    return 2 if right else 1


def filter_waypoints(waypoints: Sequence[Point], min_distance: float) -> List[Point]:
    """Drop waypoints within min_distance of the previously kept waypoint.

    The first waypoint is always kept. A waypoint is kept only when its
    distance to the last kept waypoint is strictly greater than min_distance.
    """
    kept: List[Point] = []
    for wp in waypoints:
        if not kept or wp.distance_to(kept[-1]) > min_distance:
            kept.append(wp)
    return kept


def turn_angle(a: Point, b: Point, c: Point) -> float:
    """Turn in degrees at b between segments a->b and b->c, in [0, 180]."""
    heading_in = math.degrees(math.atan2(b.y - a.y, b.x - a.x))
    heading_out = math.degrees(math.atan2(c.y - b.y, c.x - b.x))
    diff = abs(heading_out - heading_in) % 360.0
    return 360.0 - diff if diff > 180.0 else diff


def is_path_curved(waypoints: Sequence[Point],
                   min_distance: float = DEFAULT_CONFIG.waypoint_min_distance,
                   bend_threshold: float = DEFAULT_CONFIG.bend_threshold_degrees) -> bool:
    """Whether a waypoint polyline contains a bend sharper than bend_threshold.

    Fewer than 3 significant waypoints means the stroke is straight.
    """
    kept = filter_waypoints(waypoints, min_distance)
    if len(kept) < 3:
        return False
    return any(
        turn_angle(kept[i - 1], kept[i], kept[i + 1]) > bend_threshold
        for i in range(1, len(kept) - 1)
    )


def derive_stroke_metadata(path: str, viewbox_size: float = VIEWBOX_SIZE,
                           config: Optional[GradingConfig] = None) -> StrokeMetadata:
    """Derive direction and quadrants from a path string.

    Args:
        path: SVG path data in reference-canvas coordinates.
        viewbox_size: Logical reference canvas size.
        config: Optional grading config supplying the curvature thresholds.

    Returns:
        StrokeMetadata for the stroke.
    """
    config = config or DEFAULT_CONFIG
    analysis = parse_path_with_waypoints(path)

    straight = derive_stroke_direction(
        analysis.start_x, analysis.start_y, analysis.end_x, analysis.end_y
    )
    curved = is_path_curved(
        analysis.waypoints, config.waypoint_min_distance, config.bend_threshold_degrees
    )

    return StrokeMetadata(
        direction=Direction.CURVED if curved else straight,
        start_quadrant=derive_quadrant(analysis.start_x, analysis.start_y, viewbox_size),
        end_quadrant=derive_quadrant(analysis.end_x, analysis.end_y, viewbox_size),
        primary_direction=straight if curved else None,
    )
