"""Path and direction analysis module.

This module turns reference path data and drawn point sequences into the
qualitative properties the grader compares: endpoints, waypoints, octant
directions, curvature and quadrants.

The module exports:
    parse_path_with_waypoints: Decode SVG path data into a PathAnalysis.
    derive_stroke_metadata: Direction, primary direction and quadrants of a
        reference path.
    detect_stroke_direction: Direction (or ``curved``) of a drawn stroke.
    direction_distance / directions_match: Octant ring comparisons.

Example usage:
    Analyze a reference stroke::

        from stroke_grader.analysis import derive_stroke_metadata

        meta = derive_stroke_metadata('M18,30 L91,30')
        print(meta.direction.value, meta.start_quadrant, meta.end_quadrant)
        # right 1 2
"""

from .directions import (
    angle_to_direction,
    derive_stroke_direction,
    detect_stroke_direction,
    detect_straight_direction,
    direction_distance,
    directions_adjacent,
    directions_match,
    is_stroke_curved,
    reference_direction_match,
)
from .metadata import StrokeMetadata, derive_quadrant, derive_stroke_metadata, is_path_curved
from .path_parser import (
    PathAnalysis,
    estimate_path_length,
    parse_path_endpoints,
    parse_path_with_waypoints,
)

__all__ = [
    'PathAnalysis', 'parse_path_with_waypoints', 'parse_path_endpoints', 'estimate_path_length',
    'StrokeMetadata', 'derive_stroke_metadata', 'derive_quadrant', 'is_path_curved',
    'angle_to_direction', 'derive_stroke_direction', 'detect_stroke_direction',
    'detect_straight_direction', 'is_stroke_curved',
    'direction_distance', 'directions_adjacent', 'directions_match',
    'reference_direction_match',
]
