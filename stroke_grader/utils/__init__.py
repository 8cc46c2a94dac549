"""Utility functions for stroke grading.

This module provides the polyline helpers and the shape-distance metric used
by the analysis and matching layers.

The module exports the following functions:

Geometry utilities:
    to_xy_array: Convert point-like values to an ``(N, 2)`` array.
    polyline_length: Total arc length of a polyline.
    scale_polyline: Scale a polyline about the origin.
    resample_path: Evenly arc-length-spaced resampling.
    point_to_segment_distances: Distances of points to a segment.

Shape distance:
    dtw_distance: Length-normalized dynamic time warping distance.

Example usage:
    Compare two strokes::

        from stroke_grader.utils import dtw_distance, resample_path

        a = resample_path([(0, 0), (100, 0)], 50)
        b = resample_path([(0, 5), (50, 5), (100, 5)], 50)
        dtw_distance(a, b)  # 5.0
"""

from .dtw import dtw_cost_table, dtw_distance
from .geometry import (
    point_to_segment_distances,
    polyline_length,
    resample_path,
    scale_polyline,
    to_xy_array,
)

__all__ = [
    'to_xy_array', 'polyline_length', 'scale_polyline',
    'resample_path', 'point_to_segment_distances',
    'dtw_distance', 'dtw_cost_table',
]
