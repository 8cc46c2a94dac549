"""Geometric utility functions.

This module provides polyline helpers shared by the analysis and matching
layers. Polylines are handled as ``(N, 2)`` float numpy arrays; the
conversion helper accepts Points, ``{'x', 'y'}`` mappings or ``(x, y)``
sequences so callers can pass captured input as-is.

The module provides the following functions:
    to_xy_array: Convert point-like values to an ``(N, 2)`` array.
    polyline_length: Total arc length of a polyline.
    scale_polyline: Uniformly scale a polyline about the origin.
    resample_path: Resample to evenly arc-length-spaced points.
    point_to_segment_distances: Distance of many points to one segment.

Example usage:
    Resample a freehand stroke::

        from stroke_grader.utils.geometry import resample_path

        points = [(0, 0), (10, 0), (10, 10)]
        resampled = resample_path(points, num_points=5)
        resampled.shape  # (5, 2)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Sequence

import numpy as np


def to_xy_array(points: Sequence) -> np.ndarray:
    """Convert point-like values to an ``(N, 2)`` float array.

    Args:
        points: Sequence of objects with ``x``/``y`` attributes, mappings
            with ``'x'``/``'y'`` keys, or ``(x, y[, ...])`` sequences. A numpy
            array is passed through (first two columns).

    Returns:
        Float array of shape ``(N, 2)``; shape ``(0, 2)`` when empty.
    """
    if isinstance(points, np.ndarray):
        if points.size == 0:
            return np.zeros((0, 2), dtype=float)
        return np.asarray(points[:, :2], dtype=float)

    coords = []
    for p in points:
        if hasattr(p, 'x') and hasattr(p, 'y'):
            coords.append((p.x, p.y))
        elif isinstance(p, Mapping):
            coords.append((p['x'], p['y']))
        else:
            coords.append((p[0], p[1]))
    if not coords:
        return np.zeros((0, 2), dtype=float)
    return np.array(coords, dtype=float)


def _segment_lengths(xy: np.ndarray) -> np.ndarray:
    diffs = np.diff(xy, axis=0)
    return np.sqrt((diffs ** 2).sum(axis=1))


def polyline_length(points: Sequence) -> float:
    """Total arc length of a polyline; 0 for fewer than 2 points."""
    xy = to_xy_array(points)
    if len(xy) < 2:
        return 0.0
    return float(_segment_lengths(xy).sum())


def scale_polyline(points: Sequence, scale: float) -> np.ndarray:
    """Scale a polyline about the origin, e.g. reference units to pixels."""
    return to_xy_array(points) * scale


def resample_path(path: Sequence, num_points: int) -> np.ndarray:
    """Resample a path to a fixed number of evenly-spaced points.

    Interior samples sit at arc-length positions ``i * L / (num_points - 1)``
    for ``i = 1 .. num_points - 2``, linearly interpolated inside the
    segment that straddles each position. The first and last input points
    are copied verbatim to the first and last output positions.

    Args:
        path: Polyline as point-like values (see ``to_xy_array``).
        num_points: Desired number of output points.

    Returns:
        Array of shape ``(num_points, 2)``. An empty path gives an empty
        array; a single point, or a path whose points all coincide, gives
        ``num_points`` copies of the first point. ``num_points`` of 1 gives
        the first point only.

    Example:
        >>> resample_path([(0, 0), (100, 0), (100, 100)], num_points=5).tolist()
        [[0.0, 0.0], [50.0, 0.0], [100.0, 0.0], [100.0, 50.0], [100.0, 100.0]]
    """
    xy = to_xy_array(path)
    if len(xy) == 0 or num_points <= 0:
        return np.zeros((0, 2), dtype=float)
    if num_points == 1:
        return xy[:1].copy()
    if len(xy) == 1:
        return np.repeat(xy[:1], num_points, axis=0)

    # Cumulative arc length at each input vertex
    cum_length = np.concatenate([[0.0], np.cumsum(_segment_lengths(xy))])
    total_length = cum_length[-1]
    if total_length == 0:
        return np.repeat(xy[:1], num_points, axis=0)

    targets = np.arange(num_points) * (total_length / (num_points - 1))
    result = np.empty((num_points, 2), dtype=float)
    result[:, 0] = np.interp(targets, cum_length, xy[:, 0])
    result[:, 1] = np.interp(targets, cum_length, xy[:, 1])

    result[0] = xy[0]
    result[-1] = xy[-1]
    return result


def point_to_segment_distances(points: np.ndarray, seg_start: np.ndarray,
                               seg_end: np.ndarray) -> np.ndarray:
    """Distance of each point to the segment from seg_start to seg_end.

    Projections are clamped to the segment, so points beyond either end are
    measured to that endpoint. A degenerate segment measures to seg_start.

    Args:
        points: ``(N, 2)`` array.
        seg_start: Segment start as a length-2 array.
        seg_end: Segment end as a length-2 array.

    Returns:
        Array of N distances.
    """
    seg = seg_end - seg_start
    rel = points - seg_start
    len_sq = float(seg.dot(seg))
    if len_sq == 0:
        return np.sqrt((rel ** 2).sum(axis=1))

    t = np.clip(rel.dot(seg) / len_sq, 0.0, 1.0)
    closest = seg_start + np.outer(t, seg)
    return np.sqrt(((points - closest) ** 2).sum(axis=1))
