"""Dynamic time warping for polyline shape comparison.

Computes the minimum-cost alignment between two point sequences, allowing
either sequence to dwell while the other advances. The cost of an alignment
is the sum of Euclidean distances of aligned pairs; the result is divided by
the longer sequence length so strokes sampled at different densities stay
comparable.

Run time and memory are O(n * m); keep inputs resampled to tens of points.

Example usage:
    Compare a drawn stroke with a reference stroke::

        from stroke_grader.utils.dtw import dtw_distance
        from stroke_grader.utils.geometry import resample_path

        a = resample_path(drawn_points, 50)
        b = resample_path(reference_points, 50)
        avg_step_cost = dtw_distance(a, b)
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from scipy.spatial.distance import cdist

from .geometry import to_xy_array


def dtw_cost_table(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Fill the ``(n+1, m+1)`` accumulated cost table.

    Row 0 and column 0 are infinite except the origin, which is 0. Cell
    ``(i, j)`` holds ``|a[i-1] - b[j-1]| + min(up, left, diagonal)``.

    Args:
        a: ``(n, 2)`` array.
        b: ``(m, 2)`` array.

    Returns:
        The accumulated cost table.
    """
    n, m = len(a), len(b)
    cost = cdist(a, b)  # Pairwise Euclidean distances

    table = np.full((n + 1, m + 1), np.inf)
    table[0, 0] = 0.0
    for i in range(1, n + 1):
        row_prev = table[i - 1]
        row = table[i]
        for j in range(1, m + 1):
            row[j] = cost[i - 1, j - 1] + min(row_prev[j], row[j - 1], row_prev[j - 1])
    return table


def dtw_distance(a: Sequence, b: Sequence) -> float:
    """Length-normalized DTW distance between two polylines.

    Args:
        a: First polyline (point-like values or ``(n, 2)`` array).
        b: Second polyline.

    Returns:
        Average per-step alignment cost, ``table[n, m] / max(n, m)``.
        ``math.inf`` when either polyline is empty.
    """
    xa = to_xy_array(a)
    xb = to_xy_array(b)
    if len(xa) == 0 or len(xb) == 0:
        return math.inf

    table = dtw_cost_table(xa, xb)
    return float(table[-1, -1]) / max(len(xa), len(xb))
