"""Geometric value objects for stroke grading."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence, Tuple


@dataclass(frozen=True)
class Point:
    """Immutable 2D point in canvas space.

    Drawn points also carry the capture timestamp (milliseconds). Grading
    ignores it; it is kept so captured input round-trips unchanged.
    """
    x: float
    y: float
    timestamp: float = 0.0

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple for compatibility."""
        return (self.x, self.y)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {'x': float(self.x), 'y': float(self.y), 't': float(self.timestamp)}

    @classmethod
    def from_tuple(cls, t: Sequence[float]) -> Point:
        """Create from tuple or list, ``(x, y)`` or ``(x, y, t)``."""
        if len(t) > 2:
            return cls(float(t[0]), float(t[1]), float(t[2]))
        return cls(float(t[0]), float(t[1]))

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> Point:
        """Create from a ``{'x', 'y', 't'|'timestamp'}`` mapping."""
        timestamp = d.get('t', d.get('timestamp', 0.0))
        return cls(float(d['x']), float(d['y']), float(timestamp or 0.0))

    @classmethod
    def coerce(cls, value: Any) -> Point:
        """Accept a Point, a mapping or an ``(x, y[, t])`` sequence."""
        if isinstance(value, Point):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        return cls.from_tuple(value)


def coerce_stroke(points: Sequence[Any]) -> List[Point]:
    """Convert one drawn stroke of point-like values to a list of Points."""
    return [Point.coerce(p) for p in points]
