"""SVG path parsing for reference strokes.

Decodes the path-command mini-language used by reference stroke data into a
start point, an end point and the ordered list of points each command lands
on. Only the geometry needed for grading is recovered: bezier control points
and arc radii are consumed but not sampled.

Supported commands (absolute and relative): M, L, H, V, C, S, Q, T, A, Z.
Numbers are tokenized with a signed-float scanner, so compact data such as
``M10-5.5.5L20,30`` splits into ``10``, ``-5.5``, ``.5``, ``20``, ``30``.

The parser never raises. Parameter groups that are incomplete are skipped
and leave the current point unchanged; stray characters are ignored.

Example usage:
    Parse a KanjiVG-style stroke::

        from stroke_grader.analysis.path_parser import parse_path_with_waypoints

        analysis = parse_path_with_waypoints('M31.5,24.5c0,1.5-0.5,3-1,4.5')
        print(analysis.start, analysis.end)
        print(len(analysis.waypoints))  # 2
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import List, Tuple

from ..domain.geometry import Point
from ..utils.geometry import polyline_length

# Command letters, or signed floats with optional fraction and exponent
TOKEN_RE = re.compile(
    r'([MmZzLlHhVvCcSsQqTtAa])|([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)'
)

# Parameters consumed per repetition of each command
PARAM_COUNTS = {
    'M': 2, 'L': 2, 'T': 2,
    'H': 1, 'V': 1,
    'S': 4, 'Q': 4,
    'C': 6,
    'A': 7,
    'Z': 0,
}


@dataclass
class PathAnalysis:
    """Result of parsing one path string.

    Attributes:
        start_x: X of the first moveto (0 when the path has none).
        start_y: Y of the first moveto.
        end_x: X of the final current point.
        end_y: Y of the final current point.
        waypoints: Every point a command landed on, in order. Multi-set
            commands contribute one waypoint per set.
    """
    start_x: float = 0.0
    start_y: float = 0.0
    end_x: float = 0.0
    end_y: float = 0.0
    waypoints: List[Point] = field(default_factory=list)

    @property
    def start(self) -> Point:
        return Point(self.start_x, self.start_y)

    @property
    def end(self) -> Point:
        return Point(self.end_x, self.end_y)


def tokenize_path(path: str) -> List[Tuple[str, List[float]]]:
    """Split path data into ``(command, params)`` groups.

    Numbers appearing before the first command are dropped, as are numbers
    that overflow to infinity (e.g. ``1e999``).

    Args:
        path: SVG path data string.

    Returns:
        List of (command letter, list of float parameters) tuples.
    """
    groups: List[Tuple[str, List[float]]] = []
    for match in TOKEN_RE.finditer(path or ''):
        command, number = match.groups()
        if command:
            groups.append((command, []))
        elif groups:
            value = float(number)
            if math.isfinite(value):
                groups[-1][1].append(value)
    return groups


class PathParser:
    """Walks tokenized path commands, tracking the current point.

    A parser instance holds the state of a single parse; use
    ``parse_path_with_waypoints`` for a one-shot pure call.
    """

    def __init__(self):
        self.current_x = 0.0
        self.current_y = 0.0
        self.subpath_x = 0.0
        self.subpath_y = 0.0
        self.analysis = PathAnalysis()
        self._has_start = False

    def parse(self, path: str) -> PathAnalysis:
        """Parse path data and return the accumulated analysis."""
        for command, params in tokenize_path(path):
            self._process_command(command, params)

        self.analysis.end_x = self.current_x
        self.analysis.end_y = self.current_y
        return self.analysis

    def _emit(self, x: float, y: float) -> None:
        self.current_x, self.current_y = x, y
        self.analysis.waypoints.append(Point(x, y))

    def _process_command(self, cmd: str, params: List[float]) -> None:
        """Apply one command and all of its parameter sets."""
        is_relative = cmd.islower()
        cmd_upper = cmd.upper()

        if cmd_upper == 'Z':
            self._emit(self.subpath_x, self.subpath_y)
            return

        count = PARAM_COUNTS[cmd_upper]
        for i in range(0, len(params) - count + 1, count):
            group = params[i:i + count]
            ox = self.current_x if is_relative else 0.0
            oy = self.current_y if is_relative else 0.0

            if cmd_upper == 'H':
                x, y = group[0] + ox, self.current_y
            elif cmd_upper == 'V':
                x, y = self.current_x, group[0] + oy
            else:
                # Target point is always the last pair of the set
                x, y = group[-2] + ox, group[-1] + oy

            if cmd_upper == 'M' and i == 0:
                # Only the first pair moves; later pairs are implicit lineto
                self.subpath_x, self.subpath_y = x, y
                if not self._has_start:
                    self.analysis.start_x, self.analysis.start_y = x, y
                    self._has_start = True

            self._emit(x, y)


def parse_path_with_waypoints(path: str) -> PathAnalysis:
    """Parse a path string into endpoints and ordered waypoints.

    Args:
        path: SVG path data string. Malformed input yields degenerate but
            valid geometry (coordinates default to 0).

    Returns:
        PathAnalysis for the path.
    """
    return PathParser().parse(path)


def parse_path_endpoints(path: str) -> Tuple[Point, Point]:
    """Start and end point of a path."""
    analysis = parse_path_with_waypoints(path)
    return analysis.start, analysis.end


def estimate_path_length(path: str) -> int:
    """Estimate path length as the arc length of its waypoint polyline.

    Curves are measured along their chord, so the estimate is a lower
    bound of the rendered length. Used when reference data ships without a
    precomputed length.

    Args:
        path: SVG path data string.

    Returns:
        Length rounded to the nearest integer; 0 for fewer than 2 waypoints
        or when coordinates overflow.
    """
    total = polyline_length(parse_path_with_waypoints(path).waypoints)
    if not math.isfinite(total):
        return 0
    return int(math.floor(total + 0.5))
