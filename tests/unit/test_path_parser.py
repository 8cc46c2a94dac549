#!/usr/bin/env python3
"""Unit tests for stroke_grader.analysis.path_parser.

Tests path tokenizing and parsing:
    - tokenize_path: signed-float scanning of compact path data
    - parse_path_with_waypoints: endpoints and per-set waypoints for every
      command family, absolute and relative
    - malformed input: never raises, incomplete sets are skipped
    - estimate_path_length: waypoint polyline length

Example:
    Run the parser tests::

        $ python3 -m pytest tests/unit/test_path_parser.py -v
"""

import unittest

import pytest

from stroke_grader.analysis.path_parser import (
    estimate_path_length,
    parse_path_endpoints,
    parse_path_with_waypoints,
    tokenize_path,
)


def waypoint_tuples(path):
    return [p.to_tuple() for p in parse_path_with_waypoints(path).waypoints]


class TestTokenizePath(unittest.TestCase):
    """Tests for tokenize_path."""

    def test_concatenated_negative_numbers(self):
        """A minus sign starts a new number without a separator."""
        groups = tokenize_path('M10-5.5')
        self.assertEqual(groups, [('M', [10.0, -5.5])])

    def test_second_decimal_point_starts_new_number(self):
        """'-5.5.5' scans as -5.5 then .5."""
        groups = tokenize_path('M10-5.5.5')
        self.assertEqual(groups, [('M', [10.0, -5.5, 0.5])])

    def test_exponents(self):
        """Exponent notation is part of the number."""
        groups = tokenize_path('M1e1,2E-1')
        self.assertEqual(groups, [('M', [10.0, 0.2])])

    def test_numbers_before_first_command_dropped(self):
        """Leading numbers have no command to attach to."""
        groups = tokenize_path('5 5 M1,1')
        self.assertEqual(groups, [('M', [1.0, 1.0])])

    def test_overflowing_numbers_dropped(self):
        """Numbers that overflow to infinity are skipped like malformed ones."""
        groups = tokenize_path('M1e999,2 3')
        self.assertEqual(groups, [('M', [2.0, 3.0])])

    def test_commas_and_whitespace(self):
        """Commas, spaces and newlines all separate numbers."""
        groups = tokenize_path('M 1 , 2\n3\t4')
        self.assertEqual(groups, [('M', [1.0, 2.0, 3.0, 4.0])])


class TestParseLines(unittest.TestCase):
    """Tests for moveto and line commands."""

    def test_absolute_line(self):
        """M/L record a waypoint per resulting point."""
        analysis = parse_path_with_waypoints('M10,20 L30,40')
        self.assertEqual((analysis.start_x, analysis.start_y), (10.0, 20.0))
        self.assertEqual((analysis.end_x, analysis.end_y), (30.0, 40.0))
        self.assertEqual(waypoint_tuples('M10,20 L30,40'), [(10.0, 20.0), (30.0, 40.0)])

    def test_relative_line_multiple_pairs(self):
        """Repeated pairs in one l command give one waypoint each."""
        self.assertEqual(
            waypoint_tuples('m10,10 l5,0 5,0'),
            [(10.0, 10.0), (15.0, 10.0), (20.0, 10.0)],
        )

    def test_moveto_extra_pairs_are_lineto(self):
        """Pairs after the first in M are implicit lineto."""
        analysis = parse_path_with_waypoints('M0,0 10,0 10,10')
        self.assertEqual(analysis.start.to_tuple(), (0.0, 0.0))
        self.assertEqual(analysis.end.to_tuple(), (10.0, 10.0))
        self.assertEqual(len(analysis.waypoints), 3)

    def test_horizontal_and_vertical(self):
        """H/V change one coordinate; h/v are relative."""
        self.assertEqual(
            waypoint_tuples('M0,0 H10 V20 h-5 v-5'),
            [(0.0, 0.0), (10.0, 0.0), (10.0, 20.0), (5.0, 20.0), (5.0, 15.0)],
        )

    def test_compact_kanjivg_style(self):
        """Compact data parses into the expected endpoints."""
        start, end = parse_path_endpoints('M10-5.5.5L20,30')
        self.assertEqual(start.to_tuple(), (10.0, -5.5))
        self.assertEqual(end.to_tuple(), (20.0, 30.0))


class TestParseCurves(unittest.TestCase):
    """Tests for bezier and arc commands."""

    def test_cubic_multiple_sets(self):
        """Each C set lands on its last pair."""
        self.assertEqual(
            waypoint_tuples('M0,0 C1,1 2,2 3,3 4,4 5,5 6,6'),
            [(0.0, 0.0), (3.0, 3.0), (6.0, 6.0)],
        )

    def test_relative_cubic_accumulates(self):
        """Relative sets are offset from the point the previous set reached."""
        self.assertEqual(
            waypoint_tuples('M10,10 c0,0 0,0 5,5 0,0 0,0 5,5'),
            [(10.0, 10.0), (15.0, 15.0), (20.0, 20.0)],
        )

    def test_kanjivg_relative_cubic(self):
        """A typical KanjiVG stroke ends at the summed relative offset."""
        analysis = parse_path_with_waypoints('M31.5,24.5c0,1.5-0.5,3-1,4.5')
        self.assertAlmostEqual(analysis.end_x, 30.5)
        self.assertAlmostEqual(analysis.end_y, 29.0)

    def test_quadratic_and_smooth_quadratic(self):
        """Q consumes 4 numbers, T consumes 2."""
        self.assertEqual(
            waypoint_tuples('M0,0 Q5,5 10,0 T20,0 t10,0'),
            [(0.0, 0.0), (10.0, 0.0), (20.0, 0.0), (30.0, 0.0)],
        )

    def test_smooth_cubic(self):
        """S consumes 4 numbers; s is relative."""
        self.assertEqual(
            waypoint_tuples('M0,0 S5,5 10,0 s5,5 10,0'),
            [(0.0, 0.0), (10.0, 0.0), (20.0, 0.0)],
        )

    def test_arc(self):
        """Arcs land on their last pair, ignoring radii and flags."""
        self.assertEqual(
            waypoint_tuples('M0,0 A5,5 0 0 1 10,0 a5,5 0 0 1 10,0'),
            [(0.0, 0.0), (10.0, 0.0), (20.0, 0.0)],
        )


class TestClosePath(unittest.TestCase):
    """Tests for Z/z."""

    def test_close_returns_to_start(self):
        """Z emits a waypoint at the subpath start and ends there."""
        analysis = parse_path_with_waypoints('M10,10 L20,10 L20,20 Z')
        self.assertEqual(analysis.waypoints[-1].to_tuple(), (10.0, 10.0))
        self.assertEqual(analysis.end.to_tuple(), (10.0, 10.0))

    def test_close_uses_latest_subpath(self):
        """A later M starts a new subpath but keeps the overall start."""
        analysis = parse_path_with_waypoints('M10,10 L20,20 M30,30 L40,40 z')
        self.assertEqual(analysis.start.to_tuple(), (10.0, 10.0))
        self.assertEqual(analysis.end.to_tuple(), (30.0, 30.0))


@pytest.mark.parametrize("path", [
    '',
    'L',
    'M10',
    'hello',
    'C1,2,3',
    'M,,,,',
    '*&^%',
])
def test_malformed_input_never_raises(path):
    """Malformed paths yield degenerate but valid geometry."""
    analysis = parse_path_with_waypoints(path)
    assert analysis.start_x == analysis.start_y == 0.0
    assert analysis.end_x == analysis.end_y == 0.0
    assert analysis.waypoints == []


def test_incomplete_set_leaves_current_point():
    """A trailing partial set is skipped without moving the current point."""
    analysis = parse_path_with_waypoints('M10,10 L20,20 30')
    assert analysis.end.to_tuple() == (20.0, 20.0)
    assert len(analysis.waypoints) == 2


def test_overflowing_path_never_raises():
    analysis = parse_path_with_waypoints('M1e999,1e999 L1e999,1e999')
    assert analysis.waypoints == []
    assert analysis.end.to_tuple() == (0.0, 0.0)


def test_none_path_treated_as_empty():
    analysis = parse_path_with_waypoints(None)
    assert analysis.waypoints == []


class TestEstimatePathLength(unittest.TestCase):
    """Tests for estimate_path_length."""

    def test_polyline_length(self):
        """Sums segment lengths between waypoints."""
        self.assertEqual(estimate_path_length('M0,0 L3,4 L3,10'), 11)

    def test_rounds_half_up(self):
        self.assertEqual(estimate_path_length('M0,0 L2.5,0'), 3)

    def test_overflowing_relative_path_is_zero(self):
        """Relative offsets that sum past the float range give no length."""
        self.assertEqual(estimate_path_length('M1e308,0 l1e308,0 l1e308,0'), 0)

    def test_single_point_is_zero(self):
        self.assertEqual(estimate_path_length('M5,5'), 0)


if __name__ == '__main__':
    unittest.main()
