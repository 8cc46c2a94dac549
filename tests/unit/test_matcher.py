"""Unit tests for stroke_grader.matching.matcher.

Tests greedy stroke matching:
    - pair_cost: weighted start, end and direction terms
    - spatial_accuracy: DTW distance to [0, 1]
    - StrokeMatcher.match: assignment, tie-breaking, scaling, injectivity,
      unmatched strokes and the order flag
"""

import math
import unittest

import numpy as np
import pytest

from stroke_grader.domain.reference import ReferenceCharacter, ReferenceStroke
from stroke_grader.matching.matcher import (
    UNMATCHED,
    PreparedReference,
    StrokeMatcher,
    is_strictly_increasing,
    spatial_accuracy,
    validate_stroke_order,
)


@pytest.mark.parametrize("distance, canvas, expected", [
    (0.0, 100.0, 1.0),
    (12.5, 100.0, 0.5),
    (25.0, 100.0, 0.0),
    (30.0, 100.0, 0.0),
    (math.inf, 100.0, 0.0),
    (1.0, 0.0, 0.0),
])
def test_spatial_accuracy(distance, canvas, expected):
    """A quarter canvas of average deviation scores 0."""
    assert spatial_accuracy(distance, canvas) == pytest.approx(expected)


@pytest.mark.parametrize("indices, expected", [
    ([], True),
    ([3], True),
    ([0, 1, 2], True),
    ([0, 2, 5], True),
    ([2, 1, 0], False),
    ([0, 0], False),
])
def test_is_strictly_increasing(indices, expected):
    assert is_strictly_increasing(indices) is expected


class TestPairCost(unittest.TestCase):
    """Tests for StrokeMatcher.pair_cost at canvas 109 (scale 1)."""

    def setUp(self):
        self.matcher = StrokeMatcher()
        self.horizontal = PreparedReference.from_stroke(
            ReferenceStroke.from_path('h', 'M20,20 L89,20'), 1.0)

    def test_exact_match_costs_nothing(self):
        drawn = np.array([[20.0, 20.0], [89.0, 20.0]])
        self.assertAlmostEqual(self.matcher.pair_cost(drawn, self.horizontal, 109.0), 0.0)

    def test_reversed_stroke(self):
        """Both endpoints 69 away and opposite direction (ring distance 4)."""
        drawn = np.array([[89.0, 20.0], [20.0, 20.0]])
        expected = 0.4 * 69 / 109 + 0.3 * 69 / 109 + 0.3
        self.assertAlmostEqual(self.matcher.pair_cost(drawn, self.horizontal, 109.0), expected)

    def test_curved_reference_direction_term(self):
        """Curved against anything is one ring step: 0.3 * 1/4."""
        hook = PreparedReference.from_stroke(
            ReferenceStroke.from_path('hook', 'M20,20 L20,80 L40,70'), 1.0)
        drawn = np.array([[20.0, 20.0], [40.0, 70.0]])
        self.assertAlmostEqual(self.matcher.pair_cost(drawn, hook, 109.0), 0.075)

    def test_prepared_reference_scaling(self):
        prepared = PreparedReference.from_stroke(
            ReferenceStroke.from_path('h', 'M20,20 L89,20'), 2.0)
        np.testing.assert_allclose(prepared.start, [40.0, 40.0])
        np.testing.assert_allclose(prepared.end, [178.0, 40.0])
        self.assertEqual(prepared.polyline.shape, (2, 2))


class TestStrokeMatcher:
    """Tests for StrokeMatcher.match against the three_strokes fixture."""

    @pytest.fixture(autouse=True)
    def make_matcher(self, three_strokes, three_strokes_drawn):
        self.matcher = StrokeMatcher()
        self.references = three_strokes.strokes
        self.drawn = three_strokes_drawn

    def test_exact_drawing_in_order(self):
        result = self.matcher.match(self.drawn, self.references, 109)
        assert result.matched_indices == [0, 1, 2]
        assert result.stroke_order_correct
        assert result.spatial_accuracies == pytest.approx([1.0, 1.0, 1.0])

    def test_reversed_drawing_order(self):
        result = self.matcher.match(self.drawn[::-1], self.references, 109)
        assert result.matched_indices == [2, 1, 0]
        assert not result.stroke_order_correct

    def test_reversed_drawing_keeps_pair_accuracy(self):
        """Reversal permutes accuracies by assignment without changing them."""
        drawn = [[(x, y + 4.0) for x, y in self.drawn[0]]] + self.drawn[1:]
        forward = self.matcher.match(drawn, self.references, 109)
        backward = self.matcher.match(drawn[::-1], self.references, 109)
        assert backward.matched_indices == [2, 1, 0]
        for k, ref in enumerate(backward.matched_indices):
            assert backward.spatial_accuracies[k] == pytest.approx(
                forward.spatial_accuracies[ref])
        assert forward.spatial_accuracies[0] == pytest.approx(1 - 4 / 27.25)

    def test_scaled_canvas(self):
        """Reference coordinates scale by canvas / viewBox before comparison."""
        doubled = [[(x * 2, y * 2) for x, y in stroke] for stroke in self.drawn]
        result = self.matcher.match(doubled, self.references, 218)
        assert result.matched_indices == [0, 1, 2]
        assert result.spatial_accuracies == pytest.approx([1.0, 1.0, 1.0])

    def test_unscaled_drawing_on_large_canvas_loses_accuracy(self):
        result = self.matcher.match(self.drawn, self.references, 436)
        assert all(acc < 1.0 for acc in result.spatial_accuracies)

    def test_tie_goes_to_lowest_index(self):
        twins = ReferenceCharacter.from_paths('x', ['M20,20 L89,20', 'M20,20 L89,20'])
        result = self.matcher.match([[(20, 20), (89, 20)]], twins.strokes, 109)
        assert result.matched_indices == [0]

    def test_assignment_is_injective(self):
        """The same stroke drawn three times still takes three references."""
        result = self.matcher.match([self.drawn[0]] * 3, self.references, 109)
        assert result.matched_indices[0] == 0
        assert sorted(result.matched_indices) == [0, 1, 2]

    def test_extra_strokes_unmatched(self):
        drawn = self.drawn + [[(50, 50), (60, 60)]]
        result = self.matcher.match(drawn, self.references, 109)
        assert result.matched_indices == [0, 1, 2, UNMATCHED]
        assert result.spatial_accuracies[3] == 0.0
        assert result.reference_for(3) is None
        assert result.stroke_order_correct

    def test_tap_is_unmatched_and_ignored_for_order(self):
        drawn = [[(20, 20)]] + self.drawn[1:]
        result = self.matcher.match(drawn, self.references, 109)
        assert result.matched_indices == [UNMATCHED, 1, 2]
        assert result.spatial_accuracies[0] == 0.0
        assert result.stroke_order_correct

    def test_empty_stroke_is_unmatched(self):
        result = self.matcher.match([[]], self.references, 109)
        assert result.matched_indices == [UNMATCHED]

    def test_no_references(self):
        result = self.matcher.match(self.drawn, (), 109)
        assert result.matched_indices == [UNMATCHED] * 3
        assert result.stroke_order_correct

    def test_zero_canvas(self):
        result = self.matcher.match(self.drawn, self.references, 0)
        assert result.matched_indices == [UNMATCHED] * 3
        assert result.spatial_accuracies == [0.0] * 3

    def test_non_finite_points_unmatched(self):
        nan = float('nan')
        result = self.matcher.match([[(nan, nan), (10, 10)]], self.references, 109)
        assert result.matched_indices == [UNMATCHED]

    def test_accepts_point_mappings(self):
        drawn = [[{'x': x, 'y': y, 't': 0} for x, y in stroke] for stroke in self.drawn]
        result = self.matcher.match(drawn, self.references, 109)
        assert result.matched_indices == [0, 1, 2]

    def test_functional_wrapper(self):
        result = validate_stroke_order(self.drawn, self.references, 109)
        assert result.matched_indices == [0, 1, 2]


if __name__ == '__main__':
    unittest.main()
