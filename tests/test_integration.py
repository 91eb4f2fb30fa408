import pytest

from cdslib.valuation.integration import (
    KNOT_TOLERANCE,
    integration_points,
    truncate_set_exclusive,
    truncate_set_inclusive,
)


def test_truncate_set_exclusive():
    points = [3.0, 0.5, 1.0, 2.0, 5.0]
    assert truncate_set_exclusive(0.5, 3.0, points) == [1.0, 2.0]
    assert truncate_set_exclusive(3.0, 1.0, points) == []
    assert truncate_set_exclusive(5.0, 6.0, points) == []


def test_integration_points_merge_both_curves():
    result = integration_points(0.25, 4.0, [0.5, 2.0, 10.0], [1.0, 3.0, 7.0])
    assert result == [0.25, 0.5, 1.0, 2.0, 3.0, 4.0]


def test_integration_points_drop_close_knots():
    close = 1.0 + KNOT_TOLERANCE / 2
    result = integration_points(0.0, 2.0, [1.0], [close])
    assert result == [0.0, 1.0, 2.0]


def test_integration_points_end_replaces_close_node():
    end = 2.0
    result = integration_points(0.0, end, [1.0, end - KNOT_TOLERANCE / 2], [])
    assert result == [0.0, 1.0, end]


def test_integration_points_without_nodes():
    assert integration_points(0.1, 0.2, [1.0], [2.0]) == [0.1, 0.2]


def test_truncate_set_inclusive():
    assert truncate_set_inclusive(0.0, 4.0, [1.0, 2.0, 5.0]) == [0.0, 1.0, 2.0, 4.0]
    assert truncate_set_inclusive(1.5, 1.8, [1.0, 2.0]) == [1.5, 1.8]


def test_truncate_set_inclusive_absorbs_close_points():
    lower, upper = 1.0, 3.0
    points = [lower + KNOT_TOLERANCE / 3, 2.0, upper - KNOT_TOLERANCE / 3]
    result = truncate_set_inclusive(lower, upper, points)
    assert result[0] == lower
    assert result[-1] == upper
    assert result == pytest.approx([lower, 2.0, upper])
