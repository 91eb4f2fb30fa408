import math

import pytest

from cdslib.valuation.epsilon import SMALL, epsilon, epsilon_p, epsilon_pp


def test_limits_at_zero():
    assert epsilon(0.0) == 1.0
    assert epsilon_p(0.0) == 0.5
    assert epsilon_pp(0.0) == pytest.approx(1.0 / 3.0, abs=1e-16)


@pytest.mark.parametrize("x", [0.3, -0.7, 2.0, -5.0])
def test_closed_forms(x):
    assert epsilon(x) == pytest.approx(math.expm1(x) / x, rel=1e-14)
    expected_p = (x * math.exp(x) - math.expm1(x)) / (x * x)
    assert epsilon_p(x) == pytest.approx(expected_p, rel=1e-12)


@pytest.mark.parametrize("x", [SMALL * 0.999, -SMALL * 0.999])
def test_series_matches_closed_form_at_threshold(x):
    # Just inside the threshold the series branch is used
    exact = math.expm1(x) / x
    assert epsilon(x) == pytest.approx(exact, rel=1e-12)
    assert epsilon_p(x) == pytest.approx(0.5 + x / 3.0, rel=1e-9)
    assert epsilon_pp(x) == pytest.approx(1.0 / 3.0 + x / 4.0, rel=1e-9)


@pytest.mark.parametrize("x", [0.1, -0.4, 1.5])
def test_derivatives_by_finite_difference(x):
    h = 1e-5
    assert epsilon_p(x) == pytest.approx(
        (epsilon(x + h) - epsilon(x - h)) / (2 * h), rel=1e-8
    )
    assert epsilon_pp(x) == pytest.approx(
        (epsilon_p(x + h) - epsilon_p(x - h)) / (2 * h), rel=1e-7
    )


def test_continuous_across_threshold():
    below = SMALL * (1 - 1e-9)
    above = SMALL * (1 + 1e-9)
    assert epsilon(below) == pytest.approx(epsilon(above), rel=1e-12)
    assert epsilon_p(below) == pytest.approx(epsilon_p(above), rel=1e-6)
    assert epsilon_pp(below) == pytest.approx(epsilon_pp(above), rel=1e-3)
