import numpy as np
import pytest

from cdslib.interpolation import ProductLinearInterpolator

PILLARS = [0.5, 1.0, 3.0, 5.0]
RATES = [0.01, 0.03, 0.02, 0.015]


@pytest.fixture
def interpolator():
    return ProductLinearInterpolator(PILLARS, RATES)


def test_exact_at_nodes(interpolator):
    for t, r in zip(PILLARS, RATES):
        assert interpolator.interpolate(t) == r


def test_linear_in_rate_times_time(interpolator):
    t = 2.0
    w = (3.0 - t) / (3.0 - 1.0)
    expected_rt = w * 1.0 * 0.03 + (1 - w) * 3.0 * 0.02
    assert interpolator.interpolate(t) * t == pytest.approx(expected_rt, rel=1e-15)


def test_flat_left_extrapolation(interpolator):
    assert interpolator.interpolate(0.1) == RATES[0]
    assert interpolator.interpolate(0.0) == RATES[0]


def test_right_extrapolation_extends_last_segment(interpolator):
    t = 8.0
    slope = (5.0 * 0.015 - 3.0 * 0.02) / 2.0
    expected_rt = 5.0 * 0.015 + slope * (t - 5.0)
    assert interpolator.interpolate(t) == pytest.approx(expected_rt / t, rel=1e-14)


@pytest.mark.parametrize("t", [0.2, 0.75, 2.0, 4.9, 7.5])
def test_parameter_sensitivity_matches_bumps(interpolator, t):
    computed = interpolator.parameter_sensitivity(t)
    shift = 1e-7
    for i in range(len(RATES)):
        up = list(RATES)
        up[i] += shift
        down = list(RATES)
        down[i] -= shift
        fd = (
            ProductLinearInterpolator(PILLARS, up).interpolate(t)
            - ProductLinearInterpolator(PILLARS, down).interpolate(t)
        ) / (2 * shift)
        assert computed[i] == pytest.approx(fd, abs=1e-8)


def test_parameter_sensitivity_at_node(interpolator):
    np.testing.assert_array_equal(interpolator.parameter_sensitivity(3.0), [0, 0, 1, 0])


def test_single_node():
    single = ProductLinearInterpolator([2.0], [0.04])
    assert single.interpolate(10.0) == 0.04
    np.testing.assert_array_equal(single.parameter_sensitivity(10.0), [1.0])


def test_invalid_nodes():
    with pytest.raises(ValueError, match="Duplicate"):
        ProductLinearInterpolator([1.0, 1.0], [0.01, 0.02])
    with pytest.raises(ValueError, match="sorted"):
        ProductLinearInterpolator([2.0, 1.0], [0.01, 0.02])
    with pytest.raises(ValueError, match="same length"):
        ProductLinearInterpolator([1.0, 2.0], [0.01])
    with pytest.raises(ValueError, match="positive"):
        ProductLinearInterpolator([0.0, 1.0], [0.01, 0.02])


def test_nodes_are_read_only(interpolator):
    with pytest.raises(ValueError):
        interpolator.values[0] = 1.0
