"""Analytic curve sensitivities checked against central finite differences."""

from datetime import date

import numpy as np
import pytest

from cdslib.conventions import PriceType
from cdslib.sensitivity import CurveParameterSensitivities, FiniteDifferenceCalculator
from cdslib.valuation import AccrualOnDefaultFormula, IsdaCdsProductPricer

from conftest import NOTIONAL, REF_DATA, create_provider, settlement_date

EPS = 1.0e-6
CALC_FD = FiniteDifferenceCalculator(EPS)
PRODUCTS = ["product_nextday", "product_before", "product_after"]
FORMULAS = list(AccrualOnDefaultFormula)


def assert_relative_close(
    computed: CurveParameterSensitivities,
    expected: CurveParameterSensitivities,
    tolerance: float,
):
    """Node-wise comparison scaled by max(1, |expected|); unmatched curves must be zero."""
    for name in set(computed.curve_names) | set(expected.curve_names):
        mine = computed.find(name)
        theirs = expected.find(name)
        if mine is None or theirs is None:
            present = mine if mine is not None else theirs
            assert np.all(np.abs(present.sensitivity) <= tolerance), name
            continue
        assert mine.parameter_count == theirs.parameter_count
        scale = np.maximum(1.0, np.abs(theirs.sensitivity))
        diff = np.abs(mine.sensitivity - theirs.sensitivity)
        assert np.all(diff <= tolerance * scale), (name, mine.sensitivity, theirs.sensitivity)


@pytest.mark.parametrize("formula", FORMULAS)
@pytest.mark.parametrize("product_name", PRODUCTS)
def test_present_value_sensitivity(request, provider, product_name, formula):
    product = request.getfixturevalue(product_name)
    pricer = IsdaCdsProductPricer(formula)
    points = pricer.present_value_sensitivity(
        product, provider, settlement_date(product, provider), REF_DATA
    )
    computed = provider.parameter_sensitivity(points)
    expected = CALC_FD.sensitivity(
        provider,
        lambda p: pricer.present_value(
            product, p, settlement_date(product, p), PriceType.CLEAN, REF_DATA
        ).amount,
    )
    assert_relative_close(computed, expected, NOTIONAL * EPS)


@pytest.mark.parametrize("formula", FORMULAS)
@pytest.mark.parametrize("product_name", PRODUCTS)
def test_price_sensitivity(request, provider, product_name, formula):
    product = request.getfixturevalue(product_name)
    pricer = IsdaCdsProductPricer(formula)
    points = pricer.price_sensitivity(
        product, provider, settlement_date(product, provider), REF_DATA
    )
    computed = provider.parameter_sensitivity(points)
    expected = CALC_FD.sensitivity(
        provider,
        lambda p: pricer.price(
            product, p, settlement_date(product, p), PriceType.CLEAN, REF_DATA
        ),
    )
    assert_relative_close(computed, expected, 10.0 * EPS)


@pytest.mark.parametrize("price_type", list(PriceType))
@pytest.mark.parametrize("formula", FORMULAS)
@pytest.mark.parametrize("product_name", PRODUCTS)
def test_par_spread_sensitivity(request, provider, product_name, formula, price_type):
    product = request.getfixturevalue(product_name)
    pricer = IsdaCdsProductPricer(formula)
    points = pricer.par_spread_sensitivity(
        product, provider, settlement_date(product, provider), REF_DATA, price_type
    )
    computed = provider.parameter_sensitivity(points)
    expected = CALC_FD.sensitivity(
        provider,
        lambda p: pricer.par_spread(
            product, p, settlement_date(product, p), REF_DATA, price_type
        ),
    )
    assert_relative_close(computed, expected, 10.0 * EPS)


@pytest.mark.parametrize("formula", FORMULAS)
@pytest.mark.parametrize("product_name", PRODUCTS)
def test_protection_leg_sensitivity(request, provider, product_name, formula):
    product = request.getfixturevalue(product_name)
    pricer = IsdaCdsProductPricer(formula)
    points = pricer.protection_leg_sensitivity(
        product, provider, settlement_date(product, provider), REF_DATA
    )
    computed = provider.parameter_sensitivity(points)
    expected = CALC_FD.sensitivity(
        provider,
        lambda p: pricer.protection_leg(product, p, settlement_date(product, p), REF_DATA),
    )
    assert_relative_close(computed, expected, 10.0 * EPS)


@pytest.mark.parametrize("formula", FORMULAS)
@pytest.mark.parametrize("product_name", PRODUCTS)
def test_risky_annuity_sensitivity(request, provider, product_name, formula):
    product = request.getfixturevalue(product_name)
    pricer = IsdaCdsProductPricer(formula)
    points = pricer.risky_annuity_sensitivity(
        product, provider, settlement_date(product, provider), REF_DATA
    )
    computed = provider.parameter_sensitivity(points)
    expected = CALC_FD.sensitivity(
        provider,
        lambda p: pricer.risky_annuity(
            product, p, settlement_date(product, p), PriceType.DIRTY, REF_DATA
        ),
    )
    assert_relative_close(computed, expected, 10.0 * EPS)


def test_sensitivity_is_linear_in_notional(provider, product_before):
    reference_date = settlement_date(product_before, provider)
    pv_points = IsdaCdsProductPricer().present_value_sensitivity(
        product_before, provider, reference_date, REF_DATA
    )
    price_points = IsdaCdsProductPricer().price_sensitivity(
        product_before, provider, reference_date, REF_DATA
    )
    pv_sensitivity = provider.parameter_sensitivity(pv_points)
    price_sensitivity = provider.parameter_sensitivity(price_points)
    assert pv_sensitivity.equal_with_tolerance(
        price_sensitivity.multiplied_by(product_before.signed_notional), 1.0e-6
    )


def test_parameter_sensitivity_frame(provider, product_nextday):
    points = IsdaCdsProductPricer().present_value_sensitivity(
        product_nextday, provider, settlement_date(product_nextday, provider), REF_DATA
    )
    frame = provider.parameter_sensitivity(points).to_frame()

    assert list(frame.columns) == ["curve", "currency", "time", "sensitivity"]
    assert set(frame["curve"]) == {"yield", "credit"}
    assert (frame["currency"] == "USD").all()
    credit_rows = frame[frame["curve"] == "credit"]
    # Buying protection gains when the hazard rate rises
    assert credit_rows["sensitivity"].sum() > 0.0


NEAR_PROTECTION_END = [
    ("product_before", date(2024, 6, 19)),
    ("product_before", date(2024, 9, 19)),
    ("product_before", date(2024, 9, 20)),
    ("product_before", date(2024, 9, 25)),
    ("product_nextday", date(2020, 10, 19)),
    ("product_nextday_none", date(2020, 10, 19)),
    # Seven-day step-in already past the protection end
    ("product_ns_btw", date(2026, 7, 30)),
]


@pytest.mark.parametrize("formula", FORMULAS)
@pytest.mark.parametrize("product_name, valuation_date", NEAR_PROTECTION_END)
def test_sensitivities_near_protection_end(request, product_name, valuation_date, formula):
    product = request.getfixturevalue(product_name)
    provider = create_provider(valuation_date)
    reference_date = settlement_date(product, provider)
    pricer = IsdaCdsProductPricer(formula)

    pv_points = pricer.present_value_sensitivity(product, provider, reference_date, REF_DATA)
    assert_relative_close(
        provider.parameter_sensitivity(pv_points),
        CALC_FD.sensitivity(
            provider,
            lambda p: pricer.present_value(
                product, p, settlement_date(product, p), PriceType.CLEAN, REF_DATA
            ).amount,
        ),
        NOTIONAL * EPS,
    )

    protection_points = pricer.protection_leg_sensitivity(
        product, provider, reference_date, REF_DATA
    )
    assert_relative_close(
        provider.parameter_sensitivity(protection_points),
        CALC_FD.sensitivity(
            provider,
            lambda p: pricer.protection_leg(product, p, settlement_date(product, p), REF_DATA),
        ),
        10.0 * EPS,
    )

    annuity_points = pricer.risky_annuity_sensitivity(product, provider, reference_date, REF_DATA)
    assert_relative_close(
        provider.parameter_sensitivity(annuity_points),
        CALC_FD.sensitivity(
            provider,
            lambda p: pricer.risky_annuity(
                product, p, settlement_date(product, p), PriceType.DIRTY, REF_DATA
            ),
        ),
        10.0 * EPS,
    )


@pytest.mark.parametrize("formula", FORMULAS)
@pytest.mark.parametrize(
    "product_name, valuation_date",
    [
        ("product_before", date(2024, 6, 19)),
        ("product_before", date(2024, 9, 19)),
        ("product_nextday", date(2020, 10, 19)),
    ],
)
def test_par_spread_sensitivity_near_protection_end(
    request, product_name, valuation_date, formula
):
    product = request.getfixturevalue(product_name)
    provider = create_provider(valuation_date)
    pricer = IsdaCdsProductPricer(formula)
    points = pricer.par_spread_sensitivity(
        product, provider, settlement_date(product, provider), REF_DATA
    )
    assert_relative_close(
        provider.parameter_sensitivity(points),
        CALC_FD.sensitivity(
            provider,
            lambda p: pricer.par_spread(product, p, settlement_date(product, p), REF_DATA),
        ),
        10.0 * EPS,
    )
