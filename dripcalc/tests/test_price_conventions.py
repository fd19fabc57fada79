from __future__ import annotations

import math

import pytest

from dripcalc.core.engine import cash_growth_factor, project
from dripcalc.models import ProjectionParameters, ReinvestmentPriceConvention


def closing_for(convention: ReinvestmentPriceConvention, **overrides) -> float:
    values = dict(
        principal=1000.0,
        horizon_years=1,
        price_growth_rate=0.1,
        periodic_contribution=100.0,
        contribution_frequency=12,
        price_convention=convention,
    )
    values.update(overrides)
    return project(ProjectionParameters(**values))[0].closing_value


def test_cash_growth_factors():
    assert cash_growth_factor(ReinvestmentPriceConvention.START_OF_PERIOD, 1.21) == 1.21
    assert cash_growth_factor(ReinvestmentPriceConvention.MID_PERIOD_GEOMETRIC, 1.21) == pytest.approx(1.1)
    assert cash_growth_factor(ReinvestmentPriceConvention.END_OF_PERIOD, 1.21) == 1.0


def test_start_of_period_grows_cash_with_the_balance():
    assert closing_for(ReinvestmentPriceConvention.START_OF_PERIOD) == pytest.approx((1000.0 + 1200.0) * 1.1)


def test_mid_period_uses_geometric_half_year():
    expected = 1000.0 * 1.1 + 1200.0 * math.sqrt(1.1)
    assert closing_for(ReinvestmentPriceConvention.MID_PERIOD_GEOMETRIC) == pytest.approx(expected)


def test_end_of_period_adds_cash_after_growth():
    assert closing_for(ReinvestmentPriceConvention.END_OF_PERIOD) == pytest.approx(1000.0 * 1.1 + 1200.0)


def test_earlier_purchase_prices_win_when_prices_rise():
    start = closing_for(ReinvestmentPriceConvention.START_OF_PERIOD)
    mid = closing_for(ReinvestmentPriceConvention.MID_PERIOD_GEOMETRIC)
    end = closing_for(ReinvestmentPriceConvention.END_OF_PERIOD)

    assert start > mid > end


def test_fees_come_off_after_growth():
    closing = closing_for(
        ReinvestmentPriceConvention.END_OF_PERIOD,
        periodic_contribution=0.0,
        expense_ratio=0.01,
    )

    assert closing == pytest.approx(1000.0 * 1.1 - 10.0)
