from __future__ import annotations

import pytest

from dripcalc.core.returns import cagr, cumulative_return_pct, net_growth_rate, period_return_pct
from dripcalc.domain.projection import run_projection
from dripcalc.models import ProjectionParameters, ReinvestmentPriceConvention


def test_return_percentages_guard_zero_bases():
    assert period_return_pct(0.0, 500.0) == 0.0
    assert cumulative_return_pct(0.0, 500.0) == 0.0
    assert period_return_pct(200.0, 250.0) == pytest.approx(25.0)
    assert cumulative_return_pct(1000.0, 900.0) == pytest.approx(-10.0)


def test_cagr_undefined_cases():
    assert cagr(0.0, 100.0, 5) is None
    assert cagr(100.0, 150.0, 0) is None
    assert cagr(100.0, -1.0, 3) is None
    assert cagr(100.0, 100.0, 10) == 0.0


def test_cagr_round_trip_matches_simulated_path():
    params = ProjectionParameters(
        principal=25000.0,
        horizon_years=20,
        price_growth_rate=0.07,
        dividend_yield=0.03,
        dividend_tax_rate=0.15,
        expense_ratio=0.001,
        price_convention=ReinvestmentPriceConvention.END_OF_PERIOD,
    )

    result = run_projection(params)
    rate = result.cagr_pct / 100

    # constant yearly factor: 1.07 + 0.03 * 0.85 - 0.001
    assert rate == pytest.approx(0.0945, rel=1e-9)
    assert params.principal * (1 + rate) ** params.horizon_years == pytest.approx(result.final_value, rel=1e-9)


def test_net_growth_rate_counts_only_reinvested_dividends():
    params = ProjectionParameters(
        principal=1000.0,
        horizon_years=1,
        price_growth_rate=0.02,
        dividend_yield=0.04,
        dividend_tax_rate=0.25,
        expense_ratio=0.005,
    )

    assert net_growth_rate(params) == pytest.approx(0.02 + 0.03 - 0.005)
    paid_out = params.model_copy(update={"reinvest_dividends": False})
    assert net_growth_rate(paid_out) == pytest.approx(0.015)


def test_no_growth_is_flagged_not_raised():
    params = ProjectionParameters(principal=1000.0, horizon_years=5, expense_ratio=0.01)

    result = run_projection(params)

    assert result.degenerate
    assert len(result.years) == 5
    assert any("does not grow" in message for message in result.warnings)
    assert result.final_value == pytest.approx(1000.0 * 0.99 ** 5)


def test_summary_totals():
    params = ProjectionParameters(
        principal=5000.0,
        horizon_years=3,
        price_growth_rate=0.04,
        dividend_yield=0.05,
        dividend_tax_rate=0.2,
        expense_ratio=0.002,
        periodic_contribution=1000.0,
        contribution_frequency=1,
    )

    result = run_projection(params)

    assert not result.degenerate
    assert result.warnings == []
    assert result.final_value == result.years[-1].closing_value
    assert result.total_contributions == pytest.approx(8000.0)
    assert result.total_tax_paid == pytest.approx(sum(row.tax_paid for row in result.years))
    assert result.total_fees_paid == pytest.approx(sum(row.fees_paid for row in result.years))
    assert result.total_net_dividends == pytest.approx(sum(row.net_dividend for row in result.years))
