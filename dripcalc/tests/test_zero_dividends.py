from __future__ import annotations

from math import isclose

from dripcalc.core.engine import project
from dripcalc.models import ProjectionParameters


def test_zero_yield_produces_no_dividend_columns():
    """
    With no yield, dividend growth and tax have nothing to act on: every dividend figure stays at zero.
    """
    params = ProjectionParameters(
        principal=50000.0,
        horizon_years=10,
        price_growth_rate=0.06,
        dividend_yield=0.0,
        dividend_growth_rate=0.25,
        dividend_tax_rate=0.3,
        expense_ratio=0.002,
        periodic_contribution=400.0,
        contribution_frequency=12,
    )

    rows = project(params)

    assert rows, "projection should return rows"
    for row in rows:
        assert row.gross_dividend == 0.0
        assert row.net_dividend == 0.0
        assert row.tax_paid == 0.0
        assert row.cumulative_net_dividends == 0.0
        assert isclose(row.units_or_value_purchased, row.contribution_added, abs_tol=0.0)
