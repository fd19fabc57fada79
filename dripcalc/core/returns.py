"""Return metrics derived from a projected schedule."""

from typing import Optional

from dripcalc.models import ProjectionParameters


def period_return_pct(opening: float, closing: float) -> float:
    """Percentage change over one period, 0 when the period opened empty."""
    if opening == 0:
        return 0.0
    return (closing - opening) / opening * 100


def cumulative_return_pct(principal: float, closing: float) -> float:
    """Percentage change against the starting principal."""
    if principal == 0:
        return 0.0
    return (closing - principal) / principal * 100


def cagr(principal: float, final_value: float, years: int) -> Optional[float]:
    """Constant annual rate taking principal to final_value over years.

    Returns None when the rate is undefined (no principal, no horizon, or a
    negative end value).
    """
    if principal <= 0 or years <= 0 or final_value < 0:
        return None
    return (final_value / principal) ** (1 / years) - 1


def net_growth_rate(params: ProjectionParameters) -> float:
    """First-year growth left after tax and fee drag.

    Only reinvested dividends count toward growth; paid-out dividends leave
    the portfolio.
    """
    dividend_drag_free = 0.0
    if params.reinvest_dividends:
        dividend_drag_free = params.dividend_yield * (1 - params.dividend_tax_rate)
    return params.price_growth_rate + dividend_drag_free - params.expense_ratio
