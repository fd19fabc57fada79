from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from dripcalc.core.returns import cumulative_return_pct, period_return_pct
from dripcalc.domain.validation import ensure_valid
from dripcalc.models import (
    CompoundingProfile,
    ProjectionParameters,
    ReinvestmentPriceConvention,
    YearlyResult,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortfolioState:
    """Running totals threaded from one step to the next."""

    value: float
    units: Optional[float]
    total_contributions: float
    cumulative_net_dividends: float
    step: int = 0  # sub-steps taken since time zero


@dataclass(frozen=True)
class StepFlows:
    gross_dividend: float = 0.0
    tax_paid: float = 0.0
    net_dividend: float = 0.0
    fees_paid: float = 0.0
    contribution: float = 0.0
    cash_added: float = 0.0
    units_purchased: float = 0.0
    closing_before_fees: float = 0.0  # value at step end before the fee

    def __add__(self, other: "StepFlows") -> "StepFlows":
        return StepFlows(
            gross_dividend=self.gross_dividend + other.gross_dividend,
            tax_paid=self.tax_paid + other.tax_paid,
            net_dividend=self.net_dividend + other.net_dividend,
            fees_paid=self.fees_paid + other.fees_paid,
            contribution=self.contribution + other.contribution,
            cash_added=self.cash_added + other.cash_added,
            units_purchased=self.units_purchased + other.units_purchased,
            closing_before_fees=other.closing_before_fees,
        )


def initial_state(params: ProjectionParameters) -> PortfolioState:
    units = None
    if params.track_units:
        units = params.principal / params.unit_price
    return PortfolioState(
        value=float(params.principal),
        units=units,
        total_contributions=float(params.principal),
        cumulative_net_dividends=0.0,
    )


def cash_growth_factor(convention: ReinvestmentPriceConvention, growth_factor: float) -> float:
    """How much one unit of cash added during a step is worth at step end."""
    if convention is ReinvestmentPriceConvention.START_OF_PERIOD:
        return growth_factor
    if convention is ReinvestmentPriceConvention.MID_PERIOD_GEOMETRIC:
        return math.sqrt(growth_factor)
    return 1.0


def unit_price_at(params: ProjectionParameters, step: int) -> float:
    n = params.profile.steps_per_year
    return params.unit_price * (1 + params.price_growth_rate) ** (step / n)


def contribution_for_month(params: ProjectionParameters, month: int) -> float:
    """
    Contribution added in a monthly step (month is 1..12).

    Frequencies that divide the year into whole months contribute the
    per-period amount on the last month of each period (every month, months
    3/6/9/12, month 12). Bi-weekly and weekly schedules do not line up with
    months, so their annual total is spread evenly.
    """
    freq = params.contribution_frequency
    if 12 % freq == 0:
        interval = 12 // freq
        return params.periodic_contribution if month % interval == 0 else 0.0
    return params.annual_contribution / 12


def advance(
    params: ProjectionParameters,
    state: PortfolioState,
    period_index: int,
    contribution: float,
) -> Tuple[PortfolioState, StepFlows]:
    """
    One compounding step.

    Order of operations:
      1) Dividend on the opening value at the period's yield; tax withheld.
      2) Fee accrued on the opening value.
      3) Cash (contribution + reinvested net dividend) buys in at the
         convention's reference price.
      4) Capital growth to step end, then the fee is deducted.
    """
    n = params.profile.steps_per_year
    opening = state.value

    gross = opening * (params.yield_for_period(period_index) / n)
    tax = gross * params.dividend_tax_rate
    net = max(0.0, gross - tax)
    fees = opening * params.expense_ratio / n

    cash = contribution + (net if params.reinvest_dividends else 0.0)
    growth_factor = (1 + params.price_growth_rate) ** (1 / n)

    units_purchased = 0.0
    units: Optional[float] = None
    if params.track_units:
        start_price = unit_price_at(params, state.step)
        end_price = unit_price_at(params, state.step + 1)
        if params.price_convention is ReinvestmentPriceConvention.START_OF_PERIOD:
            reference_price = start_price
        elif params.price_convention is ReinvestmentPriceConvention.MID_PERIOD_GEOMETRIC:
            reference_price = start_price * math.sqrt(growth_factor)
        else:
            reference_price = end_price
        units_purchased = cash / reference_price if reference_price > 0 else 0.0
        units = state.units + units_purchased
        closing_before_fees = units * end_price
        closing = max(0.0, closing_before_fees - fees)
        # fees are paid by redeeming units at the end price
        units = closing / end_price if end_price > 0 else 0.0
    else:
        closing_before_fees = opening * growth_factor + cash * cash_growth_factor(
            params.price_convention, growth_factor
        )
        closing = max(0.0, closing_before_fees - fees)

    flows = StepFlows(
        gross_dividend=gross,
        tax_paid=tax,
        net_dividend=net,
        fees_paid=fees,
        contribution=contribution,
        cash_added=cash,
        units_purchased=units_purchased,
        closing_before_fees=closing_before_fees,
    )
    next_state = replace(
        state,
        value=closing,
        units=units,
        total_contributions=state.total_contributions + contribution,
        cumulative_net_dividends=state.cumulative_net_dividends + net,
        step=state.step + 1,
    )
    return next_state, flows


def _advance_year(
    params: ProjectionParameters, state: PortfolioState, period_index: int
) -> Tuple[PortfolioState, StepFlows]:
    if params.profile is CompoundingProfile.ANNUAL_DIRECT:
        return advance(params, state, period_index, params.annual_contribution)

    flows = StepFlows()
    for month in range(1, 13):
        state, month_flows = advance(
            params, state, period_index, contribution_for_month(params, month)
        )
        flows = flows + month_flows
    return state, flows


def project(params: ProjectionParameters) -> List[YearlyResult]:
    """
    Build the year-by-year schedule for params.

    Raises InvalidConfigurationError before computing anything when params
    are out of range. Each period opens at the previous period's closing
    value; the first opens at the principal.
    """
    ensure_valid(params)

    state = initial_state(params)
    rows: List[YearlyResult] = []

    for period_index in range(1, params.horizon_years + 1):
        opening = state.value
        state, flows = _advance_year(params, state, period_index)
        closing = state.value

        rows.append(
            YearlyResult(
                period_index=period_index,
                calendar_year=(
                    params.starting_calendar_year + period_index - 1
                    if params.starting_calendar_year is not None
                    else None
                ),
                opening_value=opening,
                dividend_yield=params.yield_for_period(period_index),
                gross_dividend=flows.gross_dividend,
                tax_paid=flows.tax_paid,
                net_dividend=flows.net_dividend,
                dividend_income_monthly=flows.net_dividend / 12,
                fees_paid=flows.fees_paid,
                contribution_added=flows.contribution,
                units_or_value_purchased=flows.cash_added,
                closing_value_before_fees=flows.closing_before_fees,
                closing_value=closing,
                unit_price=unit_price_at(params, state.step) if params.track_units else None,
                units_purchased=flows.units_purchased if params.track_units else None,
                total_units=state.units,
                total_contributions=state.total_contributions,
                cumulative_net_dividends=state.cumulative_net_dividends,
                period_return_pct=period_return_pct(opening, closing),
                cumulative_return_pct=cumulative_return_pct(params.principal, closing),
            )
        )

    logger.debug(
        "projected %d periods (%s, %s, units=%s): final value %.2f",
        params.horizon_years,
        params.profile.value,
        params.price_convention.value,
        params.track_units,
        state.value,
    )
    return rows


__all__ = [
    "PortfolioState",
    "StepFlows",
    "initial_state",
    "cash_growth_factor",
    "unit_price_at",
    "contribution_for_month",
    "advance",
    "project",
]
