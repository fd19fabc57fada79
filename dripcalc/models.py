from __future__ import annotations

from enum import Enum, IntEnum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class CompoundingProfile(str, Enum):
    ANNUAL_DIRECT = "annual_direct"
    MONTHLY_STEPPED = "monthly_stepped"

    @property
    def steps_per_year(self) -> int:
        return 12 if self is CompoundingProfile.MONTHLY_STEPPED else 1


class ReinvestmentPriceConvention(str, Enum):
    """Price at which cash added during a period buys into the portfolio.

    start_of_period: cash is treated as present for the whole period and
    earns the full period's growth.
    mid_period_geometric: cash buys at start_price * sqrt(1 + growth).
    end_of_period: cash buys at the period-end price and earns no growth.
    """

    START_OF_PERIOD = "start_of_period"
    MID_PERIOD_GEOMETRIC = "mid_period_geometric"
    END_OF_PERIOD = "end_of_period"


class ContributionFrequency(IntEnum):
    ANNUAL = 1
    QUARTERLY = 4
    MONTHLY = 12
    BIWEEKLY = 26
    WEEKLY = 52


class ProjectionParameters(BaseModel):
    """
    One projection run. Rates are fractions (0.036 for 3.6%).

    Ranges are checked by dripcalc.domain.projection before the engine runs,
    so this model only pins down types and defaults.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    principal: float
    horizon_years: int
    unit_price: Optional[float] = None

    price_growth_rate: float = 0.0
    dividend_yield: float = 0.0
    dividend_growth_rate: float = 0.0
    dividend_tax_rate: float = 0.0
    expense_ratio: float = 0.0

    periodic_contribution: float = 0.0
    contribution_frequency: int = ContributionFrequency.MONTHLY.value

    reinvest_dividends: bool = True
    starting_calendar_year: Optional[int] = None

    profile: CompoundingProfile = CompoundingProfile.ANNUAL_DIRECT
    price_convention: ReinvestmentPriceConvention = ReinvestmentPriceConvention.START_OF_PERIOD
    track_units: bool = False

    @property
    def annual_contribution(self) -> float:
        return self.periodic_contribution * self.contribution_frequency

    def yield_for_period(self, period_index: int) -> float:
        # growth compounds the rate itself, not the dividend amount
        return self.dividend_yield * (1 + self.dividend_growth_rate) ** (period_index - 1)


class YearlyResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    period_index: int
    calendar_year: Optional[int] = None

    opening_value: float
    dividend_yield: float
    gross_dividend: float
    tax_paid: float
    net_dividend: float
    dividend_income_monthly: float
    fees_paid: float
    contribution_added: float
    units_or_value_purchased: float
    closing_value_before_fees: float
    closing_value: float

    # only populated when units are tracked
    unit_price: Optional[float] = None
    units_purchased: Optional[float] = None
    total_units: Optional[float] = None

    total_contributions: float
    cumulative_net_dividends: float
    period_return_pct: float
    cumulative_return_pct: float


class ProjectionResult(BaseModel):
    """Engine output plus the summary figures shown above the table."""

    model_config = ConfigDict(extra="forbid")

    years: List[YearlyResult]
    final_value: float
    total_contributions: float
    total_net_dividends: float
    total_tax_paid: float
    total_fees_paid: float
    cagr_pct: Optional[float] = None
    net_growth_rate: float
    degenerate: bool = False
    warnings: List[str] = []


__all__ = [
    "CompoundingProfile",
    "ReinvestmentPriceConvention",
    "ContributionFrequency",
    "ProjectionParameters",
    "YearlyResult",
    "ProjectionResult",
]
