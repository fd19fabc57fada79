"""Data contracts for the projection endpoint."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from dripcalc.models import (
    CompoundingProfile,
    ProjectionParameters,
    ReinvestmentPriceConvention,
    YearlyResult,
)


class ProjectionRequest(BaseModel):
    """Raw user inputs for one projection. Rates are decimals (0.036 for 3.6%)."""

    model_config = ConfigDict(extra="forbid")

    principal: float = Field(..., ge=0, description="Portfolio value at time zero.")
    horizon_years: int = Field(..., ge=1, le=100, description="Number of years to project.")
    unit_price: Optional[float] = Field(
        None,
        gt=0,
        description="Price per unit at time zero; required when track_units is set.",
    )
    price_growth_rate: float = Field(
        0.0, gt=-1, le=1, description="Annual unit price growth (CAGR)."
    )
    dividend_yield: float = Field(0.0, ge=0, le=1, description="First-year dividend yield.")
    dividend_growth_rate: float = Field(
        0.0, gt=-1, le=1, description="Annual growth applied to the yield."
    )
    dividend_tax_rate: float = Field(
        0.0, ge=0, lt=1, description="Share of gross dividends withheld as tax."
    )
    expense_ratio: float = Field(0.0, ge=0, lt=1, description="Annual fee on assets.")
    periodic_contribution: float = Field(
        0.0, ge=0, description="Amount added each contribution period."
    )
    contribution_frequency: Literal[1, 4, 12, 26, 52] = Field(
        12, description="Contribution periods per year."
    )
    reinvest_dividends: bool = Field(True, description="Reinvest net dividends (DRIP).")
    starting_calendar_year: Optional[int] = Field(
        None, ge=1900, le=3000, description="Label for the first projected year."
    )
    profile: CompoundingProfile = CompoundingProfile.ANNUAL_DIRECT
    price_convention: ReinvestmentPriceConvention = ReinvestmentPriceConvention.START_OF_PERIOD
    track_units: bool = False

    def to_parameters(self) -> ProjectionParameters:
        return ProjectionParameters(**self.model_dump())


class ProjectionResponse(BaseModel):
    """Projected schedule plus summary."""

    years: List[YearlyResult]
    final_value: float
    total_contributions: float
    total_net_dividends: float
    total_tax_paid: float
    total_fees_paid: float
    cagr_pct: Optional[float] = None
    net_growth_rate: float
    degenerate: bool
    warnings: List[str]
