"""Data contracts for the instrument comparison endpoints."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from dripcalc.core.instruments import ComparisonRow, Instrument


class ComparisonRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    principal: float = Field(..., gt=0, description="Amount invested in every instrument.")
    horizon_years: int = Field(10, ge=1, le=100, description="Number of years to project.")
    reinvest_dividends: bool = Field(True, description="Reinvest dividends (DRIP).")
    dividend_tax_rate: float = Field(0.0, ge=0, lt=1)


class ComparisonResponse(BaseModel):
    rows: List[ComparisonRow]


class InstrumentListResponse(BaseModel):
    instruments: List[Instrument]
