"""Static instrument table and the side-by-side comparison scenario."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from dripcalc.core.engine import project
from dripcalc.core.returns import cagr
from dripcalc.models import ProjectionParameters, ReinvestmentPriceConvention

logger = logging.getLogger(__name__)

DEFAULT_INSTRUMENTS_PATH = Path(__file__).resolve().parents[1] / "data" / "instruments.json"


class Instrument(BaseModel):
    """One row of the reference table. Returns and yield are fractions."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    ticker: str = Field(min_length=1)
    name: str = ""
    unit_price: float = Field(gt=0)
    one_year_return: float
    three_year_return: float
    five_year_return: float
    ten_year_return: float
    avg_return: float = Field(gt=-1)
    dividend_yield: Optional[float] = Field(default=None, ge=0)
    risk_rating: int = Field(ge=1, le=7)


class ComparisonRow(BaseModel):
    model_config = ConfigDict(extra="forbid")

    ticker: str
    name: str
    avg_return: float
    dividend_yield: float
    risk_rating: int
    final_value: float
    total_net_dividends: float
    cagr_pct: Optional[float] = None
    closing_values: List[float]


_INSTRUMENT_LIST = TypeAdapter(List[Instrument])


@lru_cache(maxsize=8)
def _load(path: Path) -> Tuple[Instrument, ...]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    instruments = _INSTRUMENT_LIST.validate_python(raw)
    logger.info("loaded %d instruments from %s", len(instruments), path)
    return tuple(instruments)


def load_instruments(path: Union[str, Path, None] = None) -> List[Instrument]:
    """Read the instrument table; results are cached per resolved path."""
    resolved = Path(path).resolve() if path is not None else DEFAULT_INSTRUMENTS_PATH
    return list(_load(resolved))


def get_instrument(ticker: str, path: Union[str, Path, None] = None) -> Instrument:
    wanted = ticker.strip().upper()
    for instrument in load_instruments(path):
        if instrument.ticker.upper() == wanted:
            return instrument
    raise KeyError(ticker)


def parameters_for_instrument(
    instrument: Instrument,
    principal: float,
    horizon_years: int,
    reinvest_dividends: bool = True,
    dividend_tax_rate: float = 0.0,
) -> ProjectionParameters:
    """
    Treat avg_return as a total return: price growth is what is left after
    the yield. Cash buys in at the period-end price, so with no tax and DRIP
    on the portfolio compounds at exactly avg_return.
    """
    dividend_yield = instrument.dividend_yield or 0.0
    return ProjectionParameters(
        principal=principal,
        horizon_years=horizon_years,
        unit_price=instrument.unit_price,
        price_growth_rate=instrument.avg_return - dividend_yield,
        dividend_yield=dividend_yield,
        dividend_tax_rate=dividend_tax_rate,
        reinvest_dividends=reinvest_dividends,
        price_convention=ReinvestmentPriceConvention.END_OF_PERIOD,
    )


def compare_instruments(
    principal: float,
    horizon_years: int,
    reinvest_dividends: bool = True,
    dividend_tax_rate: float = 0.0,
    path: Union[str, Path, None] = None,
) -> List[ComparisonRow]:
    """Project the same principal through every instrument, best first."""
    rows: List[ComparisonRow] = []
    for instrument in load_instruments(path):
        params = parameters_for_instrument(
            instrument,
            principal,
            horizon_years,
            reinvest_dividends=reinvest_dividends,
            dividend_tax_rate=dividend_tax_rate,
        )
        years = project(params)
        final = years[-1]
        rate = cagr(principal, final.closing_value, horizon_years)
        rows.append(
            ComparisonRow(
                ticker=instrument.ticker,
                name=instrument.name,
                avg_return=instrument.avg_return,
                dividend_yield=params.dividend_yield,
                risk_rating=instrument.risk_rating,
                final_value=final.closing_value,
                total_net_dividends=final.cumulative_net_dividends,
                cagr_pct=None if rate is None else rate * 100,
                closing_values=[row.closing_value for row in years],
            )
        )

    rows.sort(key=lambda row: row.final_value, reverse=True)
    return rows


__all__ = [
    "DEFAULT_INSTRUMENTS_PATH",
    "Instrument",
    "ComparisonRow",
    "load_instruments",
    "get_instrument",
    "parameters_for_instrument",
    "compare_instruments",
]
