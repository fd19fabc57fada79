from __future__ import annotations

import logging

from dripcalc.core.engine import project
from dripcalc.core.returns import cagr, net_growth_rate
from dripcalc.domain.validation import InvalidConfigurationError, validate_parameters
from dripcalc.models import ProjectionParameters, ProjectionResult

logger = logging.getLogger(__name__)


def run_projection(params: ProjectionParameters) -> ProjectionResult:
    """Project params and attach the summary figures and warnings.

    A non-positive net growth rate does not stop the run; the result comes
    back with degenerate=True and a warning the caller can show.
    """
    # project raises InvalidConfigurationError; only the warnings are needed here
    warnings = list(validate_parameters(params).warnings)

    years = project(params)
    final = years[-1]

    growth = net_growth_rate(params)
    degenerate = growth <= 0
    if degenerate:
        warnings.append(
            f"net growth rate after tax and fees is {growth:.4%}; the portfolio does not grow on its own"
        )

    rate = cagr(params.principal, final.closing_value, params.horizon_years)

    logger.info(
        "projection: %d years, final %.2f, cagr %s, degenerate=%s",
        params.horizon_years,
        final.closing_value,
        "n/a" if rate is None else f"{rate:.4%}",
        degenerate,
    )

    return ProjectionResult(
        years=years,
        final_value=final.closing_value,
        total_contributions=final.total_contributions,
        total_net_dividends=final.cumulative_net_dividends,
        total_tax_paid=sum(row.tax_paid for row in years),
        total_fees_paid=sum(row.fees_paid for row in years),
        cagr_pct=None if rate is None else rate * 100,
        net_growth_rate=growth,
        degenerate=degenerate,
        warnings=warnings,
    )


__all__ = ["InvalidConfigurationError", "run_projection"]
