from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List

from dripcalc.models import CompoundingProfile, ContributionFrequency, ProjectionParameters


class InvalidConfigurationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass
class ValidationReport:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


SUPPORTED_FREQUENCIES = tuple(int(freq) for freq in ContributionFrequency)


def _non_negative(report: ValidationReport, name: str, value: float) -> None:
    if not math.isfinite(value):
        report.errors.append(f"{name} must be a finite number")
    elif value < 0:
        report.errors.append(f"{name} must be non-negative")


def validate_parameters(params: ProjectionParameters) -> ValidationReport:
    report = ValidationReport()

    if params.horizon_years <= 0:
        report.errors.append("horizon_years must be a positive integer")

    _non_negative(report, "principal", params.principal)
    _non_negative(report, "periodic_contribution", params.periodic_contribution)
    _non_negative(report, "dividend_yield", params.dividend_yield)

    if not 0 <= params.dividend_tax_rate < 1:
        report.errors.append("dividend_tax_rate must be in [0, 1)")

    if not 0 <= params.expense_ratio < 1:
        report.errors.append("expense_ratio must be in [0, 1)")

    # negative growth is a decline scenario; -100% or worse has no price path
    for name, rate in (
        ("price_growth_rate", params.price_growth_rate),
        ("dividend_growth_rate", params.dividend_growth_rate),
    ):
        if not math.isfinite(rate):
            report.errors.append(f"{name} must be a finite number")
        elif not rate > -1:
            report.errors.append(f"{name} must be greater than -1")

    if params.contribution_frequency not in SUPPORTED_FREQUENCIES:
        allowed = ", ".join(str(freq) for freq in SUPPORTED_FREQUENCIES)
        report.errors.append(f"contribution_frequency must be one of {allowed}")

    if params.track_units:
        if params.unit_price is None:
            report.errors.append("unit_price is required when units are tracked")
        elif not params.unit_price > 0:
            report.errors.append("unit_price must be positive when units are tracked")

    if report.errors:
        return report

    if (
        params.profile is CompoundingProfile.MONTHLY_STEPPED
        and params.periodic_contribution > 0
        and 12 % params.contribution_frequency != 0
    ):
        report.warnings.append(
            f"{params.contribution_frequency} contributions per year do not align with months; "
            "the annual total is spread evenly across the 12 monthly steps"
        )

    if params.principal == 0 and params.periodic_contribution == 0:
        report.warnings.append("principal and contributions are both zero; every period stays at zero")

    return report


def ensure_valid(params: ProjectionParameters) -> ValidationReport:
    report = validate_parameters(params)
    if not report.ok:
        raise InvalidConfigurationError(report.errors)
    return report
