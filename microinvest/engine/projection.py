"""Compound-growth projection with risk-adjusted bounding series."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Literal, Tuple

import pandas as pd

from microinvest.utils.money import round_currency
from microinvest.utils.validation import InvalidArgument, assert_in_range, assert_non_negative

RiskTolerance = Literal["conservative", "moderate", "aggressive"]
RISK_TOLERANCES: Tuple[RiskTolerance, ...] = ("conservative", "moderate", "aggressive")

MAX_ANNUAL_RETURN_PERCENT = 50.0
MAX_DURATION_YEARS = 50.0
MONTHS_PER_YEAR = 12
MONTHLY_SAMPLE_POINTS = 5


@dataclass(frozen=True)
class RiskBand:
    """Multipliers applied to the base rate for the lower and upper bounds."""

    low: float
    high: float


RISK_MULTIPLIERS: Dict[str, RiskBand] = {
    "conservative": RiskBand(low=0.6, high=0.8),
    "moderate": RiskBand(low=0.9, high=1.1),
    "aggressive": RiskBand(low=1.2, high=1.5),
}


def _check_inputs(inputs: "ProjectionInput") -> None:
    assert_non_negative(inputs.starting_balance, "starting_balance")
    assert_non_negative(inputs.monthly_contribution, "monthly_contribution")
    if inputs.starting_balance + inputs.monthly_contribution <= 0:
        raise InvalidArgument("Nothing to project: starting balance and monthly contribution are both zero")
    assert_in_range(inputs.annual_return_percent, "annual_return_percent", 0.0, MAX_ANNUAL_RETURN_PERCENT)
    assert_in_range(
        inputs.duration_years, "duration_years", 0.0, MAX_DURATION_YEARS, include_low=False
    )
    if inputs.risk_tolerance not in RISK_MULTIPLIERS:
        options = ", ".join(RISK_TOLERANCES)
        raise InvalidArgument(f"risk_tolerance must be one of {options}, received {inputs.risk_tolerance!r}")


@dataclass(frozen=True)
class ProjectionInput:
    """Validated inputs for :func:`project`.

    ``starting_balance`` already includes any spare change the caller has
    accumulated.
    """

    starting_balance: float
    monthly_contribution: float
    annual_return_percent: float
    duration_years: float
    risk_tolerance: RiskTolerance = "moderate"

    def __post_init__(self) -> None:
        for name in ("starting_balance", "monthly_contribution", "annual_return_percent", "duration_years"):
            value = getattr(self, name)
            try:
                coerced = float(value)
            except (TypeError, ValueError) as exc:
                raise InvalidArgument(f"{name} must be numeric, received {value!r}") from exc
            if not math.isfinite(coerced):
                raise InvalidArgument(f"{name} must be finite, received {value!r}")
            object.__setattr__(self, name, coerced)
        object.__setattr__(self, "risk_tolerance", str(self.risk_tolerance).lower())
        _check_inputs(self)


@dataclass(frozen=True)
class MonthlyRates:
    base: float
    conservative: float
    aggressive: float


@dataclass(frozen=True)
class ProjectionSeries:
    """Sampled projection; all sequences share one index."""

    labels: Tuple[str, ...]
    months: Tuple[int, ...]
    values: Tuple[float, ...]
    conservative: Tuple[float, ...]
    aggressive: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.labels)

    @property
    def final_value(self) -> float:
        return self.values[-1]

    @property
    def final_conservative(self) -> float:
        return self.conservative[-1]

    @property
    def final_aggressive(self) -> float:
        return self.aggressive[-1]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "label": list(self.labels),
                "month": list(self.months),
                "base": list(self.values),
                "conservative": list(self.conservative),
                "aggressive": list(self.aggressive),
            }
        )


def monthly_rates(annual_return_percent: float, risk_tolerance: RiskTolerance) -> MonthlyRates:
    """Return the base rate and the bounding rates for ``risk_tolerance``.

    The bounds come from the selected tolerance's multiplier row only; the
    base rate is never adjusted.
    """

    band = RISK_MULTIPLIERS[risk_tolerance]
    base = annual_return_percent / 100 / MONTHS_PER_YEAR
    return MonthlyRates(
        base=base,
        conservative=annual_return_percent * band.low / 100 / MONTHS_PER_YEAR,
        aggressive=annual_return_percent * band.high / 100 / MONTHS_PER_YEAR,
    )


def total_months(duration_years: float) -> int:
    # absorb float noise: 7/12 years is 7 months, not 8
    return int(math.ceil(round(duration_years * MONTHS_PER_YEAR, 9)))


def sampling_interval(duration_years: float, months: int) -> int:
    if duration_years >= 1:
        return MONTHS_PER_YEAR
    return max(1, months // MONTHLY_SAMPLE_POINTS)


def _label(month: int, yearly: bool) -> str:
    if yearly:
        years = month // MONTHS_PER_YEAR
        if years > 0:
            return f"Y{years}"
    return f"M{month}"


def project(inputs: ProjectionInput) -> ProjectionSeries:
    """Simulate monthly compounding and sample the balances.

    Each month the contribution is added before growth is applied. Samples are
    taken every 12 months for durations of a year or more and every
    ``max(1, months // 5)`` months otherwise; the final month is always
    included exactly once.
    """

    _check_inputs(inputs)
    rates = monthly_rates(inputs.annual_return_percent, inputs.risk_tolerance)
    months = total_months(inputs.duration_years)
    step = sampling_interval(inputs.duration_years, months)
    yearly = inputs.duration_years >= 1

    base = conservative = aggressive = inputs.starting_balance
    contribution = inputs.monthly_contribution

    labels: List[str] = []
    sampled: List[int] = []
    values: List[float] = []
    lows: List[float] = []
    highs: List[float] = []
    for month in range(1, months + 1):
        base = (base + contribution) * (1 + rates.base)
        conservative = (conservative + contribution) * (1 + rates.conservative)
        aggressive = (aggressive + contribution) * (1 + rates.aggressive)
        if month % step == 0 or month == months:
            labels.append(_label(month, yearly))
            sampled.append(month)
            values.append(round_currency(base))
            lows.append(round_currency(conservative))
            highs.append(round_currency(aggressive))

    return ProjectionSeries(
        labels=tuple(labels),
        months=tuple(sampled),
        values=tuple(values),
        conservative=tuple(lows),
        aggressive=tuple(highs),
    )


__all__ = [
    "RiskTolerance",
    "RISK_TOLERANCES",
    "RISK_MULTIPLIERS",
    "RiskBand",
    "MonthlyRates",
    "ProjectionInput",
    "ProjectionSeries",
    "monthly_rates",
    "total_months",
    "sampling_interval",
    "project",
]
