"""Model portfolio allocations per risk tolerance."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

import pandas as pd

from microinvest.engine.projection import RISK_TOLERANCES
from microinvest.utils.validation import InvalidArgument


@dataclass(frozen=True)
class AllocationSlice:
    name: str
    percentage: float
    color: str


@dataclass(frozen=True)
class RiskProfile:
    key: str
    label: str
    description: str
    return_range: str
    summary: str


ALLOCATIONS: Dict[str, Tuple[AllocationSlice, ...]] = {
    "conservative": (
        AllocationSlice("Government Bonds", 80, "#2e6bd6"),
        AllocationSlice("Stable Mutual Funds", 15, "#2ec4b6"),
        AllocationSlice("Low Volatility ETFs", 5, "#9b87f5"),
    ),
    "moderate": (
        AllocationSlice("Diversified ETFs", 50, "#2ec4b6"),
        AllocationSlice("Government Bonds", 30, "#2e6bd6"),
        AllocationSlice("Growth Mutual Funds", 20, "#9b87f5"),
    ),
    "aggressive": (
        AllocationSlice("Equity ETFs", 70, "#9b87f5"),
        AllocationSlice("Growth Mutual Funds", 20, "#2ec4b6"),
        AllocationSlice("Government Bonds", 10, "#2e6bd6"),
    ),
}

RISK_PROFILES: Dict[str, RiskProfile] = {
    "conservative": RiskProfile(
        key="conservative",
        label="Conservative",
        description="Lower returns, minimal risk",
        return_range="3-5% p.a.",
        summary="70-90% Government Bonds, 10-30% stable mutual funds. Capital preservation with steady, low returns.",
    ),
    "moderate": RiskProfile(
        key="moderate",
        label="Moderate",
        description="Balanced risk and returns",
        return_range="6-9% p.a.",
        summary="40-60% ETFs, 20-40% Bonds, up to 20% growth funds. Steady growth with managed risk.",
    ),
    "aggressive": RiskProfile(
        key="aggressive",
        label="Aggressive",
        description="Higher potential returns",
        return_range="10-15% p.a.",
        summary="60-80% Equity ETFs, 10-25% growth funds, 0-10% bonds. Maximum growth potential with higher volatility.",
    ),
}


def _lookup(table: Dict[str, object], risk_tolerance: str) -> object:
    try:
        return table[risk_tolerance]
    except KeyError as exc:
        options = ", ".join(RISK_TOLERANCES)
        raise InvalidArgument(f"risk_tolerance must be one of {options}, received {risk_tolerance!r}") from exc


def portfolio_allocation(risk_tolerance: str) -> List[AllocationSlice]:
    return list(_lookup(ALLOCATIONS, risk_tolerance))  # type: ignore[arg-type]


def expected_return_range(risk_tolerance: str) -> str:
    return _lookup(RISK_PROFILES, risk_tolerance).return_range  # type: ignore[union-attr]


def risk_profile(risk_tolerance: str) -> RiskProfile:
    return _lookup(RISK_PROFILES, risk_tolerance)  # type: ignore[return-value]


def allocation_frame(risk_tolerance: str) -> pd.DataFrame:
    """Allocation table with ``asset``/``percentage`` columns."""

    rows = [{"asset": item.name, "percentage": item.percentage} for item in portfolio_allocation(risk_tolerance)]
    return pd.DataFrame(rows)


__all__ = [
    "AllocationSlice",
    "RiskProfile",
    "ALLOCATIONS",
    "RISK_PROFILES",
    "portfolio_allocation",
    "expected_return_range",
    "risk_profile",
    "allocation_frame",
]
