"""Analytics utilities for microinvest."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

import pandas as pd

from microinvest.accounting.ledger import Transaction
from microinvest.engine.projection import ProjectionSeries
from microinvest.utils.money import round_currency


@dataclass
class GoalStatus:
    goal_amount: float
    progress_pct: float
    projected_progress_pct: float
    on_track: bool
    shortfall: float


def goal_progress(
    goal_amount: Optional[float], current_balance: float, projected_value: float = 0.0
) -> Optional[GoalStatus]:
    """Compare balances against a savings goal; ``None`` when no goal is set."""

    if goal_amount is None or goal_amount <= 0:
        return None
    progress = min(100.0, current_balance / goal_amount * 100)
    projected = min(100.0, projected_value / goal_amount * 100)
    return GoalStatus(
        goal_amount=goal_amount,
        progress_pct=round(max(progress, 0.0), 1),
        projected_progress_pct=round(max(projected, 0.0), 1),
        on_track=projected_value >= goal_amount,
        shortfall=round_currency(max(goal_amount - projected_value, 0.0)),
    )


def category_breakdown(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Round-up totals and shares by category, largest first."""

    rows = [{"category": txn.category, "round_up": txn.round_up, "amount": txn.amount} for txn in transactions]
    if not rows:
        return pd.DataFrame(columns=["category", "round_up", "amount", "count", "share"])
    df = pd.DataFrame(rows)
    grouped = df.groupby("category", sort=False).agg(
        round_up=("round_up", "sum"),
        amount=("amount", "sum"),
        count=("round_up", "size"),
    )
    grouped.reset_index(inplace=True)
    total = grouped["round_up"].sum()
    grouped["share"] = grouped["round_up"] / total if total > 0 else 0.0
    grouped["round_up"] = grouped["round_up"].map(round_currency)
    grouped["amount"] = grouped["amount"].map(round_currency)
    return grouped.sort_values("round_up", ascending=False, kind="stable").reset_index(drop=True)


def projection_frame(series: ProjectionSeries) -> pd.DataFrame:
    """Projection as a table, with the band width alongside."""

    df = series.to_frame()
    df["band_width"] = (df["aggressive"] - df["conservative"]).round(2)
    return df


def total_contributed(starting_balance: float, monthly_contribution: float, months: int) -> float:
    return round_currency(starting_balance + monthly_contribution * months)


__all__ = ["GoalStatus", "goal_progress", "category_breakdown", "projection_frame", "total_contributed"]
