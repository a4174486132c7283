"""Summary table generation."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd

from microinvest.analysis.metrics import goal_progress, total_contributed
from microinvest.engine.projection import ProjectionInput, ProjectionSeries, total_months
from microinvest.utils.io import save_table
from microinvest.utils.money import round_currency


def summarize_projection(
    series: ProjectionSeries,
    inputs: ProjectionInput,
    goal_amount: Optional[float] = None,
) -> pd.DataFrame:
    """Return headline metrics for a projection as a metric/value table."""

    months = total_months(inputs.duration_years)
    contributed = total_contributed(inputs.starting_balance, inputs.monthly_contribution, months)
    metrics = [
        ("risk_tolerance", inputs.risk_tolerance),
        ("months", months),
        ("final_base", series.final_value),
        ("final_conservative", series.final_conservative),
        ("final_aggressive", series.final_aggressive),
        ("total_contributed", contributed),
        ("growth", round_currency(series.final_value - contributed)),
    ]
    status = goal_progress(goal_amount, inputs.starting_balance, series.final_value)
    if status is not None:
        metrics.extend(
            [
                ("goal_amount", status.goal_amount),
                ("goal_projected_progress_pct", status.projected_progress_pct),
                ("goal_on_track", status.on_track),
                ("goal_shortfall", status.shortfall),
            ]
        )
    return pd.DataFrame(metrics, columns=["metric", "value"])


def export_summary(
    series: ProjectionSeries,
    inputs: ProjectionInput,
    out_dir: Path,
    goal_amount: Optional[float] = None,
    name: str = "summary",
) -> Path:
    table = summarize_projection(series, inputs, goal_amount)
    return save_table(table, out_dir, name)


__all__ = ["summarize_projection", "export_summary"]
