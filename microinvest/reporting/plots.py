"""Plotting utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import matplotlib.pyplot as plt

from microinvest.engine.projection import ProjectionSeries
from microinvest.utils.io import safe_filename

CATEGORY_COLORS = ["#9b87f5", "#0ea5e9", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6", "#06b6d4"]


def _ensure_out(out_dir: Path) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    return out_dir


def plot_projection(
    series: ProjectionSeries,
    out_dir: Path,
    scenario: str,
    goal_amount: Optional[float] = None,
) -> Path:
    out_dir = _ensure_out(out_dir)
    x = list(range(len(series)))
    fig, ax = plt.subplots(figsize=(10, 4))
    ax.fill_between(x, series.conservative, series.aggressive, color="tab:purple", alpha=0.15, label="Risk range")
    ax.plot(x, series.conservative, color="tab:blue", linestyle="--", linewidth=1, label="Conservative")
    ax.plot(x, series.aggressive, color="tab:orange", linestyle="--", linewidth=1, label="Aggressive")
    ax.plot(x, series.values, color="tab:green", marker="o", label="Projected")
    if goal_amount:
        ax.axhline(goal_amount, color="tab:red", linestyle=":", label="Goal")
    ax.set_xticks(x)
    ax.set_xticklabels(series.labels)
    ax.set_title(f"Projected Balance - {scenario}")
    ax.set_xlabel("Period")
    ax.set_ylabel("Balance")
    ax.legend()
    path = out_dir / f"{safe_filename(scenario)}_projection.png"
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path


def plot_categories(category_totals: Dict[str, float], out_dir: Path, scenario: str) -> Optional[Path]:
    """Pie chart of round-ups by category; ``None`` when there is nothing to draw."""

    totals = {key: value for key, value in category_totals.items() if value > 0}
    if not totals:
        return None
    out_dir = _ensure_out(out_dir)
    fig, ax = plt.subplots(figsize=(6, 6))
    colors = [CATEGORY_COLORS[i % len(CATEGORY_COLORS)] for i in range(len(totals))]
    ax.pie(list(totals.values()), labels=list(totals.keys()), colors=colors, autopct="%1.0f%%", startangle=90, counterclock=False)
    ax.set_title(f"Round-ups by Category - {scenario}")
    ax.axis("equal")
    path = out_dir / f"{safe_filename(scenario)}_categories.png"
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path


def plot_all(
    series: ProjectionSeries,
    category_totals: Dict[str, float],
    out_dir: Path,
    scenario: str,
    goal_amount: Optional[float] = None,
) -> list[Path]:
    paths = [plot_projection(series, out_dir, scenario, goal_amount)]
    pie = plot_categories(category_totals, out_dir, scenario)
    if pie is not None:
        paths.append(pie)
    return paths


__all__ = ["plot_projection", "plot_categories", "plot_all"]
