from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from microinvest.engine.projection import ProjectionInput, project
from microinvest.plans import InvestmentPlan
from microinvest.reporting.export import EXPORT_COLUMNS, export_transactions, transactions_to_csv
from microinvest.reporting.plots import plot_all, plot_categories, plot_projection
from microinvest.reporting.summary import export_summary, summarize_projection
from microinvest.utils.validation import InvalidArgument


def test_transactions_csv_text(demo_plan: InvestmentPlan) -> None:
    text = transactions_to_csv(demo_plan.ledger)
    lines = text.strip().split("\n")
    assert lines[0] == ",".join(EXPORT_COLUMNS)
    assert lines[1] == "2025-11-05,Coffee,Food & Dining,149.50,0.50"
    assert lines[2] == "2025-11-06,Grocery,Shopping,372.20,7.80"
    assert len(lines) == 4


def test_csv_quotes_descriptions_with_commas() -> None:
    plan = InvestmentPlan(id="default", name="Default Plan")
    plan.ledger.record("Milk, eggs", 42, 5, category="Shopping", date="2025-01-01")
    line = transactions_to_csv(plan.ledger).strip().split("\n")[1]
    assert line == '2025-01-01,"Milk, eggs",Shopping,42.00,3.00'


def test_empty_export_rejected(tmp_path: Path) -> None:
    with pytest.raises(InvalidArgument, match="No transactions"):
        transactions_to_csv([])
    with pytest.raises(InvalidArgument):
        export_transactions([], tmp_path, "Default Plan")


def test_export_transactions_file_name(tmp_path: Path, demo_plan: InvestmentPlan) -> None:
    path = export_transactions(demo_plan.ledger, tmp_path / "out", "Vacation Fund")
    assert path.name == "Vacation_Fund_transactions.csv"
    df = pd.read_csv(path)
    assert list(df.columns) == EXPORT_COLUMNS
    assert df["roundUp"].sum() == pytest.approx(9.3)


def test_summary_metrics_with_goal(tmp_path: Path) -> None:
    inputs = ProjectionInput(0, 100, 12, 0.5, "moderate")
    series = project(inputs)
    table = summarize_projection(series, inputs, goal_amount=1000)
    metrics = dict(zip(table["metric"], table["value"]))
    assert metrics["months"] == 6
    assert metrics["final_base"] == pytest.approx(621.35)
    assert metrics["total_contributed"] == pytest.approx(600)
    assert metrics["growth"] == pytest.approx(21.35)
    assert not metrics["goal_on_track"]
    assert metrics["goal_shortfall"] == pytest.approx(378.65)

    path = export_summary(series, inputs, tmp_path)
    assert path.name == "summary.csv"
    assert "goal_amount" not in pd.read_csv(path)["metric"].tolist()


def test_plots_written(tmp_path: Path, demo_plan: InvestmentPlan) -> None:
    series = project(ProjectionInput(1000, 200, 8, 5, "moderate"))
    png = plot_projection(series, tmp_path, "demo plan", goal_amount=25000)
    assert png.exists() and png.name == "demo_plan_projection.png"
    paths = plot_all(series, demo_plan.ledger.category_totals(), tmp_path, "demo")
    assert {p.name for p in paths} == {"demo_projection.png", "demo_categories.png"}
    assert all(p.stat().st_size > 0 for p in paths)


def test_category_plot_skipped_without_round_ups(tmp_path: Path) -> None:
    assert plot_categories({}, tmp_path, "empty") is None
    assert plot_categories({"Other": 0.0}, tmp_path, "empty") is None
