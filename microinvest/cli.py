"""Command line interface for microinvest."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from microinvest.config import load_config
from microinvest.engine.projection import RISK_TOLERANCES, ProjectionInput, ProjectionSeries, project
from microinvest.engine.roundup import round_up
from microinvest.plans import invest_now, plan_from_config, projection_input
from microinvest.portfolio import portfolio_allocation, risk_profile
from microinvest.reporting.export import export_transactions
from microinvest.reporting.plots import plot_all
from microinvest.reporting.summary import export_summary, summarize_projection
from microinvest.utils.io import ensure_directory, save_table, timestamped_dir, write_config_snapshot
from microinvest.utils.logging import setup_logging
from microinvest.utils.validation import InvalidArgument, validate_config

app = typer.Typer(help="Spare-change micro-investing calculator")
console = Console()
logger = logging.getLogger(__name__)


def _check_risk(value: str) -> str:
    value = value.lower()
    if value not in RISK_TOLERANCES:
        raise typer.BadParameter(f"choose from {', '.join(RISK_TOLERANCES)}")
    return value


def _fail(exc: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    raise typer.Exit(code=1)


def _series_table(series: ProjectionSeries, title: str) -> Table:
    table = Table(title=title)
    table.add_column("Period")
    table.add_column("Conservative", justify="right")
    table.add_column("Projected", justify="right", style="bold green")
    table.add_column("Aggressive", justify="right")
    for label, low, mid, high in zip(series.labels, series.conservative, series.values, series.aggressive):
        table.add_row(label, f"{low:,.2f}", f"{mid:,.2f}", f"{high:,.2f}")
    return table


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Logging level (defaults to $MICROINVEST_LOG_LEVEL or INFO)"),
) -> None:
    setup_logging(log_level)


@app.command("roundup")
def roundup_cmd(
    amount: float = typer.Argument(..., help="Purchase amount"),
    unit: float = typer.Option(10.0, help="Round up to the next multiple of this unit"),
) -> None:
    """Print the spare change generated by a single purchase."""

    try:
        value = round_up(amount, unit)
    except InvalidArgument as exc:
        _fail(exc)
    console.print(f"Round-up for {amount:,.2f} to unit {unit:g}: [bold green]{value:.2f}[/bold green]")


@app.command("project")
def project_cmd(
    starting_balance: float = typer.Option(0.0, help="Current balance including spare change"),
    monthly: float = typer.Option(0.0, help="Monthly contribution"),
    annual_return: float = typer.Option(8.0, help="Expected annual return (%)"),
    years: float = typer.Option(5.0, help="Investment duration in years"),
    risk: str = typer.Option("moderate", callback=_check_risk, help="conservative, moderate or aggressive"),
    csv: Optional[Path] = typer.Option(None, dir_okay=False, help="Also write the series to this CSV file"),
) -> None:
    """Project compound growth and print the sampled series."""

    try:
        inputs = ProjectionInput(starting_balance, monthly, annual_return, years, risk)
        series = project(inputs)
    except InvalidArgument as exc:
        _fail(exc)
    console.print(_series_table(series, f"Projection ({risk}, {annual_return:g}% p.a.)"))
    console.print(
        f"Projected after {years:g} years: [bold]{series.final_value:,.2f}[/bold] "
        f"(range {series.final_conservative:,.2f} - {series.final_aggressive:,.2f})"
    )
    if csv is not None:
        ensure_directory(csv.parent)
        series.to_frame().to_csv(csv, index=False)
        console.print(f"Saved series to {csv}")


@app.command()
def simulate(
    config: Path = typer.Option(..., exists=True, dir_okay=False, help="Scenario YAML"),
    out: Path = typer.Option(Path("results"), help="Output directory"),
    risk: Optional[str] = typer.Option(None, help="Override the scenario's risk tolerance"),
    demo: bool = typer.Option(False, help="Append the demo purchases before projecting"),
    invest: bool = typer.Option(False, "--invest-now", help="Fold spare change into the monthly contribution first"),
    plots: bool = typer.Option(True, help="Render PNG charts"),
) -> None:
    """Run a scenario end to end and write summary, series, ledger and charts."""

    try:
        cfg = load_config(config)
        validate_config(cfg)
        tolerance = _check_risk(risk) if risk else cfg.projection.risk_tolerance
        plan = plan_from_config(cfg)
        if demo:
            plan.ledger.seed_demo(cfg.rounding.unit)
        if invest:
            invest_now(plan)
        inputs = projection_input(plan, cfg.projection.starting_balance, tolerance)
        series = project(inputs)
    except (InvalidArgument, ValidationError) as exc:
        _fail(exc)

    out_dir = timestamped_dir(out, cfg.meta.name or config.stem)
    console.print(f"[bold green]Simulating {plan.name}[/bold green] -> {out_dir}")
    write_config_snapshot(cfg, out_dir)
    save_table(series.to_frame(), out_dir, "projection")
    export_summary(series, inputs, out_dir, goal_amount=plan.goal_amount)
    if len(plan.ledger):
        export_transactions(plan.ledger, out_dir, plan.name)
    if plots:
        for path in plot_all(series, plan.ledger.category_totals(), out_dir, plan.name, plan.goal_amount):
            logger.debug("Saved %s", path)
    console.print(_series_table(series, f"{plan.name} ({tolerance})"))
    summary = summarize_projection(series, inputs, plan.goal_amount)
    for metric, value in summary.itertuples(index=False):
        console.print(f"  {metric}: {value}")


@app.command()
def allocation(
    risk: str = typer.Option("moderate", callback=_check_risk, help="conservative, moderate or aggressive"),
) -> None:
    """Show the model portfolio for a risk tolerance."""

    profile = risk_profile(risk)
    table = Table(title=f"{profile.label} portfolio")
    table.add_column("Asset")
    table.add_column("Share", justify="right")
    for item in portfolio_allocation(risk):
        table.add_row(item.name, f"{item.percentage:g}%")
    console.print(table)
    console.print(f"Expected return: {profile.return_range}")
    console.print(profile.summary)


@app.command()
def validate(config: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Validate configuration without running a projection."""

    try:
        cfg = load_config(config)
        validate_config(cfg)
    except (InvalidArgument, ValidationError) as exc:
        _fail(exc)
    console.print("Configuration validated successfully")


if __name__ == "__main__":
    app()
