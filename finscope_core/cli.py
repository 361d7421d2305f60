from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from finscope_core.domain.models import AnnuityMode, AnnuityParams, Bucket, GoalStatus
from finscope_core.io import config as config_io
from finscope_core.io import export
from finscope_core.io import ledger as ledger_io
from finscope_core.services import accumulator, annuity, bucketing, pipeline

app = typer.Typer(help="Personal finance dashboard engine: wealth curves, budget forecasts and goal projections.")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# -------------------------------
# Argument helpers
# -------------------------------


def _parse_rate(raw: str) -> float:
    """
    Parse a rate string that may contain a percent sign or plain float.
    Accepts "0.08", "8%", or "8" (treated as 8%).
    """
    txt = raw.strip()
    has_percent = txt.endswith("%")
    txt = txt.replace("%", "")
    if not txt:
        return 0.0
    try:
        val = float(txt)
    except ValueError:
        raise typer.BadParameter(f"Not a rate: {raw!r}") from None
    return val / 100.0 if has_percent or abs(val) > 1 else val


def _parse_now(raw: Optional[str]) -> dt.date:
    if not raw:
        return dt.date.today()
    try:
        return dt.date.fromisoformat(raw)
    except ValueError:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got {raw!r}") from None


def _parse_month(raw: str) -> Bucket:
    try:
        year, month = (int(part) for part in raw.split("-"))
        if not 1 <= month <= 12:
            raise ValueError(month)
    except ValueError:
        raise typer.BadParameter(f"Expected YYYY-MM, got {raw!r}") from None
    return Bucket(year, month)


def _parse_window(raw: str) -> bucketing.WindowLength:
    try:
        return bucketing.parse_window(raw)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from None


def _money(value) -> str:
    if value is None or pd.isna(value):
        return "-"
    if pd.api.types.is_bool(value):
        return "yes" if value else "no"
    if pd.api.types.is_integer(value):
        return str(value)
    if pd.api.types.is_number(value):
        return f"{value:,.2f}"
    return str(value)


def _print_frame(frame: pd.DataFrame, title: str) -> None:
    table = Table(title=title)
    for column in frame.columns:
        table.add_column(column, justify="left" if frame[column].dtype == object else "right")
    for row in frame.itertuples(index=False):
        table.add_row(*[_money(v) for v in row])
    console.print(table)


def _emit(frame: pd.DataFrame, title: str, out: Optional[Path]) -> None:
    if out:
        export.write_table(frame, out)
        typer.echo(f"{title} written to {out}")
    else:
        _print_frame(frame, title)


def _summary_lines(lines: Iterable[str]) -> None:
    for line in lines:
        console.print(line)


# -------------------------------
# Commands
# -------------------------------


@app.command()
def wealth(
    ledger: Path = typer.Option(..., help="CSV with date,amount,category,kind"),
    lots: Optional[Path] = typer.Option(None, help="CSV of investment lots"),
    window: str = typer.Option("1y", help="6m|1y|2y|3y|all or a month count"),
    now: Optional[str] = typer.Option(None, help="Reference date YYYY-MM-DD (default: today)"),
    out: Optional[Path] = typer.Option(None, help="Write the wealth table as CSV"),
):
    """Monthly wealth curve: cumulative savings plus investments."""
    records = ledger_io.load_records(ledger)
    holdings = ledger_io.load_lots(lots) if lots else []
    points, stats = pipeline.build_wealth_report(records, holdings, _parse_now(now), _parse_window(window))
    _emit(export.wealth_frame(points), "Wealth evolution", out)
    colour = "green" if stats.is_positive else "red"
    _summary_lines(
        [
            f"Current: [bold]{stats.last_value:,.2f}[/bold] | "
            f"Change: [{colour}]{stats.absolute_change:+,.2f} ({stats.percent_change:+.1f}%)[/{colour}]",
            f"Max: {stats.max_value:,.2f} | Min: {stats.min_value:,.2f} | Avg: {stats.mean_value:,.2f}",
        ]
    )


@app.command()
def budget(
    ledger: Path = typer.Option(..., help="CSV with date,amount,category,kind"),
    budgets: Optional[Path] = typer.Option(None, help="JSON mapping category to monthly limit"),
    policy: Optional[Path] = typer.Option(None, help="JSON forecast policy overrides"),
    now: Optional[str] = typer.Option(None, help="Reference date YYYY-MM-DD (default: today)"),
    out: Optional[Path] = typer.Option(None, help="Write the forecast table as CSV"),
):
    """Month-end spend forecast per category against budgets."""
    records = ledger_io.load_records(ledger)
    limits = config_io.load_budgets(budgets) if budgets else {}
    forecast_policy = config_io.load_forecast_policy(policy) if policy else None
    entries, totals = pipeline.forecast_for_month(records, limits, _parse_now(now), forecast_policy)
    _emit(export.forecast_frame(entries, totals), "Budget forecast", out)
    if totals.budget_limit > 0:
        colour = "red" if totals.will_exceed else "green"
        console.print(f"Projected savings vs. budget: [{colour}]{totals.projected_savings:,.2f}[/{colour}]")


@app.command()
def compare(
    ledger: Path = typer.Option(..., help="CSV with date,amount,category,kind"),
    month: Optional[str] = typer.Option(None, help="Month YYYY-MM (default: current month)"),
    now: Optional[str] = typer.Option(None, help="Reference date YYYY-MM-DD when --month is omitted"),
    out: Optional[Path] = typer.Option(None, help="Write the comparison table as CSV"),
):
    """Category spend of a month against the previous month."""
    records = ledger_io.load_records(ledger)
    reference = _parse_month(month) if month else Bucket.of(_parse_now(now))
    entries, totals = pipeline.compare_with_previous(records, reference)
    _emit(export.comparison_frame(entries, totals), f"{reference} vs {reference.shift(-1)}", out)


@app.command()
def portfolio(
    lots: Path = typer.Option(..., help="CSV of investment lots"),
    out: Optional[Path] = typer.Option(None, help="Write the accumulation table as CSV"),
    positions_out: Optional[Path] = typer.Option(None, help="Write the positions table as CSV"),
):
    """Portfolio positions and the invested vs. current value curve."""
    holdings = ledger_io.load_lots(lots)
    summary = accumulator.summarize_portfolio(holdings)
    _emit(export.portfolio_frame(summary), "Positions", positions_out)
    console.print(
        f"Invested: {summary.total_invested:,.2f} | Current: {summary.total_current:,.2f} | "
        f"Gain: {summary.total_gain:+,.2f} ({summary.gain_percent:+.2f}%)"
    )
    points = accumulator.accumulate_investments(holdings)
    if not points:
        console.print("[yellow]No investments yet.[/yellow]")
        return
    _emit(export.accumulation_frame(points), "Accumulated investments", out)


def _solve_or_exit(mode: AnnuityMode, params: AnnuityParams):
    solution = annuity.solve_annuity(mode, params)
    if solution is None:
        console.print("[red]Nothing to compute: check the term and amounts.[/red]")
        raise typer.Exit(code=1)
    return solution


@app.command()
def goal(
    target: float = typer.Option(..., help="Amount to reach"),
    years: float = typer.Option(..., help="Term in years"),
    rate: str = typer.Option("10%", help="Annual rate, e.g. 10% or 0.10"),
    initial: float = typer.Option(0.0, help="Amount already invested"),
    out: Optional[Path] = typer.Option(None, help="Write the yearly projection as CSV"),
):
    """Monthly contribution needed to reach a target."""
    params = AnnuityParams(years=years, annual_rate=_parse_rate(rate), initial_value=initial, target=target)
    solution = _solve_or_exit(AnnuityMode.SOLVE_CONTRIBUTION, params)
    if solution.status is GoalStatus.ALREADY_MET:
        console.print(f"[green]The initial amount alone reaches {target:,.2f} in {years:g} years.[/green]")
    else:
        console.print(f"Invest [bold]{solution.result:,.2f}[/bold] per month to reach {target:,.2f} in {years:g} years.")
    _emit(export.projection_frame(solution), "Yearly projection", out)


@app.command()
def project(
    contribution: float = typer.Option(0.0, help="Monthly contribution"),
    years: float = typer.Option(..., help="Term in years"),
    rate: str = typer.Option("10%", help="Annual rate, e.g. 10% or 0.10"),
    initial: float = typer.Option(0.0, help="Amount already invested"),
    out: Optional[Path] = typer.Option(None, help="Write the yearly projection as CSV"),
):
    """Future value of an initial amount plus monthly contributions."""
    params = AnnuityParams(years=years, annual_rate=_parse_rate(rate), initial_value=initial, contribution=contribution)
    solution = _solve_or_exit(AnnuityMode.SOLVE_FUTURE_VALUE, params)
    console.print(
        f"Future value: [bold]{solution.future_value:,.2f}[/bold] | "
        f"Contributed: {solution.total_contributed:,.2f} | Earnings: {solution.earnings:,.2f}"
    )
    _emit(export.projection_frame(solution), "Yearly projection", out)


if __name__ == "__main__":
    app()
