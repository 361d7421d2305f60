"""
Flat tables for export sinks (CSV/PDF writers, charts).

Values are rounded to cents here and nowhere earlier.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Sequence

import pandas as pd

from finscope_core.domain.models import (
    AccumulationPoint,
    AnnuitySolution,
    ComparisonEntry,
    ForecastEntry,
    ForecastTotals,
    PortfolioSummary,
    WealthPoint,
)

DECIMALS = 2


def _frame(rows, columns) -> pd.DataFrame:
    df = pd.DataFrame(rows, columns=columns)
    numeric = df.select_dtypes(include="number").columns
    if len(numeric):
        df[numeric] = df[numeric].round(DECIMALS)
    return df


def wealth_frame(points: Sequence[WealthPoint]) -> pd.DataFrame:
    rows = [
        {
            "month": p.bucket.label,
            "income": p.income,
            "expense": p.expense,
            "net": p.income - p.expense,
            "savings": p.cumulative_savings,
            "investments": p.investment_value,
            "wealth": p.total_wealth,
        }
        for p in points
    ]
    return _frame(rows, ["month", "income", "expense", "net", "savings", "investments", "wealth"])


def forecast_frame(entries: Iterable[ForecastEntry], totals: Optional[ForecastTotals] = None) -> pd.DataFrame:
    columns = [
        "category",
        "spent",
        "projected",
        "average",
        "budget",
        "percent_of_budget",
        "will_exceed",
        "daily_allowance",
    ]
    rows = [
        {
            "category": e.category,
            "spent": e.spent_so_far,
            "projected": e.projected_total,
            "average": e.historical_average,
            "budget": e.budget_limit,
            "percent_of_budget": e.percent_of_budget,
            "will_exceed": e.will_exceed,
            "daily_allowance": e.suggested_daily_remaining,
        }
        for e in entries
    ]
    if totals is not None:
        rows.append(
            {
                "category": "Total",
                "spent": totals.spent_so_far,
                "projected": totals.projected_total,
                "average": totals.historical_average,
                "budget": totals.budget_limit,
                "percent_of_budget": totals.percent_of_budget,
                "will_exceed": totals.will_exceed,
                "daily_allowance": None,
            }
        )
    return _frame(rows, columns)


def comparison_frame(entries: Iterable[ComparisonEntry], totals: Optional[ComparisonEntry] = None) -> pd.DataFrame:
    items = list(entries) + ([totals] if totals is not None else [])
    rows = [
        {
            "category": e.category,
            "current": e.current,
            "previous": e.previous,
            "difference": e.difference,
            "percent_change": e.percent_change,
        }
        for e in items
    ]
    return _frame(rows, ["category", "current", "previous", "difference", "percent_change"])


def accumulation_frame(points: Sequence[AccumulationPoint]) -> pd.DataFrame:
    rows = [
        {"month": p.bucket.label, "invested": p.invested, "current": p.current_value, "gain": p.gain}
        for p in points
    ]
    return _frame(rows, ["month", "invested", "current", "gain"])


def portfolio_frame(summary: PortfolioSummary) -> pd.DataFrame:
    rows = [
        {
            "asset": p.lot.asset_name,
            "type": p.lot.asset_type,
            "quantity": p.lot.quantity,
            "invested": p.invested,
            "current": p.current_value,
            "gain": p.gain,
            "gain_percent": p.gain_percent,
        }
        for p in summary.positions
    ]
    return _frame(rows, ["asset", "type", "quantity", "invested", "current", "gain", "gain_percent"])


def projection_frame(solution: AnnuitySolution) -> pd.DataFrame:
    rows = [
        {
            "year": row.year,
            "total_value": row.total_value,
            "total_contributed": row.total_contributed,
            "earnings": row.earnings,
        }
        for row in solution.yearly_series
    ]
    return _frame(rows, ["year", "total_value", "total_contributed", "earnings"])


def write_table(frame: pd.DataFrame, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(path, index=False)
    return path
