from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from finscope_core.domain.models import BucketAggregate, InvestmentLot, WealthPoint, WealthStats

logger = logging.getLogger(__name__)


def investment_value_at(lots: Iterable[InvestmentLot], aggregate: BucketAggregate) -> float:
    """
    Market value of every lot bought on or before the last day of the bucket.

    Lots are valued at their latest price for every month, not at the price
    they had back then, so past points show what those holdings are worth
    today.
    """
    cutoff = aggregate.bucket.last_day
    return float(sum(lot.market_value for lot in lots if lot.purchased_on <= cutoff))


def compose_wealth(
    aggregates: Sequence[BucketAggregate],
    carry_forward: float,
    lots: Iterable[InvestmentLot],
) -> Tuple[List[WealthPoint], WealthStats]:
    """
    Combine cumulative cash flow with investment value per month.

    The cash position starts from the carry-forward and accumulates each
    month's net flow, debts included. Savings shown per month are that
    position floored at zero: a negative cash position does not eat into
    invested wealth, but later income has to cover it before savings grow.
    """
    lots = list(lots)
    points: List[WealthPoint] = []
    running = carry_forward
    for agg in aggregates:
        running += agg.income_total - agg.expense_total
        points.append(
            WealthPoint(
                bucket=agg.bucket,
                income=agg.income_total,
                expense=agg.expense_total,
                cumulative_savings=max(0.0, running),
                investment_value=investment_value_at(lots, agg),
            )
        )
    stats = wealth_stats([p.total_wealth for p in points])
    logger.debug("Composed %d wealth points over %d lots", len(points), len(lots))
    return points, stats


def wealth_stats(values: Sequence[float]) -> WealthStats:
    if not values:
        return WealthStats()
    series = np.asarray(values, dtype=float)
    first = float(series[0])
    last = float(series[-1])
    change = last - first
    return WealthStats(
        first_value=first,
        last_value=last,
        absolute_change=change,
        percent_change=(change / first) * 100 if first != 0 else 0.0,
        max_value=float(series.max()),
        min_value=float(series.min()),
        mean_value=float(series.mean()),
    )
