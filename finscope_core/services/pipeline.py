from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from finscope_core.domain.models import (
    Bucket,
    ComparisonEntry,
    ForecastEntry,
    ForecastPolicy,
    ForecastTotals,
    InvestmentLot,
    MonetaryRecord,
    WealthPoint,
    WealthStats,
)
from finscope_core.services import aggregator, budget_forecaster, comparator, wealth
from finscope_core.services.bucketing import WindowLength


def build_wealth_report(
    records: Iterable[MonetaryRecord],
    lots: Iterable[InvestmentLot],
    now: dt.date,
    window: WindowLength,
) -> Tuple[List[WealthPoint], WealthStats]:
    aggregates, carry_forward = aggregator.aggregate(records, Bucket.of(now), window)
    return wealth.compose_wealth(aggregates, carry_forward, lots)


def select_forecast_inputs(
    records: Sequence[MonetaryRecord],
    now: dt.date,
    history_months: int = 3,
) -> Tuple[List[MonetaryRecord], List[MonetaryRecord]]:
    """Split a snapshot into this month's records and the complete months before it."""
    current = Bucket.of(now)
    this_month = aggregator.records_in(records, current, current)
    if history_months < 1:
        return this_month, []
    prior = aggregator.records_in(records, current.shift(-history_months), current.shift(-1))
    return this_month, prior


def select_comparison_inputs(
    records: Sequence[MonetaryRecord],
    reference: Bucket,
) -> Tuple[List[MonetaryRecord], List[MonetaryRecord]]:
    previous = reference.shift(-1)
    return (
        aggregator.records_in(records, reference, reference),
        aggregator.records_in(records, previous, previous),
    )


def forecast_for_month(
    records: Sequence[MonetaryRecord],
    budgets: Mapping[str, float],
    now: dt.date,
    policy: Optional[ForecastPolicy] = None,
) -> Tuple[List[ForecastEntry], ForecastTotals]:
    policy = policy or budget_forecaster.DEFAULT_POLICY
    current, prior = select_forecast_inputs(records, now, policy.history_months)
    return budget_forecaster.forecast_budget(current, prior, budgets, now, policy)


def compare_with_previous(
    records: Sequence[MonetaryRecord],
    reference: Bucket,
) -> Tuple[List[ComparisonEntry], ComparisonEntry]:
    current, previous = select_comparison_inputs(records, reference)
    return comparator.compare_months(current, previous)
