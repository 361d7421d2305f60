from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable, List, Mapping, Optional, Tuple

from finscope_core.domain.models import (
    Bucket,
    ForecastEntry,
    ForecastPolicy,
    ForecastTotals,
    MonetaryRecord,
)
from finscope_core.services.aggregator import expense_by_category

logger = logging.getLogger(__name__)

DEFAULT_POLICY = ForecastPolicy()


def project_month_end(
    spent_so_far: float,
    historical_average: float,
    days_elapsed: int,
    days_in_month: int,
    policy: ForecastPolicy = DEFAULT_POLICY,
) -> float:
    """
    Month-end spend projection.

    Early in the month (``days_elapsed <= policy.blend_after_day``) the pace
    carries too little signal, so the historical average is used as is.
    Afterwards the pace extrapolation and the history are blended.
    """
    daily_rate = spent_so_far / days_elapsed if days_elapsed > 0 else 0.0
    from_pace = daily_rate * days_in_month
    if days_elapsed > policy.blend_after_day:
        return policy.pace_weight * from_pace + policy.history_weight * historical_average
    return historical_average


def _percent_of(value: float, limit: float) -> float:
    return value / limit * 100 if limit > 0 else 0.0


def _suggested_daily(limit: float, spent: float, days_remaining: int) -> float:
    if limit > 0 and days_remaining > 0:
        return max(0.0, (limit - spent) / days_remaining)
    return 0.0


def forecast_budget(
    current_records: Iterable[MonetaryRecord],
    prior_records: Iterable[MonetaryRecord],
    budgets: Mapping[str, float],
    now: dt.date,
    policy: Optional[ForecastPolicy] = None,
) -> Tuple[List[ForecastEntry], ForecastTotals]:
    """
    Project this month's spend per category against its budget.

    ``current_records`` are the expenses of the month containing ``now`` so far;
    ``prior_records`` cover the ``policy.history_months`` complete months
    before it. Income records are ignored. Categories without spend this
    month and without history are left out.
    """
    policy = policy or DEFAULT_POLICY
    bucket = Bucket.of(now)
    days_elapsed = now.day
    days_in_month = bucket.days_in_month
    days_remaining = days_in_month - days_elapsed

    current = expense_by_category(current_records)
    prior = expense_by_category(prior_records)

    entries: List[ForecastEntry] = []
    for category in set(current) | set(prior):
        spent = current.get(category, 0.0)
        history = prior.get(category, 0.0) / policy.history_months if policy.history_months > 0 else 0.0
        if spent == 0 and history == 0:
            continue
        limit = float(budgets.get(category, 0.0) or 0.0)
        projected = project_month_end(spent, history, days_elapsed, days_in_month, policy)
        entries.append(
            ForecastEntry(
                category=category,
                spent_so_far=spent,
                projected_total=projected,
                historical_average=history,
                budget_limit=limit,
                percent_of_budget=_percent_of(projected, limit),
                will_exceed=limit > 0 and projected > limit,
                suggested_daily_remaining=_suggested_daily(limit, spent, days_remaining),
            )
        )

    entries.sort(key=lambda e: (-e.projected_total, e.category))
    totals = _totals(entries)
    logger.debug(
        "Forecast %s on day %d/%d: %d categories, projected %.2f of %.2f",
        bucket,
        days_elapsed,
        days_in_month,
        len(entries),
        totals.projected_total,
        totals.budget_limit,
    )
    return entries, totals


def _totals(entries: List[ForecastEntry]) -> ForecastTotals:
    spent = sum(e.spent_so_far for e in entries)
    projected = sum(e.projected_total for e in entries)
    limit = sum(e.budget_limit for e in entries)
    return ForecastTotals(
        spent_so_far=spent,
        projected_total=projected,
        historical_average=sum(e.historical_average for e in entries),
        budget_limit=limit,
        percent_of_budget=_percent_of(projected, limit),
        will_exceed=limit > 0 and projected > limit,
    )
