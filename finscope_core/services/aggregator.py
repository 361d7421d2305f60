from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

import pandas as pd

from finscope_core.domain.models import Bucket, BucketAggregate, MonetaryRecord, RecordKind
from finscope_core.services.bucketing import WindowLength, resolve_window

logger = logging.getLogger(__name__)


def _period(bucket: Bucket) -> pd.Period:
    return pd.Period(year=bucket.year, month=bucket.month, freq="M")


def _records_frame(records: Iterable[MonetaryRecord]) -> pd.DataFrame:
    rows = [
        {
            "date": r.occurred_on,
            "kind": RecordKind(r.kind).value,
            "category": r.category,
            "amount": float(r.amount),
            "signed": float(r.signed_amount),
        }
        for r in records
    ]
    df = pd.DataFrame(rows, columns=["date", "kind", "category", "amount", "signed"])
    df["month"] = pd.to_datetime(df["date"]).dt.to_period("M")
    return df


def aggregate(
    records: Iterable[MonetaryRecord],
    window_end: Bucket,
    window_length: WindowLength,
) -> Tuple[List[BucketAggregate], float]:
    """
    Bucket records into the trailing window ending at ``window_end``.

    Returns one aggregate per month of the window (oldest first, empty months
    included) and the carry-forward: net income minus expense of every record
    dated before the window's first month. Records after ``window_end`` fall
    in neither.
    """
    records = list(records)
    buckets = resolve_window(window_end, window_length, (r.occurred_on for r in records))
    aggregates = [BucketAggregate(bucket=b) for b in buckets]
    if not records:
        return aggregates, 0.0

    df = _records_frame(records)
    first_period = _period(buckets[0])
    last_period = _period(buckets[-1])

    carry_forward = float(df.loc[df["month"] < first_period, "signed"].sum())

    in_window = df[(df["month"] >= first_period) & (df["month"] <= last_period)]
    totals = in_window.groupby(["month", "kind"])["amount"].sum()
    expenses = in_window[in_window["kind"] == RecordKind.EXPENSE.value]
    by_category = expenses.groupby(["month", "category"])["amount"].sum()

    by_bucket: Dict[Bucket, BucketAggregate] = {a.bucket: a for a in aggregates}
    for (month, kind), amount in totals.items():
        agg = by_bucket[Bucket(month.year, month.month)]
        if kind == RecordKind.INCOME.value:
            agg.income_total = float(amount)
        else:
            agg.expense_total = float(amount)
    for (month, category), amount in by_category.items():
        by_bucket[Bucket(month.year, month.month)].expense_by_category[str(category)] = float(amount)

    logger.debug(
        "Aggregated %d records into %d buckets (%s..%s), carry-forward %.2f",
        len(records),
        len(aggregates),
        buckets[0],
        buckets[-1],
        carry_forward,
    )
    return aggregates, carry_forward


def expense_by_category(records: Iterable[MonetaryRecord]) -> Dict[str, float]:
    """Expense totals per category; income records are ignored."""
    totals: Dict[str, float] = {}
    for r in records:
        if RecordKind(r.kind) is not RecordKind.EXPENSE:
            continue
        totals[r.category] = totals.get(r.category, 0.0) + float(r.amount)
    return totals


def records_in(records: Iterable[MonetaryRecord], start: Bucket, end: Bucket) -> List[MonetaryRecord]:
    """Records whose month lies in ``start..end`` inclusive."""
    return [r for r in records if start <= Bucket.of(r.occurred_on) <= end]
