from __future__ import annotations

from typing import Iterable, List, Tuple

from finscope_core.domain.models import ComparisonEntry, MonetaryRecord
from finscope_core.services.aggregator import expense_by_category

TOTAL_LABEL = "Total"


def _entry(category: str, current: float, previous: float) -> ComparisonEntry:
    difference = current - previous
    if previous > 0:
        percent = difference / previous * 100
    else:
        percent = 100.0 if current > 0 else 0.0
    return ComparisonEntry(
        category=category,
        current=current,
        previous=previous,
        difference=difference,
        percent_change=percent,
    )


def compare_months(
    current_records: Iterable[MonetaryRecord],
    previous_records: Iterable[MonetaryRecord],
) -> Tuple[List[ComparisonEntry], ComparisonEntry]:
    """
    Category spend of a month against the month before it.

    Returns one entry per category seen in either month, largest current spend
    first, plus a totals row computed with the same rules.
    """
    current = expense_by_category(current_records)
    previous = expense_by_category(previous_records)

    entries = [
        _entry(category, current.get(category, 0.0), previous.get(category, 0.0))
        for category in set(current) | set(previous)
    ]
    entries.sort(key=lambda e: (-e.current, e.category))

    totals = _entry(TOTAL_LABEL, sum(current.values()), sum(previous.values()))
    return entries, totals
