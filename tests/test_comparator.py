import datetime as dt

import pytest

from finscope_core.domain.models import MonetaryRecord, RecordKind
from finscope_core.services.comparator import TOTAL_LABEL, compare_months

MARCH = dt.date(2024, 3, 10)
FEBRUARY = dt.date(2024, 2, 10)


def _expense(category: str, amount: float, day: dt.date) -> MonetaryRecord:
    return MonetaryRecord(occurred_on=day, amount=amount, category=category, kind=RecordKind.EXPENSE)


def test_new_category_is_plus_one_hundred_percent():
    entries, _ = compare_months([_expense("Travel", 500.0, MARCH)], [])
    assert entries[0].category == "Travel"
    assert entries[0].previous == 0.0
    assert entries[0].difference == 500.0
    assert entries[0].percent_change == 100.0


def test_union_of_categories_sorted_by_current_spend():
    current = [_expense("Food", 350.0, MARCH), _expense("Leisure", 150.0, MARCH)]
    previous = [_expense("Food", 400.0, FEBRUARY), _expense("Transport", 100.0, FEBRUARY)]
    entries, totals = compare_months(current, previous)

    assert [e.category for e in entries] == ["Food", "Leisure", "Transport"]
    food, leisure, transport = entries
    assert food.difference == pytest.approx(-50.0)
    assert food.percent_change == pytest.approx(-12.5)
    assert leisure.percent_change == 100.0
    assert transport.current == 0.0
    assert transport.percent_change == pytest.approx(-100.0)

    assert totals.category == TOTAL_LABEL
    assert totals.current == pytest.approx(500.0)
    assert totals.previous == pytest.approx(500.0)
    assert totals.percent_change == 0.0


def test_empty_months_compare_to_zero():
    entries, totals = compare_months([], [])
    assert entries == []
    assert totals.percent_change == 0.0
    assert totals.difference == 0.0


def test_income_is_not_compared():
    income = MonetaryRecord(occurred_on=MARCH, amount=3000.0, category="Salary", kind=RecordKind.INCOME)
    entries, totals = compare_months([income], [])
    assert entries == []
    assert totals.current == 0.0
