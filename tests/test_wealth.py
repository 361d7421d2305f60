import datetime as dt

import pytest

from finscope_core.domain.models import Bucket, BucketAggregate, InvestmentLot, MonetaryRecord, RecordKind
from finscope_core.services.aggregator import aggregate
from finscope_core.services.wealth import compose_wealth, wealth_stats


def _lot(quantity: float, cost: float, price: float, bought: dt.date) -> InvestmentLot:
    return InvestmentLot(
        asset_name="ACME",
        asset_type="stock",
        quantity=quantity,
        unit_cost=cost,
        unit_price=price,
        purchased_on=bought,
    )


def _month(year: int, month: int, income: float, expense: float) -> BucketAggregate:
    return BucketAggregate(bucket=Bucket(year, month), income_total=income, expense_total=expense)


def test_single_month_end_to_end():
    records = [
        MonetaryRecord(occurred_on=dt.date(2024, 1, 5), amount=1000.0, category="Salary", kind=RecordKind.INCOME),
        MonetaryRecord(occurred_on=dt.date(2024, 1, 10), amount=300.0, category="Food", kind=RecordKind.EXPENSE),
    ]
    aggregates, carry = aggregate(records, Bucket(2024, 1), 1)
    points, _ = compose_wealth(aggregates, carry, [])
    assert len(points) == 1
    assert points[0].cumulative_savings == pytest.approx(700.0)
    assert points[0].investment_value == 0.0
    assert points[0].total_wealth == pytest.approx(700.0)


def test_savings_seeded_by_carry_forward():
    points, _ = compose_wealth([_month(2024, 1, 100.0, 0.0), _month(2024, 2, 0.0, 50.0)], 500.0, [])
    assert [p.cumulative_savings for p in points] == [600.0, 550.0]


def test_savings_never_negative():
    aggregates = [
        _month(2024, 1, 0.0, 800.0),
        _month(2024, 2, 100.0, 1500.0),
        _month(2024, 3, 300.0, 0.0),
    ]
    points, _ = compose_wealth(aggregates, 200.0, [])
    assert all(p.cumulative_savings >= 0 for p in points)
    assert [p.cumulative_savings for p in points] == [0.0, 0.0, 0.0]


def test_overspending_must_be_repaid_before_savings_grow():
    aggregates = [
        _month(2024, 1, 0.0, 500.0),
        _month(2024, 2, 300.0, 0.0),
        _month(2024, 3, 400.0, 0.0),
    ]
    points, _ = compose_wealth(aggregates, 0.0, [])
    assert [p.cumulative_savings for p in points] == [0.0, 0.0, 200.0]


def test_negative_carry_forward_is_a_debt():
    points, _ = compose_wealth([_month(2024, 1, 100.0, 0.0)], -250.0, [])
    assert points[0].cumulative_savings == 0.0
    assert points[0].total_wealth == 0.0


def test_investments_count_from_purchase_month_at_current_price():
    lots = [
        _lot(10, 5.0, 8.0, dt.date(2024, 2, 29)),
        _lot(1, 100.0, 90.0, dt.date(2024, 3, 1)),
    ]
    aggregates = [_month(2024, m, 0.0, 0.0) for m in (1, 2, 3)]
    points, _ = compose_wealth(aggregates, 0.0, lots)
    assert [p.investment_value for p in points] == [0.0, 80.0, 170.0]
    assert points[-1].total_wealth == pytest.approx(170.0)


def test_stats_over_series():
    aggregates = [
        _month(2024, 1, 100.0, 0.0),
        _month(2024, 2, 300.0, 0.0),
        _month(2024, 3, 0.0, 200.0),
    ]
    _, stats = compose_wealth(aggregates, 0.0, [])
    assert stats.first_value == 100.0
    assert stats.last_value == 200.0
    assert stats.absolute_change == 100.0
    assert stats.percent_change == pytest.approx(100.0)
    assert stats.max_value == 400.0
    assert stats.min_value == 100.0
    assert stats.mean_value == pytest.approx(700.0 / 3)
    assert stats.is_positive


def test_percent_change_is_zero_when_starting_from_nothing():
    stats = wealth_stats([0.0, 250.0])
    assert stats.percent_change == 0.0
    assert stats.absolute_change == 250.0
    assert stats.is_positive


def test_declining_series_is_not_positive():
    assert not wealth_stats([400.0, 100.0]).is_positive


def test_empty_series_stats():
    stats = wealth_stats([])
    assert stats.last_value == 0.0
    assert stats.is_positive
