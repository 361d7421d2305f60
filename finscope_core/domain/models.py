from __future__ import annotations

import calendar
import dataclasses
import datetime as dt
import enum
from typing import Dict, List, Optional


class RecordKind(str, enum.Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclasses.dataclass(frozen=True)
class MonetaryRecord:
    occurred_on: dt.date
    amount: float
    category: str
    kind: RecordKind
    id: Optional[str] = None

    @property
    def is_expense(self) -> bool:
        return RecordKind(self.kind) is RecordKind.EXPENSE

    @property
    def signed_amount(self) -> float:
        return -self.amount if self.is_expense else self.amount


@dataclasses.dataclass(frozen=True)
class InvestmentLot:
    asset_name: str
    asset_type: str
    quantity: float
    unit_cost: float  # price paid per unit
    unit_price: float  # latest known price per unit
    purchased_on: dt.date
    id: Optional[str] = None

    @property
    def cost_basis(self) -> float:
        return self.quantity * self.unit_cost

    @property
    def market_value(self) -> float:
        return self.quantity * self.unit_price


@dataclasses.dataclass(frozen=True, order=True)
class Bucket:
    """A calendar month. Ordering is chronological."""

    year: int
    month: int

    @classmethod
    def of(cls, date: dt.date) -> "Bucket":
        return cls(date.year, date.month)

    def shift(self, months: int) -> "Bucket":
        index = self.year * 12 + (self.month - 1) + months
        year, month0 = divmod(index, 12)
        return Bucket(year, month0 + 1)

    def months_since(self, other: "Bucket") -> int:
        return (self.year - other.year) * 12 + (self.month - other.month)

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    @property
    def first_day(self) -> dt.date:
        return dt.date(self.year, self.month, 1)

    @property
    def last_day(self) -> dt.date:
        return dt.date(self.year, self.month, self.days_in_month)

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def __str__(self) -> str:
        return self.label


@dataclasses.dataclass
class BucketAggregate:
    bucket: Bucket
    income_total: float = 0.0
    expense_total: float = 0.0
    expense_by_category: Dict[str, float] = dataclasses.field(default_factory=dict)

    @property
    def net(self) -> float:
        return self.income_total - self.expense_total


@dataclasses.dataclass
class WealthPoint:
    bucket: Bucket
    income: float
    expense: float
    cumulative_savings: float
    investment_value: float

    @property
    def total_wealth(self) -> float:
        return self.cumulative_savings + self.investment_value


@dataclasses.dataclass
class WealthStats:
    first_value: float = 0.0
    last_value: float = 0.0
    absolute_change: float = 0.0
    percent_change: float = 0.0
    max_value: float = 0.0
    min_value: float = 0.0
    mean_value: float = 0.0

    @property
    def is_positive(self) -> bool:
        return self.percent_change >= 0


@dataclasses.dataclass(frozen=True)
class ForecastPolicy:
    """
    Tuning constants of the month-end spend projection.

    The defaults are fixed heuristics, not fitted to data:
    - ``history_months``: complete months averaged for the historical baseline.
    - ``blend_after_day``: the pace extrapolation is only trusted once more
      than this many days of the month have elapsed; before that the
      projection is the historical average alone.
    - ``pace_weight``: share of the current-pace projection in the blend; the
      historical average gets the remainder.
    """

    history_months: int = 3
    blend_after_day: int = 7
    pace_weight: float = 0.6

    @property
    def history_weight(self) -> float:
        return 1.0 - self.pace_weight


@dataclasses.dataclass
class ForecastEntry:
    category: str
    spent_so_far: float
    projected_total: float
    historical_average: float
    budget_limit: float
    percent_of_budget: float
    will_exceed: bool
    suggested_daily_remaining: float


@dataclasses.dataclass
class ForecastTotals:
    spent_so_far: float
    projected_total: float
    historical_average: float
    budget_limit: float
    percent_of_budget: float
    will_exceed: bool

    @property
    def projected_savings(self) -> float:
        return self.budget_limit - self.projected_total


@dataclasses.dataclass
class ComparisonEntry:
    category: str
    current: float
    previous: float
    difference: float
    percent_change: float


@dataclasses.dataclass
class AccumulationPoint:
    bucket: Bucket
    invested: float
    current_value: float

    @property
    def gain(self) -> float:
        return self.current_value - self.invested


@dataclasses.dataclass
class LotPerformance:
    lot: InvestmentLot
    invested: float
    current_value: float
    gain: float
    gain_percent: float


@dataclasses.dataclass
class PortfolioSummary:
    total_invested: float
    total_current: float
    total_gain: float
    gain_percent: float
    positions: List[LotPerformance]
    allocation: Dict[str, float]  # asset_type -> current value


class AnnuityMode(str, enum.Enum):
    SOLVE_CONTRIBUTION = "solve_contribution"  # goal-driven
    SOLVE_FUTURE_VALUE = "solve_future_value"  # contribution-driven


class GoalStatus(str, enum.Enum):
    ALREADY_MET = "already_met"
    CONTRIBUTION_REQUIRED = "contribution_required"
    PROJECTED = "projected"


@dataclasses.dataclass(frozen=True)
class AnnuityParams:
    years: Optional[float] = None
    annual_rate: float = 0.10  # fraction, 0.10 == 10% a year
    initial_value: float = 0.0
    target: Optional[float] = None
    contribution: Optional[float] = None

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate / 12

    @property
    def term_months(self) -> float:
        return (self.years or 0.0) * 12


@dataclasses.dataclass
class YearlyProjection:
    year: int
    total_value: float
    total_contributed: float

    @property
    def earnings(self) -> float:
        return self.total_value - self.total_contributed


@dataclasses.dataclass
class AnnuitySolution:
    mode: AnnuityMode
    status: GoalStatus
    initial_value: float
    annual_rate: float
    term_months: float
    result: float  # PMT in goal mode, FV in contribution mode
    contribution: float
    future_value: float
    total_contributed: float
    yearly_series: List[YearlyProjection]

    @property
    def earnings(self) -> float:
        return self.future_value - self.total_contributed

    @property
    def goal_already_met(self) -> bool:
        return self.status is GoalStatus.ALREADY_MET
