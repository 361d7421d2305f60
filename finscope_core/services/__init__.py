from finscope_core.services.accumulator import accumulate_investments, summarize_portfolio  # noqa: F401
from finscope_core.services.aggregator import aggregate  # noqa: F401
from finscope_core.services.annuity import solve_annuity  # noqa: F401
from finscope_core.services.bucketing import bucket_of  # noqa: F401
from finscope_core.services.budget_forecaster import forecast_budget  # noqa: F401
from finscope_core.services.comparator import compare_months  # noqa: F401
from finscope_core.services.pipeline import build_wealth_report, compare_with_previous, forecast_for_month  # noqa: F401
from finscope_core.services.wealth import compose_wealth  # noqa: F401

__all__ = [
    "accumulate_investments",
    "aggregate",
    "bucket_of",
    "build_wealth_report",
    "compare_months",
    "compare_with_previous",
    "compose_wealth",
    "forecast_budget",
    "forecast_for_month",
    "solve_annuity",
    "summarize_portfolio",
]
