from finscope_core.domain.models import (  # noqa: F401
    AccumulationPoint,
    AnnuityMode,
    AnnuityParams,
    AnnuitySolution,
    Bucket,
    BucketAggregate,
    ComparisonEntry,
    ForecastEntry,
    ForecastPolicy,
    ForecastTotals,
    GoalStatus,
    InvestmentLot,
    LotPerformance,
    MonetaryRecord,
    PortfolioSummary,
    RecordKind,
    WealthPoint,
    WealthStats,
    YearlyProjection,
)

__all__ = [
    "AccumulationPoint",
    "AnnuityMode",
    "AnnuityParams",
    "AnnuitySolution",
    "Bucket",
    "BucketAggregate",
    "ComparisonEntry",
    "ForecastEntry",
    "ForecastPolicy",
    "ForecastTotals",
    "GoalStatus",
    "InvestmentLot",
    "LotPerformance",
    "MonetaryRecord",
    "PortfolioSummary",
    "RecordKind",
    "WealthPoint",
    "WealthStats",
    "YearlyProjection",
]
