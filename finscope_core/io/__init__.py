from finscope_core.io.ledger import load_lots, load_records  # noqa: F401
from finscope_core.io.config import (  # noqa: F401
    load_annuity_params,
    load_budgets,
    load_forecast_policy,
)

__all__ = ["load_records", "load_lots", "load_budgets", "load_forecast_policy", "load_annuity_params"]
