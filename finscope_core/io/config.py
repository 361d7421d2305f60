from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from finscope_core.domain.models import AnnuityParams, ForecastPolicy


def load_budgets(path: str | Path) -> Dict[str, float]:
    data = _read_json(path)
    return {str(category): float(limit or 0.0) for category, limit in data.items()}


def load_forecast_policy(path: str | Path) -> ForecastPolicy:
    data = _read_json(path)
    defaults = ForecastPolicy()
    policy = ForecastPolicy(
        history_months=int(data.get("history_months", defaults.history_months)),
        blend_after_day=int(data.get("blend_after_day", defaults.blend_after_day)),
        pace_weight=float(data.get("pace_weight", defaults.pace_weight)),
    )
    if policy.history_months < 1:
        raise ValueError("history_months must be at least 1")
    if not 0.0 <= policy.pace_weight <= 1.0:
        raise ValueError("pace_weight must be between 0 and 1")
    return policy


def load_annuity_params(path: str | Path) -> AnnuityParams:
    data = _read_json(path)
    return AnnuityParams(
        years=_optional_float(data.get("years")),
        annual_rate=float(data.get("annual_rate", 0.10)),
        initial_value=float(data.get("initial_value", 0.0) or 0.0),
        target=_optional_float(data.get("target")),
        contribution=_optional_float(data.get("contribution")),
    )


def _optional_float(value: Any):
    return None if value is None else float(value)


def _read_json(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
