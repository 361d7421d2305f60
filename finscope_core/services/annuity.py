from __future__ import annotations

import logging
import math
from typing import List, Optional

from finscope_core.domain.models import (
    AnnuityMode,
    AnnuityParams,
    AnnuitySolution,
    GoalStatus,
    YearlyProjection,
)

logger = logging.getLogger(__name__)


def annuity_factor(monthly_rate: float, months: float) -> float:
    """((1 + i)^n - 1) / i, which tends to n as i -> 0."""
    if monthly_rate == 0 or 1 + monthly_rate == 1:
        return months
    return ((1 + monthly_rate) ** months - 1) / monthly_rate


def future_value(initial: float, contribution: float, monthly_rate: float, months: float) -> float:
    """FV = PV * (1 + i)^n + PMT * ((1 + i)^n - 1) / i, monthly compounding."""
    return initial * (1 + monthly_rate) ** months + contribution * annuity_factor(monthly_rate, months)


def required_contribution(initial: float, target: float, monthly_rate: float, months: float) -> float:
    grown = initial * (1 + monthly_rate) ** months
    return max(0.0, (target - grown) / annuity_factor(monthly_rate, months))


def yearly_projection(
    initial: float,
    contribution: float,
    monthly_rate: float,
    years: float,
) -> List[YearlyProjection]:
    """
    One row per whole year from 0 to ``years``. Each row is evaluated from the
    closed form at ``year * 12`` months, not accumulated from the previous row.
    """
    rows = []
    for year in range(int(math.floor(years)) + 1):
        months = year * 12
        rows.append(
            YearlyProjection(
                year=year,
                total_value=future_value(initial, contribution, monthly_rate, months),
                total_contributed=initial + contribution * months,
            )
        )
    return rows


def _usable(params: AnnuityParams, mode: AnnuityMode) -> bool:
    if params.years is None or not math.isfinite(params.years) or params.years <= 0:
        return False
    numbers = [params.annual_rate, params.initial_value]
    if mode is AnnuityMode.SOLVE_CONTRIBUTION:
        if params.target is None or not math.isfinite(params.target) or params.target <= 0:
            return False
    elif params.contribution is not None:
        numbers.append(params.contribution)
    if not all(math.isfinite(n) for n in numbers):
        return False
    # a monthly rate at or below -100% wipes out the balance and breaks the power terms
    return params.monthly_rate > -1


def solve_annuity(mode: AnnuityMode, params: AnnuityParams) -> Optional[AnnuitySolution]:
    """
    Compound-interest calculator with monthly contributions.

    ``SOLVE_CONTRIBUTION`` finds the monthly contribution that reaches
    ``params.target``; ``SOLVE_FUTURE_VALUE`` projects ``params.contribution``
    forward. Returns ``None`` when the inputs do not describe a computable
    plan (no positive term, no positive target in goal mode, non-finite
    numbers).
    """
    mode = AnnuityMode(mode)
    if not _usable(params, mode):
        logger.warning("Annuity inputs rejected for %s: %s", mode.value, params)
        return None

    i = params.monthly_rate
    n = params.term_months
    initial = params.initial_value
    try:
        if mode is AnnuityMode.SOLVE_CONTRIBUTION:
            if initial * (1 + i) ** n >= params.target:
                contribution = 0.0
                status = GoalStatus.ALREADY_MET
            else:
                contribution = required_contribution(initial, params.target, i, n)
                status = GoalStatus.CONTRIBUTION_REQUIRED
            fv = future_value(initial, contribution, i, n)
            result = contribution
        else:
            contribution = params.contribution or 0.0
            status = GoalStatus.PROJECTED
            fv = future_value(initial, contribution, i, n)
            result = fv
        series = yearly_projection(initial, contribution, i, params.years)
    except OverflowError as exc:
        logger.warning("Annuity computation failed for %s: %s", params, exc)
        return None

    if not (math.isfinite(result) and math.isfinite(fv)):
        logger.warning("Annuity result is not finite for %s", params)
        return None

    return AnnuitySolution(
        mode=mode,
        status=status,
        initial_value=initial,
        annual_rate=params.annual_rate,
        term_months=n,
        result=result,
        contribution=contribution,
        future_value=fv,
        total_contributed=initial + contribution * n,
        yearly_series=series,
    )
