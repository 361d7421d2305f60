from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List

from finscope_core.domain.models import (
    AccumulationPoint,
    Bucket,
    InvestmentLot,
    LotPerformance,
    PortfolioSummary,
)

logger = logging.getLogger(__name__)


def accumulate_investments(lots: Iterable[InvestmentLot]) -> List[AccumulationPoint]:
    """
    Running invested vs. current value, one point per month with purchases.

    Lots bought in the same month collapse into a single point holding the
    totals after all of them.
    """
    ordered = sorted(lots, key=lambda lot: lot.purchased_on)
    points: List[AccumulationPoint] = []
    invested = 0.0
    current = 0.0
    for lot in ordered:
        invested += lot.cost_basis
        current += lot.market_value
        bucket = Bucket.of(lot.purchased_on)
        if points and points[-1].bucket == bucket:
            points[-1].invested = invested
            points[-1].current_value = current
        else:
            points.append(AccumulationPoint(bucket=bucket, invested=invested, current_value=current))
    logger.debug("Accumulated %d lots into %d points", len(ordered), len(points))
    return points


def _gain_percent(gain: float, invested: float) -> float:
    return gain / invested * 100 if invested > 0 else 0.0


def summarize_portfolio(lots: Iterable[InvestmentLot]) -> PortfolioSummary:
    positions: List[LotPerformance] = []
    allocation: Dict[str, float] = defaultdict(float)
    for lot in lots:
        invested = lot.cost_basis
        current = lot.market_value
        gain = current - invested
        positions.append(
            LotPerformance(
                lot=lot,
                invested=invested,
                current_value=current,
                gain=gain,
                gain_percent=_gain_percent(gain, invested),
            )
        )
        allocation[lot.asset_type] += current

    total_invested = sum(p.invested for p in positions)
    total_current = sum(p.current_value for p in positions)
    total_gain = total_current - total_invested
    return PortfolioSummary(
        total_invested=total_invested,
        total_current=total_current,
        total_gain=total_gain,
        gain_percent=_gain_percent(total_gain, total_invested),
        positions=positions,
        allocation=dict(allocation),
    )
