"""Collateral utilization and liquidation-risk metrics."""
from __future__ import annotations

from typing import Sequence

from ..models import (
    AggregatedPositionSummary,
    CollateralUtilization,
    RiskMetrics,
    TokenPosition,
)

# Safe borrowing stops at 80% of the formal liquidation point.
SAFE_BORROW_FACTOR = 0.8


def calc_collateral_utilization(
    positions: Sequence[TokenPosition], summary: AggregatedPositionSummary
) -> CollateralUtilization:
    """Compare collateral-enabled supply against total debt."""
    total_collateral = sum(p.supply_usd for p in positions if p.supply.is_collateral)
    used = summary.total_borrow_usd

    return CollateralUtilization(
        total_collateral_usd=total_collateral,
        used_collateral_usd=used,
        available_collateral_usd=max(0.0, total_collateral - used),
        utilization_rate=(used / total_collateral * 100) if total_collateral > 0 else 0.0,
    )


def calc_risk_metrics(
    positions: Sequence[TokenPosition], summary: AggregatedPositionSummary
) -> RiskMetrics:
    """Derive LTV headroom from supply-weighted market parameters.

    Unlike the health factor, the LTV and liquidation-threshold averages
    weight every supplied position, collateral-enabled or not: they describe
    the markets, not the exposure.
    """
    total_supply = 0.0
    ltv_sum = 0.0
    threshold_sum = 0.0

    for pos in positions:
        supply_usd = pos.supply_usd
        total_supply += supply_usd
        ltv_sum += supply_usd * pos.loan_to_value
        threshold_sum += supply_usd * pos.liquidation_threshold

    max_ltv = ltv_sum / total_supply if total_supply > 0 else 0.0
    avg_threshold = threshold_sum / total_supply if total_supply > 0 else 0.0

    current_ltv = (
        summary.total_borrow_usd / summary.total_supply_usd
        if summary.total_supply_usd > 0
        else 0.0
    )

    return RiskMetrics(
        max_ltv=max_ltv,
        current_ltv=current_ltv,
        buffer_until_liquidation=max(0.0, avg_threshold - current_ltv) * 100,
        safe_max_borrow_usd=summary.total_supply_usd * avg_threshold * SAFE_BORROW_FACTOR,
    )
