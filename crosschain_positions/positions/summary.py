"""Pure aggregation math over normalized positions. No I/O."""
from __future__ import annotations

import math
from typing import Sequence

from ..models import (
    AggregatedPositionSummary,
    ChainPositionSummary,
    HealthFactor,
    LiquidationRisk,
    TokenPosition,
)

HIGH_RISK_BELOW = 1.10
MEDIUM_RISK_BELOW = 1.50
LOW_RISK_BELOW = 2.00


def calc_health_factor(positions: Sequence[TokenPosition]) -> HealthFactor:
    """Calculate the health factor for a set of positions.

    health_factor = sum(collateral supply USD * liquidation threshold) / total borrow USD

    Only collateral-enabled supplies count. With no debt the result is
    ``math.inf`` when any collateral exists and ``None`` otherwise. Chain and
    portfolio summaries both go through this function.
    """
    collateral_value = 0.0
    total_borrow = 0.0

    for pos in positions:
        if pos.supply.is_collateral:
            collateral_value += pos.supply_usd * pos.liquidation_threshold
        total_borrow += pos.borrow_usd

    if total_borrow == 0:
        return math.inf if collateral_value > 0 else None
    return collateral_value / total_borrow


def classify_liquidation_risk(health_factor: HealthFactor) -> LiquidationRisk:
    """Bucket a health factor; lower bounds are inclusive."""
    if health_factor is None or math.isinf(health_factor):
        return "none"
    if health_factor < HIGH_RISK_BELOW:
        return "high"
    if health_factor < MEDIUM_RISK_BELOW:
        return "medium"
    if health_factor < LOW_RISK_BELOW:
        return "low"
    return "none"


def build_chain_summary(
    network_id: str, positions: Sequence[TokenPosition]
) -> ChainPositionSummary:
    """Reduce one network's positions to a :class:`ChainPositionSummary`."""
    supply_usd = sum(p.supply_usd for p in positions)
    borrow_usd = sum(p.borrow_usd for p in positions)

    return ChainPositionSummary(
        network_id=network_id,
        supply_usd=supply_usd,
        borrow_usd=borrow_usd,
        net_worth_usd=supply_usd - borrow_usd,
        health_factor=calc_health_factor(positions),
        position_count=len(positions),
    )


def calc_aggregated_summary(
    positions: Sequence[TokenPosition],
) -> AggregatedPositionSummary:
    """Reduce the full cross-network position list to portfolio totals."""
    total_supply = 0.0
    total_borrow = 0.0
    supply_apy_sum = 0.0
    borrow_apy_sum = 0.0

    for pos in positions:
        supply_usd = pos.supply_usd
        borrow_usd = pos.borrow_usd
        total_supply += supply_usd
        total_borrow += borrow_usd
        supply_apy_sum += supply_usd * pos.supply.apy
        borrow_apy_sum += borrow_usd * pos.borrow.apy

    weighted_supply_apy = supply_apy_sum / total_supply if total_supply > 0 else 0.0
    weighted_borrow_apy = borrow_apy_sum / total_borrow if total_borrow > 0 else 0.0

    health_factor = calc_health_factor(positions)

    # Unweighted mean LTV: a coarse borrowing-power estimate, not an oracle figure.
    avg_ltv = (
        sum(p.loan_to_value for p in positions) / len(positions) if positions else 0.0
    )
    available_borrow = max(0.0, total_supply * avg_ltv - total_borrow)

    net_apy = (
        (weighted_supply_apy * total_supply - weighted_borrow_apy * total_borrow)
        / total_supply
        if total_supply > 0
        else 0.0
    )

    return AggregatedPositionSummary(
        total_supply_usd=total_supply,
        total_borrow_usd=total_borrow,
        net_worth_usd=total_supply - total_borrow,
        available_borrow_usd=available_borrow,
        health_factor=health_factor,
        liquidation_risk=classify_liquidation_risk(health_factor),
        weighted_supply_apy=weighted_supply_apy,
        weighted_borrow_apy=weighted_borrow_apy,
        net_apy=net_apy,
    )
