"""Display helpers for health factors and JSON-ready views."""
from __future__ import annotations

import math
from typing import Any

from ..models import (
    ChainPositionSummary,
    CrossChainPositionView,
    HealthFactor,
    HealthStatus,
    TokenPosition,
)


def format_health_factor(hf: HealthFactor) -> str:
    if hf is None:
        return "N/A"
    if math.isinf(hf):
        return "∞"
    return f"{hf:.2f}"


def get_health_factor_status(hf: HealthFactor) -> HealthStatus:
    """Map a health factor to a status label and colour."""
    if hf is None or math.isinf(hf):
        return HealthStatus(status="healthy", color="green")
    if hf < 1.1:
        return HealthStatus(status="critical", color="red")
    if hf < 1.5:
        return HealthStatus(status="danger", color="orange")
    if hf < 2:
        return HealthStatus(status="caution", color="yellow")
    return HealthStatus(status="healthy", color="green")


def _usd(value: float) -> str:
    return f"{value:.2f}"


def _pct(fraction: float) -> str:
    return f"{fraction * 100:.2f}%"


def _chain_to_dict(cs: ChainPositionSummary) -> dict[str, Any]:
    return {
        "networkId": cs.network_id,
        "supplyUsd": _usd(cs.supply_usd),
        "borrowUsd": _usd(cs.borrow_usd),
        "netWorthUsd": _usd(cs.net_worth_usd),
        "healthFactor": format_health_factor(cs.health_factor),
        "positionCount": cs.position_count,
    }


def _position_to_dict(pos: TokenPosition) -> dict[str, Any]:
    token: dict[str, Any] = {
        "address": pos.token.address,
        "symbol": pos.token.symbol,
        "name": pos.token.name,
        "decimals": pos.token.decimals,
    }
    if pos.token.logo_uri:
        token["logoURI"] = pos.token.logo_uri

    return {
        "networkId": pos.network_id,
        "token": token,
        "supply": {
            "balance": pos.supply.balance,
            "balanceUsd": pos.supply.balance_usd,
            "apy": _pct(pos.supply.apy),
            "isCollateral": pos.supply.is_collateral,
        },
        "borrow": {
            "balance": pos.borrow.balance,
            "balanceUsd": pos.borrow.balance_usd,
            "apy": _pct(pos.borrow.apy),
        },
        "loanToValue": _pct(pos.loan_to_value),
        "liquidationThreshold": _pct(pos.liquidation_threshold),
    }


def view_to_dict(
    view: CrossChainPositionView, recommendations: list[str] | None = None
) -> dict[str, Any]:
    """Render a view as a JSON-serializable dict with formatted values."""
    summary = view.summary
    status = get_health_factor_status(summary.health_factor)
    util = view.collateral_utilization
    risk = view.risk_metrics

    result: dict[str, Any] = {
        "walletId": view.wallet_id,
        "address": view.address,
        "timestamp": view.timestamp,
        "summary": {
            "totalSupplyUsd": _usd(summary.total_supply_usd),
            "totalBorrowUsd": _usd(summary.total_borrow_usd),
            "netWorthUsd": _usd(summary.net_worth_usd),
            "availableBorrowUsd": _usd(summary.available_borrow_usd),
            "healthFactor": format_health_factor(summary.health_factor),
            "healthFactorStatus": {"status": status.status, "color": status.color},
            "liquidationRisk": summary.liquidation_risk,
            "weightedSupplyApy": _pct(summary.weighted_supply_apy),
            "weightedBorrowApy": _pct(summary.weighted_borrow_apy),
            "netApy": _pct(summary.net_apy),
        },
        "chainBreakdown": [_chain_to_dict(cs) for cs in view.chain_summaries],
        "collateralUtilization": {
            "totalCollateralUsd": _usd(util.total_collateral_usd),
            "usedCollateralUsd": _usd(util.used_collateral_usd),
            "availableCollateralUsd": _usd(util.available_collateral_usd),
            # already a percentage
            "utilizationRate": f"{util.utilization_rate:.2f}%",
        },
        "riskMetrics": {
            "maxLtv": _pct(risk.max_ltv),
            "currentLtv": _pct(risk.current_ltv),
            "bufferUntilLiquidation": f"{risk.buffer_until_liquidation:.2f}%",
            "safeMaxBorrowUsd": _usd(risk.safe_max_borrow_usd),
        },
        "positions": [_position_to_dict(p) for p in view.positions],
    }
    if recommendations is not None:
        result["recommendations"] = list(recommendations)
    return result
