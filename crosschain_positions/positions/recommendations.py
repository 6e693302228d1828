"""Advisory messages derived from a finished position view."""
from __future__ import annotations

from ..models import CrossChainPositionView

LOW_HEALTH_FACTOR = 1.5
COMFORTABLE_HEALTH_FACTOR = 2.0
NOTABLE_BORROW_POWER_USD = 1000.0
HIGH_UTILIZATION_PCT = 80.0
MEANINGFUL_CHAIN_SUPPLY_USD = 100.0


def get_position_recommendations(view: CrossChainPositionView) -> list[str]:
    """Evaluate each rule independently, in a fixed order."""
    recommendations: list[str] = []
    summary = view.summary
    hf = summary.health_factor

    if hf is not None and hf < LOW_HEALTH_FACTOR:
        recommendations.append(
            "⚠️ Health factor is low. Consider repaying debt or adding collateral."
        )

    if (
        summary.available_borrow_usd > NOTABLE_BORROW_POWER_USD
        and hf is not None
        and hf > COMFORTABLE_HEALTH_FACTOR
    ):
        recommendations.append(
            f"💡 You have ${summary.available_borrow_usd:.2f} in available borrowing power."
        )

    if view.collateral_utilization.utilization_rate > HIGH_UTILIZATION_PCT:
        recommendations.append(
            "⚠️ High collateral utilization. Avoid borrowing more to maintain safety margin."
        )

    if summary.net_apy < 0:
        recommendations.append(
            "📉 Your borrowing costs exceed supply earnings. Consider reducing debt "
            "or finding higher APY supply opportunities."
        )

    funded_chains = [
        cs for cs in view.chain_summaries if cs.supply_usd > MEANINGFUL_CHAIN_SUPPLY_USD
    ]
    if len(funded_chains) > 1:
        recommendations.append(
            f"🌐 You have positions across {len(funded_chains)} chains. "
            "Monitor each chain's health factor independently."
        )

    return recommendations
