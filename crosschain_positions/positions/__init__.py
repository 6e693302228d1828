"""Pure position math: normalization, summaries, risk and recommendations."""
from .formatting import format_health_factor, get_health_factor_status, view_to_dict
from .normalizer import normalize_position, normalize_positions
from .recommendations import get_position_recommendations
from .risk import calc_collateral_utilization, calc_risk_metrics
from .summary import (
    build_chain_summary,
    calc_aggregated_summary,
    calc_health_factor,
    classify_liquidation_risk,
)

__all__ = [
    "build_chain_summary",
    "calc_aggregated_summary",
    "calc_collateral_utilization",
    "calc_health_factor",
    "calc_risk_metrics",
    "classify_liquidation_risk",
    "format_health_factor",
    "get_health_factor_status",
    "get_position_recommendations",
    "normalize_position",
    "normalize_positions",
    "view_to_dict",
]
