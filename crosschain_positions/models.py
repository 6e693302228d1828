"""Data models: all frozen (immutable)."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal, Optional

LiquidationRisk = Literal["none", "low", "medium", "high"]

# None: not meaningful (no debt, no collateral). math.inf: no debt, some collateral.
HealthFactor = Optional[float]


def parse_usd(value: str) -> float:
    """Parse a decimal USD string.

    Blanks, garbage, NaN, infinities and negative amounts all read as zero.
    """
    try:
        number = float(value or "0")
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


@dataclass(frozen=True)
class TokenInfo:
    address: str = ""
    symbol: str = ""
    name: str = ""
    decimals: int = 18
    logo_uri: str | None = None


@dataclass(frozen=True)
class SupplyPosition:
    balance: str = "0"
    balance_usd: str = "0"
    balance_raw: str = "0"
    apy: float = 0.0
    is_collateral: bool = False


@dataclass(frozen=True)
class BorrowPosition:
    balance: str = "0"
    balance_usd: str = "0"
    balance_raw: str = "0"
    apy: float = 0.0


@dataclass(frozen=True)
class TokenPosition:
    """One token's lending position on one network."""

    network_id: str
    token: TokenInfo = field(default_factory=TokenInfo)
    supply: SupplyPosition = field(default_factory=SupplyPosition)
    borrow: BorrowPosition = field(default_factory=BorrowPosition)
    loan_to_value: float = 0.0
    liquidation_threshold: float = 0.0

    @property
    def supply_usd(self) -> float:
        return parse_usd(self.supply.balance_usd)

    @property
    def borrow_usd(self) -> float:
        return parse_usd(self.borrow.balance_usd)

    @property
    def total_usd(self) -> float:
        """Combined supply + borrow magnitude, used for ordering."""
        return self.supply_usd + self.borrow_usd

    @property
    def is_zero(self) -> bool:
        return self.supply_usd == 0 and self.borrow_usd == 0


@dataclass(frozen=True)
class ChainPositionSummary:
    """Per-network rollup."""

    network_id: str
    supply_usd: float
    borrow_usd: float
    net_worth_usd: float
    health_factor: HealthFactor
    position_count: int


@dataclass(frozen=True)
class AggregatedPositionSummary:
    """Portfolio rollup across every queried network."""

    total_supply_usd: float
    total_borrow_usd: float
    net_worth_usd: float
    available_borrow_usd: float
    health_factor: HealthFactor
    liquidation_risk: LiquidationRisk
    weighted_supply_apy: float
    weighted_borrow_apy: float
    net_apy: float


@dataclass(frozen=True)
class CollateralUtilization:
    total_collateral_usd: float
    used_collateral_usd: float
    available_collateral_usd: float
    utilization_rate: float


@dataclass(frozen=True)
class RiskMetrics:
    max_ltv: float
    current_ltv: float
    buffer_until_liquidation: float
    safe_max_borrow_usd: float


@dataclass(frozen=True)
class CrossChainPositionView:
    """Complete cross-chain position view returned to the caller."""

    wallet_id: str
    address: str
    timestamp: str
    summary: AggregatedPositionSummary
    chain_summaries: tuple[ChainPositionSummary, ...]
    positions: tuple[TokenPosition, ...]
    collateral_utilization: CollateralUtilization
    risk_metrics: RiskMetrics


@dataclass(frozen=True)
class AggregationOptions:
    network_ids: tuple[str, ...] | None = None
    include_zero_balances: bool = False
    min_usd_value: float = 0.0


@dataclass(frozen=True)
class ChainQueryResult:
    """Outcome of one per-network query: positions and summary, or the failure cause."""

    network_id: str
    positions: tuple[TokenPosition, ...] = ()
    summary: ChainPositionSummary | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class HealthStatus:
    status: Literal["healthy", "caution", "danger", "critical"]
    color: Literal["green", "yellow", "orange", "red"]
