"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Callable

import pytest

from crosschain_positions.config import (
    AggregatorConfig,
    AppConfig,
    NetworkConfig,
    WalletConfig,
)
from crosschain_positions.models import (
    BorrowPosition,
    SupplyPosition,
    TokenInfo,
    TokenPosition,
)


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_position() -> Callable[..., TokenPosition]:
    """Factory for TokenPosition with USD legs given as floats."""

    def _make(
        network_id: str = "ethereum",
        symbol: str = "USDC",
        supply_usd: float = 0.0,
        borrow_usd: float = 0.0,
        supply_apy: float = 0.0,
        borrow_apy: float = 0.0,
        is_collateral: bool = False,
        ltv: float = 0.0,
        liquidation_threshold: float = 0.0,
    ) -> TokenPosition:
        return TokenPosition(
            network_id=network_id,
            token=TokenInfo(address=f"0x{symbol.lower()}", symbol=symbol, name=symbol, decimals=6),
            supply=SupplyPosition(
                balance=str(supply_usd),
                balance_usd=str(supply_usd),
                balance_raw="0",
                apy=supply_apy,
                is_collateral=is_collateral,
            ),
            borrow=BorrowPosition(
                balance=str(borrow_usd),
                balance_usd=str(borrow_usd),
                balance_raw="0",
                apy=borrow_apy,
            ),
            loan_to_value=ltv,
            liquidation_threshold=liquidation_threshold,
        )

    return _make


@pytest.fixture()
def sample_positions(make_position: Callable[..., TokenPosition]) -> list[TokenPosition]:
    """Collateral on ethereum, debt on arbitrum: health factor (1000 * 0.8) / 400 = 2.0."""
    return [
        make_position(
            network_id="ethereum",
            symbol="ETH",
            supply_usd=1000.0,
            supply_apy=0.03,
            is_collateral=True,
            ltv=0.75,
            liquidation_threshold=0.8,
        ),
        make_position(
            network_id="arbitrum",
            symbol="USDC",
            borrow_usd=400.0,
            borrow_apy=0.05,
        ),
    ]


# ---------------------------------------------------------------------------
# Raw provider records
# ---------------------------------------------------------------------------


@pytest.fixture()
def nested_reserve() -> dict[str, Any]:
    """Reserve record in the nested token/supply/borrow shape."""
    return {
        "token": {
            "address": "0xA0b8",
            "symbol": "USDC",
            "name": "USD Coin",
            "decimals": 6,
            "logoURI": "https://example.com/usdc.png",
        },
        "supply": {
            "balance": "1500.5",
            "balanceUsd": "1500.5",
            "balanceRaw": "1500500000",
            "apy": 0.042,
            "isCollateral": True,
        },
        "borrow": {
            "balance": "200",
            "balanceUsd": "200",
            "balanceRaw": "200000000",
            "apy": 0.061,
        },
        "loanToValue": 0.77,
        "liquidationThreshold": 0.8,
    }


@pytest.fixture()
def flat_reserve() -> dict[str, Any]:
    """Reserve record in the flat Aave-style shape."""
    return {
        "underlyingAsset": "0x4200",
        "symbol": "WETH",
        "name": "Wrapped Ether",
        "decimals": 18,
        "scaledATokenBalance": "2.5",
        "scaledVariableDebt": "0.1",
        "usageAsCollateralEnabledOnUser": True,
        "loanToValue": "0.8",
        "liquidationThreshold": "0.825",
    }


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_app_config() -> AppConfig:
    return AppConfig(
        aggregator=AggregatorConfig(fetch_timeout_seconds=5.0),
        networks={
            "ethereum": NetworkConfig(endpoints=("https://eth.example.com",), timeout=5),
            "arbitrum": NetworkConfig(endpoints=("https://arb.example.com",), timeout=5),
            "base": NetworkConfig(endpoints=("https://base.example.com",), timeout=5),
        },
        wallets=(
            WalletConfig(wallet_id="main", address="0xWALLET123"),
            WalletConfig(
                wallet_id="bankr", address="0xBANKR456", networks=("ethereum", "base")
            ),
        ),
        default_wallet="main",
    )


SAMPLE_YAML = textwrap.dedent("""\
    aggregator:
      fetch_timeout_seconds: 12
      include_zero_balances: false
      min_usd_value: 1.5
    networks:
      ethereum:
        endpoints: ["https://eth.example.com"]
        timeout: 10
      base:
        endpoints: ["https://base.example.com", "https://base2.example.com"]
    wallets:
      - wallet_id: main
        address: "0xTEST"
      - wallet_id: bankr
        address: "0xBANKR"
        networks: [base]
    default_wallet: main
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
