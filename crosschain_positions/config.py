"""Configuration loader: reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .networks import normalize_network_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregatorConfig:
    fetch_timeout_seconds: float = 30.0
    include_zero_balances: bool = False
    min_usd_value: float = 0.0


@dataclass(frozen=True)
class NetworkConfig:
    endpoints: tuple[str, ...] = ()
    timeout: int = 30


@dataclass(frozen=True)
class WalletConfig:
    wallet_id: str = ""
    address: str = ""
    # Empty means every configured network is allowed.
    networks: tuple[str, ...] = ()


@dataclass(frozen=True)
class AppConfig:
    aggregator: AggregatorConfig = field(default_factory=AggregatorConfig)
    networks: dict[str, NetworkConfig] = field(default_factory=dict)
    wallets: tuple[WalletConfig, ...] = ()
    default_wallet: str = ""


_ENV_REF = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Expand ``${VAR}`` references in every string of a parsed YAML tree.

    Unset variables expand to an empty string, which validation then rejects
    where a value is required (wallet addresses).
    """
    if isinstance(value, dict):
        return {key: _interpolate_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    if not isinstance(value, str):
        return value
    return _ENV_REF.sub(lambda match: os.environ.get(match.group(1), ""), value)


def _build_aggregator(raw: dict[str, Any]) -> AggregatorConfig:
    return AggregatorConfig(
        fetch_timeout_seconds=float(raw.get("fetch_timeout_seconds", 30.0)),
        include_zero_balances=bool(raw.get("include_zero_balances", False)),
        min_usd_value=float(raw.get("min_usd_value", 0.0)),
    )


def _build_networks(raw: dict[str, Any]) -> dict[str, NetworkConfig]:
    networks: dict[str, NetworkConfig] = {}
    for network_id, section in raw.items():
        section = section or {}
        networks[str(network_id)] = NetworkConfig(
            endpoints=tuple(section.get("endpoints") or ()),
            timeout=int(section.get("timeout", 30)),
        )
    return networks


def _build_wallets(raw: list[dict[str, Any]]) -> tuple[WalletConfig, ...]:
    return tuple(
        WalletConfig(
            wallet_id=str(entry.get("wallet_id") or ""),
            address=str(entry.get("address") or ""),
            networks=tuple(entry.get("networks") or ()),
        )
        for entry in raw
    )


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate the aggregator configuration.

    ``.env`` is loaded first so wallet addresses can stay out of the YAML.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from the package).
    """
    load_dotenv()

    path = Path(config_path) if config_path is not None else (
        Path(__file__).resolve().parent.parent / "config.yaml"
    )
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = _interpolate_env(yaml.safe_load(path.read_text()) or {})

    cfg = AppConfig(
        aggregator=_build_aggregator(raw.get("aggregator") or {}),
        networks=_build_networks(raw.get("networks") or {}),
        wallets=_build_wallets(raw.get("wallets") or []),
        default_wallet=str(raw.get("default_wallet") or ""),
    )

    _validate(cfg)
    logger.info(
        "Loaded %d networks and %d wallets from %s",
        len(cfg.networks),
        len(cfg.wallets),
        path,
    )
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise ``ValueError`` on the first invalid setting."""
    if not cfg.networks:
        raise ValueError("At least one network must be configured")

    if cfg.aggregator.fetch_timeout_seconds <= 0:
        raise ValueError("aggregator.fetch_timeout_seconds must be positive")
    if cfg.aggregator.min_usd_value < 0:
        raise ValueError("aggregator.min_usd_value must not be negative")

    for network_id, network in cfg.networks.items():
        if not network.endpoints:
            raise ValueError(f"Network '{network_id}' has no endpoints")

    known_networks = {normalize_network_id(n) for n in cfg.networks}
    seen: set[str] = set()
    for wallet in cfg.wallets:
        if not wallet.wallet_id:
            raise ValueError("Every wallet needs a wallet_id")
        key = wallet.wallet_id.lower()
        if key in seen:
            raise ValueError(f"Duplicate wallet_id '{wallet.wallet_id}'")
        seen.add(key)
        if not wallet.address:
            raise ValueError(f"Wallet '{wallet.wallet_id}' has no address")
        unknown = [
            n for n in wallet.networks if normalize_network_id(n) not in known_networks
        ]
        if unknown:
            raise ValueError(
                f"Wallet '{wallet.wallet_id}' references unknown network '{unknown[0]}'"
            )

    if cfg.default_wallet and cfg.default_wallet.lower() not in seen:
        raise ValueError(f"default_wallet '{cfg.default_wallet}' is not configured")
