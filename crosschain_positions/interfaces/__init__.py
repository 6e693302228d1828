"""Collaborator interfaces for the cross-chain position aggregator."""
from .network_catalog import NetworkCatalog
from .position_source import PositionSource
from .wallet_resolver import ResolvedWallet, WalletResolver

__all__ = ["NetworkCatalog", "PositionSource", "ResolvedWallet", "WalletResolver"]
