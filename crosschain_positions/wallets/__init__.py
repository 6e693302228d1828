"""Wallet resolution."""
from .registry import ConfigWalletResolver, Wallet

__all__ = ["ConfigWalletResolver", "Wallet"]
