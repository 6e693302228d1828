"""Wallet resolver backed by the ``wallets:`` config section."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import WalletConfig
from ..errors import WalletResolutionError
from ..networks import normalize_network_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Wallet:
    """A resolved wallet. An empty ``supported_networks`` allows every network."""

    wallet_id: str
    address: str
    supported_networks: tuple[str, ...] = ()

    def supports_network(self, network_id: str) -> bool:
        if not self.supported_networks:
            return True
        wanted = normalize_network_id(network_id)
        return any(normalize_network_id(n) == wanted for n in self.supported_networks)


class ConfigWalletResolver:
    """Resolve wallet ids (case-insensitive) against configured wallets."""

    def __init__(
        self, wallets: tuple[WalletConfig, ...], default_wallet: str = ""
    ) -> None:
        self._wallets = {w.wallet_id.lower(): w for w in wallets}
        self._default_wallet = default_wallet

    async def resolve(self, wallet_id: str) -> Wallet:
        """Return the wallet for ``wallet_id``; an empty id means the default wallet."""
        key = (wallet_id or self._default_wallet).strip().lower()
        if not key:
            raise WalletResolutionError("No wallet id given and no default wallet configured")

        cfg = self._wallets.get(key)
        if cfg is None:
            known = ", ".join(sorted(self._wallets)) or "none"
            raise WalletResolutionError(f"Unknown wallet '{wallet_id}'. Configured: {known}")
        if not cfg.address:
            raise WalletResolutionError(f"Wallet '{cfg.wallet_id}' has no address")

        logger.debug("Resolved wallet %s to %s", cfg.wallet_id, cfg.address)
        return Wallet(
            wallet_id=cfg.wallet_id,
            address=cfg.address,
            supported_networks=cfg.networks,
        )
