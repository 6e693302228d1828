"""Wallet resolver protocol: wallet id to address and permitted networks."""
from typing import Protocol


class ResolvedWallet(Protocol):
    """A wallet whose address is known."""

    @property
    def wallet_id(self) -> str: ...

    @property
    def address(self) -> str: ...

    @property
    def supported_networks(self) -> tuple[str, ...]: ...

    def supports_network(self, network_id: str) -> bool: ...


class WalletResolver(Protocol):
    """Abstract interface for resolving wallet ids."""

    async def resolve(self, wallet_id: str) -> ResolvedWallet: ...
