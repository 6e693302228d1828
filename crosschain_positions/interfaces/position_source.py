"""Position source protocol: raw per-network lending positions."""
from typing import Any, Protocol


class PositionSource(Protocol):
    """Abstract interface for fetching a wallet's raw reserve records on one network."""

    async def get_positions(self, address: str, network_id: str) -> list[dict[str, Any]]: ...
