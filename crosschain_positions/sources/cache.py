"""Explicit per-(address, network) provider cache."""
from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProviderCache(Generic[T]):
    """Cache of per-network providers keyed by ``(address, network_id)``.

    Sources only see wallet addresses, so the address (compared
    case-insensitively) stands in for the wallet id it was resolved from.

    Owned by whoever builds the position source; nothing is shared across
    instances. Entries live until invalidated.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], T] = {}

    def get_or_create(self, address: str, network_id: str, factory: Callable[[], T]) -> T:
        key = (address.lower(), network_id)
        provider = self._entries.get(key)
        if provider is None:
            provider = factory()
            self._entries[key] = provider
            logger.debug("Created provider for %s on %s", address, network_id)
        return provider

    def invalidate(self, address: str, network_id: str | None = None) -> int:
        """Drop one address's providers (all networks, or just ``network_id``)."""
        address_key = address.lower()
        doomed = [
            key
            for key in self._entries
            if key[0] == address_key and (network_id is None or key[1] == network_id)
        ]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: tuple[str, str]) -> bool:
        address, network_id = key
        return (address.lower(), network_id) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
