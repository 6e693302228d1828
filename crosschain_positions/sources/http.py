"""HTTP position source with per-network endpoint fallback."""
from __future__ import annotations

import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import NetworkConfig
from ..errors import PositionFetchError, UnsupportedNetworkError
from ..networks import normalize_network_id
from .cache import ProviderCache

logger = logging.getLogger(__name__)


def extract_reserves(body: Any) -> list[dict[str, Any]]:
    """Pull the reserve list out of a response body.

    Providers answer either ``{"userReserves": [...]}`` or a bare list.
    """
    if isinstance(body, dict) and "userReserves" in body:
        body = body["userReserves"]
    if not isinstance(body, list):
        raise PositionFetchError(
            f"Unexpected position payload of type {type(body).__name__}"
        )
    return body


class NetworkPositionClient:
    """Position API client for one network with automatic endpoint fallback."""

    def __init__(self, network_id: str, config: NetworkConfig) -> None:
        self.network_id = network_id
        self.endpoints = list(config.endpoints)
        self.timeout = config.timeout
        self.current_endpoint_index = 0

    async def fetch_reserves(self, address: str) -> list[dict[str, Any]]:
        """Fetch user reserves, falling back through endpoints in order."""
        if not self.endpoints:
            raise UnsupportedNetworkError(f"No endpoints configured for {self.network_id}")

        ssl_context = ssl.create_default_context(cafile=certifi.where())

        last_error: Exception | None = None
        for attempt in range(len(self.endpoints)):
            index = (self.current_endpoint_index + attempt) % len(self.endpoints)
            url = self.endpoints[index]

            try:
                connector = aiohttp.TCPConnector(ssl=ssl_context)
                async with aiohttp.ClientSession(connector=connector) as session:
                    async with session.get(
                        url,
                        params={"address": address},
                        timeout=aiohttp.ClientTimeout(total=self.timeout),
                    ) as response:
                        if response.status != 200:
                            raise PositionFetchError(f"HTTP {response.status}")
                        body = await response.json()
                        reserves = extract_reserves(body)

                        if index != self.current_endpoint_index:
                            logger.info(
                                "Switched %s to endpoint: %s", self.network_id, url
                            )
                            self.current_endpoint_index = index

                        return reserves
            except Exception as e:
                last_error = e
                logger.warning("Endpoint %s for %s failed: %s", url, self.network_id, e)
                continue

        raise PositionFetchError(
            f"All endpoints failed for {self.network_id}. Last error: {last_error}"
        )


class HttpPositionSource:
    """Fetch raw reserve records over HTTP, one cached client per wallet and network."""

    def __init__(
        self,
        networks: dict[str, NetworkConfig],
        cache: ProviderCache[NetworkPositionClient] | None = None,
    ) -> None:
        self._networks = {normalize_network_id(k): (k, v) for k, v in networks.items()}
        self._cache = cache if cache is not None else ProviderCache()

    @property
    def cache(self) -> ProviderCache[NetworkPositionClient]:
        return self._cache

    async def get_positions(self, address: str, network_id: str) -> list[dict[str, Any]]:
        entry = self._networks.get(normalize_network_id(network_id))
        if entry is None:
            raise UnsupportedNetworkError(f"Network '{network_id}' is not configured")
        name, cfg = entry

        client = self._cache.get_or_create(
            address, name, lambda: NetworkPositionClient(name, cfg)
        )
        return await client.fetch_reserves(address)
