"""Network catalog backed by the ``networks:`` config section."""
from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import NetworkConfig

# SDK-style ids carry a hex chain-id prefix, e.g. "0x2105.base".
_HEX_PREFIX_RE = re.compile(r"^0x[0-9a-f]+\.")


def normalize_network_id(network_id: str) -> str:
    """Canonical comparison form of a network id.

    Examples:
        "0x2105.base" → "base"
        " Arbitrum " → "arbitrum"
    """
    return _HEX_PREFIX_RE.sub("", network_id.strip().lower())


class ConfigNetworkCatalog:
    """List the configured networks, in configuration order."""

    def __init__(self, networks: dict[str, NetworkConfig]) -> None:
        self._networks = dict(networks)

    def list_supported_networks(self) -> list[str]:
        return list(self._networks)
