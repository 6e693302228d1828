"""Network catalog protocol: which networks can be queried at all."""
from typing import Protocol


class NetworkCatalog(Protocol):
    """Abstract interface listing queryable networks."""

    def list_supported_networks(self) -> list[str]: ...
