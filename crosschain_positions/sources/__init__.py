"""Position sources and their provider cache."""
from .cache import ProviderCache
from .http import HttpPositionSource, NetworkPositionClient

__all__ = ["HttpPositionSource", "NetworkPositionClient", "ProviderCache"]
