"""Network catalog implementations."""
from .catalog import ConfigNetworkCatalog, normalize_network_id

__all__ = ["ConfigNetworkCatalog", "normalize_network_id"]
