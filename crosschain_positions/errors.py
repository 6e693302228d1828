"""Exception types raised by the aggregator and its collaborators."""


class AggregatorError(Exception):
    """Base class for cross-chain aggregation errors."""


class WalletResolutionError(AggregatorError):
    """The wallet id could not be resolved to an address. Fatal for a call."""


class UnsupportedNetworkError(AggregatorError):
    """A position source has no way to query the requested network."""


class PositionFetchError(AggregatorError):
    """Fetching or decoding a network's position data failed."""
