"""Cross-chain money market position aggregation and risk metrics."""
from .errors import (
    AggregatorError,
    PositionFetchError,
    UnsupportedNetworkError,
    WalletResolutionError,
)
from .models import AggregationOptions, CrossChainPositionView, TokenPosition
from .services import ChainQueryDispatcher, PositionAggregator

__all__ = [
    "AggregationOptions",
    "AggregatorError",
    "ChainQueryDispatcher",
    "CrossChainPositionView",
    "PositionAggregator",
    "PositionFetchError",
    "TokenPosition",
    "UnsupportedNetworkError",
    "WalletResolutionError",
]
