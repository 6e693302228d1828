"""Service modules"""
from .aggregator import PositionAggregator
from .dispatcher import ChainQueryDispatcher

__all__ = ["ChainQueryDispatcher", "PositionAggregator"]
