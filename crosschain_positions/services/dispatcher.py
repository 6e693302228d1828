"""Concurrent per-network position queries with per-network failure isolation."""
from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from ..interfaces.position_source import PositionSource
from ..models import ChainQueryResult, TokenPosition
from ..positions import build_chain_summary, normalize_positions
from ..sources.http import extract_reserves

logger = logging.getLogger(__name__)


class ChainQueryDispatcher:
    """Fan out one query per network and keep whichever succeed."""

    def __init__(self, source: PositionSource, timeout: float = 30.0) -> None:
        self._source = source
        self._timeout = timeout

    async def query_chain(self, address: str, network_id: str) -> ChainQueryResult:
        """Fetch, normalize and summarize one network. Never raises on failure.

        A payload that is neither a reserve list nor ``{"userReserves": [...]}``
        is a failed query, not an empty network.
        """
        try:
            raw = await asyncio.wait_for(
                self._source.get_positions(address, network_id), self._timeout
            )
            positions = tuple(normalize_positions(extract_reserves(raw), network_id))
        except asyncio.TimeoutError as e:
            logger.warning(
                "Position query for %s timed out after %.1fs", network_id, self._timeout
            )
            return ChainQueryResult(network_id=network_id, error=e)
        except Exception as e:
            logger.warning("Failed to query positions on %s: %s", network_id, e)
            return ChainQueryResult(network_id=network_id, error=e)

        return ChainQueryResult(
            network_id=network_id,
            positions=positions,
            summary=build_chain_summary(network_id, positions),
        )

    async def dispatch(
        self,
        address: str,
        network_ids: Sequence[str],
        include_zero_balances: bool = False,
        min_usd_value: float = 0.0,
    ) -> list[ChainQueryResult]:
        """Query every network concurrently; return successful results in input order.

        Unless ``include_zero_balances`` is set, zero and below-``min_usd_value``
        positions are dropped and networks left with no positions are omitted.
        """
        results = await asyncio.gather(
            *(self.query_chain(address, network_id) for network_id in network_ids)
        )

        kept: list[ChainQueryResult] = []
        for result in results:
            if not result.ok:
                continue
            if include_zero_balances:
                kept.append(result)
                continue

            positions = _filter_positions(result.positions, min_usd_value)
            if not positions:
                logger.debug("No non-zero positions on %s", result.network_id)
                continue
            kept.append(
                ChainQueryResult(
                    network_id=result.network_id,
                    positions=positions,
                    summary=build_chain_summary(result.network_id, positions),
                )
            )

        failed = len(results) - sum(1 for r in results if r.ok)
        if failed:
            logger.warning("%d of %d network queries failed", failed, len(results))
        return kept


def _filter_positions(
    positions: Sequence[TokenPosition], min_usd_value: float
) -> tuple[TokenPosition, ...]:
    return tuple(
        p for p in positions if not p.is_zero and p.total_usd >= min_usd_value
    )
