"""Cross-chain position aggregation: resolves a wallet, queries its networks, merges."""
from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from ..config import AggregatorConfig, AppConfig
from ..interfaces.network_catalog import NetworkCatalog
from ..interfaces.position_source import PositionSource
from ..interfaces.wallet_resolver import ResolvedWallet, WalletResolver
from ..models import AggregationOptions, CrossChainPositionView, TokenPosition
from ..networks import ConfigNetworkCatalog, normalize_network_id
from ..positions import (
    calc_aggregated_summary,
    calc_collateral_utilization,
    calc_risk_metrics,
)
from ..sources import HttpPositionSource, ProviderCache
from ..wallets import ConfigWalletResolver
from .dispatcher import ChainQueryDispatcher

logger = logging.getLogger(__name__)


class PositionAggregator:
    """Builds a :class:`CrossChainPositionView` for a wallet.

    Only wallet resolution failures propagate; a network that fails to answer
    is logged and left out of the view.
    """

    def __init__(
        self,
        resolver: WalletResolver,
        catalog: NetworkCatalog,
        source: PositionSource,
        config: AggregatorConfig | None = None,
    ) -> None:
        self._config = config or AggregatorConfig()
        self._resolver = resolver
        self._catalog = catalog
        self._dispatcher = ChainQueryDispatcher(
            source, timeout=self._config.fetch_timeout_seconds
        )

    @classmethod
    def from_config(
        cls, config: AppConfig, cache: ProviderCache | None = None
    ) -> "PositionAggregator":
        """Wire the config-backed resolver, catalog and HTTP source together."""
        return cls(
            resolver=ConfigWalletResolver(config.wallets, config.default_wallet),
            catalog=ConfigNetworkCatalog(config.networks),
            source=HttpPositionSource(config.networks, cache=cache),
            config=config.aggregator,
        )

    def _networks_to_query(
        self, wallet: ResolvedWallet, requested: tuple[str, ...] | None
    ) -> list[str]:
        if requested is None:
            candidates = self._catalog.list_supported_networks()
        else:
            candidates = list(requested)

        networks: list[str] = []
        seen: set[str] = set()
        for network_id in candidates:
            key = normalize_network_id(network_id)
            if key in seen:
                continue
            seen.add(key)
            if not wallet.supports_network(network_id):
                if requested is not None:
                    logger.warning(
                        "Wallet %s does not support %s, skipping",
                        wallet.wallet_id,
                        network_id,
                    )
                continue
            networks.append(network_id)
        return networks

    async def aggregate(
        self, wallet_id: str, options: AggregationOptions | None = None
    ) -> CrossChainPositionView:
        """Aggregate money market positions across the wallet's networks."""
        if options is None:
            options = AggregationOptions(
                include_zero_balances=self._config.include_zero_balances,
                min_usd_value=self._config.min_usd_value,
            )
        started = time.monotonic()

        wallet = await self._resolver.resolve(wallet_id)
        networks = self._networks_to_query(wallet, options.network_ids)

        logger.info(
            "Querying positions for %s (%s) across %d networks: %s",
            wallet.wallet_id,
            wallet.address,
            len(networks),
            ", ".join(networks) or "none",
        )

        results = await self._dispatcher.dispatch(
            wallet.address,
            networks,
            include_zero_balances=options.include_zero_balances,
            min_usd_value=options.min_usd_value,
        )

        all_positions: list[TokenPosition] = []
        chain_summaries = []
        for result in results:
            all_positions.extend(result.positions)
            if result.summary is not None:
                chain_summaries.append(result.summary)

        summary = calc_aggregated_summary(all_positions)
        view = CrossChainPositionView(
            wallet_id=wallet.wallet_id,
            address=wallet.address,
            timestamp=datetime.now(timezone.utc).isoformat(),
            summary=summary,
            chain_summaries=tuple(
                sorted(chain_summaries, key=lambda cs: cs.net_worth_usd, reverse=True)
            ),
            positions=tuple(
                sorted(all_positions, key=lambda p: p.total_usd, reverse=True)
            ),
            collateral_utilization=calc_collateral_utilization(all_positions, summary),
            risk_metrics=calc_risk_metrics(all_positions, summary),
        )

        logger.info(
            "Aggregation complete in %.0fms: %d positions on %d networks, "
            "supply $%.2f, borrow $%.2f, HF %s",
            (time.monotonic() - started) * 1000,
            len(all_positions),
            len(chain_summaries),
            summary.total_supply_usd,
            summary.total_borrow_usd,
            summary.health_factor,
        )
        return view
