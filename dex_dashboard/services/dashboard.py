# dex_dashboard/services/dashboard.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from dex_dashboard.config.tokens import TokenConfig
from dex_dashboard.models.market import GlobalMarketSummary, PriceRecord
from dex_dashboard.schemas.dashboard import (
    DashboardView,
    DataSource,
    MarketStats,
    PairDisplay,
    TradeTicket,
    TradingPair,
    WalletInfo,
)
from dex_dashboard.services.aggregation import (
    build_trading_pairs,
    compute_market_stats,
    filter_pairs,
    select_quote_token,
)
from dex_dashboard.services.market_data import FetchResult, MarketDataProvider
from dex_dashboard.utils.formatting import (
    format_address,
    format_balance,
    format_change,
    format_number,
    format_price,
)

logger = logging.getLogger("dex_dashboard.dashboard")

CONNECT_WALLET_MESSAGE = "Please connect your wallet to trade"


@dataclass(frozen=True)
class WalletSession:
    address: str = ""
    is_connected: bool = False
    balance: str = "0"
    network: str = ""


def _source_of(result: FetchResult) -> DataSource:
    return DataSource(
        source=result.source,
        cached=getattr(result, "cached", False),
        reason=getattr(result, "reason", None),
    )


def present_pair(pair: TradingPair) -> PairDisplay:
    return PairDisplay(
        pair=f"{pair.base_token_symbol}/{pair.quote_token_symbol}",
        price=format_price(pair.price),
        change=format_change(pair.price_change_24h),
        volume="$" + format_number(pair.volume_24h),
        liquidity="$" + format_number(pair.liquidity),
    )


def present_stats(stats: MarketStats) -> dict[str, str]:
    return {
        "total_pairs": str(stats.total_pairs),
        "total_volume": "$" + format_number(stats.total_volume),
        "total_liquidity": "$" + format_number(stats.total_liquidity),
        "active_wallets": str(stats.active_wallets),
        "market_cap_change": format_change(stats.market_cap_change),
    }


class DexDashboard:
    """
    State behind one dashboard screen: market data, search term, wallet, error.

    The view layer reads `view()`, calls `refresh()` to refetch and uses the
    setters for user input. Data-fetch trouble never shows up here as an
    error; only a trade without a wallet does.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        tokens: Sequence[TokenConfig],
        tracked_token_ids: Sequence[str],
        network: str = "",
    ):
        self.provider = provider
        self.tokens = list(tokens)
        self.quote_token = select_quote_token(self.tokens)
        self.tracked_token_ids = list(tracked_token_ids)
        self.network = network

        self.token_prices: tuple[PriceRecord, ...] = ()
        self.market_data: Optional[GlobalMarketSummary] = None
        self.sources: dict[str, DataSource] = {}
        self.is_loading = False
        self.search_term = ""
        self.error: Optional[str] = None
        self.wallet = WalletSession()

    async def refresh(self) -> None:
        self.is_loading = True
        try:
            global_result, prices_result = await asyncio.gather(
                self.provider.get_global_market_data(),
                self.provider.get_token_prices(self.tracked_token_ids),
            )
            self.market_data = global_result.data
            self.token_prices = tuple(prices_result.data)
            self.sources = {
                "global": _source_of(global_result),
                "prices": _source_of(prices_result),
            }
            logger.info(
                "market data refreshed | prices=%s | global=%s | rows=%d",
                prices_result.source,
                global_result.source,
                len(self.token_prices),
            )
        finally:
            self.is_loading = False

    def all_pairs(self) -> List[TradingPair]:
        return build_trading_pairs(self.tokens, self.quote_token, self.token_prices)

    def visible_pairs(self) -> List[TradingPair]:
        return filter_pairs(self.all_pairs(), self.search_term)

    def stats(self, pairs: Sequence[TradingPair] | None = None) -> MarketStats:
        if pairs is None:
            pairs = self.visible_pairs()
        return compute_market_stats(pairs, self.wallet.is_connected, self.market_data)

    def view(self) -> DashboardView:
        pairs = self.visible_pairs()
        stats = self.stats(pairs)
        return DashboardView(
            pairs=pairs,
            stats=stats,
            is_loading=self.is_loading,
            search_term=self.search_term,
            error=self.error,
            wallet=self.wallet_info(),
            sources=dict(self.sources),
            pair_display=[present_pair(p) for p in pairs],
            stats_display=present_stats(stats),
        )

    def set_search_term(self, term: str) -> None:
        self.search_term = term or ""

    def set_error(self, message: Optional[str]) -> None:
        self.error = message

    # ----------------------------
    # wallet session
    # ----------------------------
    def connect_wallet(self, address: str, balance: str = "0", network: Optional[str] = None) -> WalletInfo:
        self.wallet = WalletSession(
            address=address,
            is_connected=True,
            balance=balance,
            network=network or self.network,
        )
        return self.wallet_info()

    def disconnect_wallet(self) -> None:
        self.wallet = WalletSession()
        self.error = None

    def wallet_info(self) -> Optional[WalletInfo]:
        if not self.wallet.is_connected or not self.wallet.address:
            return None
        return WalletInfo(
            address=self.wallet.address,
            formatted_address=format_address(self.wallet.address),
            balance=format_balance(self.wallet.balance),
            network=self.wallet.network,
        )

    def handle_trade(self, pair_id: int) -> Optional[TradeTicket]:
        """
        Mock trade action. Without a connected wallet this only sets the
        user-facing error and returns None.
        """
        if not self.wallet.is_connected:
            self.set_error(CONNECT_WALLET_MESSAGE)
            return None

        pair = next((p for p in self.visible_pairs() if p.id == pair_id), None)
        if pair is None:
            raise KeyError(pair_id)

        label = f"{pair.base_token_symbol}/{pair.quote_token_symbol}"
        return TradeTicket(pair_id=pair.id, pair=label, message=f"Trade {label} - This is a mock action")
