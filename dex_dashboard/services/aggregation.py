"""
Turn the token whitelist and CoinGecko price rows into dashboard pairs/stats.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence

from dex_dashboard.config.tokens import TokenConfig
from dex_dashboard.models.market import GlobalMarketSummary, PriceRecord
from dex_dashboard.schemas.dashboard import MarketStats, TradingPair

MAX_PAIRS = 4
LIQUIDITY_MARKET_CAP_RATIO = 0.1
PREFERRED_QUOTE_SYMBOLS = ("USDC", "USDT")


def select_quote_token(tokens: Sequence[TokenConfig]) -> Optional[TokenConfig]:
    for symbol in PREFERRED_QUOTE_SYMBOLS:
        for token in tokens:
            if token.symbol == symbol:
                return token
    return next((t for t in tokens if t.is_stable), None)


def find_price_record(token: TokenConfig, prices: Iterable[PriceRecord]) -> Optional[PriceRecord]:
    """
    First record whose symbol equals the token symbol, or whose name contains it
    (both case-insensitive).
    """
    symbol = token.symbol.lower()
    for record in prices:
        if record.symbol.lower() == symbol or symbol in record.name.lower():
            return record
    return None


def eligible_base_tokens(
    tokens: Sequence[TokenConfig],
    quote: TokenConfig,
    max_pairs: int = MAX_PAIRS,
) -> List[TokenConfig]:
    candidates = [
        t for t in tokens
        if t.symbol != quote.symbol and not t.is_wrapped and not t.is_temp_hidden
    ]
    return candidates[:max_pairs]


def build_trading_pairs(
    tokens: Sequence[TokenConfig],
    quote: Optional[TokenConfig],
    prices: Sequence[PriceRecord],
    max_pairs: int = MAX_PAIRS,
) -> List[TradingPair]:
    if not tokens or quote is None or not prices:
        return []

    pairs: List[TradingPair] = []
    for base in eligible_base_tokens(tokens, quote, max_pairs):
        record = find_price_record(base, prices)
        if record is None:
            continue

        pairs.append(
            TradingPair(
                id=len(pairs) + 1,
                base_token=base.name,
                quote_token=quote.name,
                base_token_symbol=base.symbol,
                quote_token_symbol=quote.symbol,
                price=record.current_price or 0.0,
                price_change_24h=record.price_change_percentage_24h or 0.0,
                volume_24h=record.total_volume or 0.0,
                # not fetched; estimated from market cap
                liquidity=(record.market_cap or 0.0) * LIQUIDITY_MARKET_CAP_RATIO,
                base_token_address=base.address,
                quote_token_address=quote.address,
                base_token_decimals=base.decimals,
                quote_token_decimals=quote.decimals,
                base_token_logo=record.image or base.image_url or "",
                quote_token_logo=quote.image_url or "",
            )
        )
    return pairs


def filter_pairs(pairs: Iterable[TradingPair], search_term: str) -> List[TradingPair]:
    term = (search_term or "").lower()
    return [
        p for p in pairs
        if term in p.base_token_symbol.lower() or term in p.quote_token_symbol.lower()
    ]


def _safe_sum(values: Iterable[float]) -> float:
    total = sum(v or 0.0 for v in values)
    return 0.0 if math.isnan(total) else total


def compute_market_stats(
    pairs: Sequence[TradingPair],
    wallet_connected: bool,
    summary: Optional[GlobalMarketSummary] = None,
) -> MarketStats:
    """Stats for the given (already filtered) pairs."""
    change = summary.market_cap_change_percentage_24h_usd if summary is not None else None
    return MarketStats(
        total_pairs=len(pairs),
        total_volume=_safe_sum(p.volume_24h for p in pairs),
        total_liquidity=_safe_sum(p.liquidity for p in pairs),
        active_wallets=1 if wallet_connected else 0,
        market_cap_change=change or 0.0,
    )
