"""
Synthetic market data used when CoinGecko is unavailable or returns junk.

Values are random, but each recognised token draws from its own range so
fallback rows stay plausible (bitcoin volume dwarfs an unknown token's).
"""

from __future__ import annotations

import random
from typing import Dict, Iterable, Tuple

from dex_dashboard.models.market import GlobalMarketSummary, PriceRecord

Range = Tuple[float, float]

# (total_volume range, market_cap range)
_TOKEN_RANGES: Dict[str, Tuple[Range, Range]] = {
    "bitcoin": ((2e10, 7e10), (1e12, 3e12)),
    "ethereum": ((1.5e10, 5.5e10), (4e11, 1.2e12)),
    "binancecoin": ((5e8, 2.5e9), (5e10, 1.5e11)),
}
_ALIASES = {"btc": "bitcoin", "eth": "ethereum", "bnb": "binancecoin"}
_DEFAULT_RANGES: Tuple[Range, Range] = ((1e9, 1.1e10), (1e11, 6e11))

PRICE_RANGE: Range = (100.0, 5100.0)
CHANGE_RANGE: Range = (-5.0, 5.0)

FALLBACK_IMAGE = "https://assets.coingecko.com/coins/images/1/large/bitcoin.png"

FALLBACK_GLOBAL = GlobalMarketSummary(
    total_market_cap=1234567890123,
    total_volume=987654321098,
    market_cap_percentage={"btc": 50.1, "eth": 18.2},
    market_cap_change_percentage_24h_usd=2.5,
)


def token_ranges(token_id: str) -> Tuple[Range, Range]:
    key = token_id.lower()
    key = _ALIASES.get(key, key)
    return _TOKEN_RANGES.get(key, _DEFAULT_RANGES)


def fallback_token_prices(token_ids: Iterable[str], rng: random.Random | None = None) -> list[PriceRecord]:
    rng = rng or random.Random()
    records = []
    for token_id in token_ids:
        (vol_lo, vol_hi), (cap_lo, cap_hi) = token_ranges(token_id)
        records.append(
            PriceRecord(
                id=token_id,
                symbol=token_id.upper(),
                name=token_id[:1].upper() + token_id[1:],
                current_price=rng.uniform(*PRICE_RANGE),
                price_change_percentage_24h=rng.uniform(*CHANGE_RANGE),
                total_volume=rng.uniform(vol_lo, vol_hi),
                market_cap=rng.uniform(cap_lo, cap_hi),
                image=FALLBACK_IMAGE,
            )
        )
    return records


def fallback_global_summary() -> GlobalMarketSummary:
    return FALLBACK_GLOBAL
