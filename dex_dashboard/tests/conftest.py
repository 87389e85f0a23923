from __future__ import annotations

import asyncio
from typing import Any

import pytest

from dex_dashboard.config.tokens import TokenConfig
from dex_dashboard.models.market import GlobalMarketSummary, PriceRecord


class FakeClock:
    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCoinGecko:
    """Stands in for CoinGeckoClient; records calls and can fail or block."""

    def __init__(
        self,
        prices: list[Any] | None = None,
        summary: Any = None,
        prices_exc: Exception | None = None,
        global_exc: Exception | None = None,
        gate: asyncio.Event | None = None,
    ):
        self.prices = prices if prices is not None else []
        self.summary = summary
        self.prices_exc = prices_exc
        self.global_exc = global_exc
        self.gate = gate
        self.price_calls: list[list[str]] = []
        self.global_calls = 0

    async def fetch_prices(self, token_ids):
        self.price_calls.append(list(token_ids))
        if self.gate is not None:
            await self.gate.wait()
        if self.prices_exc is not None:
            raise self.prices_exc
        return list(self.prices)

    async def fetch_global_summary(self):
        self.global_calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.global_exc is not None:
            raise self.global_exc
        return self.summary


def make_record(
    symbol: str,
    *,
    name: str | None = None,
    price: float = 1.0,
    volume: float = 1.0,
    market_cap: float = 10.0,
    change: float = 0.0,
) -> PriceRecord:
    return PriceRecord(
        id=(name or symbol).lower(),
        symbol=symbol.lower(),
        name=name or symbol.title(),
        current_price=price,
        price_change_percentage_24h=change,
        total_volume=volume,
        market_cap=market_cap,
        image=f"https://img.example/{symbol.lower()}.png",
    )


def make_token(symbol: str, **flags: Any) -> TokenConfig:
    return TokenConfig(
        symbol=symbol,
        name=flags.pop("name", symbol.title()),
        address=f"0x{symbol.lower():0>40}",
        decimals=flags.pop("decimals", 18),
        image_url=f"https://tokens.example/{symbol.lower()}.png",
        **flags,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def summary() -> GlobalMarketSummary:
    return GlobalMarketSummary(
        total_market_cap=2.5e12,
        total_volume=9.0e10,
        market_cap_percentage={"btc": 52.0, "eth": 17.0},
        market_cap_change_percentage_24h_usd=-1.25,
    )


@pytest.fixture()
def e2e_tokens() -> list[TokenConfig]:
    return [
        make_token("USDC", name="USD Coin", decimals=6, is_stable=True),
        make_token("ETH", name="Ethereum"),
        make_token("WBTC", name="Wrapped Bitcoin", decimals=8, is_wrapped=True),
        make_token("SOL", name="Solana", decimals=9),
    ]


@pytest.fixture()
def e2e_prices() -> list[PriceRecord]:
    return [
        make_record("ETH", name="Ethereum", price=3000, volume=1e10, market_cap=4e11),
        make_record("SOL", name="Solana", price=150, volume=2e9, market_cap=6e10),
    ]
