from __future__ import annotations

import asyncio
import math

import pytest

from conftest import FakeCoinGecko, make_record
from dex_dashboard.models.market import GlobalMarketSummary
from dex_dashboard.services.coingecko import HttpStatusError, TransportError
from dex_dashboard.services.fallback import FALLBACK_GLOBAL
from dex_dashboard.services.market_data import (
    GLOBAL_MARKET_KEY,
    Fallback,
    MarketDataProvider,
    Ok,
    token_prices_key,
)
from dex_dashboard.utils.cache import TTLCache


def _provider(client, clock=None, **kwargs) -> MarketDataProvider:
    cache = TTLCache(clock=clock) if clock is not None else TTLCache()
    return MarketDataProvider(client, cache, **kwargs)


def test_price_key_is_order_independent():
    assert token_prices_key(["solana", "bitcoin"]) == token_prices_key(["bitcoin", "solana"])
    assert token_prices_key(["bitcoin"]) == "token_prices_bitcoin"


@pytest.mark.asyncio
async def test_live_fetch_is_cached_and_reused(clock):
    client = FakeCoinGecko(prices=[make_record("BTC", name="Bitcoin")])
    provider = _provider(client, clock)

    first = await provider.get_token_prices(["bitcoin"])
    second = await provider.get_token_prices(["bitcoin"])

    assert isinstance(first, Ok) and first.cached is False
    assert isinstance(second, Ok) and second.cached is True
    assert second.data == first.data
    assert second.source == "live"
    assert client.price_calls == [["bitcoin"]]


@pytest.mark.asyncio
async def test_cache_ttl_boundary(clock):
    client = FakeCoinGecko(prices=[make_record("BTC", name="Bitcoin")])
    provider = _provider(client, clock)

    await provider.get_token_prices(["bitcoin"])

    clock.advance(299.999)
    await provider.get_token_prices(["bitcoin"])
    assert len(client.price_calls) == 1

    clock.advance(0.002)
    result = await provider.get_token_prices(["bitcoin"])
    assert len(client.price_calls) == 2
    assert isinstance(result, Ok) and result.cached is False


@pytest.mark.asyncio
async def test_empty_live_list_is_never_returned_as_live():
    client = FakeCoinGecko(prices=[])
    provider = _provider(client)

    result = await provider.get_token_prices(["bitcoin", "ethereum"])

    assert isinstance(result, Fallback)
    assert result.source == "fallback"
    assert "empty" in result.reason
    assert [r.symbol for r in result.data] == ["BITCOIN", "ETHEREUM"]
    assert provider.cache.get(token_prices_key(["bitcoin", "ethereum"])) is None


@pytest.mark.asyncio
async def test_empty_cached_list_is_discarded_and_refetched(clock):
    client = FakeCoinGecko(prices=[make_record("BTC", name="Bitcoin")])
    provider = _provider(client, clock)
    provider.cache.put(token_prices_key(["bitcoin"]), ())

    result = await provider.get_token_prices(["bitcoin"])

    assert isinstance(result, Ok)
    assert result.cached is False
    assert len(client.price_calls) == 1


@pytest.mark.asyncio
async def test_empty_cached_list_with_failing_provider_gives_fallback(clock):
    client = FakeCoinGecko(prices_exc=TransportError("dns failure"))
    provider = _provider(client, clock)
    provider.cache.put(token_prices_key(["bitcoin"]), ())

    result = await provider.get_token_prices(["bitcoin"])

    assert isinstance(result, Fallback)
    assert len(result.data) == 1


@pytest.mark.asyncio
async def test_provider_error_gives_fallback_and_is_not_cached():
    client = FakeCoinGecko(prices_exc=HttpStatusError(503, "https://cg.test/coins/markets"))
    provider = _provider(client)

    result = await provider.get_token_prices(["bitcoin"])
    again = await provider.get_token_prices(["bitcoin"])

    assert isinstance(result, Fallback)
    assert result.reason.startswith("HttpStatusError")
    assert isinstance(again, Fallback)
    assert len(client.price_calls) == 2
    assert len(provider.cache) == 0


@pytest.mark.asyncio
async def test_unexpected_exception_also_falls_back():
    client = FakeCoinGecko(prices_exc=KeyError("current_price"))
    result = await _provider(client).get_token_prices(["solana"])
    assert isinstance(result, Fallback)
    assert result.data[0].symbol == "SOLANA"


@pytest.mark.asyncio
async def test_returned_prices_are_immutable_tuples():
    client = FakeCoinGecko(prices=[make_record("BTC", name="Bitcoin")])
    result = await _provider(client).get_token_prices(["bitcoin"])
    assert isinstance(result.data, tuple)


@pytest.mark.asyncio
async def test_global_summary_live_and_cached(summary):
    client = FakeCoinGecko(summary=summary)
    provider = _provider(client)

    first = await provider.get_global_market_data()
    second = await provider.get_global_market_data()

    assert isinstance(first, Ok) and first.data == summary
    assert isinstance(second, Ok) and second.cached is True
    assert client.global_calls == 1
    assert provider.cache.is_valid(GLOBAL_MARKET_KEY)


@pytest.mark.asyncio
async def test_global_summary_with_nan_volume_falls_back():
    client = FakeCoinGecko(summary=GlobalMarketSummary(total_volume=math.nan))
    provider = _provider(client)

    result = await provider.get_global_market_data()

    assert isinstance(result, Fallback)
    assert result.data == FALLBACK_GLOBAL
    assert "ShapeValidationError" in result.reason
    assert provider.cache.get(GLOBAL_MARKET_KEY) is None


@pytest.mark.asyncio
async def test_global_summary_without_volume_falls_back():
    client = FakeCoinGecko(summary=GlobalMarketSummary(total_market_cap=1e12))
    result = await _provider(client).get_global_market_data()
    assert isinstance(result, Fallback)
    assert "missing" in result.reason


@pytest.mark.asyncio
async def test_concurrent_misses_share_one_fetch():
    gate = asyncio.Event()
    client = FakeCoinGecko(prices=[make_record("BTC", name="Bitcoin")], gate=gate)
    provider = _provider(client)

    first = asyncio.create_task(provider.get_token_prices(["bitcoin"]))
    second = asyncio.create_task(provider.get_token_prices(["bitcoin"]))
    await asyncio.sleep(0)
    assert provider.inflight_keys() == [token_prices_key(["bitcoin"])]

    gate.set()
    a, b = await asyncio.gather(first, second)

    assert len(client.price_calls) == 1
    assert isinstance(a, Ok) and isinstance(b, Ok)
    assert a.data == b.data
    assert provider.inflight_keys() == []


@pytest.mark.asyncio
async def test_concurrent_misses_without_dedupe_each_fetch():
    gate = asyncio.Event()
    client = FakeCoinGecko(prices=[make_record("BTC", name="Bitcoin")], gate=gate)
    provider = _provider(client, dedupe_inflight=False)

    tasks = [asyncio.create_task(provider.get_token_prices(["bitcoin"])) for _ in range(2)]
    await asyncio.sleep(0)
    gate.set()
    await asyncio.gather(*tasks)

    assert len(client.price_calls) == 2


@pytest.mark.asyncio
async def test_failure_in_one_kind_does_not_affect_the_other(summary):
    client = FakeCoinGecko(
        summary=summary,
        prices_exc=TransportError("connection reset"),
    )
    provider = _provider(client)

    global_result, prices_result = await asyncio.gather(
        provider.get_global_market_data(),
        provider.get_token_prices(["bitcoin"]),
    )

    assert isinstance(global_result, Ok)
    assert global_result.data == summary
    assert isinstance(prices_result, Fallback)
