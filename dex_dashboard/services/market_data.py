# dex_dashboard/services/market_data.py
from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, ClassVar, Generic, Sequence, TypeVar, Union

from dex_dashboard.models.market import GlobalMarketSummary, PriceRecord
from dex_dashboard.services.coingecko import CoinGeckoClient
from dex_dashboard.services.fallback import fallback_global_summary, fallback_token_prices
from dex_dashboard.services.validation import (
    Validation,
    validate_global_summary,
    validate_price_records,
)
from dex_dashboard.utils.cache import TTLCache

logger = logging.getLogger("dex_dashboard.market_data")

T = TypeVar("T")

GLOBAL_MARKET_KEY = "global_market_data"


def token_prices_key(token_ids: Sequence[str]) -> str:
    return "token_prices_" + ",".join(sorted(token_ids))


@dataclass(frozen=True)
class Ok(Generic[T]):
    data: T
    cached: bool = False

    source: ClassVar[str] = "live"
    is_fallback: ClassVar[bool] = False


@dataclass(frozen=True)
class Fallback(Generic[T]):
    data: T
    reason: str

    source: ClassVar[str] = "fallback"
    is_fallback: ClassVar[bool] = True


FetchResult = Union[Ok[T], Fallback[T]]


class MarketDataProvider:
    """
    Cache-aside access to CoinGecko with validated fallback.

    Never raises for provider trouble: callers always get data, tagged as
    Ok (live, possibly from cache) or Fallback (synthetic, with a reason).
    """

    def __init__(
        self,
        client: CoinGeckoClient,
        cache: TTLCache,
        *,
        dedupe_inflight: bool = True,
        rng: random.Random | None = None,
    ):
        self.client = client
        self.cache = cache
        self.dedupe_inflight = dedupe_inflight
        self._rng = rng or random.Random()
        self._inflight: dict[str, asyncio.Task] = {}

    async def get_token_prices(self, token_ids: Sequence[str]) -> FetchResult[tuple[PriceRecord, ...]]:
        ids = list(token_ids)

        # tuples, so a caller can't mutate what the cache holds
        async def fetch() -> tuple[PriceRecord, ...]:
            return tuple(await self.client.fetch_prices(ids))

        return await self._resolve(
            token_prices_key(ids),
            fetch,
            validate_price_records,
            lambda: tuple(fallback_token_prices(ids, self._rng)),
        )

    async def get_global_market_data(self) -> FetchResult[GlobalMarketSummary]:
        return await self._resolve(
            GLOBAL_MARKET_KEY,
            self.client.fetch_global_summary,
            validate_global_summary,
            fallback_global_summary,
        )

    def inflight_keys(self) -> list[str]:
        return list(self._inflight)

    async def _resolve(
        self,
        key: str,
        fetch: Callable[[], Awaitable[Any]],
        validate: Callable[[Any], Validation],
        fallback: Callable[[], Any],
    ) -> FetchResult:
        if self.cache.is_valid(key):
            entry = self.cache.get(key)
            check = validate(entry.payload)
            if check.ok:
                logger.debug("cache hit | key=%s", key)
                return Ok(entry.payload, cached=True)
            logger.warning("discarding invalid cache entry | key=%s | reason=%s", key, check.reason)

        outcome = await self._fetch_shared(key, fetch, validate)
        if isinstance(outcome, Ok):
            return outcome

        logger.warning("serving fallback data | key=%s | reason=%s", key, outcome)
        return Fallback(fallback(), reason=outcome)

    async def _fetch_shared(
        self,
        key: str,
        fetch: Callable[[], Awaitable[Any]],
        validate: Callable[[Any], Validation],
    ) -> Ok | str:
        if not self.dedupe_inflight:
            return await self._fetch_and_store(key, fetch, validate)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch_and_store(key, fetch, validate))
            self._inflight[key] = task
            task.add_done_callback(lambda t, k=key: self._forget(k, t))
        else:
            logger.debug("joining in-flight fetch | key=%s", key)

        # a cancelled waiter must not cancel the shared fetch
        return await asyncio.shield(task)

    def _forget(self, key: str, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    async def _fetch_and_store(
        self,
        key: str,
        fetch: Callable[[], Awaitable[Any]],
        validate: Callable[[Any], Validation],
    ) -> Ok | str:
        """Return Ok on success, otherwise a failure reason. Never raises."""
        try:
            data = await fetch()
            validate(data).raise_for_invalid()
        except Exception as exc:
            logger.warning("provider fetch failed | key=%s | err=%r", key, exc, exc_info=True)
            return f"{type(exc).__name__}: {exc}"

        self.cache.put(key, data)
        logger.debug("cache write | key=%s", key)
        return Ok(data, cached=False)
