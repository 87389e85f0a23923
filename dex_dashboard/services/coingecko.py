"""Helpers for interacting with the public CoinGecko API."""

from __future__ import annotations

import logging
from typing import Any, Iterable

import httpx
from pydantic import ValidationError

from dex_dashboard.models.market import GlobalMarketSummary, PriceRecord

logger = logging.getLogger("dex_dashboard.coingecko")

COINGECKO_BASE_URL = "https://api.coingecko.com/api/v3"


class ProviderError(RuntimeError):
    """Any failure talking to the market-data provider."""


class TransportError(ProviderError):
    pass


class HttpStatusError(ProviderError):
    def __init__(self, status_code: int, url: str):
        super().__init__(f"CoinGecko returned HTTP {status_code} for {url}")
        self.status_code = status_code
        self.url = url


class ParseError(ProviderError):
    pass


def _usd_value(value: Any) -> Any:
    # /global reports per-currency maps; keep plain numbers as they are.
    if isinstance(value, dict):
        return value.get("usd")
    return value


class CoinGeckoClient:
    """
    Thin async client for the two CoinGecko reads the dashboard needs.

    One attempt per call, no retries. Every failure surfaces as a ProviderError.
    """

    def __init__(
        self,
        base_url: str = COINGECKO_BASE_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise TransportError(f"Unable to reach CoinGecko: {exc!r}") from exc

        if not response.is_success:
            raise HttpStatusError(response.status_code, url)

        try:
            return response.json()
        except ValueError as exc:
            raise ParseError(f"CoinGecko returned a non-JSON body for {url}") from exc

    async def fetch_prices(self, token_ids: Iterable[str]) -> list[PriceRecord]:
        """Return USD market rows for the given CoinGecko ids."""

        params = {
            "vs_currency": "usd",
            "ids": ",".join(token_ids),
            "order": "market_cap_desc",
            "per_page": 100,
            "page": 1,
            "sparkline": "false",
        }
        payload = await self._get_json("/coins/markets", params=params)

        if not isinstance(payload, list):
            raise ParseError(f"Expected a JSON array from /coins/markets, got {type(payload).__name__}")

        records: list[PriceRecord] = []
        for item in payload:
            if not isinstance(item, dict):
                raise ParseError(f"Unexpected market row: {item!r}")
            try:
                records.append(PriceRecord(**item))
            except ValidationError as exc:
                raise ParseError(f"Malformed market row for {item.get('id')!r}") from exc

        logger.debug("fetched prices | ids=%s | rows=%d", params["ids"], len(records))
        return records

    async def fetch_global_summary(self) -> GlobalMarketSummary:
        payload = await self._get_json("/global")

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise ParseError("Expected {'data': {...}} from /global")

        try:
            return GlobalMarketSummary(
                total_market_cap=_usd_value(data.get("total_market_cap")),
                total_volume=_usd_value(data.get("total_volume")),
                market_cap_percentage=data.get("market_cap_percentage") or {},
                market_cap_change_percentage_24h_usd=data.get("market_cap_change_percentage_24h_usd"),
            )
        except ValidationError as exc:
            raise ParseError("Malformed /global payload") from exc
