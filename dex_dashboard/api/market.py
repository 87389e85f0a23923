from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, Request

from dex_dashboard.api.dashboard import _error_response
from dex_dashboard.config.settings import parse_csv
from dex_dashboard.services.market_data import FetchResult, MarketDataProvider


router = APIRouter(prefix="/market", tags=["market"])


def get_provider(request: Request) -> MarketDataProvider:
    return request.app.state.provider


def _provenance(result: FetchResult) -> dict[str, Any]:
    return {
        "source": result.source,
        "cached": getattr(result, "cached", False),
        "reason": getattr(result, "reason", None),
    }


@router.get("/prices")
async def get_prices(
    request: Request,
    ids: str | None = Query(None, description="Comma-separated CoinGecko ids"),
    provider: MarketDataProvider = Depends(get_provider),
):
    """
    USD market rows for the requested ids (defaults to the tracked set).
    Example: /market/prices?ids=bitcoin,ethereum
    """
    token_ids = parse_csv(ids, request.app.state.dashboard.tracked_token_ids)
    if not token_ids:
        return _error_response(
            code="empty_ids",
            message="ids must name at least one CoinGecko id",
            details={"ids": ids},
        )

    result = await provider.get_token_prices(token_ids)
    return {
        **_provenance(result),
        "ids": token_ids,
        "records": [r.model_dump() for r in result.data],
    }


@router.get("/global")
async def get_global(provider: MarketDataProvider = Depends(get_provider)):
    result = await provider.get_global_market_data()
    return {**_provenance(result), "summary": result.data.model_dump()}
