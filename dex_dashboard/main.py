# dex_dashboard/main.py
from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI

from dex_dashboard.api.dashboard import router as dashboard_router
from dex_dashboard.api.health import router as health_router
from dex_dashboard.api.market import router as market_router

from dex_dashboard.config.logging_setup import configure_logging
from dex_dashboard.config.settings import Settings, get_settings
from dex_dashboard.config.tokens import get_network_label, get_whitelisted_tokens

from dex_dashboard.services.coingecko import CoinGeckoClient
from dex_dashboard.services.dashboard import DexDashboard
from dex_dashboard.services.market_data import MarketDataProvider
from dex_dashboard.utils.cache import TTLCache

logger = logging.getLogger("dex_dashboard.main")


def build_dashboard(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DexDashboard:
    """Assemble client -> cache -> provider -> dashboard. One cache per process."""
    client = CoinGeckoClient(
        base_url=settings.COINGECKO_BASE_URL,
        timeout=settings.COINGECKO_TIMEOUT_SECONDS,
        transport=transport,
    )
    provider = MarketDataProvider(client, TTLCache(), dedupe_inflight=settings.DEDUPE_INFLIGHT)
    return DexDashboard(
        provider,
        tokens=get_whitelisted_tokens(settings.DEFAULT_CHAIN_ID),
        tracked_token_ids=settings.TRACKED_TOKEN_IDS,
        network=get_network_label(settings.DEFAULT_CHAIN_ID),
    )


app = FastAPI(title="DEX Dashboard API")

# Routers
app.include_router(health_router)
app.include_router(market_router)
app.include_router(dashboard_router)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "DEX Dashboard"}


@app.on_event("startup")
async def on_startup() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    dashboard = build_dashboard(settings)
    app.state.dashboard = dashboard
    app.state.provider = dashboard.provider

    logger.info(
        "dashboard ready | chain_id=%s | tokens=%d | tracked=%s",
        settings.DEFAULT_CHAIN_ID,
        len(dashboard.tokens),
        ",".join(dashboard.tracked_token_ids),
    )

    if settings.REFRESH_ON_STARTUP:
        await dashboard.refresh()
