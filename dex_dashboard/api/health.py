# dex_dashboard/api/health.py
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])

APP_STARTED_AT = time.time()


def _now_meta() -> Dict[str, Any]:
    now_ts = time.time()
    now_dt = datetime.fromtimestamp(now_ts, tz=timezone.utc)
    return {
        "now_unix": int(now_ts),
        "now_iso": now_dt.isoformat().replace("+00:00", "Z"),
        "uptime_s": int(now_ts - APP_STARTED_AT),
    }


@router.get("/health")
async def health(request: Request) -> Dict[str, Any]:
    """
    Liveness plus a view of the cache and where the last data came from.
    Always 200: a CoinGecko outage degrades to fallback data, not downtime.
    """
    provider = request.app.state.provider
    dashboard = request.app.state.dashboard
    cache = provider.cache

    entries = {}
    for key in cache.keys():
        age = cache.age(key)
        entries[key] = {
            "age_s": round(age, 3) if age is not None else None,
            "valid": cache.is_valid(key),
        }

    return {
        "ok": True,
        **_now_meta(),
        "cache": {"ttl_s": cache.ttl, "size": len(cache), "entries": entries},
        "inflight": provider.inflight_keys(),
        "sources": {k: v.model_dump() for k, v in dashboard.sources.items()},
        "is_loading": dashboard.is_loading,
    }
