# dex_dashboard/api/dashboard.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from dex_dashboard.schemas.dashboard import (
    DashboardView,
    ErrorRequest,
    SearchRequest,
    TradeRequest,
    TradeTicket,
    WalletConnectRequest,
    WalletInfo,
)
from dex_dashboard.services.dashboard import DexDashboard


router = APIRouter(tags=["dashboard"])


def get_dashboard(request: Request) -> DexDashboard:
    return request.app.state.dashboard


def _error_response(
    *,
    code: str,
    message: str,
    status_code: int = 400,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    payload: dict[str, Any] = {"error": {"code": code, "message": message}}
    if details:
        payload["error"]["details"] = details
    return JSONResponse(status_code=status_code, content=payload)


@router.get("/dashboard", response_model=DashboardView)
async def read_dashboard(dashboard: DexDashboard = Depends(get_dashboard)):
    return dashboard.view()


@router.post("/dashboard/refresh", response_model=DashboardView)
async def refresh_dashboard(dashboard: DexDashboard = Depends(get_dashboard)):
    await dashboard.refresh()
    return dashboard.view()


@router.put("/dashboard/search", response_model=DashboardView)
async def update_search(body: SearchRequest, dashboard: DexDashboard = Depends(get_dashboard)):
    dashboard.set_search_term(body.term)
    return dashboard.view()


@router.put("/dashboard/error", response_model=DashboardView)
async def update_error(body: ErrorRequest, dashboard: DexDashboard = Depends(get_dashboard)):
    dashboard.set_error(body.message)
    return dashboard.view()


@router.post("/dashboard/trade", response_model=TradeTicket)
async def trade(body: TradeRequest, dashboard: DexDashboard = Depends(get_dashboard)):
    try:
        ticket = dashboard.handle_trade(body.pair_id)
    except KeyError:
        return _error_response(
            code="pair_not_found",
            message=f"No visible trading pair with id {body.pair_id}",
            status_code=404,
            details={"pair_id": body.pair_id},
        )

    if ticket is None:
        return _error_response(code="wallet_not_connected", message=dashboard.error or "")
    return ticket


@router.get("/wallet")
async def read_wallet(dashboard: DexDashboard = Depends(get_dashboard)) -> dict[str, Any]:
    info = dashboard.wallet_info()
    return {
        "connected": info is not None,
        "wallet": info.model_dump() if info else None,
    }


@router.post("/wallet/connect", response_model=WalletInfo)
async def connect_wallet(body: WalletConnectRequest, dashboard: DexDashboard = Depends(get_dashboard)):
    return dashboard.connect_wallet(body.address, body.balance, body.network)


@router.post("/wallet/disconnect")
async def disconnect_wallet(dashboard: DexDashboard = Depends(get_dashboard)) -> dict[str, bool]:
    dashboard.disconnect_wallet()
    return {"connected": False}
