from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TradingPair(BaseModel):
    """A base/quote pair as shown in the dashboard table."""

    model_config = ConfigDict(frozen=True)

    id: int
    base_token: str
    quote_token: str
    base_token_symbol: str
    quote_token_symbol: str
    price: float
    price_change_24h: float
    volume_24h: float
    liquidity: float
    base_token_address: str
    quote_token_address: str
    base_token_decimals: int
    quote_token_decimals: int
    base_token_logo: str
    quote_token_logo: str


class MarketStats(BaseModel):
    """Summary figures over the pairs currently on screen."""

    total_pairs: int
    total_volume: float
    total_liquidity: float
    active_wallets: int
    market_cap_change: float


class WalletInfo(BaseModel):
    address: str
    formatted_address: str
    balance: str
    network: str


class DataSource(BaseModel):
    source: Optional[str] = None
    cached: bool = False
    reason: Optional[str] = None


class PairDisplay(BaseModel):
    pair: str
    price: str
    change: str
    volume: str
    liquidity: str


class DashboardView(BaseModel):
    pairs: List[TradingPair]
    stats: MarketStats
    is_loading: bool
    search_term: str
    error: Optional[str] = None
    wallet: Optional[WalletInfo] = None
    sources: Dict[str, DataSource] = {}
    pair_display: List[PairDisplay] = []
    stats_display: Dict[str, str] = {}


class TradeTicket(BaseModel):
    pair_id: int
    pair: str
    message: str


class SearchRequest(BaseModel):
    term: str = ""


class ErrorRequest(BaseModel):
    message: Optional[str] = None


class TradeRequest(BaseModel):
    pair_id: int = Field(..., ge=1)


class WalletConnectRequest(BaseModel):
    address: str = Field(..., min_length=1)
    balance: str = "0"
    network: Optional[str] = None
