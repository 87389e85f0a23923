"""Pydantic models for the market data we read from CoinGecko."""

from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt


class PriceRecord(BaseModel):
    """One row of the CoinGecko /coins/markets payload."""

    model_config = ConfigDict(frozen=True)

    id: str
    symbol: str
    name: str
    current_price: Optional[float] = None
    price_change_percentage_24h: Optional[float] = None
    total_volume: Optional[float] = None
    market_cap: Optional[float] = None
    image: Optional[str] = None


class GlobalMarketSummary(BaseModel):
    """The `data` object of the CoinGecko /global payload, in USD."""

    model_config = ConfigDict(frozen=True)

    total_market_cap: Optional[float] = None
    # strict: a bool or numeric string is junk, not a volume
    total_volume: Optional[Union[StrictInt, StrictFloat]] = None
    market_cap_percentage: Dict[str, float] = {}
    market_cap_change_percentage_24h_usd: Optional[float] = None
