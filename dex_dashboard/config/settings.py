# dex_dashboard/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List


def parse_csv(value: str | None, default: List[str]) -> List[str]:
    if not value:
        return default
    items = [x.strip() for x in value.split(",")]
    return [x for x in items if x]


def parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_int(value: str | None, default: int) -> int:
    if value is None or value.strip() == "":
        return default
    return int(value)


def parse_float(value: str | None, default: float) -> float:
    if value is None or value.strip() == "":
        return default
    return float(value)


DEFAULT_TRACKED_TOKEN_IDS = ["bitcoin", "ethereum", "binancecoin", "cardano", "solana"]


@dataclass(frozen=True)
class Settings:
    COINGECKO_BASE_URL: str
    COINGECKO_TIMEOUT_SECONDS: float
    TRACKED_TOKEN_IDS: List[str]
    DEFAULT_CHAIN_ID: int
    DEDUPE_INFLIGHT: bool
    REFRESH_ON_STARTUP: bool
    LOG_LEVEL: str

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            COINGECKO_BASE_URL=os.getenv("COINGECKO_BASE_URL", "https://api.coingecko.com/api/v3").rstrip("/"),
            COINGECKO_TIMEOUT_SECONDS=parse_float(os.getenv("COINGECKO_TIMEOUT_SECONDS"), 10.0),
            TRACKED_TOKEN_IDS=parse_csv(os.getenv("TRACKED_TOKEN_IDS"), []) or list(DEFAULT_TRACKED_TOKEN_IDS),
            DEFAULT_CHAIN_ID=parse_int(os.getenv("DEFAULT_CHAIN_ID"), 42161),
            DEDUPE_INFLIGHT=parse_bool(os.getenv("DEDUPE_INFLIGHT"), True),
            REFRESH_ON_STARTUP=parse_bool(os.getenv("REFRESH_ON_STARTUP"), True),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
