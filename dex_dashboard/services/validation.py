from __future__ import annotations

import math
from dataclasses import dataclass
from collections.abc import Sequence
from typing import Any

from dex_dashboard.models.market import GlobalMarketSummary


class ShapeValidationError(ValueError):
    """Payload parsed fine but is empty or carries a non-numeric volume."""


@dataclass(frozen=True)
class Validation:
    ok: bool
    reason: str | None = None

    def raise_for_invalid(self) -> None:
        if not self.ok:
            raise ShapeValidationError(self.reason or "invalid payload")


VALID = Validation(ok=True)


def validate_price_records(payload: Any) -> Validation:
    if not isinstance(payload, Sequence) or isinstance(payload, (str, bytes)):
        return Validation(False, f"price list must be a sequence, got {type(payload).__name__}")
    if len(payload) == 0:
        return Validation(False, "price list is empty")
    return VALID


def validate_global_summary(payload: Any) -> Validation:
    if not isinstance(payload, GlobalMarketSummary):
        return Validation(False, f"expected GlobalMarketSummary, got {type(payload).__name__}")

    volume = payload.total_volume
    if volume is None:
        return Validation(False, "total_volume is missing")
    if isinstance(volume, bool) or not isinstance(volume, (int, float)):
        return Validation(False, f"total_volume is not numeric: {volume!r}")
    if not math.isfinite(volume):
        return Validation(False, f"total_volume is not finite: {volume!r}")
    return VALID
