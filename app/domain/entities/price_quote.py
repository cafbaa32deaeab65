from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PriceBreakdown:
    base_price: Decimal
    service: str
    duration: int
    duration_uplift: Decimal = Decimal("0")
    time_uplift: Decimal = Decimal("0")
    time_uplift_label: str | None = None


@dataclass(frozen=True)
class PriceQuote:
    price: Decimal
    breakdown: PriceBreakdown


@dataclass(frozen=True)
class RescheduleQuote:
    price: Decimal
    price_difference: Decimal
    original_price: Decimal
    original_uplift: Decimal
    new_uplift: Decimal
    time_uplift_label: str | None = None
