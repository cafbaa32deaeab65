from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


PERCENTAGE = "percentage"
FIXED_AMOUNT = "fixed_amount"


@dataclass(frozen=True)
class DiscountCode:
    id: str
    code: str
    discount_type: str  # "percentage" or "fixed_amount"
    discount_value: Decimal
    valid_from: datetime
    minimum_order_amount: Decimal = Decimal("0")
    maximum_discount_amount: Decimal | None = None
    usage_limit: int | None = None
    usage_count: int = 0
    valid_until: datetime | None = None
    is_active: bool = True
    description: str = ""


@dataclass(frozen=True)
class GiftCard:
    id: str
    code: str
    current_balance: Decimal
    expires_at: datetime | None = None
    is_active: bool = True


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    message: str
    amount: Decimal | None = None


@dataclass(frozen=True)
class CheckoutBreakdown:
    gross_price: Decimal
    discount_amount: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    net_price: Decimal
    final_amount: Decimal
    gift_card_amount: Decimal = Decimal("0")
    discount_type: str | None = None
    discount_code: str | None = None
    gift_card_code: str | None = None
