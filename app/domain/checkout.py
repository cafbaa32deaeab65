"""
Checkout arithmetic: discount codes, GST and gift cards.

Order of application: discount on the gross price, GST on the discounted
amount, then gift card against the GST-inclusive total.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from app.domain.entities.checkout import (
    PERCENTAGE,
    CheckoutBreakdown,
    DiscountCode,
    GiftCard,
    ValidationResult,
)
from app.domain.pricing import HUNDRED, round_money

DEFAULT_TAX_RATE = Decimal("10")
ZERO = Decimal("0")


def calculate_discount_amount(gross_price: Decimal, discount_code: DiscountCode) -> Decimal:
    if discount_code.discount_type == PERCENTAGE:
        discount = gross_price * (discount_code.discount_value / HUNDRED)
    else:
        discount = discount_code.discount_value

    if discount_code.maximum_discount_amount:
        discount = min(discount, discount_code.maximum_discount_amount)

    return min(discount, gross_price)


def calculate_tax_amount(amount: Decimal, tax_rate: Decimal) -> Decimal:
    return round_money(amount * (tax_rate / HUNDRED))


def calculate_checkout(
    gross_price: Decimal,
    discount_code: DiscountCode | None = None,
    gift_card_amount: Decimal = ZERO,
    tax_rate: Decimal = DEFAULT_TAX_RATE,
    gift_card_code: str | None = None,
) -> CheckoutBreakdown:
    discount_amount = calculate_discount_amount(gross_price, discount_code) if discount_code else ZERO
    price_after_discount = max(ZERO, gross_price - discount_amount)

    tax_amount = calculate_tax_amount(price_after_discount, tax_rate)
    net_price = price_after_discount + tax_amount

    applied_gift_card = min(gift_card_amount, net_price)
    final_amount = max(ZERO, net_price - applied_gift_card)

    return CheckoutBreakdown(
        gross_price=gross_price,
        discount_amount=round_money(discount_amount),
        discount_type=discount_code.discount_type if discount_code else None,
        discount_code=discount_code.code if discount_code else None,
        gift_card_amount=round_money(applied_gift_card),
        gift_card_code=gift_card_code if applied_gift_card > 0 else None,
        tax_rate=tax_rate,
        tax_amount=tax_amount,
        net_price=round_money(net_price),
        final_amount=round_money(final_amount),
    )


def validate_discount_code(discount_code: DiscountCode | None, now: datetime, order_amount: Decimal) -> ValidationResult:
    if not discount_code:
        return ValidationResult(is_valid=False, message="Invalid discount code")

    if not discount_code.is_active:
        return ValidationResult(is_valid=False, message="Discount code is not active")

    if discount_code.valid_from > now:
        return ValidationResult(is_valid=False, message="Discount code not yet valid")

    if discount_code.valid_until and discount_code.valid_until < now:
        return ValidationResult(is_valid=False, message="Discount code has expired")

    if discount_code.usage_limit and discount_code.usage_count >= discount_code.usage_limit:
        return ValidationResult(is_valid=False, message="Discount code usage limit reached")

    if order_amount < discount_code.minimum_order_amount:
        return ValidationResult(
            is_valid=False,
            message=f"Order must be at least ${discount_code.minimum_order_amount:.2f} to use this code",
        )

    return ValidationResult(
        is_valid=True,
        message="Discount code valid",
        amount=round_money(calculate_discount_amount(order_amount, discount_code)),
    )


def validate_gift_card(gift_card: GiftCard | None, now: datetime) -> ValidationResult:
    if not gift_card:
        return ValidationResult(is_valid=False, message="Invalid gift card code")

    if not gift_card.is_active:
        return ValidationResult(is_valid=False, message="Gift card is not active")

    if gift_card.expires_at and gift_card.expires_at < now:
        return ValidationResult(is_valid=False, message="Gift card has expired")

    if gift_card.current_balance <= 0:
        return ValidationResult(is_valid=False, message="Gift card has no remaining balance")

    return ValidationResult(is_valid=True, message="Gift card valid", amount=gift_card.current_balance)


def format_rate(rate: Decimal) -> str:
    """Percentage without trailing zeros, e.g. 10.0 -> 10."""
    text = format(rate, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_currency(amount: Decimal) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(round_money(amount)):,.2f}"


def pricing_summary_lines(breakdown: CheckoutBreakdown) -> list[str]:
    """Human readable lines for receipts and the admin UI."""
    lines = [f"Subtotal: {format_currency(breakdown.gross_price)}"]

    if breakdown.discount_amount > 0:
        lines.append(f"Discount ({breakdown.discount_code}): -{format_currency(breakdown.discount_amount)}")

    if breakdown.tax_amount > 0:
        lines.append(f"GST ({format_rate(breakdown.tax_rate)}%): {format_currency(breakdown.tax_amount)}")

    lines.append(f"Total: {format_currency(breakdown.net_price)}")

    if breakdown.gift_card_amount > 0:
        lines.append(f"Gift Card Applied: -{format_currency(breakdown.gift_card_amount)}")
        lines.append(f"Amount Due: {format_currency(breakdown.final_amount)}")

    return lines
