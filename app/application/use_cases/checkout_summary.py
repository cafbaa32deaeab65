from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable
from zoneinfo import ZoneInfo

from app.application.dto.price_request import CheckoutRequest
from app.application.ports.pricing_repository import PricingRepositoryPort
from app.domain.checkout import (
    DEFAULT_TAX_RATE,
    calculate_checkout,
    pricing_summary_lines,
    validate_discount_code,
    validate_gift_card,
)
from app.domain.entities.checkout import CheckoutBreakdown, ValidationResult


@dataclass(frozen=True)
class CheckoutResult:
    breakdown: CheckoutBreakdown
    summary: list[str]
    discount_validation: ValidationResult | None = None
    gift_card_validation: ValidationResult | None = None


class CheckoutSummaryUseCase:
    def __init__(
        self,
        repository: PricingRepositoryPort,
        timezone: ZoneInfo,
        default_tax_rate: Decimal = DEFAULT_TAX_RATE,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._repository = repository
        self._default_tax_rate = default_tax_rate
        self._clock = clock or (lambda: datetime.now(timezone))
        self._logger = logging.getLogger(__name__)

    def execute(self, request: CheckoutRequest) -> CheckoutResult:
        now = self._clock()
        tax_rate = request.tax_rate if request.tax_rate is not None else self._default_tax_rate

        discount = None
        discount_validation = None
        if request.discount_code and request.discount_code.strip():
            code = self._repository.get_discount_code(request.discount_code.strip())
            discount_validation = validate_discount_code(code, now, request.gross_price)
            if discount_validation.is_valid:
                discount = code
            else:
                self._logger.info(
                    "Discount code rejected",
                    extra={"code": request.discount_code, "reason": discount_validation.message},
                )

        gift_card_amount = Decimal("0")
        gift_card_code = None
        gift_card_validation = None
        if request.gift_card_code and request.gift_card_code.strip():
            card = self._repository.get_gift_card(request.gift_card_code.strip())
            gift_card_validation = validate_gift_card(card, now)
            if gift_card_validation.is_valid and card is not None:
                gift_card_amount = card.current_balance
                gift_card_code = card.code
            else:
                self._logger.info(
                    "Gift card rejected",
                    extra={"code": request.gift_card_code, "reason": gift_card_validation.message},
                )

        breakdown = calculate_checkout(
            request.gross_price,
            discount_code=discount,
            gift_card_amount=gift_card_amount,
            tax_rate=tax_rate,
            gift_card_code=gift_card_code,
        )
        return CheckoutResult(
            breakdown=breakdown,
            summary=pricing_summary_lines(breakdown),
            discount_validation=discount_validation,
            gift_card_validation=gift_card_validation,
        )
