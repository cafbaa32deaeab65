from __future__ import annotations

import logging
from decimal import Decimal

from app.application.dto.price_request import RescheduleRequest
from app.application.ports.pricing_repository import PricingRepositoryPort
from app.application.use_cases.calculate_price import lookup_time_uplift
from app.domain.entities.price_quote import RescheduleQuote
from app.domain.pricing import HUNDRED, apply_uplift, round_money


class ReschedulePriceUseCase:
    """
    Price a move of an existing booking to a new time.

    Starts from the price already charged and only adds the increase in
    time-of-day uplift. Duration cannot change on reschedule, so no duration
    scaling happens here. A cheaper slot keeps the original price.
    """

    def __init__(self, repository: PricingRepositoryPort) -> None:
        self._repository = repository
        self._logger = logging.getLogger(__name__)

    def execute(self, request: RescheduleRequest) -> RescheduleQuote:
        original = lookup_time_uplift(self._repository, request.original_booking_time)
        new = lookup_time_uplift(self._repository, request.booking_time)

        new_price = request.original_price
        difference = Decimal("0")

        if new.uplift_percentage > original.uplift_percentage:
            base_price = request.original_price / (1 + original.uplift_percentage / HUNDRED)
            new_price = apply_uplift(base_price, new.uplift_percentage)
            difference = new_price - request.original_price

        self._logger.info(
            "Reschedule priced",
            extra={
                "original_uplift": original.uplift_percentage,
                "uplift": new.uplift_percentage,
                "label": new.label,
                "price": round_money(new_price),
            },
        )
        return RescheduleQuote(
            price=round_money(new_price),
            price_difference=round_money(difference),
            original_price=request.original_price,
            original_uplift=original.uplift_percentage,
            new_uplift=new.uplift_percentage,
            time_uplift_label=new.label,
        )
