from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from app.application.dto.price_request import PriceRequest
from app.application.exceptions import ServiceNotFoundError
from app.application.ports.pricing_repository import PricingRepositoryPort
from app.application.utils.local_time import day_of_week, time_of_day
from app.domain.entities.price_quote import PriceBreakdown, PriceQuote
from app.domain.entities.pricing_rules import TimeUpliftMatch
from app.domain.pricing import (
    apply_uplift,
    find_duration_rule,
    round_money,
    scale_to_duration,
    select_time_uplift,
)

logger = logging.getLogger(__name__)


def lookup_time_uplift(repository: PricingRepositoryPort, booking_time: datetime) -> TimeUpliftMatch:
    """Highest active time-of-day uplift for a local booking time."""
    dow = day_of_week(booking_time)
    hhmm = time_of_day(booking_time)
    rules = repository.get_time_rules(dow)
    match = select_time_uplift(rules, dow, hhmm)
    logger.debug(
        "Time uplift resolved",
        extra={"day_of_week": dow, "time": hhmm, "rule_count": len(rules), "uplift": match.uplift_percentage, "label": match.label},
    )
    return match


class CalculatePriceUseCase:
    def __init__(self, repository: PricingRepositoryPort) -> None:
        self._repository = repository
        self._logger = logging.getLogger(__name__)

    def execute(self, request: PriceRequest) -> PriceQuote:
        service = self._repository.get_service(request.service_id)
        if service is None:
            self._logger.info("Service not found", extra={"service_id": request.service_id})
            raise ServiceNotFoundError(request.service_id)

        duration = request.duration_minutes
        price = service.base_price

        duration_uplift = Decimal("0")
        rule = find_duration_rule(self._repository.get_duration_rules(duration), duration)
        if rule and rule.uplift_percentage > 0:
            duration_uplift = rule.uplift_percentage
            price = apply_uplift(price, rule.uplift_percentage)

        price = scale_to_duration(price, duration)

        time_uplift = lookup_time_uplift(self._repository, request.booking_time)
        if time_uplift.uplift_percentage > 0:
            price = apply_uplift(price, time_uplift.uplift_percentage)

        final_price = round_money(price)
        self._logger.info(
            "Price calculated",
            extra={
                "service_id": service.id,
                "duration": duration,
                "uplift": time_uplift.uplift_percentage,
                "label": time_uplift.label,
                "price": final_price,
            },
        )
        return PriceQuote(
            price=final_price,
            breakdown=PriceBreakdown(
                base_price=service.base_price,
                service=service.name,
                duration=duration,
                duration_uplift=duration_uplift,
                time_uplift=time_uplift.uplift_percentage,
                time_uplift_label=time_uplift.label,
            ),
        )
