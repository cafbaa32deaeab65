from __future__ import annotations

from typing import Iterable

from app.application.ports.pricing_repository import PricingRepositoryPort
from app.domain.entities.checkout import DiscountCode, GiftCard
from app.domain.entities.pricing_rules import DurationUpliftRule, TimeUpliftRule
from app.domain.entities.service_catalog import ServiceCatalogEntry


class MemoryPricingRepository(PricingRepositoryPort):
    def __init__(
        self,
        services: Iterable[ServiceCatalogEntry] = (),
        duration_rules: Iterable[DurationUpliftRule] = (),
        time_rules: Iterable[TimeUpliftRule] = (),
        discount_codes: Iterable[DiscountCode] = (),
        gift_cards: Iterable[GiftCard] = (),
    ) -> None:
        self._services = {s.id: s for s in services}
        self._duration_rules = list(duration_rules)
        self._time_rules = list(time_rules)
        self._discount_codes = {c.code.upper(): c for c in discount_codes}
        self._gift_cards = {c.code.upper(): c for c in gift_cards}

    def get_service(self, service_id: str) -> ServiceCatalogEntry | None:
        return self._services.get(service_id)

    def list_active_services(self) -> list[ServiceCatalogEntry]:
        active = [s for s in self._services.values() if s.is_active]
        return sorted(active, key=lambda s: (s.sort_order is None, s.sort_order or 0, s.name))

    def get_duration_rules(self, duration_minutes: int | None = None) -> list[DurationUpliftRule]:
        return [
            r
            for r in self._duration_rules
            if r.is_active and (duration_minutes is None or r.duration_minutes == duration_minutes)
        ]

    def get_time_rules(self, day_of_week: int) -> list[TimeUpliftRule]:
        return [r for r in self._time_rules if r.is_active and r.day_of_week == day_of_week]

    def get_discount_code(self, code: str) -> DiscountCode | None:
        return self._discount_codes.get(code.strip().upper())

    def get_gift_card(self, code: str) -> GiftCard | None:
        return self._gift_cards.get(code.strip().upper())
