from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.checkout import DiscountCode, GiftCard
from app.domain.entities.pricing_rules import DurationUpliftRule, TimeUpliftRule
from app.domain.entities.service_catalog import ServiceCatalogEntry


class PricingRepositoryPort(ABC):
    @abstractmethod
    def get_service(self, service_id: str) -> ServiceCatalogEntry | None:
        """Get a service by id. Returns None if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    def list_active_services(self) -> list[ServiceCatalogEntry]:
        """Active services ordered by sort_order, then name."""
        raise NotImplementedError

    @abstractmethod
    def get_duration_rules(self, duration_minutes: int | None = None) -> list[DurationUpliftRule]:
        """Active duration rules, optionally only those for an exact duration."""
        raise NotImplementedError

    @abstractmethod
    def get_time_rules(self, day_of_week: int) -> list[TimeUpliftRule]:
        """Active time-of-day rules for a day (0 = Sunday)."""
        raise NotImplementedError

    @abstractmethod
    def get_discount_code(self, code: str) -> DiscountCode | None:
        raise NotImplementedError

    @abstractmethod
    def get_gift_card(self, code: str) -> GiftCard | None:
        raise NotImplementedError
