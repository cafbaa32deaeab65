"""
Shared fixtures: an in-memory pricing catalog and an API client wired to it.
"""

from __future__ import annotations

from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from app.application.use_cases.calculate_price import CalculatePriceUseCase
from app.application.use_cases.checkout_summary import CheckoutSummaryUseCase
from app.application.use_cases.list_services import ListServicesUseCase
from app.application.use_cases.reschedule_price import ReschedulePriceUseCase
from app.application.utils.local_time import parse_time_of_day
from app.domain.entities.pricing_rules import DurationUpliftRule, TimeUpliftRule
from app.domain.entities.service_catalog import ServiceCatalogEntry
from app.infrastructure.store.memory_repository import MemoryPricingRepository
from app.main import app
from app.wiring.dependencies import (
    get_calculate_price_use_case,
    get_checkout_summary_use_case,
    get_list_services_use_case,
    get_reschedule_price_use_case,
    get_timezone,
)

# Brisbane has no daylight saving, so local clock times are stable in tests
BRISBANE = ZoneInfo("Australia/Brisbane")

# Calendar anchors (January 2025, local time)
FRIDAY = "2025-01-10"
SATURDAY = "2025-01-11"
SUNDAY = "2025-01-12"
MONDAY = "2025-01-13"


def time_rule(day: int, start: str, end: str, uplift: str, label: str, rule_id: str | None = None, active: bool = True) -> TimeUpliftRule:
    return TimeUpliftRule(
        day_of_week=day,
        start_time=parse_time_of_day(start),
        end_time=parse_time_of_day(end),
        uplift_percentage=Decimal(uplift),
        label=label,
        is_active=active,
        id=rule_id,
    )


@pytest.fixture
def repository() -> MemoryPricingRepository:
    return MemoryPricingRepository(
        services=[
            ServiceCatalogEntry(id="relax", name="Relaxation Massage", base_price=Decimal("100"), sort_order=1),
            ServiceCatalogEntry(id="remedial", name="Remedial Massage", base_price=Decimal("80"), sort_order=2),
        ],
        duration_rules=[
            DurationUpliftRule(duration_minutes=90, uplift_percentage=Decimal("10"), id="d90"),
            DurationUpliftRule(duration_minutes=120, uplift_percentage=Decimal("15"), id="d120", is_active=False),
        ],
        time_rules=[
            time_rule(5, "17:00", "21:00", "20", "Evening Premium", "t-evening"),
            time_rule(6, "09:00", "18:00", "15", "Weekend", "t-sat"),
            time_rule(6, "12:00", "14:00", "25", "Saturday Peak", "t-sat-peak"),
            time_rule(0, "00:00", "23:59", "20", "Sunday", "t-sun"),
        ],
    )


@pytest.fixture
def client(repository):
    app.dependency_overrides[get_timezone] = lambda: BRISBANE
    app.dependency_overrides[get_calculate_price_use_case] = lambda: CalculatePriceUseCase(repository=repository)
    app.dependency_overrides[get_reschedule_price_use_case] = lambda: ReschedulePriceUseCase(repository=repository)
    app.dependency_overrides[get_list_services_use_case] = lambda: ListServicesUseCase(repository=repository)
    app.dependency_overrides[get_checkout_summary_use_case] = lambda: CheckoutSummaryUseCase(
        repository=repository, timezone=BRISBANE
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
