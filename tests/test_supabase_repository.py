"""
Tests for the Supabase repository against a fake PostgREST query builder.
"""

from __future__ import annotations

from datetime import time
from decimal import Decimal
from typing import Any

import httpx
import pytest
from postgrest.exceptions import APIError

from app.application.dto.price_request import PriceRequest
from app.application.exceptions import UpstreamUnavailableError
from app.application.use_cases.calculate_price import CalculatePriceUseCase
from app.domain.entities.pricing_rules import END_OF_DAY
from app.infrastructure.database.pricing_repository import SupabasePricingRepository

from tests.conftest import BRISBANE, FRIDAY


class FakeResponse:
    def __init__(self, data: Any) -> None:
        self.data = data


class FakeQuery:
    def __init__(self, client: "FakeClient", table: str) -> None:
        self._client = client
        self.table = table
        self.calls: list[tuple] = []

    def __getattr__(self, name: str):
        if name not in {"select", "eq", "order", "limit"}:
            raise AttributeError(name)

        def record(*args, **kwargs):
            self.calls.append((name, *args))
            return self

        return record

    def execute(self) -> FakeResponse:
        self._client.queries.append(self)
        outcome = self._client.tables[self.table]
        if isinstance(outcome, Exception):
            raise outcome
        return FakeResponse(outcome)


class FakeClient:
    def __init__(self, **tables: Any) -> None:
        self.tables = tables
        self.queries: list[FakeQuery] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


def test_get_service_maps_row():
    client = FakeClient(services=[{"id": "svc-1", "name": "Relaxation", "service_base_price": 99.5, "sort_order": 1}])
    repo = SupabasePricingRepository(client)

    service = repo.get_service("svc-1")

    assert service.id == "svc-1"
    assert service.base_price == Decimal("99.5")
    assert ("eq", "id", "svc-1") in client.queries[0].calls


def test_get_service_missing_returns_none():
    repo = SupabasePricingRepository(FakeClient(services=[]))
    assert repo.get_service("svc-404") is None


def test_malformed_service_id_is_not_found():
    error = APIError({"message": "invalid input syntax for type uuid", "code": "22P02"})
    repo = SupabasePricingRepository(FakeClient(services=error))
    assert repo.get_service("not-a-uuid") is None


def test_api_error_is_upstream_failure():
    error = APIError({"message": "permission denied", "code": "42501"})
    repo = SupabasePricingRepository(FakeClient(services=error))
    with pytest.raises(UpstreamUnavailableError):
        repo.get_service("svc-1")


def test_network_error_is_upstream_failure():
    repo = SupabasePricingRepository(FakeClient(time_pricing_rules=httpx.ConnectError("connection refused")))
    with pytest.raises(UpstreamUnavailableError):
        repo.get_time_rules(5)


def test_time_rules_filtered_by_day_and_normalised():
    client = FakeClient(
        time_pricing_rules=[
            {
                "id": 7,
                "day_of_week": "5",
                "start_time": "17:00:00",
                "end_time": "21:00:00",
                "uplift_percentage": "20.00",
                "label": "Evening Premium",
                "is_active": True,
            }
        ]
    )
    rules = SupabasePricingRepository(client).get_time_rules(5)

    assert rules[0].start_time == time(17, 0)
    assert rules[0].day_of_week == 5
    assert rules[0].uplift_percentage == Decimal("20.00")
    assert rules[0].id == "7"
    calls = client.queries[0].calls
    assert ("eq", "is_active", True) in calls
    assert ("eq", "day_of_week", 5) in calls


def test_end_of_day_rule_loads_and_prices():
    client = FakeClient(
        services=[{"id": "svc-1", "name": "Relaxation", "service_base_price": 100}],
        duration_pricing=[],
        time_pricing_rules=[
            {"id": 9, "day_of_week": 5, "start_time": "18:00:00", "end_time": "24:00:00", "uplift_percentage": 20, "label": "Late"}
        ],
    )
    repo = SupabasePricingRepository(client)

    assert repo.get_time_rules(5)[0].end_time == END_OF_DAY

    request = PriceRequest.from_query("svc-1", f"{FRIDAY}T19:00", None, BRISBANE)
    quote = CalculatePriceUseCase(repo).execute(request)
    assert quote.price == Decimal("120.00")
    assert quote.breakdown.time_uplift_label == "Late"


def test_duration_rules_filter_by_exact_duration():
    client = FakeClient(duration_pricing=[{"id": 2, "duration_minutes": 90, "uplift_percentage": 10, "is_active": True}])
    rules = SupabasePricingRepository(client).get_duration_rules(90)

    assert rules[0].duration_minutes == 90
    assert ("eq", "duration_minutes", 90) in client.queries[0].calls


def test_malformed_rule_row_is_upstream_failure():
    client = FakeClient(time_pricing_rules=[{"day_of_week": 1, "start_time": "late", "end_time": "21:00"}])
    with pytest.raises(UpstreamUnavailableError):
        SupabasePricingRepository(client).get_time_rules(1)


def test_unexpected_response_shape():
    client = FakeClient(duration_pricing={"duration_minutes": 90})
    with pytest.raises(UpstreamUnavailableError):
        SupabasePricingRepository(client).get_duration_rules()


def test_discount_code_lookup_is_upper_cased():
    client = FakeClient(
        discount_codes=[
            {
                "id": "dc",
                "code": "WELCOME10",
                "discount_type": "percentage",
                "discount_value": 10,
                "valid_from": "2024-01-01T00:00:00+00:00",
                "usage_count": None,
            }
        ]
    )
    code = SupabasePricingRepository(client).get_discount_code(" welcome10 ")

    assert code.code == "WELCOME10"
    assert code.usage_count == 0
    assert code.valid_until is None
    assert ("eq", "code", "WELCOME10") in client.queries[0].calls


def test_list_active_services_orders_results():
    client = FakeClient(services=[{"id": "a", "name": "A", "service_base_price": "80"}])
    services = SupabasePricingRepository(client).list_active_services()

    assert [s.id for s in services] == ["a"]
    calls = client.queries[0].calls
    assert ("order", "sort_order") in calls
    assert ("order", "name") in calls
