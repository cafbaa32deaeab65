from __future__ import annotations

import logging
from decimal import InvalidOperation
from typing import Any, Callable, TypeVar

import httpx
from postgrest.exceptions import APIError

from app.application.exceptions import UpstreamUnavailableError
from app.application.ports.pricing_repository import PricingRepositoryPort
from app.domain.entities.checkout import DiscountCode, GiftCard
from app.domain.entities.pricing_rules import DurationUpliftRule, TimeUpliftRule
from app.domain.entities.service_catalog import ServiceCatalogEntry
from app.infrastructure.store.rows import (
    discount_code_from_row,
    duration_rule_from_row,
    gift_card_from_row,
    service_from_row,
    time_rule_from_row,
)

T = TypeVar("T")

# Postgres "invalid_text_representation", e.g. a non-uuid value against a uuid column
INVALID_TEXT_REPRESENTATION = "22P02"

SERVICE_COLUMNS = "id, name, short_description, service_base_price, is_active, sort_order"


class SupabasePricingRepository(PricingRepositoryPort):
    def __init__(self, client: Any) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    def get_service(self, service_id: str) -> ServiceCatalogEntry | None:
        query = self._client.table("services").select(SERVICE_COLUMNS).eq("id", service_id).limit(1)
        try:
            rows = self._execute(query, "services")
        except UpstreamUnavailableError as e:
            if getattr(e.__cause__, "code", None) == INVALID_TEXT_REPRESENTATION:
                return None
            raise
        return self._map_one(rows, service_from_row, "services")

    def list_active_services(self) -> list[ServiceCatalogEntry]:
        query = (
            self._client.table("services")
            .select(SERVICE_COLUMNS)
            .eq("is_active", True)
            .order("sort_order")
            .order("name")
        )
        return self._map(self._execute(query, "services"), service_from_row, "services")

    def get_duration_rules(self, duration_minutes: int | None = None) -> list[DurationUpliftRule]:
        query = self._client.table("duration_pricing").select("*").eq("is_active", True)
        if duration_minutes is not None:
            query = query.eq("duration_minutes", duration_minutes)
        query = query.order("duration_minutes")
        return self._map(self._execute(query, "duration_pricing"), duration_rule_from_row, "duration_pricing")

    def get_time_rules(self, day_of_week: int) -> list[TimeUpliftRule]:
        query = (
            self._client.table("time_pricing_rules")
            .select("*")
            .eq("is_active", True)
            .eq("day_of_week", day_of_week)
        )
        return self._map(self._execute(query, "time_pricing_rules"), time_rule_from_row, "time_pricing_rules")

    def get_discount_code(self, code: str) -> DiscountCode | None:
        query = self._client.table("discount_codes").select("*").eq("code", code.strip().upper()).limit(1)
        return self._map_one(self._execute(query, "discount_codes"), discount_code_from_row, "discount_codes")

    def get_gift_card(self, code: str) -> GiftCard | None:
        query = self._client.table("gift_cards").select("*").eq("code", code.strip().upper()).limit(1)
        return self._map_one(self._execute(query, "gift_cards"), gift_card_from_row, "gift_cards")

    def _execute(self, query: Any, table: str) -> list[dict[str, Any]]:
        try:
            response = query.execute()
        except (APIError, httpx.HTTPError) as e:
            self._logger.error("Supabase query failed", extra={"table": table, "error": str(e)})
            raise UpstreamUnavailableError(f"Failed to read {table}") from e
        data = response.data
        if data is None:
            return []
        if not isinstance(data, list):
            self._logger.error("Unexpected Supabase response", extra={"table": table, "error": type(data).__name__})
            raise UpstreamUnavailableError(f"Unexpected response shape from {table}")
        return data

    def _map(self, rows: list[dict[str, Any]], mapper: Callable[[dict[str, Any]], T], table: str) -> list[T]:
        try:
            return [mapper(row) for row in rows]
        except (KeyError, TypeError, ValueError, InvalidOperation) as e:
            self._logger.error("Malformed row", extra={"table": table, "error": repr(e)})
            raise UpstreamUnavailableError(f"Malformed row in {table}") from e

    def _map_one(self, rows: list[dict[str, Any]], mapper: Callable[[dict[str, Any]], T], table: str) -> T | None:
        mapped = self._map(rows[:1], mapper, table)
        return mapped[0] if mapped else None
