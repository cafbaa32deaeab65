"""Map Supabase/PostgREST rows (plain dicts) to domain entities."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any
from zoneinfo import ZoneInfo

from app.application.utils.local_time import parse_time_of_day, parse_timestamp
from app.domain.entities.checkout import DiscountCode, GiftCard
from app.domain.entities.pricing_rules import DurationUpliftRule, TimeUpliftRule
from app.domain.entities.service_catalog import ServiceCatalogEntry

UTC = ZoneInfo("UTC")


def to_decimal(value: Any) -> Decimal:
    # numeric columns come back as int, float or str depending on the driver
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def _optional_decimal(value: Any) -> Decimal | None:
    return None if value is None else Decimal(str(value))


def _optional_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    return parse_timestamp(str(value), UTC)


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def service_from_row(row: dict[str, Any]) -> ServiceCatalogEntry:
    return ServiceCatalogEntry(
        id=str(row["id"]),
        name=str(row["name"]),
        base_price=to_decimal(row["service_base_price"]),
        short_description=row.get("short_description"),
        is_active=bool(row.get("is_active", True)),
        sort_order=row.get("sort_order"),
    )


def duration_rule_from_row(row: dict[str, Any]) -> DurationUpliftRule:
    return DurationUpliftRule(
        duration_minutes=int(row["duration_minutes"]),
        uplift_percentage=to_decimal(row.get("uplift_percentage")),
        is_active=bool(row.get("is_active", True)),
        id=_optional_str(row.get("id")),
    )


def time_rule_from_row(row: dict[str, Any]) -> TimeUpliftRule:
    return TimeUpliftRule(
        day_of_week=int(row["day_of_week"]),
        start_time=parse_time_of_day(row["start_time"]),
        end_time=parse_time_of_day(row["end_time"]),
        uplift_percentage=to_decimal(row.get("uplift_percentage")),
        label=str(row.get("label") or ""),
        is_active=bool(row.get("is_active", True)),
        id=_optional_str(row.get("id")),
    )


def discount_code_from_row(row: dict[str, Any]) -> DiscountCode:
    return DiscountCode(
        id=str(row["id"]),
        code=str(row["code"]),
        discount_type=str(row["discount_type"]),
        discount_value=to_decimal(row["discount_value"]),
        minimum_order_amount=to_decimal(row.get("minimum_order_amount")),
        maximum_discount_amount=_optional_decimal(row.get("maximum_discount_amount")),
        usage_limit=row.get("usage_limit"),
        usage_count=int(row.get("usage_count") or 0),
        valid_from=_optional_datetime(row.get("valid_from")) or datetime.min.replace(tzinfo=UTC),
        valid_until=_optional_datetime(row.get("valid_until")),
        is_active=bool(row.get("is_active", True)),
        description=str(row.get("description") or ""),
    )


def gift_card_from_row(row: dict[str, Any]) -> GiftCard:
    return GiftCard(
        id=str(row["id"]),
        code=str(row["code"]),
        current_balance=to_decimal(row.get("current_balance")),
        expires_at=_optional_datetime(row.get("expires_at")),
        is_active=bool(row.get("is_active", True)),
    )
