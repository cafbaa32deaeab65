from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field

from app.application.exceptions import InvalidParameterError, MissingParameterError
from app.application.utils.local_time import parse_timestamp

DEFAULT_DURATION_MINUTES = 60

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_duration(raw: str | int | None, default: int = DEFAULT_DURATION_MINUTES) -> int:
    """Read the leading integer of a duration ("90", "90min"). Falls back to the default."""
    if raw is None:
        return default
    if isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INT.match(raw)
        if not match:
            return default
        value = int(match.group(1))
    return value if value > 0 else default


def _require(name: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise MissingParameterError(name)
    return value.strip()


def _parse_booking_time(name: str, value: str, timezone: ZoneInfo) -> datetime:
    try:
        return parse_timestamp(value, timezone)
    except ValueError:
        raise InvalidParameterError(name, value)


class PriceRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    service_id: str
    booking_time: datetime  # local, tz-aware
    duration_minutes: int = Field(default=DEFAULT_DURATION_MINUTES, gt=0)

    @classmethod
    def from_query(
        cls,
        service_id: str | None,
        booking_time: str | None,
        duration: str | int | None,
        timezone: ZoneInfo,
        default_duration: int = DEFAULT_DURATION_MINUTES,
    ) -> "PriceRequest":
        # booking_time is checked first so reschedule and new-booking requests report the same error
        raw_time = _require("booking_time", booking_time)
        sid = _require("service_id", service_id)
        return cls(
            service_id=sid,
            booking_time=_parse_booking_time("booking_time", raw_time, timezone),
            duration_minutes=parse_duration(duration, default_duration),
        )


class RescheduleRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    booking_time: datetime
    original_booking_time: datetime
    original_price: Decimal

    @classmethod
    def from_query(
        cls,
        booking_time: str | None,
        original_price: str,
        original_booking_time: str,
        timezone: ZoneInfo,
    ) -> "RescheduleRequest":
        raw_time = _require("booking_time", booking_time)
        try:
            price = Decimal(original_price.strip())
        except InvalidOperation:
            raise InvalidParameterError("original_price", original_price)
        if not price.is_finite() or price < 0:
            raise InvalidParameterError("original_price", original_price)
        return cls(
            booking_time=_parse_booking_time("booking_time", raw_time, timezone),
            original_booking_time=_parse_booking_time("original_booking_time", original_booking_time, timezone),
            original_price=price,
        )


class CheckoutRequest(BaseModel):
    gross_price: Decimal = Field(ge=0)
    discount_code: str | None = None
    gift_card_code: str | None = None
    tax_rate: Decimal | None = Field(default=None, ge=0)
