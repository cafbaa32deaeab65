"""
Tests for turning raw query parameters into typed pricing requests.
"""

from __future__ import annotations

from datetime import time
from decimal import Decimal

import pytest

from app.application.dto.price_request import PriceRequest, RescheduleRequest, parse_duration
from app.application.exceptions import InvalidParameterError, MissingParameterError
from app.application.utils.local_time import day_of_week, parse_time_of_day, parse_timestamp, time_of_day
from app.domain.entities.pricing_rules import END_OF_DAY

from tests.conftest import BRISBANE


def test_parse_duration_defaults_and_leading_integer():
    assert parse_duration(None) == 60
    assert parse_duration("") == 60
    assert parse_duration("abc") == 60
    assert parse_duration("90") == 90
    assert parse_duration(" 120 ") == 120
    assert parse_duration("90min") == 90
    assert parse_duration("90.5") == 90
    assert parse_duration(45) == 45


def test_parse_duration_rejects_non_positive():
    assert parse_duration("0") == 60
    assert parse_duration("-30") == 60
    assert parse_duration(0) == 60


def test_day_of_week_starts_on_sunday():
    assert day_of_week(parse_timestamp("2025-01-12T10:00", BRISBANE)) == 0  # Sunday
    assert day_of_week(parse_timestamp("2025-01-13T10:00", BRISBANE)) == 1  # Monday
    assert day_of_week(parse_timestamp("2025-01-11T10:00", BRISBANE)) == 6  # Saturday


def test_timestamps_are_read_in_business_time():
    # 08:30 UTC on Friday is 18:30 Friday in Brisbane
    local = parse_timestamp("2025-01-10T08:30:00Z", BRISBANE)
    assert time_of_day(local) == "18:30"
    assert day_of_week(local) == 5

    # late UTC Saturday is already Sunday morning in Brisbane
    local = parse_timestamp("2025-01-11T20:00:00+00:00", BRISBANE)
    assert day_of_week(local) == 0
    assert time_of_day(local) == "06:00"


def test_naive_timestamp_is_already_local():
    local = parse_timestamp("2025-01-10T18:30:00", BRISBANE)
    assert time_of_day(local) == "18:30"
    assert local.tzinfo == BRISBANE


def test_unencoded_plus_in_offset():
    local = parse_timestamp("2025-01-10T18:30:00 10:00", BRISBANE)
    assert time_of_day(local) == "18:30"
    # a plain "date time" value is not mistaken for an offset
    local = parse_timestamp("2025-01-10 18:30", BRISBANE)
    assert time_of_day(local) == "18:30"


def test_compact_offsets_and_odd_fractions():
    assert time_of_day(parse_timestamp("2025-01-10T08:30:00 0000", BRISBANE)) == "18:30"
    assert time_of_day(parse_timestamp("2025-01-10T18:30:00.5+10:00", BRISBANE)) == "18:30"


def test_parse_time_of_day_drops_seconds():
    assert parse_time_of_day("17:00:00") == time(17, 0)
    assert parse_time_of_day("09:30") == time(9, 30)
    assert parse_time_of_day(time(8, 15, 42)) == time(8, 15)
    assert parse_time_of_day("24:00:00") == END_OF_DAY
    assert parse_time_of_day("24:00") == END_OF_DAY


def test_price_request_from_query():
    request = PriceRequest.from_query("relax", "2025-01-10T18:30:00", "90", BRISBANE)
    assert request.service_id == "relax"
    assert request.duration_minutes == 90
    assert time_of_day(request.booking_time) == "18:30"


def test_price_request_missing_fields():
    with pytest.raises(MissingParameterError) as exc:
        PriceRequest.from_query(None, "2025-01-10T18:30:00", None, BRISBANE)
    assert exc.value.parameter == "service_id"
    assert "service_id" in str(exc.value)

    with pytest.raises(MissingParameterError) as exc:
        PriceRequest.from_query("relax", "  ", None, BRISBANE)
    assert exc.value.parameter == "booking_time"


def test_price_request_bad_timestamp():
    with pytest.raises(InvalidParameterError) as exc:
        PriceRequest.from_query("relax", "next friday", None, BRISBANE)
    assert exc.value.parameter == "booking_time"


def test_reschedule_request_parsing():
    request = RescheduleRequest.from_query("2025-01-11T10:00", "115.00", "2025-01-13T10:00", BRISBANE)
    assert request.original_price == Decimal("115.00")

    with pytest.raises(InvalidParameterError):
        RescheduleRequest.from_query("2025-01-11T10:00", "lots", "2025-01-13T10:00", BRISBANE)

    with pytest.raises(InvalidParameterError):
        RescheduleRequest.from_query("2025-01-11T10:00", "NaN", "2025-01-13T10:00", BRISBANE)

    with pytest.raises(MissingParameterError):
        RescheduleRequest.from_query(None, "115.00", "2025-01-13T10:00", BRISBANE)
