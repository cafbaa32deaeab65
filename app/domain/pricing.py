from __future__ import annotations

from datetime import time
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from app.domain.entities.pricing_rules import END_OF_DAY, DurationUpliftRule, TimeUpliftMatch, TimeUpliftRule

BASELINE_MINUTES = 60
CENTS = Decimal("0.01")
HUNDRED = Decimal("100")


def round_money(amount: Decimal) -> Decimal:
    """Round to cents, half away from zero."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def apply_uplift(amount: Decimal, uplift_percentage: Decimal) -> Decimal:
    return amount * (1 + uplift_percentage / HUNDRED)


def scale_to_duration(amount: Decimal, duration_minutes: int) -> Decimal:
    """Scale a per-hour amount to the requested duration."""
    return amount * Decimal(duration_minutes) / BASELINE_MINUTES


def find_duration_rule(rules: Iterable[DurationUpliftRule], duration_minutes: int) -> DurationUpliftRule | None:
    """Exact match on duration only. No interpolation between durations."""
    for rule in rules:
        if rule.is_active and rule.duration_minutes == duration_minutes:
            return rule
    return None


def minutes_of_day(value: time) -> int:
    if value == END_OF_DAY:
        return 24 * 60
    return value.hour * 60 + value.minute


def rule_matches(rule: TimeUpliftRule, time_of_day: str) -> bool:
    # Half-open [start, end). Windows with end before start never match.
    hours, minutes = time_of_day.split(":")
    booked = int(hours) * 60 + int(minutes)
    return minutes_of_day(rule.start_time) <= booked < minutes_of_day(rule.end_time)


def select_time_uplift(rules: Iterable[TimeUpliftRule], day_of_week: int, time_of_day: str) -> TimeUpliftMatch:
    """Pick the highest matching uplift for a day (0 = Sunday) and HH:MM time."""
    matching = [
        rule
        for rule in rules
        if rule.is_active and rule.day_of_week == day_of_week and rule_matches(rule, time_of_day)
    ]
    matching = [rule for rule in matching if rule.uplift_percentage > 0]
    if not matching:
        return TimeUpliftMatch()

    winner = min(
        matching,
        key=lambda r: (-r.uplift_percentage, r.start_time, r.id or "", r.label),
    )
    return TimeUpliftMatch(uplift_percentage=winner.uplift_percentage, label=winner.label)
