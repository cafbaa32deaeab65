from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from decimal import Decimal

# Postgres stores end-of-day as "24:00", which datetime.time cannot hold
END_OF_DAY = time.max


@dataclass(frozen=True)
class DurationUpliftRule:
    duration_minutes: int
    uplift_percentage: Decimal
    is_active: bool = True
    id: str | None = None


@dataclass(frozen=True)
class TimeUpliftRule:
    day_of_week: int  # 0 = Sunday
    start_time: time
    end_time: time  # exclusive, END_OF_DAY for "24:00"
    uplift_percentage: Decimal
    label: str
    is_active: bool = True
    id: str | None = None


@dataclass(frozen=True)
class TimeUpliftMatch:
    uplift_percentage: Decimal = Decimal("0")
    label: str | None = None
