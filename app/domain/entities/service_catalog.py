from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ServiceCatalogEntry:
    id: str
    name: str
    base_price: Decimal  # per 60 minutes
    short_description: str | None = None
    is_active: bool = True
    sort_order: int | None = None
