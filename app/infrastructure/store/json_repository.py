from __future__ import annotations

import json
import logging
from pathlib import Path

from app.infrastructure.store.memory_repository import MemoryPricingRepository
from app.infrastructure.store.rows import (
    discount_code_from_row,
    duration_rule_from_row,
    gift_card_from_row,
    service_from_row,
    time_rule_from_row,
)


class JsonPricingRepository(MemoryPricingRepository):
    """
    Read-only repository backed by a JSON export of the pricing tables.

    The file holds one list of rows per table, keyed by table name, in the
    same shape the Supabase REST API returns them.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        with open(self._path, "r", encoding="utf-8") as f:
            data = json.load(f)

        super().__init__(
            services=[service_from_row(r) for r in data.get("services", [])],
            duration_rules=[duration_rule_from_row(r) for r in data.get("duration_pricing", [])],
            time_rules=[time_rule_from_row(r) for r in data.get("time_pricing_rules", [])],
            discount_codes=[discount_code_from_row(r) for r in data.get("discount_codes", [])],
            gift_cards=[gift_card_from_row(r) for r in data.get("gift_cards", [])],
        )
        logging.getLogger(__name__).info("Loaded pricing fixture", extra={"path": str(self._path)})
