"""
Sample orders dataset -- deterministic synthetic rows for the embedded engine.

Generates ``dataset_size`` orders spread over 2024-01-01 … 2025-12-31 across
the registry's regions and categories, placed by a fixed pool of customers.
Same seed, same rows.
"""
from __future__ import annotations

import random
from datetime import date, timedelta
from typing import Any

from faker import Faker

from src.governance.schema_registry import load_schema_registry

# ── Tunables ─────────────────────────────────────────────
NUM_CUSTOMERS = 25
MAX_QUANTITY = 10
DATE_START = date(2024, 1, 1)
DATE_END = date(2025, 12, 31)
DATE_RANGE_DAYS = (DATE_END - DATE_START).days

# per-unit price band by category
PRICE_BANDS: dict[str, tuple[float, float]] = {
    "Electronics": (40.0, 900.0),
    "Grocery": (2.0, 40.0),
    "Clothing": (10.0, 120.0),
    "Furniture": (60.0, 700.0),
    "Office Supplies": (3.0, 80.0),
    "Sports": (8.0, 250.0),
}
_DEFAULT_BAND = (5.0, 100.0)


def generate_orders(count: int, seed: int = 42) -> list[dict[str, Any]]:
    """Return *count* order dicts with the base (non-derived) columns."""
    registry = load_schema_registry()
    regions = list(registry.column("region").values)
    categories = list(registry.column("category").values)

    rng = random.Random(seed)
    fake = Faker()
    fake.seed_instance(seed)
    customers = [fake.unique.company() for _ in range(NUM_CUSTOMERS)]

    orders: list[dict[str, Any]] = []
    for order_id in range(1, count + 1):
        category = rng.choice(categories)
        low, high = PRICE_BANDS.get(category, _DEFAULT_BAND)
        quantity = rng.randint(1, MAX_QUANTITY)
        order_date = DATE_START + timedelta(days=rng.randint(0, DATE_RANGE_DAYS))
        orders.append({
            "id": order_id,
            "customer": rng.choice(customers),
            "region": rng.choice(regions),
            "category": category,
            "amount": round(rng.uniform(low, high) * quantity, 2),
            "quantity": quantity,
            "order_date": order_date.isoformat(),
        })
    return orders


def with_derived_columns(order: dict[str, Any]) -> dict[str, Any]:
    """Add ``order_month`` (YYYY-MM) and ``order_year`` derived from ``order_date``."""
    order_date = order["order_date"]
    return {**order, "order_month": order_date[:7], "order_year": int(order_date[:4])}
