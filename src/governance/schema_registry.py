"""
Loads, parses, and caches the schema registry YAML into strongly-typed objects.

The registry is the single source of truth for:
  - the one queryable table and its ordered columns
  - semantic column types (integer, decimal, text, date, categorical)
  - the closed set of canonical values for categorical columns
  - metric columns and their aggregate aliases
  - the derived month / year columns used for date filtering
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from functools import lru_cache
from typing import Any

import yaml

_REGISTRY_PATH = Path(__file__).resolve().parents[2] / "semantic_layer" / "orders.yml"

COLUMN_TYPES = ("integer", "decimal", "text", "date", "categorical")


# ── Typed domain objects ─────────────────────────────────

@dataclass(frozen=True)
class Column:
    name: str
    type: str
    label: str = ""
    plural: str = ""
    is_dimension: bool = False
    is_metric: bool = False
    values: tuple[str, ...] = ()
    derived_from: str | None = None
    month_number_expression: str | None = None

    @property
    def is_categorical(self) -> bool:
        return self.type == "categorical"


@dataclass(frozen=True)
class SchemaRegistry:
    """Fully parsed description of the queryable table."""

    version: int
    table: str
    columns: tuple[Column, ...]
    default_metric: str
    metric_aliases: dict[str, dict[str, str]] = field(default_factory=dict)
    count_alias: str = "order_count"
    max_limit: int = 1000

    # ── Convenience look-ups ─────────────────────────

    def column(self, name: str) -> Column | None:
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def get_column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    def categorical_columns(self) -> list[Column]:
        return [c for c in self.columns if c.is_categorical]

    def dimension_columns(self) -> list[Column]:
        return [c for c in self.columns if c.is_dimension]

    def metric_columns(self) -> list[Column]:
        return [c for c in self.columns if c.is_metric]

    @property
    def month_column(self) -> Column:
        for col in self.columns:
            if col.month_number_expression:
                return col
        raise LookupError("Schema registry defines no derived month column")

    @property
    def year_column(self) -> Column:
        for col in self.columns:
            if col.derived_from and col.type == "integer":
                return col
        raise LookupError("Schema registry defines no derived year column")

    def metric_alias(self, metric: str, aggregate: str) -> str:
        """Readable output name for *aggregate* applied to *metric*."""
        if aggregate == "COUNT":
            return self.count_alias
        return self.metric_aliases.get(metric, {}).get(aggregate, f"{aggregate.lower()}_{metric}")

    def get_columns_list(self) -> list[dict[str, Any]]:
        """Return columns as a list of dicts (for API responses)."""
        result = []
        for c in self.columns:
            result.append({
                "name": c.name,
                "type": c.type,
                "dimension": c.is_dimension,
                "metric": c.is_metric,
                "values": list(c.values),
            })
        return result


# ── Parsing ──────────────────────────────────────────────

def _parse_column(raw: dict[str, Any]) -> Column:
    col_type = raw["type"]
    if col_type not in COLUMN_TYPES:
        raise ValueError(f"Column '{raw['name']}' has unknown type '{col_type}'")
    return Column(
        name=raw["name"],
        type=col_type,
        label=raw.get("label", raw["name"]),
        plural=raw.get("plural", raw["name"]),
        is_dimension=raw.get("dimension", False),
        is_metric=raw.get("metric", False),
        values=tuple(raw.get("values") or ()),
        derived_from=raw.get("derived_from"),
        month_number_expression=raw.get("month_number_expression"),
    )


def _parse_registry(raw_yaml: dict[str, Any]) -> SchemaRegistry:
    metrics = raw_yaml.get("metrics") or {}
    security = raw_yaml.get("security") or {}
    return SchemaRegistry(
        version=raw_yaml.get("version", 1),
        table=raw_yaml["table"],
        columns=tuple(_parse_column(c) for c in raw_yaml.get("columns", [])),
        default_metric=metrics.get("default", "amount"),
        metric_aliases=metrics.get("aliases") or {},
        count_alias=metrics.get("count_alias", "order_count"),
        max_limit=security.get("max_limit", 1000),
    )


# ── Public API ───────────────────────────────────────────

@lru_cache
def load_schema_registry() -> SchemaRegistry:
    """Load and cache the schema registry from YAML."""
    with open(_REGISTRY_PATH) as f:
        raw = yaml.safe_load(f)
    return _parse_registry(raw)
