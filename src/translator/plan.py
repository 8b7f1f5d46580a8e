"""
QueryPlan -- the structured intermediate representation between
natural language and SQL.  One instance per translation call.
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Aggregate = Literal["SUM", "AVG", "COUNT", "LIST"]
Operator = Literal["EQUALS", "IN_MONTH", "BETWEEN_MONTHS"]


class Filter(BaseModel):
    """One WHERE predicate: ``column <operator> value``."""

    column: str = Field(..., description="Registry column the predicate applies to")
    operator: Operator
    value: str | int = Field(..., description="Canonical value, or the (start) month number")
    end: int | None = Field(None, description="Inclusive end month for BETWEEN_MONTHS")


class QueryPlan(BaseModel):
    """Parsed representation of a request over the orders table."""

    aggregate: Aggregate = "LIST"
    metric_column: str | None = Field(None, description="Column aggregated by SUM / AVG")
    group_by_column: str | None = None
    filters: list[Filter] = Field(default_factory=list)
    limit: int | None = Field(None, description="Top-N row count")
    order_by: str | None = Field(None, description="Metric column ranked by (top-N only)")
    order_direction: Literal["DESC"] | None = None

    @property
    def is_fallback(self) -> bool:
        """True when nothing beyond 'show every row' was recognized."""
        return (
            self.aggregate == "LIST"
            and not self.filters
            and self.group_by_column is None
            and self.limit is None
        )


def fallback_plan() -> QueryPlan:
    """The LIST-all-rows plan used for empty or unrecognized input."""
    return QueryPlan()
