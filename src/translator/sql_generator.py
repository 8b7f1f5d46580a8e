"""
SQL Generator -- renders a QueryPlan into a single-line SQL SELECT string.

Grammar subset: SELECT / FROM / WHERE / GROUP BY / ORDER BY / LIMIT with
SUM, AVG, COUNT aggregates and equality / BETWEEN predicates.  Table and
column names come from the schema registry; string literals are always
quote-escaped before interpolation.
"""
from __future__ import annotations

from src.translator.plan import Filter, QueryPlan
from src.governance.schema_registry import load_schema_registry, SchemaRegistry
from src.core.logging import get_logger

logger = get_logger(__name__)


def quote_literal(value: str) -> str:
    """Render *value* as a SQL string literal, doubling embedded quotes."""
    return "'" + value.replace("'", "''") + "'"


def aggregate_alias(plan: QueryPlan, registry: SchemaRegistry) -> str | None:
    """Output column name of the plan's aggregate expression (None for LIST)."""
    if plan.aggregate == "LIST":
        return None
    if plan.aggregate == "COUNT":
        return registry.count_alias
    if plan.limit is not None:
        return registry.metric_alias(plan.metric_column, "RANK")
    return registry.metric_alias(plan.metric_column, plan.aggregate)


def _aggregate_expression(plan: QueryPlan) -> str:
    if plan.aggregate == "COUNT":
        return "COUNT(*)"
    return f"{plan.aggregate}({plan.metric_column})"


def render_filter(f: Filter, registry: SchemaRegistry) -> str:
    """Render one filter as a WHERE predicate."""
    if f.operator == "EQUALS":
        if isinstance(f.value, int):
            return f"{f.column} = {int(f.value)}"
        return f"{f.column} = {quote_literal(str(f.value))}"

    month_expr = registry.column(f.column).month_number_expression
    if f.operator == "IN_MONTH":
        return f"{month_expr} = {int(f.value)}"
    return f"{month_expr} BETWEEN {int(f.value)} AND {int(f.end)}"


def generate_sql(plan: QueryPlan, registry: SchemaRegistry | None = None) -> str:
    """Build the SQL SELECT for *plan*."""
    if registry is None:
        registry = load_schema_registry()

    alias = aggregate_alias(plan, registry)

    # ── SELECT clause ────────────────────────────────
    select_parts: list[str] = []
    if alias is None:
        select_parts.append("*")
    else:
        if plan.group_by_column:
            select_parts.append(plan.group_by_column)
        select_parts.append(f"{_aggregate_expression(plan)} AS {alias}")

    sql_parts = [f"SELECT {', '.join(select_parts)}", f"FROM {registry.table}"]

    # ── WHERE clause ─────────────────────────────────
    where_parts = [render_filter(f, registry) for f in plan.filters]
    if where_parts:
        sql_parts.append("WHERE " + " AND ".join(where_parts))

    if plan.group_by_column and alias is not None:
        sql_parts.append(f"GROUP BY {plan.group_by_column}")

    # ── ORDER BY / LIMIT ─────────────────────────────
    if plan.limit is not None:
        sql_parts.append(f"ORDER BY {alias or plan.order_by} {plan.order_direction or 'DESC'}")
        sql_parts.append(f"LIMIT {int(plan.limit)}")

    sql = " ".join(sql_parts)
    logger.info("Generated SQL: %s", sql)
    return sql
