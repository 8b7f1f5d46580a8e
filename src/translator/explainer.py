"""
Template-based explanations -- a short declarative sentence assembled
from the same QueryPlan fields the SQL generator renders.
"""
from __future__ import annotations

from src.translator.lexicon import month_name
from src.translator.plan import Filter, QueryPlan
from src.translator.sql_generator import aggregate_alias
from src.governance.schema_registry import load_schema_registry, SchemaRegistry

FALLBACK_EXPLANATION = "No specific condition was recognized, so all rows from {table} are shown."

_HEADS = {
    "SUM": "Summing {metric}",
    "AVG": "Averaging {metric}",
    "COUNT": "Counting {table}",
    "LIST": "Listing {table}",
}


def _label(column: str, registry: SchemaRegistry) -> str:
    col = registry.column(column)
    return col.label if col else column


def describe_filter(f: Filter, registry: SchemaRegistry) -> str:
    label = _label(f.column, registry)
    if f.operator == "IN_MONTH":
        return f"{label} = {month_name(int(f.value))}"
    if f.operator == "BETWEEN_MONTHS":
        return f"{label} between {month_name(int(f.value))} and {month_name(int(f.end))}"
    return f"{label} = {f.value}"


def explain(plan: QueryPlan, registry: SchemaRegistry | None = None) -> str:
    """Describe what the SQL for *plan* does, in one sentence."""
    if registry is None:
        registry = load_schema_registry()

    if plan.is_fallback:
        return FALLBACK_EXPLANATION.format(table=registry.table)

    filters = ""
    if plan.filters:
        filters = " filtered by " + " and ".join(describe_filter(f, registry) for f in plan.filters)

    alias = aggregate_alias(plan, registry) or plan.order_by
    if plan.limit is not None and plan.group_by_column is None:
        # nothing to rank: the ungrouped aggregate is always exactly one row
        return (
            f"Summing {plan.metric_column}{filters} into a single {alias} total, "
            f"so the top {plan.limit} returns one row."
        )

    if plan.limit is not None:
        group = registry.column(plan.group_by_column)
        subject = group.plural if group else plan.group_by_column
        text = f"Showing the top {plan.limit} {subject} ranked by {alias}"
    else:
        text = _HEADS[plan.aggregate].format(metric=plan.metric_column, table=registry.table)
        if plan.group_by_column:
            text += f" grouped by {_label(plan.group_by_column, registry)}"

    return text + filters + "."
