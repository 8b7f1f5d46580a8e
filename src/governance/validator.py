"""
Validates a QueryPlan against the schema registry.

Checks performed:
  1. SUM / AVG plans name a metric column that exists in the registry
  2. The group-by column is a known dimension
  3. The group-by column is not pinned by an EQUALS filter
  4. Every filter column exists and fits its operator
  5. EQUALS values on categorical columns are canonical known values
  6. Month filters carry month numbers 1-12 with start <= end
  7. No two filters share the same (column, operator)
  8. limit is positive and within the ceiling; ordering only with a limit
"""
from __future__ import annotations

from src.governance.schema_registry import load_schema_registry, SchemaRegistry
from src.translator.plan import QueryPlan


def _valid_month(value: object) -> bool:
    return isinstance(value, int) and 1 <= value <= 12


def validate_plan(plan: QueryPlan, registry: SchemaRegistry | None = None) -> list[str]:
    """Return a list of validation error messages (empty list = plan is valid)."""
    if registry is None:
        registry = load_schema_registry()

    errors: list[str] = []
    metric_names = [c.name for c in registry.metric_columns()]

    if plan.aggregate in ("SUM", "AVG"):
        if not plan.metric_column:
            errors.append(f"Aggregate {plan.aggregate} requires a metric column.")
        elif plan.metric_column not in metric_names:
            errors.append(
                f"Unknown metric '{plan.metric_column}'. "
                f"Allowed: {', '.join(metric_names)}"
            )

    if plan.group_by_column is not None:
        dim_names = [c.name for c in registry.dimension_columns()]
        if plan.group_by_column not in dim_names:
            errors.append(
                f"Unknown dimension '{plan.group_by_column}'. "
                f"Allowed: {', '.join(dim_names)}"
            )
        pinned = {f.column for f in plan.filters if f.operator == "EQUALS"}
        if plan.group_by_column in pinned:
            errors.append(
                f"Group-by column '{plan.group_by_column}' is pinned by an equality filter."
            )

    month_col = registry.month_column.name
    seen: set[tuple[str, str]] = set()
    for f in plan.filters:
        key = (f.column, f.operator)
        if key in seen:
            errors.append(f"Duplicate {f.operator} filter on '{f.column}'.")
        seen.add(key)

        column = registry.column(f.column)
        if column is None:
            errors.append(f"Filter column '{f.column}' is not in the registry.")
            continue

        if f.operator == "EQUALS":
            if column.is_categorical and f.value not in column.values:
                errors.append(f"Filter value {f.value!r} is not a known {column.name}.")
            elif isinstance(f.value, str) and not f.value.strip():
                errors.append(f"Filter '{f.column}' has an empty value.")
        else:
            if f.column != month_col:
                errors.append(f"{f.operator} filter must target '{month_col}', got '{f.column}'.")
            if not _valid_month(f.value):
                errors.append(f"Invalid month {f.value!r} in {f.operator} filter.")
            if f.operator == "BETWEEN_MONTHS":
                if not _valid_month(f.end):
                    errors.append(f"Invalid end month {f.end!r} in BETWEEN_MONTHS filter.")
                elif _valid_month(f.value) and f.value > f.end:
                    errors.append(f"Month range {f.value}-{f.end} is reversed.")

    if plan.limit is not None:
        if plan.limit <= 0:
            errors.append(f"Limit must be positive, got {plan.limit}.")
        elif plan.limit > registry.max_limit:
            errors.append(
                f"Requested limit ({plan.limit}) exceeds maximum allowed ({registry.max_limit})."
            )
    elif plan.order_by is not None or plan.order_direction is not None:
        errors.append("Ordering is only allowed together with a limit.")

    return errors
