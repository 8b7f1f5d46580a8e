"""
Planner -- merges classified intent and recognized entities into a QueryPlan.

Deterministic keyword extraction over a closed vocabulary: the same text
always yields the same plan, and any input without a usable signal yields
the LIST-all-rows fallback plan.
"""
from __future__ import annotations

from src.governance.schema_registry import SchemaRegistry, load_schema_registry
from src.governance.validator import validate_plan
from src.translator.entities import RecognizedEntities, recognize
from src.translator.intent import Intent, classify
from src.translator.normalizer import normalize
from src.translator.plan import QueryPlan, fallback_plan
from src.core.logging import get_logger

logger = get_logger(__name__)


def build_plan(intent: Intent, entities: RecognizedEntities, registry: SchemaRegistry) -> QueryPlan:
    """Combine *intent* and *entities*; enforces the plan invariants."""
    pinned = entities.pinned_columns

    # 1. Group-by: explicit "by <dim>", else the first unpinned dimension on the top-N path
    group_by = entities.group_by
    if group_by is None and intent.top_n:
        group_by = next((c for c in entities.dimension_mentions if c not in pinned), None)
    if group_by in pinned:
        group_by = None

    # 2. Rows cannot be listed per group; aggregate them instead
    aggregate = intent.aggregate
    if aggregate == "LIST" and group_by is not None:
        aggregate = "SUM" if intent.metric_column else "COUNT"

    # 3. Metric only matters for SUM / AVG
    metric = None
    if aggregate in ("SUM", "AVG"):
        metric = intent.metric_column or registry.default_metric

    # 4. Ranking (top-N path only, always descending)
    limit = order_by = direction = None
    if intent.top_n and entities.limit is not None:
        limit = min(entities.limit, registry.max_limit)
        order_by = metric
        direction = "DESC"

    return QueryPlan(
        aggregate=aggregate,
        metric_column=metric,
        group_by_column=group_by,
        filters=list(entities.filters),
        limit=limit,
        order_by=order_by,
        order_direction=direction,
    )


def plan(text: str, registry: SchemaRegistry | None = None) -> QueryPlan:
    """Parse *text* into a QueryPlan.  Never raises."""
    if registry is None:
        registry = load_schema_registry()

    try:
        tokens = normalize(text)
        entities = recognize(tokens, registry)
        intent = classify(tokens, entities)
        query_plan = build_plan(intent, entities, registry)
    except Exception:
        logger.exception("Planner failed on %r -- using fallback plan", text)
        return fallback_plan()

    errors = validate_plan(query_plan, registry)
    if errors:
        logger.warning("Plan rejected, using fallback plan: %s", errors)
        return fallback_plan()

    if query_plan.is_fallback:
        logger.warning("No condition recognized in %r -- listing all rows", text)

    logger.info("Planner -> %s", query_plan.model_dump_json(indent=None))
    return query_plan
