"""
translate() -- natural-language text to ``{sql, explanation}``.

Pure and stateless: no I/O, no caching, no history.  Safe to call on every
keystroke.  It never raises; any failure degrades to the fallback plan.
"""
from __future__ import annotations

from pydantic import BaseModel

from src.translator.explainer import explain, FALLBACK_EXPLANATION
from src.translator.plan import QueryPlan, fallback_plan
from src.translator.planner import plan as build_query_plan
from src.translator.sql_generator import generate_sql
from src.governance.schema_registry import load_schema_registry
from src.core.logging import get_logger

logger = get_logger(__name__)


class TranslationResult(BaseModel):
    sql: str
    explanation: str


def translate_with_plan(text: str) -> tuple[QueryPlan, TranslationResult]:
    """Like :func:`translate`, also returning the plan that was rendered."""
    registry = load_schema_registry()
    query_plan = build_query_plan(text, registry)
    try:
        result = TranslationResult(
            sql=generate_sql(query_plan, registry),
            explanation=explain(query_plan, registry),
        )
    except Exception:
        logger.exception("Rendering failed for %r -- using fallback plan", text)
        return fallback_plan(), TranslationResult(
            sql=f"SELECT * FROM {registry.table}",
            explanation=FALLBACK_EXPLANATION.format(table=registry.table),
        )
    return query_plan, result


def translate(text: str) -> TranslationResult:
    """Translate *text* into a SQL statement and a one-sentence explanation."""
    return translate_with_plan(text)[1]
