"""
Agent service -- orchestrates translate -> safety check -> execute -> chart.

The translator itself is pure; this layer owns the one side effect, running
the generated SQL against the embedded engine.  An execution failure is
reported on the result, never retried, and never affects later calls.
"""
from __future__ import annotations

import time
from typing import Any

from src.agent.chart_generator import suggest_chart, ChartSpec
from src.translator.pipeline import translate_with_plan
from src.translator.plan import QueryPlan
from src.governance.sql_safety import check_sql_safety
from src.governance.schema_registry import load_schema_registry
from src.db.executor import execute_query
from src.core.logging import get_logger

logger = get_logger(__name__)

SAMPLE_PROMPTS = [
    "total sales by region",
    "show average amount for electronics in february",
    "top 5 customers by revenue",
    "number of orders between january and march by category",
    "list grocery orders in the south region",
]


class AgentResult:
    def __init__(
        self,
        text: str,
        plan: QueryPlan,
        sql: str,
        explanation: str,
        columns: list[str] | None = None,
        rows: list[dict[str, Any]] | None = None,
        chart: ChartSpec | None = None,
        error: str | None = None,
        latency_ms: int = 0,
    ):
        self.text = text
        self.plan = plan
        self.sql = sql
        self.explanation = explanation
        self.columns = columns or []
        self.rows = rows or []
        self.chart = chart
        self.error = error
        self.latency_ms = latency_ms

    @property
    def success(self) -> bool:
        return self.error is None


def run(text: str, execute: bool = True) -> AgentResult:
    """End-to-end: text -> SQL + explanation -> rows -> chart.

    Parameters
    ----------
    text : str
        Natural-language request (may be empty).
    execute : bool
        If True, run the generated SQL against the embedded engine.
        If False, return the SQL without executing (dry-run).
    """
    t0 = time.perf_counter()
    logger.info("Agent.run | text=%r | execute=%s", text, execute)

    query_plan, translation = translate_with_plan(text)
    result = AgentResult(
        text=text,
        plan=query_plan,
        sql=translation.sql,
        explanation=translation.explanation,
    )

    safety_errors = check_sql_safety(result.sql, load_schema_registry())
    if safety_errors:
        result.error = "; ".join(safety_errors)
    elif execute:
        try:
            query_result = execute_query(result.sql)
        except Exception as exc:
            logger.exception("SQL execution failed")
            result.error = f"Execution error: {exc}"
        else:
            result.columns = query_result.columns
            result.rows = query_result.rows
            result.chart = suggest_chart(query_result.columns, query_result.rows)

    result.latency_ms = int((time.perf_counter() - t0) * 1000)
    return result
