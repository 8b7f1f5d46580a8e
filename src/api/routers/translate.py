"""POST /translate, POST /query, GET /examples -- translator endpoints."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException

from src.agent.service import run, SAMPLE_PROMPTS
from src.translator.pipeline import translate, TranslationResult
from src.translator.plan import QueryPlan
from src.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


class TranslateRequest(BaseModel):
    text: str = Field("", max_length=500, description="Natural-language request (may be empty)")


class QueryRequest(TranslateRequest):
    execute: bool = Field(True, description="If true, run the SQL on the embedded dataset")


class ChartResponse(BaseModel):
    chart_type: str
    label_column: str
    value_column: str
    dataset_label: str
    labels: list[str]
    values: list[float]


class QueryResponse(BaseModel):
    text: str
    plan: QueryPlan
    sql: str
    explanation: str
    columns: list[str]
    rows: list[dict[str, Any]]
    chart: ChartResponse | None
    error: str | None
    success: bool
    latency_ms: int


class ExamplesResponse(BaseModel):
    examples: list[str]


@router.post("/translate", response_model=TranslationResult)
def translate_endpoint(req: TranslateRequest):
    """Text -> {sql, explanation}.  Never fails for any text."""
    return translate(req.text)


@router.post("/query", response_model=QueryResponse)
def query_endpoint(req: QueryRequest):
    """Full pipeline: text -> SQL -> safety check -> execute -> chart."""
    try:
        result = run(req.text, execute=req.execute)
    except Exception as exc:
        logger.exception("Agent.run failed")
        raise HTTPException(status_code=500, detail=str(exc))

    return QueryResponse(
        text=req.text,
        plan=result.plan,
        sql=result.sql,
        explanation=result.explanation,
        columns=result.columns,
        rows=result.rows,
        chart=ChartResponse(**result.chart.to_dict()) if result.chart else None,
        error=result.error,
        success=result.success,
        latency_ms=result.latency_ms,
    )


@router.get("/examples", response_model=ExamplesResponse)
def examples_endpoint():
    """Sample requests shown in the UI."""
    return ExamplesResponse(examples=SAMPLE_PROMPTS)
