"""
GET /schema -- schema registry metadata.
"""
from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from src.governance.schema_registry import load_schema_registry

router = APIRouter()


class ColumnItem(BaseModel):
    name: str
    type: str
    dimension: bool
    metric: bool
    values: list[str]


class SchemaResponse(BaseModel):
    table: str
    columns: list[ColumnItem]
    default_metric: str
    max_limit: int


@router.get("/schema", response_model=SchemaResponse)
def schema() -> SchemaResponse:
    """Return the queryable table, its columns and known categorical values."""
    registry = load_schema_registry()
    return SchemaResponse(
        table=registry.table,
        columns=[ColumnItem(**c) for c in registry.get_columns_list()],
        default_metric=registry.default_metric,
        max_limit=registry.max_limit,
    )
