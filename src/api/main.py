"""
FastAPI app for the SQL agent.

Translation endpoints live in ``routers.translate``, the registry catalog in
``routers.catalog``.  ``/health`` also reports which registry the translator
is compiling against.
"""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routers import catalog, translate
from src.governance.schema_registry import load_schema_registry

app = FastAPI(
    title="Natural Language SQL Agent",
    version="0.1.0",
    description="Closed-vocabulary English-to-SQL translator over the orders dataset",
)

# the Streamlit page calls the API from another port
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(translate.router, tags=["Translator"])
app.include_router(catalog.router, tags=["Catalog"])


@app.get("/health")
def health():
    registry = load_schema_registry()
    return {"status": "ok", "table": registry.table, "registry_version": registry.version}
