"""
Deterministic SQL safety checks.

These checks are the final gate before any SQL reaches the embedded engine.
They operate purely on the SQL text and the schema registry.

Checks performed:
  1. SQL must be a single SELECT statement (no DDL / DML / multi-statement)
  2. No dangerous keywords (DROP, ALTER, INSERT, UPDATE, DELETE, ATTACH, PRAGMA …)
  3. No SQL comments (--, /*)
  4. Only the registry's table may appear after FROM / JOIN
  5. LIMIT, when present, must be ≤ the registry ceiling

String literals are blanked before scanning so a quoted value can never
trip (or hide) a keyword.
"""
from __future__ import annotations

import re

from src.governance.schema_registry import load_schema_registry, SchemaRegistry
from src.core.logging import get_logger

logger = get_logger(__name__)

# ── Compiled patterns ────────────────────────────────────

_STRING_LITERAL = re.compile(r"'(?:[^']|'')*'")

_DANGEROUS_KW = re.compile(
    r"\b(DROP|ALTER|TRUNCATE|INSERT|UPDATE|DELETE|REPLACE|CREATE|"
    r"ATTACH|DETACH|PRAGMA|VACUUM|REINDEX|GRANT|REVOKE)\b",
    re.IGNORECASE,
)

_MULTI_STMT = re.compile(r";\s*\S")  # semicolon followed by non-whitespace

_COMMENT_INLINE = re.compile(r"--")
_COMMENT_BLOCK = re.compile(r"/\*")

_LIMIT_RE = re.compile(r"\bLIMIT\s+(\d+)", re.IGNORECASE)

_FROM_JOIN_RE = re.compile(r"\b(?:FROM|JOIN)\s+([\w.]+)", re.IGNORECASE)


def check_sql_safety(sql: str, registry: SchemaRegistry | None = None) -> list[str]:
    """Return a list of safety violations (empty list = safe)."""
    if registry is None:
        registry = load_schema_registry()

    errors: list[str] = []
    stripped = _STRING_LITERAL.sub("''", sql.strip())

    if not stripped.upper().startswith("SELECT"):
        errors.append("SQL must be a SELECT statement.")

    if _MULTI_STMT.search(stripped):
        errors.append("Multi-statement SQL is not allowed (found ';' followed by another statement).")

    m = _DANGEROUS_KW.search(stripped)
    if m:
        errors.append(f"Dangerous keyword detected: '{m.group(1).upper()}'.")

    if _COMMENT_INLINE.search(stripped):
        errors.append("Inline comments (--) are not allowed.")
    if _COMMENT_BLOCK.search(stripped):
        errors.append("Block comments (/* */) are not allowed.")

    for ref in _FROM_JOIN_RE.findall(stripped):
        if ref.lower() != registry.table.lower():
            errors.append(f"Table '{ref}' is not the registry table '{registry.table}'.")

    limit_match = _LIMIT_RE.search(stripped)
    if limit_match and int(limit_match.group(1)) > registry.max_limit:
        errors.append(
            f"LIMIT {limit_match.group(1)} exceeds maximum allowed ({registry.max_limit})."
        )

    if errors:
        logger.warning("SQL safety violations: %s", errors)
    return errors
