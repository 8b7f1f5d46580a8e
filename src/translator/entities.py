"""
Entity recognizer -- scans normalized tokens for literal values.

Recognized entities:
  categorical values   "south", "office supplies"   → EQUALS filter (canonical casing)
  month ranges         "between jan and march"      → BETWEEN_MONTHS filter
  single months        "in february"                → IN_MONTH filter
  years                "2024"                       → EQUALS filter on the year column
  top-N numerals       "top 5", "top three"         → limit
  group-by dimensions  "by region", "per customer"  → group-by column

Filters are returned in the order their text appears in the sentence.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from src.governance.schema_registry import Column, SchemaRegistry, load_schema_registry
from src.translator import lexicon
from src.translator.normalizer import normalize
from src.translator.plan import Filter

_SKIPPABLE = frozenset({"the", "each", "every"})


@dataclass
class RecognizedEntities:
    filters: list[Filter] = field(default_factory=list)
    limit: int | None = None
    group_by: str | None = None
    dimension_mentions: list[str] = field(default_factory=list)

    @property
    def pinned_columns(self) -> set[str]:
        return {f.column for f in self.filters if f.operator == "EQUALS"}


# ── Categorical values ───────────────────────────────────

def _find_categorical(tokens: list[str], column: Column) -> tuple[int, Filter] | None:
    """First (left-most, then longest) known value of *column* in *tokens*.

    A multi-word value also matches its hyphenated spelling ("office-supplies").
    """
    candidates = sorted(
        ((tuple(normalize(v)), v) for v in column.values),
        key=lambda c: len(c[0]),
        reverse=True,
    )
    for i in range(len(tokens)):
        for value_tokens, canonical in candidates:
            n = len(value_tokens)
            if not n:
                continue
            if tuple(tokens[i:i + n]) == value_tokens or tokens[i] == "-".join(value_tokens):
                return i, Filter(column=column.name, operator="EQUALS", value=canonical)
    return None


# ── Months ───────────────────────────────────────────────

def _find_month_range(tokens: list[str], month_col: str) -> tuple[int, Filter] | None:
    for i, tok in enumerate(tokens[:-3]):
        closers = lexicon.RANGE_OPENERS.get(tok)
        if closers is None:
            continue
        first, joiner, last = tokens[i + 1], tokens[i + 2], tokens[i + 3]
        if first in lexicon.MONTHS and joiner in closers and last in lexicon.MONTHS:
            start, end = sorted((lexicon.MONTHS[first], lexicon.MONTHS[last]))
            if start == end:
                return i, Filter(column=month_col, operator="IN_MONTH", value=start)
            return i, Filter(column=month_col, operator="BETWEEN_MONTHS", value=start, end=end)
    return None


def _find_single_month(tokens: list[str], month_col: str) -> tuple[int, Filter] | None:
    for i, tok in enumerate(tokens):
        if tok not in lexicon.MONTHS:
            continue
        if tok in lexicon.AMBIGUOUS_MONTHS and (i == 0 or tokens[i - 1] not in lexicon.MONTH_PREPOSITIONS):
            continue
        return i, Filter(column=month_col, operator="IN_MONTH", value=lexicon.MONTHS[tok])
    return None


def _find_year(tokens: list[str], year_col: str) -> tuple[int, Filter] | None:
    low, high = lexicon.YEAR_RANGE
    for i, tok in enumerate(tokens):
        if len(tok) == 4 and tok.isdigit() and low <= int(tok) <= high:
            if i > 0 and tokens[i - 1] in lexicon.TOP_MARKERS:
                continue
            return i, Filter(column=year_col, operator="EQUALS", value=int(tok))
    return None


# ── Top-N and grouping ───────────────────────────────────

def _parse_numeral(token: str) -> int | None:
    if token.isdigit():
        return int(token)
    return lexicon.NUMBER_WORDS.get(token)


def _find_limit(tokens: list[str], ceiling: int) -> int | None:
    for i, tok in enumerate(tokens[:-1]):
        if tok not in lexicon.TOP_MARKERS:
            continue
        n = _parse_numeral(tokens[i + 1])
        if n is not None and n > 0:
            return min(n, ceiling)
    return None


def _find_group_by(tokens: list[str]) -> str | None:
    for i, tok in enumerate(tokens):
        if tok not in lexicon.GROUP_MARKERS:
            continue
        j = i + 1
        while j < len(tokens) and tokens[j] in _SKIPPABLE:
            j += 1
        if j < len(tokens) and tokens[j] in lexicon.DIMENSION_NOUNS:
            return lexicon.DIMENSION_NOUNS[tokens[j]]
    return None


# ── Public API ───────────────────────────────────────────

def recognize(tokens: list[str], registry: SchemaRegistry | None = None) -> RecognizedEntities:
    """Extract every entity from *tokens*.  Absent entities are simply left empty."""
    if registry is None:
        registry = load_schema_registry()

    found: list[tuple[int, Filter]] = []
    for column in registry.categorical_columns():
        hit = _find_categorical(tokens, column)
        if hit:
            found.append(hit)

    month_col = registry.month_column.name
    month_hit = _find_month_range(tokens, month_col) or _find_single_month(tokens, month_col)
    if month_hit:
        found.append(month_hit)

    year_hit = _find_year(tokens, registry.year_column.name)
    if year_hit:
        found.append(year_hit)

    found.sort(key=lambda hit: hit[0])

    return RecognizedEntities(
        filters=[f for _, f in found],
        limit=_find_limit(tokens, registry.max_limit),
        group_by=_find_group_by(tokens),
        dimension_mentions=[lexicon.DIMENSION_NOUNS[t] for t in tokens if t in lexicon.DIMENSION_NOUNS],
    )
