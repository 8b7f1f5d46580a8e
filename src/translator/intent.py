"""
Intent classifier -- picks the aggregate and metric from keyword precedence.

Rules, first match wins:
  1. a top-N numeral was recognized  → SUM, ranked descending
  2. count family ("number of", "count", "how many")  → COUNT
  3. sum family ("total", "sum")  → SUM
  4. average family ("average", "avg", "mean")  → AVG
  5. otherwise  → LIST
"""
from __future__ import annotations

from dataclasses import dataclass

from src.translator import lexicon
from src.translator.entities import RecognizedEntities


@dataclass(frozen=True)
class Intent:
    aggregate: str
    metric_column: str | None = None
    top_n: bool = False


def _has_phrase(tokens: list[str], phrases: tuple[tuple[str, ...], ...]) -> bool:
    for phrase in phrases:
        n = len(phrase)
        for i in range(len(tokens) - n + 1):
            if tuple(tokens[i:i + n]) == phrase:
                return True
    return False


def find_metric(tokens: list[str]) -> str | None:
    """First metric noun in *tokens*, mapped to its column."""
    for tok in tokens:
        if tok in lexicon.METRIC_NOUNS:
            return lexicon.METRIC_NOUNS[tok]
    return None


def classify(tokens: list[str], entities: RecognizedEntities) -> Intent:
    metric = find_metric(tokens)

    if entities.limit is not None:
        return Intent("SUM", metric, top_n=True)
    if _has_phrase(tokens, lexicon.COUNT_PHRASES):
        return Intent("COUNT")
    if _has_phrase(tokens, lexicon.SUM_PHRASES):
        return Intent("SUM", metric)
    if _has_phrase(tokens, lexicon.AVG_PHRASES):
        return Intent("AVG", metric)
    return Intent("LIST", metric)
