"""
Lexicon -- static surface-synonym tables for the translator.

Every table maps a surface form (one or more lowercase tokens) to a
canonical concept.  Multi-word phrases are stored as token tuples so the
recognizer can match them against contiguous token runs.
"""
from __future__ import annotations

from types import MappingProxyType

# ── Aggregate families (checked in precedence order by the classifier) ──

COUNT_PHRASES: tuple[tuple[str, ...], ...] = (
    ("number", "of"),
    ("how", "many"),
    ("count",),
)

SUM_PHRASES: tuple[tuple[str, ...], ...] = (
    ("total",),
    ("sum",),
)

AVG_PHRASES: tuple[tuple[str, ...], ...] = (
    ("average",),
    ("avg",),
    ("mean",),
)

# ── Metric nouns → metric column ────────────────────────

METRIC_NOUNS = MappingProxyType({
    "sales": "amount",
    "revenue": "amount",
    "amount": "amount",
    "amounts": "amount",
    "quantity": "quantity",
    "quantities": "quantity",
    "units": "quantity",
})

# ── Dimension nouns → grouping column ───────────────────

DIMENSION_NOUNS = MappingProxyType({
    "region": "region",
    "regions": "region",
    "area": "region",
    "areas": "region",
    "category": "category",
    "categories": "category",
    "customer": "customer",
    "customers": "customer",
    "client": "customer",
    "clients": "customer",
    "month": "order_month",
    "months": "order_month",
})

GROUP_MARKERS = frozenset({"by", "per"})

# ── Months ──────────────────────────────────────────────

MONTH_NAMES: tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

MONTHS = MappingProxyType({
    **{name.lower(): i for i, name in enumerate(MONTH_NAMES, 1)},
    **{name[:3].lower(): i for i, name in enumerate(MONTH_NAMES, 1)},
    "sept": 9,
})

RANGE_OPENERS = MappingProxyType({
    "between": frozenset({"and"}),
    "from": frozenset({"to", "through", "until"}),
})

# "may" is also a modal verb; it reads as a month only after one of these
MONTH_PREPOSITIONS = frozenset({"in", "for", "during", "of"})
AMBIGUOUS_MONTHS = frozenset({"may"})

# ── Ordering / top-N ────────────────────────────────────

TOP_MARKERS = frozenset({"top"})

NUMBER_WORDS = MappingProxyType({
    word: i for i, word in enumerate(
        (
            "one", "two", "three", "four", "five", "six", "seven", "eight", "nine", "ten",
            "eleven", "twelve", "thirteen", "fourteen", "fifteen", "sixteen", "seventeen",
            "eighteen", "nineteen", "twenty",
        ),
        1,
    )
})

YEAR_RANGE = (2000, 2099)


def month_name(number: int) -> str:
    """Display name for a month number 1-12."""
    return MONTH_NAMES[number - 1]
