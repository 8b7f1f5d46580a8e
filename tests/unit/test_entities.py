"""
Unit tests -- entity recognizer: categorical values, months, years, top-N, group-by.
"""
import pytest
from src.translator.entities import recognize
from src.translator.normalizer import normalize
from src.governance.schema_registry import load_schema_registry


@pytest.fixture(scope="module")
def registry():
    return load_schema_registry()


def _recognize(text, registry):
    return recognize(normalize(text), registry)


# ── Categorical values ───────────────────────────────────

def test_category_canonical_casing(registry):
    ents = _recognize("list GROCERY orders", registry)
    assert [(f.column, f.operator, f.value) for f in ents.filters] == [("category", "EQUALS", "Grocery")]


def test_multi_word_value(registry):
    ents = _recognize("orders for office supplies", registry)
    assert ents.filters[0].value == "Office Supplies"


def test_first_region_wins(registry):
    ents = _recognize("sales in the north and the south", registry)
    regions = [f.value for f in ents.filters if f.column == "region"]
    assert regions == ["North"]


def test_filters_ordered_by_position(registry):
    ents = _recognize("south region grocery orders", registry)
    assert [f.column for f in ents.filters] == ["region", "category"]


def test_partial_token_does_not_match(registry):
    ents = _recognize("the southern office", registry)
    assert ents.filters == []


def test_hyphenated_multi_word_value(registry):
    ents = _recognize("total sales of office-supplies", registry)
    assert [(f.column, f.value) for f in ents.filters] == [("category", "Office Supplies")]


# ── Months ───────────────────────────────────────────────

def test_in_month(registry):
    ents = _recognize("sales in february", registry)
    f = ents.filters[0]
    assert (f.column, f.operator, f.value) == ("order_month", "IN_MONTH", 2)


def test_month_abbreviation(registry):
    ents = _recognize("sales in sept", registry)
    assert ents.filters[0].value == 9


def test_between_months(registry):
    ents = _recognize("orders between january and march", registry)
    f = ents.filters[0]
    assert (f.operator, f.value, f.end) == ("BETWEEN_MONTHS", 1, 3)
    assert len(ents.filters) == 1


def test_from_to_months(registry):
    ents = _recognize("sales from april through june", registry)
    f = ents.filters[0]
    assert (f.operator, f.value, f.end) == ("BETWEEN_MONTHS", 4, 6)


def test_reversed_range_normalized(registry):
    ents = _recognize("orders between march and january", registry)
    assert (ents.filters[0].value, ents.filters[0].end) == (1, 3)


def test_same_month_range_is_single_month(registry):
    ents = _recognize("orders between may and may", registry)
    assert ents.filters[0].operator == "IN_MONTH"
    assert ents.filters[0].value == 5


def test_incomplete_range_falls_back_to_single_month(registry):
    ents = _recognize("orders between january and later", registry)
    assert ents.filters[0].operator == "IN_MONTH"
    assert ents.filters[0].value == 1


def test_modal_may_is_not_a_month(registry):
    ents = _recognize("orders that may be shipped to the south", registry)
    assert [(f.column, f.value) for f in ents.filters] == [("region", "South")]


@pytest.mark.parametrize("text", ["sales in may", "orders for may", "orders during may"])
def test_may_after_preposition_is_a_month(registry, text):
    ents = _recognize(text, registry)
    assert [(f.operator, f.value) for f in ents.filters] == [("IN_MONTH", 5)]


def test_standalone_month_name(registry):
    ents = _recognize("february orders", registry)
    assert ents.filters[0].value == 2


# ── Years ────────────────────────────────────────────────

def test_year_filter(registry):
    ents = _recognize("total sales in 2024", registry)
    f = ents.filters[0]
    assert (f.column, f.operator, f.value) == ("order_year", "EQUALS", 2024)


def test_out_of_range_number_is_not_a_year(registry):
    ents = _recognize("sales 1999", registry)
    assert ents.filters == []


# ── Top-N ────────────────────────────────────────────────

def test_top_n_digit(registry):
    assert _recognize("top 5 customers", registry).limit == 5


def test_top_n_word(registry):
    assert _recognize("top three regions", registry).limit == 3


def test_top_zero_ignored(registry):
    assert _recognize("top 0 customers", registry).limit is None


def test_top_n_clamped(registry):
    assert _recognize("top 50000 customers", registry).limit == registry.max_limit


def test_number_without_top_is_not_limit(registry):
    assert _recognize("5 customers", registry).limit is None


# ── Group-by ─────────────────────────────────────────────

@pytest.mark.parametrize("text,column", [
    ("sales by region", "region"),
    ("sales by area", "region"),
    ("sales by category", "category"),
    ("sales by customer", "customer"),
    ("sales per month", "order_month"),
    ("sales by the region", "region"),
])
def test_group_by(registry, text, column):
    assert _recognize(text, registry).group_by == column


def test_by_metric_is_not_group_by(registry):
    assert _recognize("top 5 customers by revenue", registry).group_by is None


def test_dimension_mentions(registry):
    ents = _recognize("top 5 customers in the south region", registry)
    assert ents.dimension_mentions == ["customer", "region"]


def test_nothing_recognized(registry):
    ents = _recognize("hello there", registry)
    assert ents.filters == []
    assert ents.limit is None
    assert ents.group_by is None
