"""
Unit tests -- explanation sentences.
"""
import pytest
from src.translator.explainer import explain, FALLBACK_EXPLANATION
from src.translator.plan import Filter, QueryPlan
from src.governance.schema_registry import load_schema_registry


@pytest.fixture(scope="module")
def registry():
    return load_schema_registry()


def test_fallback(registry):
    text = explain(QueryPlan(), registry)
    assert text == FALLBACK_EXPLANATION.format(table="orders")
    assert "no specific condition was recognized" in text.lower()


def test_sum_grouped(registry):
    p = QueryPlan(aggregate="SUM", metric_column="amount", group_by_column="region")
    assert explain(p, registry) == "Summing amount grouped by region."


def test_top_n(registry):
    p = QueryPlan(
        aggregate="SUM", metric_column="amount", group_by_column="customer",
        limit=5, order_by="amount", order_direction="DESC",
    )
    assert explain(p, registry) == "Showing the top 5 customers ranked by revenue."


def test_list_filters(registry):
    p = QueryPlan(filters=[
        Filter(column="category", operator="EQUALS", value="Grocery"),
        Filter(column="region", operator="EQUALS", value="South"),
    ])
    assert explain(p, registry) == "Listing orders filtered by category = Grocery and region = South."


def test_average_with_month(registry):
    p = QueryPlan(aggregate="AVG", metric_column="amount", filters=[
        Filter(column="order_month", operator="IN_MONTH", value=2),
    ])
    assert explain(p, registry) == "Averaging amount filtered by month = February."


def test_count_between_months(registry):
    p = QueryPlan(aggregate="COUNT", group_by_column="category", filters=[
        Filter(column="order_month", operator="BETWEEN_MONTHS", value=1, end=3),
    ])
    assert explain(p, registry) == (
        "Counting orders grouped by category filtered by month between January and March."
    )


def test_group_by_month_label(registry):
    p = QueryPlan(aggregate="SUM", metric_column="quantity", group_by_column="order_month")
    assert explain(p, registry) == "Summing quantity grouped by month."


def test_year_filter(registry):
    p = QueryPlan(aggregate="COUNT", filters=[
        Filter(column="order_year", operator="EQUALS", value=2025),
    ])
    assert explain(p, registry) == "Counting orders filtered by year = 2025."


def test_top_n_without_group_is_a_single_total(registry):
    p = QueryPlan(
        aggregate="SUM", metric_column="amount", limit=3, order_by="amount", order_direction="DESC",
        filters=[Filter(column="region", operator="EQUALS", value="South")],
    )
    text = explain(p, registry)
    assert text == (
        "Summing amount filtered by region = South into a single revenue total, "
        "so the top 3 returns one row."
    )
    assert "top 3 orders" not in text
