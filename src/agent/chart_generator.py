"""
Auto-chart selection.

Given the columns and rows returned by the engine, decides whether a bar
chart makes sense and which columns feed it:

  - label axis  → first column whose value is text (else the first column)
  - value axis  → first numeric column
  - no chart    → no rows, no numeric column, or every value is zero
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

CHART_BAR = "bar"


@dataclass
class ChartSpec:
    """Describes how a set of result rows should be visualised."""
    chart_type: str
    label_column: str
    value_column: str
    dataset_label: str
    labels: list[str] = field(default_factory=list)
    values: list[float] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "chart_type": self.chart_type,
            "label_column": self.label_column,
            "value_column": self.value_column,
            "dataset_label": self.dataset_label,
            "labels": self.labels,
            "values": self.values,
        }


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def suggest_chart(columns: list[str], rows: list[dict[str, Any]]) -> ChartSpec | None:
    """Choose the bar-chart axes for *rows*, or None when a chart would say nothing."""
    if not rows or not columns:
        return None

    first = rows[0]
    label_col = next((c for c in columns if isinstance(first.get(c), str)), columns[0])
    numeric = [c for c in columns if _is_number(first.get(c))]
    if not numeric:
        return None

    value_col = numeric[0]
    labels = ["" if row.get(label_col) is None else str(row.get(label_col)) for row in rows]
    values = [float(row.get(value_col) or 0) for row in rows]

    if not any(v != 0 for v in values):
        return None

    return ChartSpec(
        chart_type=CHART_BAR,
        label_column=label_col,
        value_column=value_col,
        dataset_label=value_col.replace("_", " "),
        labels=labels,
        values=values,
    )
