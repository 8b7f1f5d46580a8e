"""Cell formatting for result tables."""
from __future__ import annotations

import re
from typing import Any

_DATE_RE = re.compile(r"^\d{4}-\d{2}(-\d{2})?$")


def format_cell(value: Any) -> str:
    """Integers get thousands separators, floats two decimals; dates pass through."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        if value.is_integer():
            return f"{int(value):,}"
        return f"{value:,.2f}"
    if isinstance(value, str) and _DATE_RE.match(value):
        return value
    return str(value)
