from __future__ import annotations

import math
from typing import Any, Optional


def parse_number(value: Any) -> float:
    """Coerce raw form input to a number; blank or non-numeric input becomes 0.0."""
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def format_percentage(value: Optional[float]) -> str:
    if value is None or math.isnan(value):
        return "N/A"
    if value == math.inf:
        return "∞%"
    return f"{value * 100:.2f}%"


def format_days(value: Optional[float]) -> str:
    if value is None or math.isnan(value):
        return "N/A"
    days = int(math.ceil(value))
    return f"{days:,} day" if days == 1 else f"{days:,} days"
