from __future__ import annotations

from typing import Sequence

import pandas as pd

from .formatting import format_percentage
from .planner import MdeRow
from .significance import SignificanceResult


def significance_frame(result: SignificanceResult) -> pd.DataFrame:
    """Per-arm summary table: visitors, conversions and conversion rate."""
    rows = [
        {
            "arm": "Control (A)",
            "visitors": result.control.visitors,
            "conversions": result.control.conversions,
            "conversion_rate": format_percentage(result.rate_a),
        },
        {
            "arm": "Variation (B)",
            "visitors": result.variation.visitors,
            "conversions": result.variation.conversions,
            "conversion_rate": format_percentage(result.rate_b),
        },
    ]
    return pd.DataFrame(rows)


def mde_frame(rows: Sequence[MdeRow]) -> pd.DataFrame:
    """MDE table ordered by duration.

    `Relative MDE` is display text ("not found" when nothing within the search
    ceiling is detectable); `mde` keeps the raw value for charts, NaN when missing.
    """
    out = pd.DataFrame(
        [
            {
                "Week": r.weeks,
                "Visitors / Variation": int(round(r.visitors_per_variation)),
                "mde": r.mde,
            }
            for r in rows
        ],
        columns=["Week", "Visitors / Variation", "mde"],
    )
    out["mde"] = out["mde"].astype(float)
    out["Relative MDE"] = out["mde"].map(lambda v: "not found" if pd.isna(v) else format_percentage(v))
    return out.sort_values("Week").reset_index(drop=True)
