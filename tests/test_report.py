import pandas as pd

from abcalc.planner import MdeRow, plan_mde
from abcalc.report import mde_frame, significance_frame
from abcalc.significance import analyze_significance


def test_significance_frame_has_one_row_per_arm():
    res = analyze_significance(10000, 500, 10000, 650)
    df = significance_frame(res)

    assert list(df["arm"]) == ["Control (A)", "Variation (B)"]
    assert list(df["visitors"]) == [10000, 10000]
    assert list(df["conversions"]) == [500, 650]
    assert list(df["conversion_rate"]) == ["5.00%", "6.50%"]


def test_mde_frame_from_plan():
    rows = plan_mde(20000, 400, 95, 80, method="closed_form")
    df = mde_frame(rows)

    assert list(df.columns) == ["Week", "Visitors / Variation", "mde", "Relative MDE"]
    assert list(df["Week"]) == [1, 2, 3, 4, 5, 6]
    assert list(df["Visitors / Variation"]) == [10000, 20000, 30000, 40000, 50000, 60000]
    assert df["mde"].is_monotonic_decreasing
    assert all(text.endswith("%") for text in df["Relative MDE"])


def test_mde_frame_marks_missing_rows():
    rows = [
        MdeRow(weeks=2, visitors_per_variation=20.0, mde=1.25),
        MdeRow(weeks=1, visitors_per_variation=10.0, mde=None),
    ]
    df = mde_frame(rows)

    # sorted by week
    assert list(df["Week"]) == [1, 2]
    assert pd.isna(df.loc[0, "mde"])
    assert df.loc[0, "Relative MDE"] == "not found"
    assert df.loc[1, "Relative MDE"] == "125.00%"
