from __future__ import annotations

import pandas as pd
import plotly.express as px
import streamlit as st

from abcalc import (
    analyze_significance,
    format_days,
    format_percentage,
    generate_summary,
    parse_number,
    plan_mde,
)
from abcalc import config
from abcalc.report import mde_frame, significance_frame

st.set_page_config(page_title="A/B Test Calculator", layout="wide")

st.title("A/B Test Calculator")


@st.cache_data
def _mde_table(traffic: float, conversions: float, confidence_pct: float, power_pct: float, method: str):
    rows = plan_mde(traffic, conversions, confidence_pct, power_pct, method=method)
    return None if rows is None else mde_frame(rows)


with st.sidebar:
    st.header("Calculator")
    mode = st.radio("Mode", list(config.MODES), index=0, key="mode")

    if mode == config.MODE_MDE:
        st.subheader("Baseline")
        weekly_traffic = st.text_input("Weekly traffic", placeholder="e.g., 20000", key="weekly_traffic")
        weekly_conversions = st.text_input("Weekly conversions", placeholder="e.g., 400", key="weekly_conversions")
        confidence_pct = st.slider("Confidence (%)", 50, 99, config.DEFAULT_CONFIDENCE_PCT, 1, key="confidence")
        power_pct = st.slider("Power (%)", 50, 99, config.DEFAULT_POWER_PCT, 1, key="power")
        method = st.selectbox(
            "Algorithm",
            list(config.MDE_METHODS),
            index=0,
            key="method",
            help="bisection uses the variance of both arms; closed_form assumes they share the baseline variance.",
        )


def render_significance() -> None:
    left, right = st.columns(2)
    with left:
        st.markdown("#### Control (A)")
        visitors_a = st.text_input("Visitors", placeholder="e.g., 1000", key="visitors_a")
        conversions_a = st.text_input("Conversions", placeholder="e.g., 100", key="conversions_a")
    with right:
        st.markdown("#### Variation (B)")
        visitors_b = st.text_input("Visitors", placeholder="e.g., 1000", key="visitors_b")
        conversions_b = st.text_input("Conversions", placeholder="e.g., 120", key="conversions_b")

    duration = st.text_input("Test duration so far (days, optional)", placeholder="e.g., 14", key="test_duration")

    res = analyze_significance(
        parse_number(visitors_a),
        parse_number(conversions_a),
        parse_number(visitors_b),
        parse_number(conversions_b),
        duration_days=parse_number(duration) or None,
    )
    if res is None:
        st.info("Enter visitors and conversions for both variations (conversions cannot exceed visitors).")
        return

    st.subheader("Results")

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Control (A) conversion", format_percentage(res.rate_a))
    c2.metric("Variation (B) conversion", format_percentage(res.rate_b))
    c3.metric("Uplift", format_percentage(res.uplift))
    c4.metric("Confidence", format_percentage(res.confidence))

    summary = generate_summary(res)
    if res.is_significant:
        st.success(summary)
    else:
        st.warning(summary)

    if res.projection is not None:
        p1, p2, p3 = st.columns(3)
        p1.metric("Additional days needed", format_days(res.projection.additional_days))
        p2.metric("Projected total duration", format_days(res.projection.projected_total_days))
        p3.metric("Visitors needed per variation", f"{res.projection.required_per_variation:,}")

    st.dataframe(significance_frame(res), hide_index=True)

    conv_df = pd.DataFrame({"group": ["A", "B"], "conversion_rate": [res.rate_a, res.rate_b]})
    fig = px.bar(conv_df, x="group", y="conversion_rate", text=conv_df["conversion_rate"].map(format_percentage))
    fig.update_layout(yaxis_tickformat=",.2%", height=360)
    st.plotly_chart(fig)


def render_mde() -> None:
    table = _mde_table(
        parse_number(weekly_traffic),
        parse_number(weekly_conversions),
        float(confidence_pct),
        float(power_pct),
        method,
    )
    if table is None:
        st.info("Enter weekly traffic and conversions (baseline rate must be between 0% and 100%).")
        return

    st.subheader("Minimum detectable effect by test duration")
    st.dataframe(table[["Week", "Visitors / Variation", "Relative MDE"]], hide_index=True)

    chart = table.dropna(subset=["mde"])
    if len(chart):
        fig = px.line(chart, x="Week", y="mde", markers=True)
        fig.update_layout(yaxis_tickformat=",.0%", yaxis_title="Relative MDE", height=360)
        st.plotly_chart(fig)


if mode == config.MODE_SIGNIFICANCE:
    render_significance()
else:
    render_mde()
