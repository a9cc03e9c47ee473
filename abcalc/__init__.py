"""Core A/B calculator logic: significance testing and MDE planning."""

from .normal import normal_cdf, inverse_normal_cdf
from .significance import (
    SignificanceResult,
    TimeProjection,
    TrialArm,
    analyze_significance,
    generate_summary,
    project_duration,
)
from .planner import MdeRow, PlanningInput, plan_mde
from .formatting import format_days, format_percentage, parse_number
