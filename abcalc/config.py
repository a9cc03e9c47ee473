"""
Calculator settings.

Edit these constants to change thresholds, defaults and search limits.
"""

# Significance
SIGNIFICANCE_THRESHOLD = 0.95  # confidence needed to call a result significant

# Time-to-significance projection
PROJECTION_CONFIDENCE = 0.95
PROJECTION_POWER = 0.80

# MDE planning
DEFAULT_CONFIDENCE_PCT = 95
DEFAULT_POWER_PCT = 80
PLANNING_WEEKS = range(1, 7)
DAYS_PER_WEEK = 7
MDE_SEARCH_CEILING = 5.0  # 500% relative uplift
BISECTION_ITERATIONS = 100
MDE_METHODS = ("bisection", "closed_form")

# Page modes
MODE_SIGNIFICANCE = "Significance"
MODE_MDE = "Minimum detectable effect"
MODES = (MODE_SIGNIFICANCE, MODE_MDE)
