from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from . import config
from .normal import inverse_normal_cdf


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanningInput:
    weekly_traffic: float
    weekly_conversions: float
    confidence: float  # in (0, 1)
    power: float  # in (0, 1)

    @property
    def baseline_rate(self) -> float:
        return self.weekly_conversions / self.weekly_traffic

    @property
    def z_alpha(self) -> float:
        return inverse_normal_cdf(1 - (1 - self.confidence) / 2)

    @property
    def z_beta(self) -> float:
        return inverse_normal_cdf(self.power)


@dataclass(frozen=True)
class MdeRow:
    weeks: int
    visitors_per_variation: float
    mde: Optional[float]  # relative uplift; None means "not found"


def required_sample_size(baseline_rate: float, mde: float, z_alpha: float, z_beta: float) -> float:
    """Visitors per variation needed to detect a relative uplift of `mde`.

    Uses the unpooled (asymmetric) variance of both arms. Infinite when the
    uplift is not positive or pushes the variation rate above 1.
    """
    p1 = baseline_rate
    p2 = p1 * (1 + mde)
    if mde <= 0 or p2 > 1:
        return math.inf
    return (z_alpha + z_beta) ** 2 * (p1 * (1 - p1) + p2 * (1 - p2)) / (p2 - p1) ** 2


def closed_form_mde(baseline_rate: float, n_per_variation: float, z_alpha: float, z_beta: float) -> float:
    """Relative MDE assuming both arms share the baseline variance (p2 ~ p1)."""
    p = baseline_rate
    return (z_alpha + z_beta) / p * math.sqrt(2 * p * (1 - p) / n_per_variation)


def bisection_mde(
    baseline_rate: float,
    n_per_variation: float,
    z_alpha: float,
    z_beta: float,
    *,
    ceiling: float = config.MDE_SEARCH_CEILING,
    iterations: int = config.BISECTION_ITERATIONS,
) -> Optional[float]:
    """Smallest relative uplift whose required sample size fits `n_per_variation`.

    Returns None when even the search ceiling cannot be detected.
    """
    # keep p2 <= 1 inside the bracket, rounding included
    hi = min(ceiling, (1 - baseline_rate) / baseline_rate)
    while baseline_rate * (1 + hi) > 1:
        hi = math.nextafter(hi, 0.0)
    if required_sample_size(baseline_rate, hi, z_alpha, z_beta) > n_per_variation:
        return None

    lo = 0.0
    for _ in range(iterations):
        mid = (lo + hi) / 2
        if required_sample_size(baseline_rate, mid, z_alpha, z_beta) > n_per_variation:
            lo = mid
        else:
            hi = mid
    return hi


def _is_invalid(
    weekly_traffic: float,
    weekly_conversions: float,
    confidence: float,
    power: float,
) -> bool:
    values = (weekly_traffic, weekly_conversions, confidence, power)
    if not all(math.isfinite(v) for v in values):
        return True
    if weekly_traffic <= 0 or weekly_conversions < 0 or weekly_conversions > weekly_traffic:
        return True
    if not (0 < confidence < 1) or not (0 < power < 1):
        return True
    return not (0 < weekly_conversions / weekly_traffic < 1)


def plan_mde(
    weekly_traffic: float,
    weekly_conversions: float,
    confidence_pct: float = config.DEFAULT_CONFIDENCE_PCT,
    power_pct: float = config.DEFAULT_POWER_PCT,
    *,
    method: str = "bisection",
) -> Optional[List[MdeRow]]:
    """Minimum detectable relative uplift for each planned duration (1..6 weeks).

    Traffic is split evenly between two variations, so after `w` weeks each one has
    seen `weekly_traffic * w / 2` visitors. `method` is "bisection" (exact
    two-arm variance) or "closed_form" (shared-variance approximation); one table
    always uses a single method. Returns None for inputs that cannot be planned.
    """
    if method not in config.MDE_METHODS:
        raise ValueError(f"method must be one of {config.MDE_METHODS}")

    confidence = confidence_pct / 100
    power = power_pct / 100
    if _is_invalid(weekly_traffic, weekly_conversions, confidence, power):
        logger.debug(
            "rejecting plan traffic=%s conversions=%s confidence=%s%% power=%s%%",
            weekly_traffic,
            weekly_conversions,
            confidence_pct,
            power_pct,
        )
        return None

    plan = PlanningInput(
        weekly_traffic=weekly_traffic,
        weekly_conversions=weekly_conversions,
        confidence=confidence,
        power=power,
    )
    p = plan.baseline_rate
    z_alpha = plan.z_alpha
    z_beta = plan.z_beta

    rows: List[MdeRow] = []
    for weeks in config.PLANNING_WEEKS:
        # daily traffic * days, halved across the two variations
        n = (weekly_traffic / config.DAYS_PER_WEEK) * (weeks * config.DAYS_PER_WEEK) / 2

        if method == "closed_form":
            mde: Optional[float] = closed_form_mde(p, n, z_alpha, z_beta)
        else:
            mde = bisection_mde(p, n, z_alpha, z_beta)
            if mde is None:
                logger.debug("no detectable uplift within ceiling for %s week(s), n=%s", weeks, n)

        rows.append(MdeRow(weeks=weeks, visitors_per_variation=n, mde=mde))

    return rows
