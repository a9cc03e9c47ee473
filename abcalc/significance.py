from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from . import config
from .normal import inverse_normal_cdf, normal_cdf


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrialArm:
    visitors: float
    conversions: float

    @property
    def rate(self) -> float:
        return self.conversions / self.visitors


@dataclass(frozen=True)
class TimeProjection:
    required_per_variation: int
    required_total_visitors: int
    visitors_per_day: float
    required_days: int
    additional_days: float
    projected_total_days: float


@dataclass(frozen=True)
class SignificanceResult:
    control: TrialArm
    variation: TrialArm
    rate_a: float
    rate_b: float
    absolute_lift: float
    uplift: float
    z_score: float
    p_value: Optional[float]
    confidence: Optional[float]
    is_significant: bool
    projection: Optional[TimeProjection] = None


def _is_invalid(visitors: float, conversions: float) -> bool:
    if not (math.isfinite(visitors) and math.isfinite(conversions)):
        return True
    return visitors <= 0 or conversions < 0 or conversions > visitors


def _uplift(rate_a: float, rate_b: float) -> float:
    if rate_a == 0:
        return math.inf if rate_b > 0 else 0.0
    return (rate_b - rate_a) / rate_a


def project_duration(
    control: TrialArm,
    variation: TrialArm,
    duration_days: Optional[float],
) -> Optional[TimeProjection]:
    """Estimate how many more days the test needs to reach significance.

    Assumes traffic and both conversion rates stay where they are now, so this is a
    point estimate only. Targets PROJECTION_CONFIDENCE (two-sided) and PROJECTION_POWER.
    """
    if duration_days is None or not math.isfinite(duration_days) or duration_days <= 0:
        return None

    p1 = control.rate
    p2 = variation.rate
    if not (0 < p1 < 1 and 0 < p2 < 1) or p1 == p2:
        return None

    pooled_p = (control.conversions + variation.conversions) / (control.visitors + variation.visitors)

    z_alpha = inverse_normal_cdf(1 - (1 - config.PROJECTION_CONFIDENCE) / 2)
    z_beta = inverse_normal_cdf(config.PROJECTION_POWER)

    numerator = z_alpha * math.sqrt(2 * pooled_p * (1 - pooled_p)) + z_beta * math.sqrt(
        p1 * (1 - p1) + p2 * (1 - p2)
    )
    required_per_variation = int(math.ceil(numerator**2 / (p1 - p2) ** 2))
    required_total = required_per_variation * 2

    visitors_per_day = (control.visitors + variation.visitors) / duration_days
    required_days = int(math.ceil(required_total / visitors_per_day))

    additional = max(0.0, required_days - duration_days)

    return TimeProjection(
        required_per_variation=required_per_variation,
        required_total_visitors=required_total,
        visitors_per_day=visitors_per_day,
        required_days=required_days,
        additional_days=additional,
        projected_total_days=duration_days + additional,
    )


def analyze_significance(
    visitors_a: float,
    conversions_a: float,
    visitors_b: float,
    conversions_b: float,
    duration_days: Optional[float] = None,
) -> Optional[SignificanceResult]:
    """Two-tailed two-proportion z-test (pooled SE) of variation B against control A.

    Returns None when the counts cannot describe a real experiment. When
    `duration_days` is given the result also carries a time-to-significance projection.
    """
    if _is_invalid(visitors_a, conversions_a) or _is_invalid(visitors_b, conversions_b):
        logger.debug(
            "rejecting counts A=%s/%s B=%s/%s",
            conversions_a,
            visitors_a,
            conversions_b,
            visitors_b,
        )
        return None

    control = TrialArm(visitors=visitors_a, conversions=conversions_a)
    variation = TrialArm(visitors=visitors_b, conversions=conversions_b)

    p1 = control.rate
    p2 = variation.rate
    uplift = _uplift(p1, p2)

    pooled_p = (conversions_a + conversions_b) / (visitors_a + visitors_b)
    se_pooled = math.sqrt(pooled_p * (1 - pooled_p) * (1 / visitors_a + 1 / visitors_b))

    if p1 == 0 and p2 > 0:
        # No control conversions to compare against: uplift is unbounded, no verdict.
        z_score = 0.0
        confidence, p_value = None, None
        is_significant = False
    elif se_pooled == 0:
        # Everyone (or no one) converted: no variance to test against.
        z_score = 0.0
        if p1 == p2:
            confidence, p_value = 0.5, 1.0
        else:
            confidence = 1.0 if p2 > p1 else 0.0
            p_value = 0.0
        is_significant = False
    else:
        z_score = (p2 - p1) / se_pooled
        p_value = 2 * (1 - normal_cdf(abs(z_score)))
        confidence = 1 - p_value
        is_significant = confidence >= config.SIGNIFICANCE_THRESHOLD

    return SignificanceResult(
        control=control,
        variation=variation,
        rate_a=p1,
        rate_b=p2,
        absolute_lift=p2 - p1,
        uplift=uplift,
        z_score=z_score,
        p_value=p_value,
        confidence=confidence,
        is_significant=is_significant,
        projection=project_duration(control, variation, duration_days),
    )


def generate_summary(result: SignificanceResult) -> str:
    if result.is_significant:
        return "The change is statistically significant."

    projection = result.projection
    if projection is None:
        return "The change is not statistically significant."

    if projection.additional_days == 0:
        return (
            "The change is not statistically significant yet. At the current traffic "
            f"the test already has enough visitors ({projection.required_total_visitors:,}) "
            "to detect the observed difference, so it may simply be noise."
        )

    return (
        "The change is not statistically significant yet. If traffic and conversion "
        f"rates hold, it needs about {math.ceil(projection.additional_days):,} more days "
        f"({math.ceil(projection.projected_total_days):,} days in total, "
        f"{projection.required_total_visitors:,} visitors)."
    )
