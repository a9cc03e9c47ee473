from __future__ import annotations

import math


# Abramowitz & Stegun 7.1.26
_ERF_P = 0.3275911
_ERF_A1 = 0.254829592
_ERF_A2 = -0.284496736
_ERF_A3 = 1.421413741
_ERF_A4 = -1.453152027
_ERF_A5 = 1.061405429


def normal_cdf(z: float) -> float:
    """Standard normal CDF built on the Abramowitz-Stegun erf approximation.

    Absolute error of the erf polynomial is about 1.5e-7, so results should not be
    compared tighter than that.
    """
    sign = 1.0 if z >= 0 else -1.0
    x = abs(z) / math.sqrt(2.0)

    t = 1.0 / (1.0 + _ERF_P * x)
    poly = (
        _ERF_A1 * t
        + _ERF_A2 * t**2
        + _ERF_A3 * t**3
        + _ERF_A4 * t**4
        + _ERF_A5 * t**5
    )
    erf = 1.0 - poly * math.exp(-x * x)

    return 0.5 * (1.0 + sign * erf)


# Acklam's rational approximation, highest power first; denominators end in 1.
_CENTRAL_NUM = (
    -39.6968302866538,
    220.946098424521,
    -275.928510446969,
    138.357751867269,
    -30.6647980661472,
    2.50662827745924,
)
_CENTRAL_DEN = (
    -54.4760987982241,
    161.585836858041,
    -155.698979859887,
    66.8013118877197,
    -13.2806815528857,
    1.0,
)
_TAIL_NUM = (
    -0.00778489400243029,
    -0.322396458041136,
    -2.40075827716184,
    -2.54973253934373,
    4.37466414146497,
    2.93816398269878,
)
_TAIL_DEN = (
    0.00778469570904146,
    0.32246712907004,
    2.445134137143,
    3.75440866190742,
    1.0,
)
_P_LOW = 0.02425
_P_HIGH = 1 - _P_LOW


def _horner(coefficients: tuple[float, ...], x: float) -> float:
    result = 0.0
    for c in coefficients:
        result = result * x + c
    return result


def _lower_tail(p: float) -> float:
    q = math.sqrt(-2 * math.log(p))
    return _horner(_TAIL_NUM, q) / _horner(_TAIL_DEN, q)


def inverse_normal_cdf(p: float) -> float:
    """Inverse standard normal CDF (Peter J. Acklam's approximation).

    Returns 0.0 for p outside (0, 1) instead of raising, so callers must check the
    domain themselves whenever 0.0 is a meaningful answer.
    """
    if not (0.0 < p < 1.0):
        return 0.0

    if p < _P_LOW:
        return _lower_tail(p)

    if p <= _P_HIGH:
        q = p - 0.5
        r = q * q
        return _horner(_CENTRAL_NUM, r) * q / _horner(_CENTRAL_DEN, r)

    # upper tail mirrors the lower one
    return -_lower_tail(1 - p)
