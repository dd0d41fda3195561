"""
Sigmoid quality mapping.

Maps an unbounded native score x to a quality component value:

    Q = h * (a + s * sigmoid(x, x0, w)),   sigmoid = 1 / (1 + exp((x0 - x) / w))

clipped to [0, 100] and optionally rounded half away from zero.
"""

import math

from src.quality.types import SigmoidParameters

QUALITY_MIN = 0.0
QUALITY_MAX = 100.0


def sigmoid(x: float, x0: float, w: float) -> float:
    """
    Logistic function centred at x0 with divisor w.

    Evaluated in a form that does not overflow for large |z|; infinite
    inputs saturate to 0.0 or 1.0.

    Example:
        >>> sigmoid(0.2, x0=0.2, w=0.06)
        0.5
    """
    z = (x - x0) / w
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    e = math.exp(z)
    return e / (1.0 + e)


def round_half_away_from_zero(value: float) -> float:
    """Round to the nearest integer, ties away from zero (as C's round())."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return math.copysign(whole, value)


def clamp_quality(value: float, round_result: bool = True) -> float:
    """Clip a quality value to [0, 100], optionally rounding half away from zero."""
    value = min(max(value, QUALITY_MIN), QUALITY_MAX)
    if round_result:
        value = round_half_away_from_zero(value)
    return float(value)


def map_to_quality(raw_score: float, params: SigmoidParameters) -> float:
    """
    Map a native score to a quality component value in [0, 100].

    Args:
        raw_score: Native score; NaN marks an undefined measurement.
        params: Mapping parameters.

    Returns:
        Quality value, integral-valued when params.round is set. NaN if
        raw_score is NaN.

    Example:
        >>> map_to_quality(0.2, SigmoidParameters(h=100, x0=0.2, w=0.06))
        50.0
    """
    if math.isnan(raw_score):
        return math.nan

    value = params.h * (params.a + params.s * sigmoid(raw_score, params.x0, params.w))
    return clamp_quality(value, params.round)
