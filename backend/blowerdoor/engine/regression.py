"""
Multi-point power-law regression.

Blower-door leakage follows Q = C × ΔP^n. Taking logs gives a straight line

    ln Q = ln C + n × ln ΔP

which is fitted by ordinary least squares over every valid point. Duplicate
(ΔP, Q) pairs are independent samples and are not merged.
"""

import math

import numpy as np
from scipy.stats import linregress

from blowerdoor.config import MIN_VALID_POINTS
from blowerdoor.engine.errors import DegenerateFitError, InsufficientPointsError
from blowerdoor.models.result import RegressionFit


def fit_power_law(
    pressures: list[float],
    flows: list[float],
) -> RegressionFit:
    """
    Fit Q = C × ΔP^n to (building pressure, flow) pairs.

    Args:
        pressures: Building pressure differences (Pa), all > 0
        flows: Airflows (CFM) at those pressures, all > 0

    Returns:
        RegressionFit with C, n and r² of the log-log fit

    Raises:
        InsufficientPointsError: fewer than MIN_VALID_POINTS pairs
        DegenerateFitError: all pressures identical
    """
    if len(pressures) != len(flows):
        raise ValueError("pressures and flows must have the same length")
    if len(pressures) < MIN_VALID_POINTS:
        raise InsufficientPointsError(len(pressures), MIN_VALID_POINTS)
    if any(p <= 0 for p in pressures) or any(q <= 0 for q in flows):
        raise ValueError("pressures and flows must be positive for a log-log fit")

    # Sort by pressure so the sums (and so the fit) do not depend on point order
    pairs = sorted(zip(pressures, flows), reverse=True)
    x = np.log(np.array([p for p, _ in pairs], dtype=float))
    y = np.log(np.array([q for _, q in pairs], dtype=float))

    if np.ptp(x) == 0.0:
        raise DegenerateFitError(
            "All test points share the same building pressure; "
            "a flow exponent cannot be determined"
        )

    fit = linregress(x, y)
    r = float(fit.rvalue) if math.isfinite(fit.rvalue) else 0.0

    return RegressionFit(
        flow_coefficient_c=math.exp(float(fit.intercept)),
        flow_exponent_n=float(fit.slope),
        correlation_r2=r * r,
        valid_point_count=len(pairs),
    )


def predict_flow(fit: RegressionFit, pressure_pa: float) -> float:
    """Evaluate the fitted model at a building pressure (Pa)."""
    return fit.flow_coefficient_c * pressure_pa ** fit.flow_exponent_n
