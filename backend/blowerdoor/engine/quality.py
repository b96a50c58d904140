"""
Test-quality signals for a multi-point fit.

None of these block a result; they are reported so the auditor can decide
whether to re-run the test.
"""

from blowerdoor.config import (
    FLOW_EXPONENT_RANGE,
    MIN_CORRELATION_R2,
    MAX_POINT_DEVIATION,
    MAX_WIND_SPEED_MPH,
)
from blowerdoor.engine.regression import predict_flow
from blowerdoor.models.blower_door import WeatherConditions
from blowerdoor.models.result import RegressionFit


def find_outlier_points(
    fit: RegressionFit,
    samples: list[tuple[int, float, float]],
) -> list[int]:
    """
    Indices of points whose flow deviates from the fitted curve by more than
    MAX_POINT_DEVIATION.

    Args:
        samples: (index, building pressure, flow) for each point in the fit
    """
    outliers = []
    for index, pressure, flow in samples:
        expected = predict_flow(fit, pressure)
        if expected > 0 and abs(flow - expected) / expected > MAX_POINT_DEVIATION:
            outliers.append(index)
    return outliers


def assess_quality(
    fit: RegressionFit,
    samples: list[tuple[int, float, float]],
    weather: WeatherConditions,
) -> list[str]:
    warnings = []

    n_min, n_max = FLOW_EXPONENT_RANGE
    if not n_min <= fit.flow_exponent_n <= n_max:
        warnings.append(
            f"Flow exponent n={fit.flow_exponent_n:.3f} is outside the expected "
            f"range {n_min}-{n_max}"
        )

    if fit.correlation_r2 < MIN_CORRELATION_R2:
        warnings.append(
            f"Correlation r²={fit.correlation_r2:.4f} is below {MIN_CORRELATION_R2}"
        )

    outliers = find_outlier_points(fit, samples)
    if outliers:
        listed = ", ".join(str(i) for i in outliers)
        warnings.append(
            f"Points {listed} deviate more than {MAX_POINT_DEVIATION:.0%} "
            f"from the fitted curve"
        )

    if weather.wind_speed_mph is not None and weather.wind_speed_mph > MAX_WIND_SPEED_MPH:
        warnings.append(
            f"Wind speed {weather.wind_speed_mph:.1f} mph exceeds "
            f"{MAX_WIND_SPEED_MPH} mph; results may be biased"
        )

    return warnings
