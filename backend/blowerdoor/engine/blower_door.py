"""
Blower-door calculation pipeline.

Runs validation → flow conversion → environmental correction → regression →
derived metrics → compliance and assembles one immutable TestResult.

Expected conditions (too few points, missing building volume, bad points)
are encoded in the returned BlowerDoorOutput. Only configuration defects,
such as a calibration table without a curve for a valid ring, raise.
"""

import logging
import math
from typing import Optional

from blowerdoor.config import MIN_VALID_POINTS
from blowerdoor.engine.calibration import DEFAULT_CALIBRATION, CalibrationTable, convert_flow
from blowerdoor.engine.compliance import evaluate_compliance
from blowerdoor.engine.corrections import (
    altitude_correction,
    apply_corrections,
    temperature_correction,
)
from blowerdoor.engine.errors import BlowerDoorError, DegenerateFitError
from blowerdoor.engine.metrics import (
    calculate_ach50,
    calculate_cfm50,
    calculate_ela,
    indoor_air_density,
)
from blowerdoor.engine.quality import assess_quality
from blowerdoor.engine.regression import fit_power_law
from blowerdoor.engine.validation import validate_points
from blowerdoor.models.blower_door import BuildingProfile, TestPoint, WeatherConditions
from blowerdoor.models.result import (
    BlowerDoorOutput,
    CalculationError,
    ErrorCode,
    PointResult,
    RegressionFit,
    TestResult,
)

logger = logging.getLogger(__name__)


def _round_opt(value: Optional[float], digits: int) -> Optional[float]:
    return None if value is None else round(value, digits)


def _convert_points(
    results: list[PointResult],
    table: CalibrationTable,
    correction_factor: float,
) -> tuple[list[PointResult], list[float]]:
    """
    Attach raw and corrected CFM to every valid point.

    Returns the updated points and the unrounded corrected flows of the valid
    points, in order. The regression runs on the unrounded flows; rounding is
    for display only.
    """
    valid = [p for p in results if p.valid]
    raw = [convert_flow(p.fan_pressure_pa, p.ring_config, table) for p in valid]
    corrected = apply_corrections(raw, correction_factor)

    flows = iter(zip(raw, corrected))
    converted = []
    for point in results:
        if not point.valid:
            converted.append(point)
            continue
        cfm, cfm_corrected = next(flows)
        converted.append(point.model_copy(update={
            "computed_cfm": round(cfm, 4),
            "corrected_cfm": round(cfm_corrected, 4),
        }))
    return converted, corrected


def _invalid_point_diagnostics(points: list[PointResult]) -> list[CalculationError]:
    return [
        CalculationError(
            code=ErrorCode.INVALID_POINT,
            message=p.issue or "invalid test point",
            point_index=p.index,
        )
        for p in points
        if not p.valid
    ]


def compute_result(
    points: list[TestPoint],
    building: BuildingProfile,
    weather: WeatherConditions,
    code_threshold_ach50: float,
    calibration: CalibrationTable = DEFAULT_CALIBRATION,
) -> BlowerDoorOutput:
    """
    Turn raw multi-point readings into leakage metrics and a code verdict.

    Args:
        points: Field readings (any order; invalid points are flagged, not dropped)
        building: Building geometry; volume is needed for ACH50, ELA and compliance
        weather: Site conditions; each correction is applied only when its data is present
        code_threshold_ach50: ACH50 limit of the applicable code
        calibration: Fan calibration table

    Returns:
        BlowerDoorOutput with either a TestResult or a CalculationError

    Raises:
        UnrecognizedRingError: the calibration table cannot resolve a valid ring
        ValueError: the code threshold is not a positive number
    """
    if not math.isfinite(code_threshold_ach50) or code_threshold_ach50 <= 0:
        raise ValueError("Code threshold must be a positive, finite ACH50 value")

    temp_factor, weather_corrected = temperature_correction(weather)
    altitude_factor, altitude_corrected = altitude_correction(weather)
    correction_factor = temp_factor * altitude_factor

    point_results, flows = _convert_points(
        validate_points(points), calibration, correction_factor
    )
    valid = [p for p in point_results if p.valid]
    logger.debug(
        "Blower door calculation: %d of %d points valid, correction factor %.4f",
        len(valid), len(point_results), correction_factor,
    )

    if len(valid) < MIN_VALID_POINTS:
        logger.warning(
            "Insufficient valid points for regression: %d < %d",
            len(valid), MIN_VALID_POINTS,
        )
        return BlowerDoorOutput(
            error=CalculationError(
                code=ErrorCode.INSUFFICIENT_POINTS,
                message=(
                    f"Need at least {MIN_VALID_POINTS} valid test points; "
                    f"got {len(valid)}"
                ),
            ),
            points=tuple(point_results),
        )

    try:
        fit = fit_power_law(
            [p.target_pressure_pa for p in valid],
            flows,
        )
    except BlowerDoorError as exc:
        code = (
            ErrorCode.DEGENERATE_FIT
            if isinstance(exc, DegenerateFitError)
            else ErrorCode.INSUFFICIENT_POINTS
        )
        logger.warning("Regression failed: %s", exc)
        return BlowerDoorOutput(
            error=CalculationError(code=code, message=str(exc)),
            points=tuple(point_results),
        )

    cfm50 = calculate_cfm50(fit)
    ach50 = calculate_ach50(cfm50, building.volume_cu_ft)
    if ach50 is not None:
        ach50 = round(ach50, 4)

    diagnostics = _invalid_point_diagnostics(point_results)
    if ach50 is None:
        diagnostics.append(CalculationError(
            code=ErrorCode.MISSING_BUILDING_VOLUME,
            message="Building volume is missing or not positive; "
                    "ACH50, ELA and compliance are indeterminate",
        ))

    # ELA only when the full point set entered the fit and geometry is known
    ela = None
    if ach50 is not None and len(valid) == len(point_results):
        ela = calculate_ela(fit, indoor_air_density(weather))

    status, margin = evaluate_compliance(ach50, code_threshold_ach50)

    warnings = assess_quality(
        fit,
        [(p.index, p.target_pressure_pa, q) for p, q in zip(valid, flows)],
        weather,
    )

    result = TestResult(
        cfm50=round(cfm50, 2),
        cfm50_uncorrected=round(cfm50 / correction_factor, 2),
        ach50=ach50,
        ela_sq_in=_round_opt(ela, 2),
        fit=RegressionFit(
            flow_coefficient_c=round(fit.flow_coefficient_c, 6),
            flow_exponent_n=round(fit.flow_exponent_n, 6),
            correlation_r2=round(fit.correlation_r2, 6),
            valid_point_count=fit.valid_point_count,
        ),
        weather_corrected=weather_corrected,
        temperature_correction_factor=round(temp_factor, 6),
        altitude_correction_factor=round(altitude_factor, 6),
        altitude_corrected=altitude_corrected,
        code_threshold_ach50=code_threshold_ach50,
        compliance_status=status,
        compliance_margin_ach50=margin,
        points=tuple(point_results),
        diagnostics=tuple(diagnostics),
        quality_warnings=tuple(warnings),
    )
    logger.debug(
        "CFM50 %.1f, ACH50 %s, status %s", result.cfm50, result.ach50, status.value
    )
    return BlowerDoorOutput(result=result, points=result.points)
