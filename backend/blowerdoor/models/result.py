"""
Pydantic models for blower-door calculation output.

The engine returns a BlowerDoorOutput for every expected condition:
either ok=True with an immutable TestResult, or ok=False with a
CalculationError. Per-point validity is reported in both cases.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

from blowerdoor.config import RingConfig


class ComplianceStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    INDETERMINATE = "indeterminate"  # ACH50 not computable


class ErrorCode(str, Enum):
    INSUFFICIENT_POINTS = "insufficient_points"          # fatal
    MISSING_BUILDING_VOLUME = "missing_building_volume"  # partial result
    INVALID_POINT = "invalid_point"                      # point excluded
    DEGENERATE_FIT = "degenerate_fit"                    # fatal


class CalculationError(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    message: str
    point_index: Optional[int] = None


class PointResult(BaseModel):
    """A TestPoint with its derived flow and validity flag."""

    model_config = ConfigDict(frozen=True)

    index: int
    target_pressure_pa: Optional[float]
    fan_pressure_pa: Optional[float]
    ring_config: Union[RingConfig, str] = Field(union_mode="left_to_right")
    computed_cfm: Optional[float] = None   # raw calibration output
    corrected_cfm: Optional[float] = None  # after environmental scaling
    valid: bool
    issue: Optional[str] = None


class RegressionFit(BaseModel):
    """Power-law fit Q = C × ΔP^n over the valid points."""

    model_config = ConfigDict(frozen=True)

    flow_coefficient_c: float
    flow_exponent_n: float
    correlation_r2: float
    valid_point_count: int = Field(..., ge=5)

    @computed_field
    @property
    def correlation_r(self) -> float:
        return max(0.0, self.correlation_r2) ** 0.5


class TestResult(BaseModel):
    """Finalized metrics and verdict for one test session."""

    __test__ = False
    model_config = ConfigDict(frozen=True)

    cfm50: float
    cfm50_uncorrected: float
    ach50: Optional[float]        # None = not computable (no building volume)
    ela_sq_in: Optional[float]    # None = not available
    fit: RegressionFit

    weather_corrected: bool
    temperature_correction_factor: float
    altitude_correction_factor: float
    altitude_corrected: bool

    code_threshold_ach50: float
    compliance_status: ComplianceStatus
    compliance_margin_ach50: Optional[float]  # threshold - ach50

    points: tuple[PointResult, ...]
    diagnostics: tuple[CalculationError, ...] = ()
    quality_warnings: tuple[str, ...] = ()


class BlowerDoorOutput(BaseModel):
    """Result<TestResult, CalculationError> as returned to the caller."""

    model_config = ConfigDict(frozen=True)

    result: Optional[TestResult] = None
    error: Optional[CalculationError] = None
    points: tuple[PointResult, ...] = ()

    @computed_field
    @property
    def ok(self) -> bool:
        return self.result is not None


class PointValidationOutput(BaseModel):
    points: list[PointResult]
    valid_point_count: int
    can_calculate: bool


class RingCurveOutput(BaseModel):
    ring_config: RingConfig
    coefficient: float
    exponent: float


class CodeThresholdOutput(BaseModel):
    jurisdiction: str
    threshold_ach50: float
