"""
API routes for blower-door test calculations.
"""

from fastapi import APIRouter, HTTPException

from blowerdoor.config import CODE_THRESHOLDS
from blowerdoor.engine.blower_door import compute_result
from blowerdoor.engine.calibration import DEFAULT_CALIBRATION, convert_flow
from blowerdoor.engine.compliance import resolve_code_threshold
from blowerdoor.engine.errors import UnrecognizedRingError
from blowerdoor.engine.validation import summarize_validation
from blowerdoor.engine.workflow import advance_stage, can_calculate
from blowerdoor.models.blower_door import (
    BlowerDoorInput,
    FlowConversionInput,
    FlowConversionOutput,
    PointValidationInput,
)
from blowerdoor.models.result import (
    BlowerDoorOutput,
    CodeThresholdOutput,
    PointValidationOutput,
    RingCurveOutput,
)
from blowerdoor.models.workflow import StageAdvanceInput, StageAdvanceOutput

router = APIRouter(prefix="/api/v1/blower-door", tags=["blower-door"])


@router.post("/calculate", response_model=BlowerDoorOutput)
async def calculate(data: BlowerDoorInput) -> BlowerDoorOutput:
    """
    Run the multi-point calculation for one test session.

    Too few valid points is not an HTTP error: the response has ok=false and
    an error code so the client can keep collecting readings.
    """
    try:
        threshold = data.code_threshold_ach50
        if threshold is None:
            threshold = resolve_code_threshold(data.jurisdiction)
        return compute_result(data.points, data.building, data.weather, threshold)
    except UnrecognizedRingError as e:
        raise HTTPException(status_code=500, detail=f"Calibration error: {str(e)}")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.post("/validate", response_model=PointValidationOutput)
async def validate(data: PointValidationInput) -> PointValidationOutput:
    """Flag invalid points and report whether calculation is allowed yet."""
    return summarize_validation(data.points)


@router.post("/flow", response_model=FlowConversionOutput)
async def flow(data: FlowConversionInput) -> FlowConversionOutput:
    """Convert a single fan pressure reading to CFM for live entry."""
    try:
        cfm = convert_flow(data.fan_pressure_pa, data.ring_config)
    except UnrecognizedRingError as e:
        raise HTTPException(status_code=500, detail=f"Calibration error: {str(e)}")
    return FlowConversionOutput(
        fan_pressure_pa=data.fan_pressure_pa,
        ring_config=data.ring_config,
        cfm=round(cfm, 2),
    )


@router.post("/session/advance", response_model=StageAdvanceOutput)
async def session_advance(data: StageAdvanceInput) -> StageAdvanceOutput:
    """Move a test session to its next stage, enforcing the point-count gate."""
    try:
        stage = advance_stage(data.stage, data.valid_point_count)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return StageAdvanceOutput(stage=stage, can_calculate=can_calculate(data.valid_point_count))


@router.get("/rings", response_model=list[RingCurveOutput])
async def rings():
    """List the fan calibration curves."""
    return [
        RingCurveOutput(ring_config=ring, coefficient=curve.coefficient, exponent=curve.exponent)
        for ring, curve in DEFAULT_CALIBRATION.items()
    ]


@router.get("/codes", response_model=list[CodeThresholdOutput])
async def codes():
    """List the configured airtightness code thresholds."""
    return [
        CodeThresholdOutput(jurisdiction=key, threshold_ach50=value)
        for key, value in CODE_THRESHOLDS.items()
    ]
