"""
Test-session workflow gate.

This is caller-side state: setup → weather → multi_point → results → report.
The engine itself is stateless; this module only decides whether a session
may move on, in particular whether the results stage (the calculate action)
is reachable yet.
"""

from blowerdoor.config import MIN_VALID_POINTS
from blowerdoor.models.workflow import SessionStage

_STAGE_ORDER = [
    SessionStage.SETUP,
    SessionStage.WEATHER,
    SessionStage.MULTI_POINT,
    SessionStage.RESULTS,
    SessionStage.REPORT,
]


def can_calculate(valid_point_count: int) -> bool:
    return valid_point_count >= MIN_VALID_POINTS


def advance_stage(stage: SessionStage, valid_point_count: int) -> SessionStage:
    """
    Return the stage after `stage`.

    Raises:
        ValueError: at the last stage, or when entering results without
            enough valid points
    """
    position = _STAGE_ORDER.index(stage)
    if position == len(_STAGE_ORDER) - 1:
        raise ValueError(f"'{stage.value}' is the final stage")

    next_stage = _STAGE_ORDER[position + 1]
    if next_stage == SessionStage.RESULTS and not can_calculate(valid_point_count):
        raise ValueError(
            f"Need at least {MIN_VALID_POINTS} valid test points before "
            f"calculating results; have {valid_point_count}"
        )
    return next_stage
