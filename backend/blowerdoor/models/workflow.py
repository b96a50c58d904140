"""
Pydantic models for the test-session workflow (caller-side state).
"""

from enum import Enum

from pydantic import BaseModel, Field


class SessionStage(str, Enum):
    SETUP = "setup"
    WEATHER = "weather"
    MULTI_POINT = "multi_point"
    RESULTS = "results"  # gated on the minimum valid point count
    REPORT = "report"


class StageAdvanceInput(BaseModel):
    stage: SessionStage
    valid_point_count: int = Field(0, ge=0)


class StageAdvanceOutput(BaseModel):
    stage: SessionStage
    can_calculate: bool
