"""
Pydantic models for blower-door test input.

Provides models for:
  - Raw multi-point readings (house pressure, fan pressure, flow ring)
  - Building geometry used for ACH50 and ELA
  - Weather/site conditions used for environmental corrections
"""

from enum import Enum
from typing import Annotated, Optional, Union

from pydantic import BaseModel, Field, field_validator

from blowerdoor.config import RingConfig, RANKINE_OFFSET, DEFAULT_JURISDICTION


class BasementType(str, Enum):
    NONE = "none"
    UNCONDITIONED = "unconditioned"
    CONDITIONED = "conditioned"


class TestPoint(BaseModel):
    """A single multi-point reading as entered in the field."""

    __test__ = False

    index: int = Field(..., description="Stable position identifier (not an ordering)")
    target_pressure_pa: Optional[float] = Field(
        None, description="Induced building pressure (house ΔP), Pa"
    )
    fan_pressure_pa: Optional[float] = Field(
        None, description="Fan pressure reading, Pa"
    )
    # Known labels become RingConfig; anything else stays a raw string so the
    # validator can flag the point instead of rejecting the whole request.
    ring_config: Annotated[
        Union[RingConfig, str], Field(union_mode="left_to_right")
    ] = RingConfig.OPEN

    @field_validator("ring_config", mode="before")
    @classmethod
    def _parse_ring_label(cls, value):
        if isinstance(value, str) and not isinstance(value, RingConfig):
            return RingConfig.from_label(value) or value
        return value


class BuildingProfile(BaseModel):
    """Building geometry. Volume is required for ACH50, ELA and compliance."""

    volume_cu_ft: Optional[float] = None
    conditioned_area_sq_ft: Optional[float] = Field(None, ge=0)
    surface_area_sq_ft: Optional[float] = Field(None, ge=0)
    stories: Optional[int] = Field(None, ge=1)
    basement_type: Optional[BasementType] = None


class WeatherConditions(BaseModel):
    """Site conditions during the test. Every field is optional."""

    outdoor_temp_f: Optional[float] = Field(None, gt=-RANKINE_OFFSET)
    indoor_temp_f: Optional[float] = Field(None, gt=-RANKINE_OFFSET)
    outdoor_humidity_pct: Optional[float] = Field(None, ge=0, le=100)
    indoor_humidity_pct: Optional[float] = Field(None, ge=0, le=100)
    wind_speed_mph: Optional[float] = Field(None, ge=0)
    barometric_pressure_in_hg: Optional[float] = Field(
        None, ge=20.0, le=32.0,
        description="Station barometric pressure (realistic range 20-32 inHg)",
    )
    altitude_ft: Optional[float] = Field(None, ge=-1500.0, le=15000.0)


class BlowerDoorInput(BaseModel):
    """Request body for a blower-door calculation."""

    points: list[TestPoint]
    building: BuildingProfile = Field(default_factory=BuildingProfile)
    weather: WeatherConditions = Field(default_factory=WeatherConditions)

    # Explicit threshold wins; otherwise looked up from the jurisdiction key
    code_threshold_ach50: Optional[float] = Field(None, gt=0)
    jurisdiction: str = DEFAULT_JURISDICTION


class PointValidationInput(BaseModel):
    """Request body for validating points before calculation."""

    points: list[TestPoint]


class FlowConversionInput(BaseModel):
    """Single fan-pressure → CFM conversion."""

    fan_pressure_pa: float = Field(..., ge=0)
    ring_config: RingConfig = RingConfig.OPEN

    @field_validator("ring_config", mode="before")
    @classmethod
    def _parse_ring_label(cls, value):
        if isinstance(value, str) and not isinstance(value, RingConfig):
            return RingConfig.from_label(value) or value
        return value


class FlowConversionOutput(BaseModel):
    fan_pressure_pa: float
    ring_config: RingConfig
    cfm: float
