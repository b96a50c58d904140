"""
Fan calibration and flow conversion.

Each flow ring restricts the fan's effective orifice, so every ring carries
its own calibration curve:

    Q [CFM] = c × ΔP_fan^n

Curve shapes follow the field calibration used for Model 3 fans in Minnesota
audits (n = 0.5, ring coefficients in the same proportions as the Open
configuration).
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from blowerdoor.config import RingConfig
from blowerdoor.engine.errors import UnrecognizedRingError


@dataclass(frozen=True)
class RingCurve:
    """Calibration curve for one ring configuration."""

    coefficient: float
    exponent: float

    def __post_init__(self):
        if self.coefficient <= 0 or self.exponent <= 0:
            raise ValueError("Calibration coefficient and exponent must be positive")

    def flow(self, fan_pressure_pa: float) -> float:
        return self.coefficient * fan_pressure_pa ** self.exponent


CalibrationTable = Mapping[RingConfig, RingCurve]

DEFAULT_CALIBRATION: CalibrationTable = MappingProxyType({
    RingConfig.OPEN: RingCurve(74.0, 0.5),
    RingConfig.RING_A: RingCurve(55.4, 0.5),
    RingConfig.RING_B: RingCurve(40.0, 0.5),
    RingConfig.RING_C: RingCurve(26.8, 0.5),
    RingConfig.RING_D: RingCurve(17.6, 0.5),
})


def lookup_curve(ring: RingConfig, table: CalibrationTable = DEFAULT_CALIBRATION) -> RingCurve:
    """
    Return the calibration curve for a ring.

    Raises:
        UnrecognizedRingError: the table has no curve for this ring. There is
            deliberately no fallback to the Open curve.
    """
    try:
        return table[ring]
    except KeyError:
        raise UnrecognizedRingError(ring) from None


def convert_flow(
    fan_pressure_pa: float,
    ring: RingConfig,
    table: CalibrationTable = DEFAULT_CALIBRATION,
) -> float:
    """
    Convert a fan pressure reading to airflow in CFM.

    Args:
        fan_pressure_pa: Fan pressure (Pa), must be non-negative
        ring: Ring configuration installed on the fan
        table: Calibration table to use

    Returns:
        Airflow through the fan (CFM), strictly increasing in fan pressure
    """
    if fan_pressure_pa < 0:
        raise ValueError("fan_pressure_pa must be non-negative")
    return lookup_curve(ring, table).flow(fan_pressure_pa)
