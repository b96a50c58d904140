"""
BlowerDoor configuration and constants.
"""

from enum import Enum


class RingConfig(str, Enum):
    OPEN = "Open"      # No flow ring installed
    RING_A = "Ring A"  # Largest restriction insert
    RING_B = "Ring B"
    RING_C = "Ring C"
    RING_D = "Ring D"  # Smallest orifice, lowest flows

    @classmethod
    def from_label(cls, label: str) -> "RingConfig | None":
        """Parse a field label ("Ring A", "ring_a", "A", "open") or return None."""
        key = label.strip().lower().replace("_", " ").replace("-", " ")
        if key.startswith("ring "):
            key = key[5:].strip()
        return _RING_ALIASES.get(key)


_RING_ALIASES = {
    "open": RingConfig.OPEN,
    "a": RingConfig.RING_A,
    "b": RingConfig.RING_B,
    "c": RingConfig.RING_C,
    "d": RingConfig.RING_D,
}


# Reference pressures for derived metrics
REFERENCE_PRESSURE_PA = 50.0   # CFM50 / ACH50
ELA_REFERENCE_PRESSURE_PA = 4.0  # LBL effective leakage area

# ELA discharge coefficient (LBL definition uses Cd = 1.0 at 4 Pa)
ELA_DISCHARGE_COEFFICIENT = 1.0

# Minimum number of valid points for a multi-point regression
MIN_VALID_POINTS = 5

# Standard atmosphere
STANDARD_BAROMETRIC_INHG = 29.92
RANKINE_OFFSET = 459.67  # °F → °R

# Default indoor conditions for air density when weather is missing
DEFAULT_INDOOR_TEMP_F = 70.0
DEFAULT_INDOOR_HUMIDITY_PCT = 0.0

# Unit conversions
PSI_PER_INHG = 0.4911541
LBF_FT2_PER_PA = 0.0208854342
GC_LBM_FT_PER_LBF_S2 = 32.174
SQ_IN_PER_SQ_FT = 144.0

# Test quality signals (non-fatal)
FLOW_EXPONENT_RANGE = (0.5, 1.0)
MIN_CORRELATION_R2 = 0.98
MAX_POINT_DEVIATION = 0.20  # fraction of fitted flow
MAX_WIND_SPEED_MPH = 4.5

# Airtightness code thresholds (ACH50), keyed by jurisdiction/code edition.
# Minnesota 2020 Energy Code adopts 3.0 ACH50 for both climate zones.
CODE_THRESHOLDS: dict[str, float] = {
    "MN-2020-CZ6": 3.0,
    "MN-2020-CZ7": 3.0,
    "IECC-2021-CZ1-2": 5.0,
    "IECC-2021-CZ3-8": 3.0,
}

DEFAULT_JURISDICTION = "MN-2020-CZ6"

# Local frontend dev servers allowed by CORS
CORS_ORIGINS = [
    "http://localhost:5173",  # Vite default
    "http://localhost:3000",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:3000",
]
