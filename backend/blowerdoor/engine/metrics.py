"""
Derived leakage metrics evaluated from the fitted power-law model.

  CFM50 = C × 50^n
  ACH50 = CFM50 × 60 / Volume
  ELA   = Q4 / (Cd × √(2 × ΔP / ρ))   at ΔP = 4 Pa, Cd = 1.0 (LBL)

ACH50 and ELA return None rather than a sentinel number when the inputs
they need are missing.
"""

import math
from typing import Optional

import psychrolib

from blowerdoor.config import (
    REFERENCE_PRESSURE_PA,
    ELA_REFERENCE_PRESSURE_PA,
    ELA_DISCHARGE_COEFFICIENT,
    DEFAULT_INDOOR_TEMP_F,
    DEFAULT_INDOOR_HUMIDITY_PCT,
    LBF_FT2_PER_PA,
    GC_LBM_FT_PER_LBF_S2,
    SQ_IN_PER_SQ_FT,
)
from blowerdoor.engine.corrections import station_pressure_psia
from blowerdoor.engine.regression import predict_flow
from blowerdoor.models.blower_door import WeatherConditions
from blowerdoor.models.result import RegressionFit


def calculate_cfm50(fit: RegressionFit) -> float:
    """Flow at the 50 Pa reference pressure (CFM)."""
    return predict_flow(fit, REFERENCE_PRESSURE_PA)


def calculate_ach50(cfm50: float, volume_cu_ft: Optional[float]) -> Optional[float]:
    """
    Air changes per hour at 50 Pa.

    Returns None when the building volume is missing or not positive.
    """
    if cfm50 < 0 or not math.isfinite(cfm50):
        raise ValueError("CFM50 must be a finite, non-negative number")
    if volume_cu_ft is None or not math.isfinite(volume_cu_ft) or volume_cu_ft <= 0:
        return None
    return (cfm50 * 60.0) / volume_cu_ft


def indoor_air_density(weather: WeatherConditions) -> float:
    """
    Moist-air density (lb/ft³) of indoor air at station pressure.

    Falls back to 70°F dry air when indoor conditions were not recorded.
    """
    psychrolib.SetUnitSystem(psychrolib.IP)
    pressure = station_pressure_psia(weather)
    tdb = weather.indoor_temp_f if weather.indoor_temp_f is not None else DEFAULT_INDOOR_TEMP_F
    rh_pct = (
        weather.indoor_humidity_pct
        if weather.indoor_humidity_pct is not None
        else DEFAULT_INDOOR_HUMIDITY_PCT
    )
    W = psychrolib.GetHumRatioFromRelHum(tdb, rh_pct / 100.0, pressure)
    return psychrolib.GetMoistAirDensity(tdb, W, pressure)


def calculate_ela(fit: RegressionFit, air_density_lb_ft3: float) -> float:
    """
    Effective leakage area (in²) at the 4 Pa reference pressure.

    Args:
        fit: Power-law fit of the test
        air_density_lb_ft3: Density of the air passing through the leaks
    """
    if air_density_lb_ft3 <= 0:
        raise ValueError("air density must be positive")

    q4_cfs = predict_flow(fit, ELA_REFERENCE_PRESSURE_PA) / 60.0
    dp_lbf_ft2 = ELA_REFERENCE_PRESSURE_PA * LBF_FT2_PER_PA
    velocity_ft_s = math.sqrt(2.0 * dp_lbf_ft2 * GC_LBM_FT_PER_LBF_S2 / air_density_lb_ft3)
    area_ft2 = q4_cfs / (ELA_DISCHARGE_COEFFICIENT * velocity_ft_s)
    return area_ft2 * SQ_IN_PER_SQ_FT
