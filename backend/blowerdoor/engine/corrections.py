"""
Environmental corrections for measured blower-door flow.

Both corrections are linear scalings of flow (never of pressure) and are
applied to every point before the regression:

  Temperature:  f_T = √((T_in + 459.67) / (T_out + 459.67))
  Barometric:   f_P = √(P_station / 29.92 inHg)
  Altitude:     f_P = √(P_std(h) / P_std(0))   (when no barometer reading)

Each stage decides on its own whether it has the data it needs.
"""

import math

import psychrolib

from blowerdoor.config import RANKINE_OFFSET, STANDARD_BAROMETRIC_INHG, PSI_PER_INHG
from blowerdoor.models.blower_door import WeatherConditions


def temperature_correction(weather: WeatherConditions) -> tuple[float, bool]:
    """
    Indoor/outdoor temperature (stack) correction.

    Returns (factor, applied). Skipped with factor 1.0 unless both
    temperatures are present.
    """
    if weather.indoor_temp_f is None or weather.outdoor_temp_f is None:
        return (1.0, False)

    indoor_r = weather.indoor_temp_f + RANKINE_OFFSET
    outdoor_r = weather.outdoor_temp_f + RANKINE_OFFSET
    if indoor_r <= 0 or outdoor_r <= 0:
        raise ValueError("Temperature below absolute zero")

    return (math.sqrt(indoor_r / outdoor_r), True)


def get_pressure_from_altitude(altitude_ft: float) -> float:
    """Standard-atmosphere pressure (psia) at an altitude in feet."""
    psychrolib.SetUnitSystem(psychrolib.IP)
    return psychrolib.GetStandardAtmPressure(altitude_ft)


def station_pressure_psia(weather: WeatherConditions) -> float:
    """Best estimate of station pressure: barometer, then altitude, then sea level."""
    if weather.barometric_pressure_in_hg is not None:
        return weather.barometric_pressure_in_hg * PSI_PER_INHG
    if weather.altitude_ft is not None:
        return get_pressure_from_altitude(weather.altitude_ft)
    return get_pressure_from_altitude(0.0)


def altitude_correction(weather: WeatherConditions) -> tuple[float, bool]:
    """
    Air density (barometric/altitude) correction.

    Returns (factor, applied). The factor is 1.0 at sea level and standard
    pressure; applied=False means no barometer or altitude was supplied.
    """
    if weather.barometric_pressure_in_hg is not None:
        ratio = weather.barometric_pressure_in_hg / STANDARD_BAROMETRIC_INHG
        return (math.sqrt(ratio), True)

    if weather.altitude_ft is not None:
        ratio = get_pressure_from_altitude(weather.altitude_ft) / get_pressure_from_altitude(0.0)
        return (math.sqrt(ratio), True)

    return (1.0, False)


def apply_corrections(flows: list[float], factor: float) -> list[float]:
    """Scale every measured flow by the combined correction factor."""
    return [q * factor for q in flows]
