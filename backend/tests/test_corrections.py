"""
Tests for temperature and altitude/barometric flow corrections.

Reference values cross-checked against the field service formulas:
  f_T = √((T_in + 459.67)/(T_out + 459.67)),  f_P = √(P/29.92)
"""

import pytest
from pydantic import ValidationError

from blowerdoor.engine.corrections import (
    altitude_correction,
    apply_corrections,
    get_pressure_from_altitude,
    station_pressure_psia,
    temperature_correction,
)
from blowerdoor.models.blower_door import WeatherConditions


def approx(value: float, rel_tol: float = 0.001, abs_tol: float = 1e-4):
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


# ---------------------------------------------------------------------------
# Temperature
# ---------------------------------------------------------------------------

class TestTemperatureCorrection:

    def test_equal_temperatures(self):
        factor, applied = temperature_correction(WeatherConditions(indoor_temp_f=70.0, outdoor_temp_f=70.0))
        assert factor == 1.0
        assert applied is True

    def test_minnesota_winter_day(self):
        """68°F inside, 20°F outside: √(527.67/479.67) ≈ 1.0488."""
        factor, applied = temperature_correction(WeatherConditions(indoor_temp_f=68.0, outdoor_temp_f=20.0))
        assert factor == approx(1.0488)
        assert applied is True

    def test_hot_outdoor_weather(self):
        factor, _ = temperature_correction(WeatherConditions(indoor_temp_f=70.0, outdoor_temp_f=95.0))
        assert 0.95 < factor < 1.0

    def test_only_indoor_temperature(self):
        assert temperature_correction(WeatherConditions(indoor_temp_f=70.0)) == (1.0, False)

    def test_only_outdoor_temperature(self):
        assert temperature_correction(WeatherConditions(outdoor_temp_f=10.0)) == (1.0, False)

    def test_no_weather(self):
        assert temperature_correction(WeatherConditions()) == (1.0, False)


# ---------------------------------------------------------------------------
# Altitude / barometric
# ---------------------------------------------------------------------------

class TestAltitudeCorrection:

    def test_sea_level_is_identity(self):
        factor, applied = altitude_correction(WeatherConditions(altitude_ft=0.0))
        assert factor == approx(1.0, abs_tol=1e-9)
        assert applied is True

    def test_standard_barometer_is_identity(self):
        factor, applied = altitude_correction(WeatherConditions(barometric_pressure_in_hg=29.92))
        assert factor == approx(1.0, abs_tol=1e-9)
        assert applied is True

    def test_not_corrected_without_data(self):
        assert altitude_correction(WeatherConditions()) == (1.0, False)

    def test_denver_barometer(self):
        """√(25.0/29.92) ≈ 0.9141."""
        factor, _ = altitude_correction(WeatherConditions(barometric_pressure_in_hg=25.0))
        assert factor == approx(0.9141)

    def test_5000_ft(self):
        factor, _ = altitude_correction(WeatherConditions(altitude_ft=5000.0))
        assert 0.90 < factor < 0.93

    def test_decreases_smoothly_with_altitude(self):
        factors = [
            altitude_correction(WeatherConditions(altitude_ft=h))[0]
            for h in (0.0, 500.0, 1000.0, 2000.0, 5000.0, 8000.0)
        ]
        assert all(b < a for a, b in zip(factors, factors[1:]))

    def test_barometer_takes_precedence(self):
        both = WeatherConditions(barometric_pressure_in_hg=29.92, altitude_ft=5000.0)
        assert altitude_correction(both)[0] == approx(1.0, abs_tol=1e-9)

    def test_high_pressure_system(self):
        factor, _ = altitude_correction(WeatherConditions(barometric_pressure_in_hg=31.0))
        assert factor == approx(1.0179)


class TestStationPressure:

    def test_sea_level_default(self):
        assert station_pressure_psia(WeatherConditions()) == approx(14.696)

    def test_from_altitude(self):
        assert station_pressure_psia(WeatherConditions(altitude_ft=5000.0)) == approx(
            get_pressure_from_altitude(5000.0)
        )

    def test_from_barometer(self):
        assert station_pressure_psia(WeatherConditions(barometric_pressure_in_hg=29.92)) == approx(14.695)


class TestApplyCorrections:

    def test_linear_scaling(self):
        assert apply_corrections([100.0, 200.0], 1.05) == approx([105.0, 210.0])


# ---------------------------------------------------------------------------
# Input bounds
# ---------------------------------------------------------------------------

class TestWeatherBounds:

    def test_below_absolute_zero(self):
        with pytest.raises(ValidationError):
            WeatherConditions(indoor_temp_f=-500.0)

    def test_unrealistic_barometer(self):
        with pytest.raises(ValidationError):
            WeatherConditions(barometric_pressure_in_hg=15.0)
        with pytest.raises(ValidationError):
            WeatherConditions(barometric_pressure_in_hg=35.0)

    def test_humidity_out_of_range(self):
        with pytest.raises(ValidationError):
            WeatherConditions(indoor_humidity_pct=120.0)
