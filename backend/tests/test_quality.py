"""
Tests for the non-blocking test-quality warnings.
"""

from typing import Optional

from blowerdoor.engine.quality import assess_quality, find_outlier_points
from blowerdoor.models.blower_door import WeatherConditions
from blowerdoor.models.result import RegressionFit

PRESSURES = [50.0, 45.0, 40.0, 35.0, 30.0]


def _fit(n: float = 0.65, r2: float = 0.999) -> RegressionFit:
    return RegressionFit(
        flow_coefficient_c=100.0,
        flow_exponent_n=n,
        correlation_r2=r2,
        valid_point_count=5,
    )


def _samples(fit: RegressionFit, scale: Optional[dict[int, float]] = None) -> list[tuple[int, float, float]]:
    """Points lying on the fitted curve, optionally scaled per index."""
    scale = scale or {}
    return [
        (i, p, fit.flow_coefficient_c * p ** fit.flow_exponent_n * scale.get(i, 1.0))
        for i, p in enumerate(PRESSURES)
    ]


# ---------------------------------------------------------------------------
# Outlier points
# ---------------------------------------------------------------------------

class TestFindOutlierPoints:

    def setup_method(self):
        self.fit = _fit()

    def test_points_on_curve(self):
        assert find_outlier_points(self.fit, _samples(self.fit)) == []

    def test_high_point_flagged(self):
        assert find_outlier_points(self.fit, _samples(self.fit, {2: 1.3})) == [2]

    def test_low_point_flagged(self):
        assert find_outlier_points(self.fit, _samples(self.fit, {0: 0.7, 4: 0.75})) == [0, 4]

    def test_within_tolerance_not_flagged(self):
        assert find_outlier_points(self.fit, _samples(self.fit, {1: 1.15, 3: 0.85})) == []


# ---------------------------------------------------------------------------
# assess_quality
# ---------------------------------------------------------------------------

class TestAssessQuality:

    def test_clean_test_has_no_warnings(self):
        fit = _fit()
        assert assess_quality(fit, _samples(fit), WeatherConditions()) == []

    def test_exponent_below_range(self):
        fit = _fit(n=0.4)
        warnings = assess_quality(fit, _samples(fit), WeatherConditions())
        assert len(warnings) == 1
        assert "Flow exponent n=0.400" in warnings[0]

    def test_exponent_above_range(self):
        fit = _fit(n=1.2)
        warnings = assess_quality(fit, _samples(fit), WeatherConditions())
        assert any("Flow exponent" in w for w in warnings)

    def test_exponent_range_inclusive(self):
        for n in (0.5, 1.0):
            fit = _fit(n=n)
            assert assess_quality(fit, _samples(fit), WeatherConditions()) == []

    def test_low_correlation(self):
        fit = _fit(r2=0.95)
        warnings = assess_quality(fit, _samples(fit), WeatherConditions())
        assert len(warnings) == 1
        assert "Correlation" in warnings[0]

    def test_correlation_at_limit_accepted(self):
        fit = _fit(r2=0.98)
        assert assess_quality(fit, _samples(fit), WeatherConditions()) == []

    def test_outlier_warning_lists_points(self):
        fit = _fit()
        warnings = assess_quality(fit, _samples(fit, {1: 1.3, 3: 0.6}), WeatherConditions())
        assert warnings == ["Points 1, 3 deviate more than 20% from the fitted curve"]

    def test_wind_at_limit_accepted(self):
        fit = _fit()
        assert assess_quality(fit, _samples(fit), WeatherConditions(wind_speed_mph=4.5)) == []

    def test_strong_wind(self):
        fit = _fit()
        warnings = assess_quality(fit, _samples(fit), WeatherConditions(wind_speed_mph=10.0))
        assert len(warnings) == 1
        assert warnings[0].startswith("Wind speed 10.0 mph")

    def test_warnings_accumulate(self):
        fit = _fit(n=0.3, r2=0.9)
        warnings = assess_quality(
            fit, _samples(fit, {0: 2.0}), WeatherConditions(wind_speed_mph=8.0)
        )
        assert len(warnings) == 4
