"""
Tests for the test-session stage gate.
"""

import pytest

from blowerdoor.engine.workflow import advance_stage, can_calculate
from blowerdoor.models.workflow import SessionStage


class TestAdvanceStage:

    def test_setup_to_weather(self):
        assert advance_stage(SessionStage.SETUP, 0) == SessionStage.WEATHER

    def test_weather_to_multi_point(self):
        assert advance_stage(SessionStage.WEATHER, 0) == SessionStage.MULTI_POINT

    def test_results_blocked_with_four_points(self):
        with pytest.raises(ValueError, match="at least 5"):
            advance_stage(SessionStage.MULTI_POINT, 4)

    def test_results_reachable_with_five_points(self):
        assert advance_stage(SessionStage.MULTI_POINT, 5) == SessionStage.RESULTS

    def test_results_to_report(self):
        assert advance_stage(SessionStage.RESULTS, 5) == SessionStage.REPORT

    def test_report_is_final(self):
        with pytest.raises(ValueError, match="final"):
            advance_stage(SessionStage.REPORT, 7)


class TestCanCalculate:

    @pytest.mark.parametrize("count, expected", [(0, False), (4, False), (5, True), (7, True)])
    def test_gate(self, count, expected):
        assert can_calculate(count) is expected
