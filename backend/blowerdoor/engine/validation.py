"""
Point validation: decide which readings may enter the regression.
"""

import logging
import math
from typing import Optional

from blowerdoor.config import RingConfig, MIN_VALID_POINTS
from blowerdoor.models.blower_door import TestPoint
from blowerdoor.models.result import PointResult, PointValidationOutput

logger = logging.getLogger(__name__)


def _pressure_issue(name: str, value: Optional[float]) -> Optional[str]:
    if value is None:
        return f"{name} is missing"
    if not math.isfinite(value):
        return f"{name} must be a finite number"
    if value <= 0:
        return f"{name} must be greater than zero"
    return None


def check_point(point: TestPoint) -> Optional[str]:
    """Return the reason a point is invalid, or None if it is usable."""
    issue = _pressure_issue("fan_pressure_pa", point.fan_pressure_pa)
    if issue is None:
        issue = _pressure_issue("target_pressure_pa", point.target_pressure_pa)
    if issue is None and not isinstance(point.ring_config, RingConfig):
        issue = f"unrecognized ring configuration: {point.ring_config!r}"
    return issue


def validate_points(points: list[TestPoint]) -> list[PointResult]:
    """
    Classify every point as valid or invalid.

    Invalid points are kept in the output (with the reason) so callers can
    show a per-point indicator; they are never dropped silently.
    """
    results = []
    for point in points:
        issue = check_point(point)
        if issue is not None:
            logger.info("Excluding test point %d: %s", point.index, issue)
        results.append(PointResult(
            index=point.index,
            target_pressure_pa=point.target_pressure_pa,
            fan_pressure_pa=point.fan_pressure_pa,
            ring_config=point.ring_config,
            valid=issue is None,
            issue=issue,
        ))
    return results


def summarize_validation(points: list[TestPoint]) -> PointValidationOutput:
    """Validate points and report whether the calculate action is allowed."""
    results = validate_points(points)
    valid_count = sum(1 for r in results if r.valid)
    return PointValidationOutput(
        points=results,
        valid_point_count=valid_count,
        can_calculate=valid_count >= MIN_VALID_POINTS,
    )
