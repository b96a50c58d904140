"""
Airtightness code compliance.

The threshold is always an input; CODE_THRESHOLDS only provides the values
a caller looks up per jurisdiction.
"""

import logging
import math
from typing import Optional

from blowerdoor.config import CODE_THRESHOLDS
from blowerdoor.models.result import ComplianceStatus

logger = logging.getLogger(__name__)


def resolve_code_threshold(jurisdiction: str) -> float:
    """Look up the ACH50 limit for a jurisdiction key such as "MN-2020-CZ6"."""
    try:
        return CODE_THRESHOLDS[jurisdiction]
    except KeyError:
        known = ", ".join(sorted(CODE_THRESHOLDS))
        raise ValueError(
            f"Unknown jurisdiction: {jurisdiction!r}. Known jurisdictions: {known}"
        ) from None


def evaluate_compliance(
    ach50: Optional[float],
    threshold_ach50: float,
) -> tuple[ComplianceStatus, Optional[float]]:
    """
    Compare ACH50 against a code threshold.

    Returns (status, margin) where margin = threshold - ach50 (positive means
    headroom). ach50 equal to the threshold passes. When ach50 is None the
    status is INDETERMINATE and the margin is None.
    """
    if threshold_ach50 <= 0 or not math.isfinite(threshold_ach50):
        raise ValueError("Code threshold must be a positive, finite ACH50 value")

    if ach50 is None:
        return (ComplianceStatus.INDETERMINATE, None)

    if ach50 < 0 or not math.isfinite(ach50):
        raise ValueError("ACH50 must be a finite, non-negative number")

    status = ComplianceStatus.PASS if ach50 <= threshold_ach50 else ComplianceStatus.FAIL
    margin = round(threshold_ach50 - ach50, 4)
    logger.debug("ACH50 %.3f vs limit %.2f: %s", ach50, threshold_ach50, status.value)
    return (status, margin)
