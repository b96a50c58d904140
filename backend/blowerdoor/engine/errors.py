"""
Exceptions raised inside the blower-door engine.

Input problems subclass ValueError so API routes map them to 422 like any
other bad input. A calibration table miss is a configuration defect and
subclasses LookupError instead.
"""


class BlowerDoorError(ValueError):
    """Base class for expected calculation failures."""


class InsufficientPointsError(BlowerDoorError):
    def __init__(self, valid_count: int, required: int):
        self.valid_count = valid_count
        self.required = required
        super().__init__(
            f"Need at least {required} valid test points for a multi-point "
            f"regression; got {valid_count}"
        )


class DegenerateFitError(BlowerDoorError):
    """All points share one building pressure, so no slope can be fitted."""


class UnrecognizedRingError(LookupError):
    def __init__(self, ring):
        self.ring = ring
        super().__init__(f"No calibration curve for ring configuration: {ring!r}")
