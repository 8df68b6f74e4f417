# probe_frame/validation.py
from __future__ import annotations

import logging
import math
from typing import Optional

from .errors import (
    AxialOrderError,
    DegenerateAxisError,
    NonUniqueAxisMappingError,
    OutOfRangeError,
    UnknownAxisLabelError,
    ValidationFailure,
)
from .rotation import REFERENCE_AXES
from .types import AxisMapping, Point3, StageLimits

logger = logging.getLogger(__name__)


def validate_inputs(
    p1: Point3,
    p2: Point3,
    axdir: AxisMapping,
    limits: StageLimits,
) -> Optional[ValidationFailure]:
    """
    Check every precondition of the step-vector computation.

    Returns None when the inputs are usable, otherwise a ValidationFailure
    listing all violations found (not just the first one).
    """
    failure = ValidationFailure()

    for name, p in (("p1", p1), ("p2", p2)):
        if not limits.contains(p):
            failure.add(OutOfRangeError(name, p, limits.violations(p)))

    if p1.z < p2.z:
        failure.add(AxialOrderError(p1, p2))

    for role, label in (("ax", axdir.ax), ("lat", axdir.lat), ("elev", axdir.elev)):
        if label not in REFERENCE_AXES:
            failure.add(UnknownAxisLabelError(role, label))

    if not axdir.is_unique():
        failure.add(NonUniqueAxisMappingError(axdir.labels()))

    # zero or non-finite axis length would make every later stage undefined
    length = math.hypot(p1.x - p2.x, p1.y - p2.y, p1.z - p2.z)
    if length == 0.0 or not math.isfinite(length):
        failure.add(DegenerateAxisError(p1))

    if failure:
        logger.debug("Input validation failed with %d issue(s): %s", len(failure), failure.messages())
        return failure
    return None
