# probe_frame/projector.py
"""
Step-vector projection and the full computation pipeline.

    validate -> resolve axial direction -> minimal rotation -> project

The rotation is solved in the rig frame (where the reference table lives),
so the measured axial direction is swapped into rig order before solving
and the rotated lateral/elevation axes are swapped back into motor order.
No yaw about the axial direction is modelled: array probes that need a yaw
correction are not supported.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .errors import ValidationFailure
from .rotation import (
    minimal_rotation,
    reference_axis,
    resolve_axial_direction,
    rodrigues_matrix,
    swap_xy,
)
from .types import AxisAngle, AxisMapping, Point3, StageLimits, StepVectors
from .validation import validate_inputs

logger = logging.getLogger(__name__)


def project_step_vectors(udc: np.ndarray, axdir: AxisMapping, rotation: AxisAngle) -> StepVectors:
    """
    Build R from `rotation` and carry the lateral and elevation reference
    axes through it. Output vectors are in motor order; `uax` is `udc`.
    """
    R = rodrigues_matrix(rotation.axis, rotation.angle_rad)

    lat_rotated = R @ reference_axis(axdir.lat)
    elev_rotated = R @ reference_axis(axdir.elev)

    return StepVectors(
        ulat=swap_xy(lat_rotated),
        uelev=swap_xy(elev_rotated),
        uax=np.asarray(udc, float).copy(),
        rotation=AxisAngle(
            axis=rotation.axis,
            angle_rad=rotation.angle_rad,
            matrix=R,
            ambiguous=rotation.ambiguous,
        ),
    )


@dataclass(frozen=True, eq=False)
class StepVectorResult:
    """Either `vectors` or `failure` is set, never both."""
    vectors: Optional[StepVectors] = None
    failure: Optional[ValidationFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> StepVectors:
        """Return the vectors, or raise StepVectorInputError with the full report."""
        if self.failure is not None:
            self.failure.raise_for_failure()
        return self.vectors


def compute_step_vectors(
    p1: Point3,
    p2: Point3,
    axdir: AxisMapping,
    limits: StageLimits,
    *,
    strict: bool = False,
) -> StepVectorResult:
    """
    Motor-space unit step vectors for the probe's lateral, elevational and
    axial directions.

    Args
    ----
    p1 : far point detected along the probe axis (mm, stage frame)
    p2 : origin / near point (mm, stage frame)
    axdir : which nominal motor axis is axial, lateral and elevational
    limits : symmetric stage travel
    strict : raise AmbiguousRotationAxisError instead of resolving an
        anti-parallel measured axis with the fixed 180 deg tie-break

    Returns
    -------
    StepVectorResult holding StepVectors on success, or the complete
    ValidationFailure report. Nothing is computed when validation fails.
    """
    failure = validate_inputs(p1, p2, axdir, limits)
    if failure is not None:
        return StepVectorResult(failure=failure)

    udc = resolve_axial_direction(p1, p2)
    rotation = minimal_rotation(reference_axis(axdir.ax), swap_xy(udc), strict=strict)
    logger.debug("Minimal rotation: axis=%s angle=%.6f deg", rotation.axis, rotation.angle_deg)

    vectors = project_step_vectors(udc, axdir, rotation)
    logger.debug("Step vectors: ulat=%s uelev=%s uax=%s", vectors.ulat, vectors.uelev, vectors.uax)
    return StepVectorResult(vectors=vectors)
