# probe_frame/__init__.py
"""
Public API for the probe_frame package.

External code (e.g. stepvec.py) can import:
    from probe_frame import compute_step_vectors, Point3, AxisMapping, StageLimits
    from probe_frame import load_rig, StepVectorPlotter

Inside package modules, prefer relative imports to avoid cycles:
    from .types import Point3
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import importlib

__all__ = [
    # Value records
    "Point3", "AxisMapping", "StageLimits", "StepVectors", "AxisAngle",
    # Pipeline
    "compute_step_vectors", "StepVectorResult", "validate_inputs",
    "resolve_axial_direction", "minimal_rotation", "rodrigues_matrix",
    "reference_axis", "project_step_vectors",
    # Errors
    "ProbeFrameError", "ValidationFailure", "OutOfRangeError", "AxialOrderError",
    "NonUniqueAxisMappingError", "UnknownAxisLabelError", "DegenerateAxisError",
    "AmbiguousRotationAxisError", "RigConfigError", "StepVectorInputError",
    # Config
    "RigConfig", "load_rig", "load_job",
    # Visualisation
    "StepVectorPlotter", "PlotConfig",
]

# Map exported names -> submodule that defines them
_EXPORT_MAP = {
    "Point3": "probe_frame.types",
    "AxisMapping": "probe_frame.types",
    "StageLimits": "probe_frame.types",
    "StepVectors": "probe_frame.types",
    "AxisAngle": "probe_frame.types",

    "compute_step_vectors": "probe_frame.projector",
    "StepVectorResult": "probe_frame.projector",
    "project_step_vectors": "probe_frame.projector",
    "validate_inputs": "probe_frame.validation",
    "resolve_axial_direction": "probe_frame.rotation",
    "minimal_rotation": "probe_frame.rotation",
    "rodrigues_matrix": "probe_frame.rotation",
    "reference_axis": "probe_frame.rotation",

    "ProbeFrameError": "probe_frame.errors",
    "ValidationFailure": "probe_frame.errors",
    "OutOfRangeError": "probe_frame.errors",
    "AxialOrderError": "probe_frame.errors",
    "NonUniqueAxisMappingError": "probe_frame.errors",
    "UnknownAxisLabelError": "probe_frame.errors",
    "DegenerateAxisError": "probe_frame.errors",
    "AmbiguousRotationAxisError": "probe_frame.errors",
    "RigConfigError": "probe_frame.errors",
    "StepVectorInputError": "probe_frame.errors",

    "RigConfig": "probe_frame.rig_config",
    "load_rig": "probe_frame.rig_config",
    "load_job": "probe_frame.rig_config",

    # plotly is only imported when the plotter is asked for
    "StepVectorPlotter": "probe_frame.plotter",
    "PlotConfig": "probe_frame.plotter",
}


def __getattr__(name: str):
    """Lazy attribute loader to avoid import-time cycles."""
    mod_name = _EXPORT_MAP.get(name)
    if not mod_name:
        raise AttributeError(f"module 'probe_frame' has no attribute {name!r}")
    mod = importlib.import_module(mod_name)
    return getattr(mod, name)


if TYPE_CHECKING:
    # Eager imports for static type checkers / IDEs only.
    from .types import Point3, AxisMapping, StageLimits, StepVectors, AxisAngle
    from .projector import compute_step_vectors, StepVectorResult, project_step_vectors
    from .validation import validate_inputs
    from .rotation import resolve_axial_direction, minimal_rotation, rodrigues_matrix, reference_axis
    from .errors import (
        ProbeFrameError, ValidationFailure, OutOfRangeError, AxialOrderError,
        NonUniqueAxisMappingError, UnknownAxisLabelError, DegenerateAxisError,
        AmbiguousRotationAxisError, RigConfigError, StepVectorInputError,
    )
    from .rig_config import RigConfig, load_rig, load_job
    from .plotter import StepVectorPlotter, PlotConfig
