# probe_frame/errors.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Type

from .types import Point3


class ProbeFrameError(Exception):
    """Base class for everything raised or reported by probe_frame."""


class OutOfRangeError(ProbeFrameError):
    def __init__(self, point_name: str, point: Point3, coords: tuple = ()):
        self.point_name = point_name
        self.point = point
        self.coords = tuple(coords)
        which = f" ({', '.join(self.coords)})" if self.coords else ""
        super().__init__(
            f"{point_name}=({point.x:g}, {point.y:g}, {point.z:g}) lies outside the stage travel{which}."
        )


class AxialOrderError(ProbeFrameError):
    def __init__(self, p1: Point3, p2: Point3):
        self.p1 = p1
        self.p2 = p2
        super().__init__(
            f"Axial far point p1 must not be below origin p2 (p1.z={p1.z:g} < p2.z={p2.z:g})."
        )


class NonUniqueAxisMappingError(ProbeFrameError):
    def __init__(self, labels: tuple):
        self.labels = tuple(labels)
        super().__init__(
            "Axial, lateral and elevation must map to different motor axes "
            f"(got ax={labels[0]}, lat={labels[1]}, elev={labels[2]})."
        )


class UnknownAxisLabelError(ProbeFrameError):
    def __init__(self, role: str, label):
        self.role = role
        self.label = label
        super().__init__(f"Axis label for '{role}' must be 1, 2 or 3 (got {label!r}).")


class DegenerateAxisError(ProbeFrameError):
    def __init__(self, point: Optional[Point3] = None):
        self.point = point
        where = f" at ({point.x:g}, {point.y:g}, {point.z:g})" if point is not None else ""
        super().__init__(
            f"p1 - p2 has no finite, non-zero length{where}; axial direction is undefined."
        )


class AmbiguousRotationAxisError(ProbeFrameError):
    """Measured axial direction is anti-parallel to the reference axis."""

    def __init__(self, reference, target):
        self.reference = reference
        self.target = target
        super().__init__(
            f"Measured axial direction {[float(v) for v in target]} is opposite to reference axis "
            f"{[float(v) for v in reference]}; rotation axis is undetermined."
        )


class RigConfigError(ProbeFrameError):
    pass


class StepVectorInputError(ProbeFrameError):
    """Raised on demand from a ValidationFailure; carries the full report."""

    def __init__(self, failure: "ValidationFailure"):
        self.failure = failure
        super().__init__("; ".join(failure.messages()))


@dataclass
class ValidationFailure:
    """Every precondition violated by one set of inputs, in detection order."""
    errors: List[ProbeFrameError] = field(default_factory=list)

    def add(self, err: ProbeFrameError) -> None:
        self.errors.append(err)

    def has(self, kind: Type[ProbeFrameError]) -> bool:
        return any(isinstance(e, kind) for e in self.errors)

    def of_type(self, kind: Type[ProbeFrameError]) -> List[ProbeFrameError]:
        return [e for e in self.errors if isinstance(e, kind)]

    def messages(self) -> List[str]:
        return [str(e) for e in self.errors]

    def raise_for_failure(self) -> None:
        if self.errors:
            raise StepVectorInputError(self)

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)
