# probe_frame/types.py
# Plain value records passed between the pipeline stages. No behavior beyond data.
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class Point3:
    """Stage-frame point in mm (x = motor-1, y = motor-2, z = motor-3)."""
    x: float
    y: float
    z: float

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @classmethod
    def from_seq(cls, seq) -> "Point3":
        x, y, z = (float(v) for v in seq)
        return cls(x, y, z)

    def __iter__(self):
        return iter((self.x, self.y, self.z))


@dataclass(frozen=True)
class AxisMapping:
    """
    Which nominal motor axis (1, 2 or 3) plays the axial, lateral and
    elevational role for the current probe orientation.
    """
    ax: int
    lat: int
    elev: int

    def labels(self) -> Tuple[int, int, int]:
        return (self.ax, self.lat, self.elev)

    def is_unique(self) -> bool:
        return len(set(self.labels())) == 3


@dataclass(frozen=True)
class StageLimits:
    """Symmetric travel per motor: valid region is [-len, len] on each axis."""
    x_len: float
    y_len: float
    z_len: float

    def contains(self, p: Point3) -> bool:
        return (abs(p.x) <= self.x_len
                and abs(p.y) <= self.y_len
                and abs(p.z) <= self.z_len)

    def violations(self, p: Point3) -> Tuple[str, ...]:
        """Names of the coordinates of `p` that fall outside the travel range."""
        out = []
        for name, v, lim in (("x", p.x, self.x_len), ("y", p.y, self.y_len), ("z", p.z, self.z_len)):
            # NaN fails every comparison, so test the in-range condition
            if not (abs(v) <= lim):
                out.append(name)
        return tuple(out)


@dataclass(frozen=True, eq=False)
class AxisAngle:
    """
    Minimal rotation as axis/angle, plus the Rodrigues matrix once built.
    `axis` and `matrix` are expressed in the rig frame (first two components
    swapped relative to motor order).
    """
    axis: np.ndarray
    angle_rad: float
    matrix: Optional[np.ndarray] = None
    ambiguous: bool = False

    @property
    def angle_deg(self) -> float:
        return float(np.degrees(self.angle_rad))

    def motor_axis(self) -> np.ndarray:
        """Rotation axis in motor order. The swap is a reflection, so the axis flips sign."""
        a = np.asarray(self.axis, float)
        return -np.array([a[1], a[0], a[2]], dtype=float)


@dataclass(frozen=True, eq=False)
class StepVectors:
    """
    Motor-space displacement per 1 mm along each logical probe direction.
    Each vector has unit norm by construction.
    """
    ulat: np.ndarray
    uelev: np.ndarray
    uax: np.ndarray
    rotation: Optional[AxisAngle] = None

    def as_dict(self) -> dict:
        return {
            "ulat": [float(v) for v in self.ulat],
            "uelev": [float(v) for v in self.uelev],
            "uax": [float(v) for v in self.uax],
        }
