# probe_frame/rotation.py
from __future__ import annotations

import math
import logging

import numpy as np

from .errors import AmbiguousRotationAxisError, DegenerateAxisError
from .types import AxisAngle, Point3

logger = logging.getLogger(__name__)

# Below this |r x target| the two directions are treated as (anti-)parallel.
PARALLEL_EPS = 1e-12


# ---------- reference axes (rig frame) ----------

# Nominal motor axis label -> unit reference vector. The rig labels its first
# two axes in swapped order; keep this table exactly as is.
REFERENCE_AXES = {
    1: (0.0, 1.0, 0.0),
    2: (1.0, 0.0, 0.0),
    3: (0.0, 0.0, 1.0),
}


def reference_axis(label: int) -> np.ndarray:
    """Constant reference vector for nominal motor axis `label` (1, 2 or 3)."""
    try:
        return np.array(REFERENCE_AXES[label], dtype=float)
    except KeyError:
        raise ValueError(f"Unknown motor axis label {label!r}; expected 1, 2 or 3.") from None


def swap_xy(v: np.ndarray) -> np.ndarray:
    """Exchange the first two components (motor order <-> rig order)."""
    v = np.asarray(v, float)
    return np.array([v[1], v[0], v[2]], dtype=float)


# ---------- axial direction ----------

def resolve_axial_direction(p1: Point3, p2: Point3) -> np.ndarray:
    """
    Unit vector from origin p2 towards far point p1, in motor order.
    Raises DegenerateAxisError when the points coincide or their separation
    is not a finite length.
    """
    d = p1.as_array() - p2.as_array()
    # hypot scales internally, so huge finite coordinates do not overflow
    n = math.hypot(*d)
    if n == 0.0 or not math.isfinite(n):
        raise DegenerateAxisError(p1)
    udc = d / n
    logger.debug("Axial direction: d=%s |d|=%.6g udc=%s", d, n, udc)
    return udc


# ---------- minimal rotation ----------

def _fallback_axis(r: np.ndarray) -> np.ndarray:
    """
    Deterministic unit vector orthogonal to `r`: r x e_k, where e_k is the
    basis vector with the smallest |r_k| (lowest index on ties).
    """
    k = int(np.argmin(np.abs(r)))
    e = np.zeros(3, dtype=float)
    e[k] = 1.0
    v = np.cross(r, e)
    return v / np.linalg.norm(v)


def minimal_rotation(reference: np.ndarray, target: np.ndarray, *, strict: bool = False) -> AxisAngle:
    """
    Axis/angle of the smallest rotation taking unit vector `reference` onto
    unit vector `target`.

    u_raw = r x t, sin = |u_raw|, cos = r . t, theta = atan2(sin, cos).

    Parallel inputs give the identity (theta = 0) with the fallback axis.
    Anti-parallel inputs give theta = pi about the fallback axis, unless
    `strict` is set, in which case AmbiguousRotationAxisError is raised.
    """
    r = np.asarray(reference, float)
    t = np.asarray(target, float)

    u_raw = np.cross(r, t)
    s = float(np.linalg.norm(u_raw))
    c = float(np.clip(r @ t, -1.0, 1.0))

    if s < PARALLEL_EPS:
        if c > 0.0:
            return AxisAngle(axis=_fallback_axis(r), angle_rad=0.0)
        if strict:
            raise AmbiguousRotationAxisError(r, t)
        axis = _fallback_axis(r)
        logger.warning(
            "Measured axial direction is opposite to reference %s; rotating by 180 deg about %s.",
            r, axis,
        )
        return AxisAngle(axis=axis, angle_rad=math.pi, ambiguous=True)

    theta = math.atan2(s, c)
    return AxisAngle(axis=u_raw / s, angle_rad=theta)


# ---------- rotation matrix ----------

def cross_matrix(u: np.ndarray) -> np.ndarray:
    """Skew-symmetric [u]x so that cross_matrix(u) @ v == u x v."""
    u = np.asarray(u, float)
    return np.array([[0.0, -u[2], u[1]],
                     [u[2], 0.0, -u[0]],
                     [-u[1], u[0], 0.0]], dtype=float)


def rodrigues_matrix(axis: np.ndarray, theta: float) -> np.ndarray:
    """
    3x3 rotation about unit `axis` by `theta` (radians):
        R = I cos(theta) + sin(theta) [u]x + (1 - cos(theta)) u u^T
    """
    u = np.asarray(axis, float)
    c = math.cos(theta)
    s = math.sin(theta)
    return np.eye(3, dtype=float) * c + s * cross_matrix(u) + (1.0 - c) * np.outer(u, u)
