"""Reference table, axial direction and minimal-rotation solver."""
import math
import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from probe_frame.errors import AmbiguousRotationAxisError, DegenerateAxisError
from probe_frame.rotation import (
    cross_matrix,
    minimal_rotation,
    reference_axis,
    resolve_axial_direction,
    rodrigues_matrix,
    swap_xy,
)
from probe_frame.types import Point3


def test_reference_axes_use_rig_labelling():
    assert np.array_equal(reference_axis(1), [0.0, 1.0, 0.0])
    assert np.array_equal(reference_axis(2), [1.0, 0.0, 0.0])
    assert np.array_equal(reference_axis(3), [0.0, 0.0, 1.0])


def test_reference_axis_rejects_unknown_label():
    with pytest.raises(ValueError):
        reference_axis(0)


def test_reference_axis_returns_a_fresh_array():
    a = reference_axis(3)
    a[2] = 5.0
    assert reference_axis(3)[2] == 1.0


def test_swap_xy():
    assert np.array_equal(swap_xy([1.0, 2.0, 3.0]), [2.0, 1.0, 3.0])


def test_axial_direction_is_normalized():
    udc = resolve_axial_direction(Point3(4, 6, 2), Point3(1, 2, 2))
    assert np.allclose(udc, [0.6, 0.8, 0.0])
    assert math.isclose(np.linalg.norm(udc), 1.0)


def test_axial_direction_degenerate():
    with pytest.raises(DegenerateAxisError):
        resolve_axial_direction(Point3(1, 1, 1), Point3(1, 1, 1))


def test_minimal_rotation_45_degrees():
    target = np.array([1.0, 0.0, 1.0]) / math.sqrt(2.0)
    rot = minimal_rotation(reference_axis(3), target)
    assert np.allclose(rot.axis, [0.0, 1.0, 0.0], atol=1e-12)
    assert math.isclose(rot.angle_rad, math.pi / 4, rel_tol=1e-12)
    assert math.isclose(rot.angle_deg, 45.0, rel_tol=1e-12)
    assert not rot.ambiguous


def test_minimal_rotation_maps_reference_onto_target():
    r = reference_axis(1)
    target = np.array([0.3, -0.5, 0.81])
    target = target / np.linalg.norm(target)
    rot = minimal_rotation(r, target)
    R = rodrigues_matrix(rot.axis, rot.angle_rad)
    assert np.allclose(R @ r, target, atol=1e-12)
    assert abs(float(rot.axis @ r)) < 1e-12, "rotation axis must be perpendicular to the reference"


def test_minimal_rotation_parallel_is_identity():
    rot = minimal_rotation(reference_axis(3), np.array([0.0, 0.0, 1.0]))
    assert rot.angle_rad == 0.0
    assert math.isclose(np.linalg.norm(rot.axis), 1.0)
    assert np.allclose(rodrigues_matrix(rot.axis, rot.angle_rad), np.eye(3))


def test_minimal_rotation_anti_parallel_tie_break():
    rot = minimal_rotation(reference_axis(3), np.array([0.0, 0.0, -1.0]))
    assert rot.ambiguous
    assert math.isclose(rot.angle_rad, math.pi)
    assert np.allclose(rot.axis, [0.0, 1.0, 0.0])
    R = rodrigues_matrix(rot.axis, rot.angle_rad)
    assert np.allclose(R, np.diag([-1.0, 1.0, -1.0]), atol=1e-12)
    assert np.all(np.isfinite(R))


def test_minimal_rotation_anti_parallel_strict():
    with pytest.raises(AmbiguousRotationAxisError):
        minimal_rotation(reference_axis(3), np.array([0.0, 0.0, -1.0]), strict=True)


def test_minimal_rotation_near_anti_parallel_stays_finite():
    target = np.array([1e-9, 0.0, -1.0])
    target = target / np.linalg.norm(target)
    rot = minimal_rotation(reference_axis(3), target)
    assert not rot.ambiguous
    assert np.all(np.isfinite(rot.axis))
    assert math.isclose(np.linalg.norm(rot.axis), 1.0)


def test_cross_matrix_matches_np_cross():
    u = np.array([0.2, -1.3, 0.7])
    v = np.array([-0.4, 0.5, 2.0])
    assert np.allclose(cross_matrix(u) @ v, np.cross(u, v))


def test_rodrigues_quarter_turn_about_z():
    R = rodrigues_matrix(np.array([0.0, 0.0, 1.0]), math.pi / 2)
    assert np.allclose(R @ np.array([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0], atol=1e-12)


def test_rodrigues_matches_skew_square_form():
    u = np.array([1.0, 2.0, -2.0]) / 3.0
    theta = 1.234
    K = cross_matrix(u)
    expected = np.eye(3) + math.sin(theta) * K + (1.0 - math.cos(theta)) * (K @ K)
    R = rodrigues_matrix(u, theta)
    assert np.allclose(R, expected, atol=1e-12)
    assert np.allclose(R.T @ R, np.eye(3), atol=1e-12)
    assert math.isclose(np.linalg.det(R), 1.0, rel_tol=1e-12)


def test_axial_direction_of_huge_coordinates_is_unit():
    udc = resolve_axial_direction(Point3(1e200, 0, 1e200), Point3(-1e200, 0, -1e200))
    assert np.allclose(udc, np.array([1.0, 0.0, 1.0]) / math.sqrt(2.0))


def test_axial_direction_with_overflowing_separation_is_degenerate():
    with pytest.raises(DegenerateAxisError):
        resolve_axial_direction(Point3(1e308, 0, 1e308), Point3(-1e308, 0, -1e308))
