"""Input validation: every violated precondition is reported, nothing is computed."""
import sys
from pathlib import Path

import pytest

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from probe_frame.errors import (
    AxialOrderError,
    DegenerateAxisError,
    NonUniqueAxisMappingError,
    OutOfRangeError,
    UnknownAxisLabelError,
)
from probe_frame.projector import compute_step_vectors
from probe_frame.types import AxisMapping, Point3, StageLimits
from probe_frame.validation import validate_inputs

LIMITS = StageLimits(50.0, 50.0, 50.0)
MAPPING = AxisMapping(ax=3, lat=1, elev=2)


def test_valid_inputs_pass():
    assert validate_inputs(Point3(0, 0, 40), Point3(0, 0, 10), MAPPING, LIMITS) is None


def test_points_on_the_travel_boundary_are_in_range():
    assert validate_inputs(Point3(50, -50, 50), Point3(-50, 50, -50), MAPPING, LIMITS) is None


@pytest.mark.parametrize("p1, coord", [
    (Point3(60, 0, 10), "x"),
    (Point3(0, -50.001, 10), "y"),
    (Point3(0, 0, 51), "z"),
])
def test_p1_out_of_range(p1, coord):
    failure = validate_inputs(p1, Point3(0, 0, 0), MAPPING, LIMITS)
    assert failure is not None
    errs = failure.of_type(OutOfRangeError)
    assert len(errs) == 1
    assert errs[0].point_name == "p1"
    assert errs[0].coords == (coord,)


def test_p2_out_of_range_names_p2():
    failure = validate_inputs(Point3(0, 0, 10), Point3(0, 70, -80), MAPPING, LIMITS)
    errs = failure.of_type(OutOfRangeError)
    assert [e.point_name for e in errs] == ["p2"]
    assert errs[0].coords == ("y", "z")


def test_both_points_out_of_range_reported_separately():
    failure = validate_inputs(Point3(0, 0, 100), Point3(0, 0, 90), MAPPING, LIMITS)
    assert [e.point_name for e in failure.of_type(OutOfRangeError)] == ["p1", "p2"]


def test_axial_order_violation():
    failure = validate_inputs(Point3(0, 0, 5), Point3(0, 0, 10), MAPPING, LIMITS)
    assert failure is not None
    assert len(failure) == 1
    assert isinstance(failure.errors[0], AxialOrderError)


def test_non_unique_mapping():
    failure = validate_inputs(Point3(0, 0, 40), Point3(0, 0, 10), AxisMapping(ax=1, lat=1, elev=2), LIMITS)
    assert failure is not None
    assert failure.has(NonUniqueAxisMappingError)
    assert failure.of_type(NonUniqueAxisMappingError)[0].labels == (1, 1, 2)


def test_unknown_label():
    failure = validate_inputs(Point3(0, 0, 40), Point3(0, 0, 10), AxisMapping(ax=4, lat=1, elev=2), LIMITS)
    errs = failure.of_type(UnknownAxisLabelError)
    assert len(errs) == 1
    assert errs[0].role == "ax"
    assert not failure.has(NonUniqueAxisMappingError)


def test_coincident_points_are_degenerate():
    failure = validate_inputs(Point3(1, 2, 3), Point3(1, 2, 3), MAPPING, LIMITS)
    assert failure is not None
    assert failure.has(DegenerateAxisError)


def test_all_causes_reported_together():
    failure = validate_inputs(Point3(60, 0, 5), Point3(0, 0, 10), AxisMapping(1, 1, 2), LIMITS)
    kinds = [type(e) for e in failure.errors]
    assert kinds == [OutOfRangeError, AxialOrderError, NonUniqueAxisMappingError]
    assert len(failure.messages()) == 3


def test_failed_validation_returns_no_vectors():
    result = compute_step_vectors(Point3(0, 0, 5), Point3(0, 0, 10), MAPPING, LIMITS)
    assert not result.ok
    assert result.vectors is None
    assert result.failure.has(AxialOrderError)


def test_nan_coordinate_is_out_of_range():
    p = Point3(float("nan"), 0, 0)
    assert LIMITS.violations(p) == ("x",)
    failure = validate_inputs(Point3(0, 0, 10), p, MAPPING, LIMITS)
    errs = failure.of_type(OutOfRangeError)
    assert len(errs) == 1
    assert errs[0].coords == ("x",)


def test_overflowing_axis_length_is_degenerate():
    unbounded = StageLimits(float("inf"), float("inf"), float("inf"))
    p1, p2 = Point3(1e308, 0, 1e308), Point3(-1e308, 0, -1e308)
    failure = validate_inputs(p1, p2, MAPPING, unbounded)
    assert failure.has(DegenerateAxisError)
    assert not compute_step_vectors(p1, p2, MAPPING, unbounded).ok
