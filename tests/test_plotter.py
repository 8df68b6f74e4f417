"""Plotly preview traces."""
import sys
from pathlib import Path

import numpy as np

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from probe_frame.plotter import PlotConfig, StepVectorPlotter
from probe_frame.projector import compute_step_vectors
from probe_frame.types import AxisMapping, Point3, StageLimits

P1, P2 = Point3(10, 0, 10), Point3(0, 0, 0)
LIMITS = StageLimits(50, 50, 50)


def _plotter(**cfg):
    v = compute_step_vectors(P1, P2, AxisMapping(3, 1, 2), LIMITS).unwrap()
    return StepVectorPlotter(P1, P2, v, LIMITS, config=PlotConfig(**cfg))


def test_figure_has_box_points_axis_and_vectors():
    fig = _plotter().build_figure()
    names = [t.name for t in fig.data]
    assert names == ["Stage travel", "Measured points", "Measured axis",
                     "Lateral ulat", "Elevation uelev", "Axial uax"]
    # 12 box edges, each (start, end, gap)
    assert len(fig.data[0].x) == 36


def test_vectors_start_at_origin_with_requested_length():
    fig = _plotter(arrow_scale_mm=5.0).build_figure()
    ax = fig.data[-1]
    start = np.array([ax.x[0], ax.y[0], ax.z[0]])
    tip = np.array([ax.x[1], ax.y[1], ax.z[1]])
    assert np.allclose(start, P2.as_array())
    assert np.isclose(np.linalg.norm(tip - start), 5.0)


def test_box_can_be_hidden():
    fig = _plotter(show_box=False, show_axis_line=False).build_figure()
    assert [t.name for t in fig.data][0] == "Measured points"
    assert len(fig.data) == 4


def test_module_docstring_is_kept():
    import probe_frame.plotter as plotter_module
    assert plotter_module.__doc__ is not None
    assert "preview" in plotter_module.__doc__
