"""3-D preview of a probe frame: stage travel box, measured points and step vectors.

Plotting is kept out of the computation modules; everything here consumes
finished StepVectors and only builds plotly traces.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import plotly.graph_objects as go

from .types import Point3, StageLimits, StepVectors


@dataclass
class PlotConfig:
    show_box: bool = True
    show_points: bool = True
    show_axis_line: bool = True
    arrow_scale_mm: Optional[float] = None      # None -> 25% of |p1 - p2|
    title: str = "Probe step vectors"

    colors: Dict[str, str] = field(default_factory=lambda: {
        'box': 'lightgray',
        'points': 'black',
        'axis_line': 'gray',
        'ulat': 'red',
        'uelev': 'green',
        'uax': 'blue',
    })


class StepVectorPlotter:
    def __init__(self, p1: Point3, p2: Point3, vectors: StepVectors,
                 limits: Optional[StageLimits] = None, *, config: PlotConfig | None = None):
        self.p1 = p1
        self.p2 = p2
        self.vectors = vectors
        self.limits = limits
        self.cfg = config or PlotConfig()

    def _arrow_length(self) -> float:
        if self.cfg.arrow_scale_mm is not None:
            return float(self.cfg.arrow_scale_mm)
        d = float(np.linalg.norm(self.p1.as_array() - self.p2.as_array()))
        return 0.25 * d if d > 0 else 1.0

    # ---------------- traces builders ----------------
    def build_box_trace(self, traces: List):
        if not self.cfg.show_box or self.limits is None:
            return
        lx, ly, lz = self.limits.x_len, self.limits.y_len, self.limits.z_len
        corners = np.array([[sx * lx, sy * ly, sz * lz]
                            for sx in (-1, 1) for sy in (-1, 1) for sz in (-1, 1)], dtype=float)
        # corner indices differ in exactly one sign along each edge
        edges = [(i, j) for i in range(8) for j in range(i + 1, 8) if bin(i ^ j).count("1") == 1]
        xs: List = []; ys: List = []; zs: List = []
        for i, j in edges:
            xs += [corners[i, 0], corners[j, 0], None]
            ys += [corners[i, 1], corners[j, 1], None]
            zs += [corners[i, 2], corners[j, 2], None]
        traces.append(go.Scatter3d(
            x=xs, y=ys, z=zs,
            mode='lines',
            line=dict(color=self.cfg.colors['box'], width=2),
            name='Stage travel',
            hoverinfo='skip',
        ))

    def build_point_traces(self, traces: List):
        if self.cfg.show_points:
            pts = [self.p1, self.p2]
            traces.append(go.Scatter3d(
                x=[p.x for p in pts], y=[p.y for p in pts], z=[p.z for p in pts],
                mode='markers+text',
                marker=dict(size=4, color=self.cfg.colors['points']),
                text=['p1', 'p2'],
                name='Measured points',
                hovertemplate='X: %{x:.3f} mm<br>Y: %{y:.3f} mm<br>Z: %{z:.3f} mm<extra></extra>',
            ))
        if self.cfg.show_axis_line:
            traces.append(go.Scatter3d(
                x=[self.p2.x, self.p1.x], y=[self.p2.y, self.p1.y], z=[self.p2.z, self.p1.z],
                mode='lines',
                line=dict(color=self.cfg.colors['axis_line'], width=2, dash='dash'),
                name='Measured axis',
            ))

    def build_vector_traces(self, traces: List):
        origin = self.p2.as_array()
        scale = self._arrow_length()
        vec_info = [
            (self.vectors.ulat, 'Lateral ulat', 'ulat'),
            (self.vectors.uelev, 'Elevation uelev', 'uelev'),
            (self.vectors.uax, 'Axial uax', 'uax'),
        ]
        for v, label, key in vec_info:
            v = np.asarray(v, float)
            tip = origin + v * scale
            # customdata: [dX, dY, dZ] of the unit vector
            cdat = [[float(v[0]), float(v[1]), float(v[2])]] * 2
            traces.append(go.Scatter3d(
                x=[origin[0], tip[0]], y=[origin[1], tip[1]], z=[origin[2], tip[2]],
                mode='lines',
                line=dict(color=self.cfg.colors[key], width=5),
                name=label,
                customdata=cdat,
                hovertemplate=(
                    '<b>' + label + '</b><br>'
                    'dX: %{customdata[0]:.5f}<br>'
                    'dY: %{customdata[1]:.5f}<br>'
                    'dZ: %{customdata[2]:.5f}<extra></extra>'
                ),
            ))

    # ---------------- figure ----------------
    def build_figure(self) -> go.Figure:
        traces: List = []
        self.build_box_trace(traces)
        self.build_point_traces(traces)
        self.build_vector_traces(traces)
        fig = go.Figure(data=traces)
        fig.update_layout(
            title=self.cfg.title,
            scene=dict(
                xaxis_title="X / motor 1 (mm)",
                yaxis_title="Y / motor 2 (mm)",
                zaxis_title="Z / motor 3 (mm)",
                aspectmode='data',
            ),
        )
        return fig

    def write_html(self, out_html: str) -> str:
        fig = self.build_figure()
        fig.write_html(out_html, include_plotlyjs='cdn')
        return out_html
