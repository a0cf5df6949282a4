from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Dict, List, Optional

import plotly.graph_objects as go

from orrery_sim.core.constants import SUN_RADIUS_SCENE
from orrery_sim.physics.orbit_path import OrbitPath
from orrery_sim.simulation.engine import SimulationLog
from orrery_sim.simulation.scenario import Scenario

logger = logging.getLogger(__name__)


def _sun_mesh(radius: float = SUN_RADIUS_SCENE, n_lat: int = 20, n_lon: int = 40):
    # Parametric sphere, Y up to match the XZ orbital plane
    lats = [(-math.pi / 2) + i * (math.pi / (n_lat - 1)) for i in range(n_lat)]
    lons = [(-math.pi) + j * (2 * math.pi / (n_lon - 1)) for j in range(n_lon)]

    x, y, z = [], [], []
    for lat in lats:
        row_x, row_y, row_z = [], [], []
        for lon in lons:
            row_x.append(radius * math.cos(lat) * math.cos(lon))
            row_y.append(radius * math.sin(lat))
            row_z.append(radius * math.cos(lat) * math.sin(lon))
        x.append(row_x); y.append(row_y); z.append(row_z)
    return x, y, z


def _sun_trace() -> go.Surface:
    sx, sy, sz = _sun_mesh()
    return go.Surface(
        x=sx, y=sy, z=sz,
        showscale=False,
        colorscale=[[0, "#ffcc00"], [1, "#ffee55"]],
        name="Sun",
    )


def _scene_layout() -> dict:
    return dict(
        xaxis_title="X",
        yaxis_title="Y",
        zaxis_title="Z",
        aspectmode="data",
        bgcolor="black",
    )


def _orbit_trace(body_id: str, path: OrbitPath) -> go.Scatter3d:
    return go.Scatter3d(
        x=[p[0] for p in path],
        y=[p[1] for p in path],
        z=[p[2] for p in path],
        mode="lines",
        line=dict(color="gray", width=2),
        name=f"{body_id} orbit",
        showlegend=False,
    )


def render_static_scene(
    scenario: Scenario,
    log: SimulationLog,
    paths: Dict[str, OrbitPath],
    out_html: str = "out/orrery_scene.html",
    colors: Optional[Dict[str, str]] = None,
) -> str:
    """
    Renders a static 3D scene:
      - Sun sphere at the origin
      - Orbit ring for each body
      - Last logged position marker for each body
    """
    colors = colors or {}
    fig = go.Figure()
    fig.add_trace(_sun_trace())

    for body_id, path in paths.items():
        fig.add_trace(_orbit_trace(body_id, path))

    for body_id, samples in log.body_positions.items():
        if not samples:
            continue
        _t, (x, y, z) = samples[-1]
        body = scenario.bodies.get(body_id)
        size = body.display_size() if body is not None else 1.0
        fig.add_trace(go.Scatter3d(
            x=[x], y=[y], z=[z],
            mode="markers+text",
            text=[body.name if body is not None else body_id],
            textposition="top center",
            name=body_id,
            marker=dict(size=max(3.0, size), color=colors.get(body_id, "white")),
        ))

    fig.update_layout(
        title=f"{scenario.name} (Static Scene)",
        scene=_scene_layout(),
        margin=dict(l=0, r=0, t=40, b=0),
        legend=dict(orientation="h"),
    )

    Path(out_html).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(out_html, auto_open=False)
    logger.info("Wrote static scene to %s", out_html)
    return out_html


def render_playback(
    log: SimulationLog,
    paths: Dict[str, OrbitPath],
    out_html: str = "out/orrery_playback.html",
    frame_stride: int = 1,
    title: str = "Orrery Playback",
    colors: Optional[Dict[str, str]] = None,
) -> str:
    """
    Animated playback of every logged body.
    Assumes all bodies were logged at the same tick times.
    """
    body_ids = sorted(log.body_positions.keys())
    if not body_ids:
        raise ValueError("No body positions found in log.")

    colors = colors or {}
    times_full = log.times()
    idxs = list(range(0, len(times_full), max(1, frame_stride)))
    times = [times_full[i] for i in idxs]

    pos: Dict[str, Dict[str, List[float]]] = {}
    for bid in body_ids:
        samples = log.body_positions[bid]
        if len(samples) != len(times_full):
            raise ValueError(f"Body {bid} has {len(samples)} samples, expected {len(times_full)}.")
        pos[bid] = {
            "x": [samples[i][1][0] for i in idxs],
            "y": [samples[i][1][1] for i in idxs],
            "z": [samples[i][1][2] for i in idxs],
        }

    fig = go.Figure()
    fig.add_trace(_sun_trace())
    for body_id in body_ids:
        if body_id in paths:
            fig.add_trace(_orbit_trace(body_id, paths[body_id]))

    # One marker trace per body, updated each frame
    marker_trace_idxs: Dict[str, int] = {}
    for bid in body_ids:
        fig.add_trace(go.Scatter3d(
            x=[pos[bid]["x"][0]],
            y=[pos[bid]["y"][0]],
            z=[pos[bid]["z"][0]],
            mode="markers",
            name=bid,
            marker=dict(size=5, color=colors.get(bid, "white")),
        ))
        marker_trace_idxs[bid] = len(list(fig.data)) - 1

    frames: List[go.Frame] = []
    for fi in range(len(times)):
        frame_data = []
        frame_traces = []
        for bid in body_ids:
            frame_data.append(go.Scatter3d(
                x=[pos[bid]["x"][fi]], y=[pos[bid]["y"][fi]], z=[pos[bid]["z"][fi]],
                mode="markers",
            ))
            frame_traces.append(marker_trace_idxs[bid])
        frames.append(go.Frame(name=str(fi), data=frame_data, traces=frame_traces))

    fig.frames = frames

    step_stride = max(1, len(times) // 50)
    slider_steps = [
        dict(
            method="animate",
            args=[[str(i)], {"mode": "immediate", "frame": {"duration": 0, "redraw": True}}],
            label=f"{times[i]:g}d",
        )
        for i in range(0, len(times), step_stride)
    ]

    fig.update_layout(
        title=title,
        scene=_scene_layout(),
        margin=dict(l=0, r=0, t=40, b=0),
        legend=dict(orientation="h"),
        updatemenus=[dict(
            type="buttons",
            showactive=True,
            buttons=[
                dict(label="Play", method="animate",
                     args=[None, {"frame": {"duration": 40, "redraw": True}, "fromcurrent": True}]),
                dict(label="Pause", method="animate",
                     args=[[None], {"frame": {"duration": 0, "redraw": False}, "mode": "immediate"}]),
            ],
        )],
        sliders=[dict(steps=slider_steps, active=0)],
    )

    Path(out_html).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(out_html, auto_open=False)
    logger.info("Wrote playback (%d frames) to %s", len(frames), out_html)
    return out_html
