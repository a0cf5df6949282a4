from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from orrery_sim.physics.orbit_path import OrbitPath
from orrery_sim.simulation.engine import SimulationLog
from orrery_sim.simulation.scenario import Scenario

logger = logging.getLogger(__name__)


def export_playback_bundle(
    scenario: Scenario,
    log: SimulationLog,
    paths: Dict[str, OrbitPath],
    out_path: str = "out/orrery_bundle.json",
) -> str:
    """
    Export a bundle for a browser (Three.js / Babylon.js) viewer:
      - times: global tick times (days)
      - positions: per-body [x, y, z] aligned to times
      - rotations: per-body self rotation (rad) aligned to times
      - orbit_paths: per-body closed polyline
      - bodies: metadata for mesh/label creation

    JSON shape:
    {
      "times": [0, 1, 2, ...],
      "positions": { "Earth": [[x,y,z], ...], ... },
      "rotations": { "Earth": [0.01, 0.02, ...], ... },
      "orbit_paths": { "Earth": [[x,y,z], ...], ... },
      "bodies": { "Earth": {"name": "...", "size": ..., "period_days": ..., "eccentricity": ...}, ...}
    }
    """
    body_ids = sorted(log.body_positions.keys())
    if not body_ids:
        raise ValueError("No body positions found in log.")

    times: List[float] = log.times()

    data: Dict[str, Any] = {
        "times": times,
        "positions": {},
        "rotations": {},
        "orbit_paths": {},
        "bodies": {},
    }

    for body_id in body_ids:
        samples = log.body_positions[body_id]
        if len(samples) != len(times):
            raise ValueError(f"{body_id} samples length mismatch.")
        data["positions"][body_id] = [[p[0], p[1], p[2]] for (_t, p) in samples]

        rotations = log.body_rotations.get(body_id, [])
        if rotations and len(rotations) != len(times):
            raise ValueError(f"{body_id} rotation series length mismatch.")
        data["rotations"][body_id] = [r for (_t, r) in rotations]

    for body_id, path in paths.items():
        data["orbit_paths"][body_id] = [[p[0], p[1], p[2]] for p in path]

    for body_id, body in scenario.bodies.items():
        el = body.elements
        data["bodies"][body_id] = {
            "name": el.name,
            "size": body.display_size(),
            "period_days": el.orbital_period,
            "eccentricity": el.eccentricity,
            "policy": body.policy.value,
        }

    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(data, f)

    logger.info("Wrote playback bundle for %d bodies to %s", len(body_ids), out_path)
    return out_path
