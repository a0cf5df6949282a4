from __future__ import annotations

from dataclasses import dataclass

from orrery_sim.simulation.scenario import Scenario
from orrery_sim.simulation.engine import SimulationLog


@dataclass
class StateRecorderSystem:
    name: str = "state_recorder"

    def on_step(self, t: float, scenario: Scenario, log: SimulationLog) -> None:
        for body in scenario.body_list():
            log.record_position(body.body_id, t, body.state.position)
            log.record_rotation(body.body_id, t, body.state.self_rotation)
