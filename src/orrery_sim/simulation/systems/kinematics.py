from __future__ import annotations

from dataclasses import dataclass, field

from orrery_sim.core.config import DEFAULT_CONFIG, SimulationConfig
from orrery_sim.simulation.scenario import Scenario
from orrery_sim.simulation.engine import SimulationLog


@dataclass
class KinematicsSystem:
    config: SimulationConfig = field(default=DEFAULT_CONFIG)
    name: str = "kinematics"

    def on_step(self, t: float, scenario: Scenario, log: SimulationLog) -> None:
        # Bodies are independent; order does not matter
        for body in scenario.body_list():
            body.advance(t, self.config)
