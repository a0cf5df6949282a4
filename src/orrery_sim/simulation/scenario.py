from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional

from orrery_sim.core.config import DEFAULT_CONFIG, OrbitPolicy, SimulationConfig
from orrery_sim.objects.body import BodyState, CelestialBody
from orrery_sim.physics.orbit import OrbitalElements


@dataclass
class Scenario:
    """
    Container for all bodies in a simulation run.
    Keep this pure: just data + lookup, no stepping logic.
    """
    name: str
    bodies: Dict[str, CelestialBody] = field(default_factory=dict)

    def add_body(self, body: CelestialBody) -> None:
        if body.body_id in self.bodies:
            raise ValueError(f"Duplicate body ID: {body.body_id}")
        self.bodies[body.body_id] = body

    def body_list(self) -> List[CelestialBody]:
        return list(self.bodies.values())

    def snapshot(self) -> Dict[str, BodyState]:
        """Copies of every body's current state, keyed by body ID."""
        return {body_id: replace(body.state) for body_id, body in self.bodies.items()}


def build_scenario(
    name: str,
    elements: Iterable[OrbitalElements],
    policy: Optional[OrbitPolicy] = None,
    config: SimulationConfig = DEFAULT_CONFIG,
) -> Scenario:
    """One CelestialBody per element set, all sharing the same policy and units."""
    scenario = Scenario(name=name)
    body_policy = policy if policy is not None else config.policy
    for el in elements:
        scenario.add_body(CelestialBody(elements=el, policy=body_policy, units=config.units))
    return scenario
