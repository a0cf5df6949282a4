from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Tuple

from orrery_sim.core.vectors import Vector3
from orrery_sim.objects.body import BodyState
from orrery_sim.simulation.scenario import Scenario

logger = logging.getLogger(__name__)


class System(Protocol):
    """
    Plugin interface for simulation systems.
    Each system runs per tick and can write to the log.
    """
    name: str

    def on_step(self, t: float, scenario: Scenario, log: "SimulationLog") -> None:
        ...


@dataclass
class SimulationLog:
    """
    Stores outputs from a simulation run.
    Keep it simple and serializable.
    """
    # Positions: body_id -> list of (t, position)
    body_positions: Dict[str, List[Tuple[float, Vector3]]] = field(default_factory=dict)

    # Self rotation: body_id -> list of (t, rotation_rad)
    body_rotations: Dict[str, List[Tuple[float, float]]] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list)

    def record_position(self, body_id: str, t: float, position: Vector3) -> None:
        self.body_positions.setdefault(body_id, []).append((t, position))

    def record_rotation(self, body_id: str, t: float, rotation: float) -> None:
        self.body_rotations.setdefault(body_id, []).append((t, rotation))

    def times(self) -> List[float]:
        """Tick times, taken from the first body (all bodies share the clock)."""
        if not self.body_positions:
            return []
        first = sorted(self.body_positions)[0]
        return [t for (t, _p) in self.body_positions[first]]


@dataclass
class Engine:
    """
    Fixed-step simulation engine.
    Deterministic replay: given same scenario + dt + start/end => same output.
    Time is in days.
    """
    dt: float
    systems: List[System] = field(default_factory=list)

    def step(self, scenario: Scenario, t: float, log: SimulationLog) -> None:
        for sys in self.systems:
            sys.on_step(t, scenario, log)

    def advance(self, scenario: Scenario, t: float, log: Optional[SimulationLog] = None) -> Dict[str, BodyState]:
        """
        One externally-clocked tick (e.g. from a render loop): run every system
        at time t and return the new state snapshot.
        """
        self.step(scenario, t, log if log is not None else SimulationLog())
        return scenario.snapshot()

    def run(self, scenario: Scenario, t_start: float, t_end: float) -> SimulationLog:
        if self.dt <= 0:
            raise ValueError("dt must be positive.")
        if t_end < t_start:
            raise ValueError("t_end must be >= t_start.")

        log = SimulationLog()
        ticks = 0
        t = t_start

        # Inclusive end if it lands exactly; otherwise last tick < end
        while t <= t_end + 1e-9:
            self.step(scenario, t, log)
            ticks += 1
            t = t_start + ticks * self.dt

        logger.debug(
            "Scenario '%s': %d ticks over [%s, %s] with %d bodies",
            scenario.name, ticks, t_start, t_end, len(scenario.bodies),
        )
        return log
