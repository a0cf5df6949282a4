import logging

from orrery_sim.core.config import OrbitPolicy, SimulationConfig
from orrery_sim.data.loader import load_elements
from orrery_sim.data.planets import PLANET_RECORDS, planet_colors
from orrery_sim.physics.orbit_path import OrbitPathCache, path_for
from orrery_sim.simulation.scenario import build_scenario
from orrery_sim.simulation.engine import Engine
from orrery_sim.simulation.systems.kinematics import KinematicsSystem
from orrery_sim.simulation.systems.state_recorder import StateRecorderSystem
from orrery_sim.visualization.plotly_viewer import render_static_scene, render_playback

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(module)s - %(message)s")

# Planet list radii are already scene units; bodies advance by their own orbitalSpeed each tick
config = SimulationConfig(policy=OrbitPolicy.ACCUMULATED_ANGLE)

elements = load_elements(PLANET_RECORDS, config.units)
scenario = build_scenario("Inner and Outer Planets", elements, config=config)

cache = OrbitPathCache()
paths = {el.body_id: path_for(el, config.units, config.policy, config.segment_count, cache) for el in elements}

engine = Engine(dt=config.dt_days, systems=[KinematicsSystem(config), StateRecorderSystem()])
log = engine.run(scenario, t_start=0.0, t_end=365.0)

static_path = render_static_scene(scenario, log, paths, out_html="out/planets_scene.html", colors=planet_colors())
anim_path = render_playback(log, paths, out_html="out/planets_playback.html", frame_stride=5,
                            title="Planets Playback", colors=planet_colors())

print("Wrote:")
print(" -", static_path)
print(" -", anim_path)
print("\nOpen these HTML files in your browser.")
