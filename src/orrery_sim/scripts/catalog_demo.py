import logging
import sys
from pathlib import Path

from orrery_sim.core.config import OrbitPolicy, SimulationConfig, load_config
from orrery_sim.data.loader import load_catalog
from orrery_sim.physics.orbit_path import OrbitPathCache, path_for
from orrery_sim.simulation.scenario import build_scenario
from orrery_sim.simulation.engine import Engine
from orrery_sim.simulation.systems.kinematics import KinematicsSystem
from orrery_sim.simulation.systems.state_recorder import StateRecorderSystem
from orrery_sim.visualization.export_log import export_playback_bundle
from orrery_sim.visualization.plotly_viewer import render_playback

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(module)s - %(message)s")

# usage: python -m orrery_sim.scripts.catalog_demo [catalog.json] [config.json]
DATA_DIR = Path(__file__).resolve().parents[3] / "data"
catalog_path = sys.argv[1] if len(sys.argv) > 1 else str(DATA_DIR / "neo_sample.json")
config = load_config(sys.argv[2]) if len(sys.argv) > 2 else SimulationConfig(policy=OrbitPolicy.KEPLERIAN, dt_days=5.0)

elements = load_catalog(catalog_path, config.units)
if not elements:
    print(f"No usable bodies in {catalog_path}")
    sys.exit(0)

scenario = build_scenario(Path(catalog_path).stem, elements, config=config)

cache = OrbitPathCache()
paths = {el.body_id: path_for(el, config.units, config.policy, config.segment_count, cache) for el in elements}

longest = max(el.orbital_period for el in elements)
engine = Engine(dt=config.dt_days, systems=[KinematicsSystem(config), StateRecorderSystem()])
log = engine.run(scenario, t_start=0.0, t_end=min(longest, 5 * 365.0))

bundle_path = export_playback_bundle(scenario, log, paths, out_path=f"out/{scenario.name}_bundle.json")
anim_path = render_playback(log, paths, out_html=f"out/{scenario.name}_playback.html", frame_stride=2,
                            title=f"{scenario.name} Playback")

print("Wrote:")
print(" -", bundle_path)
print(" -", anim_path)
