from __future__ import annotations

import math

TWO_PI: float = 2.0 * math.pi

# Days in one orbital "year" for catalogs that give periods in years (p_yr, per_y)
DAYS_PER_YEAR: float = 365.0

# Scene units per AU (the x100 convention used for catalog distances)
DEFAULT_DISTANCE_SCALE: float = 100.0

# Polyline resolution for orbit rings
DEFAULT_SEGMENT_COUNT: int = 64

# Cosmetic spin per tick (rad)
DEFAULT_ROTATION_STEP: float = 0.01

# Orbit angle increment per tick for speed-driven bodies (rad)
DEFAULT_ANGULAR_SPEED: float = 0.01

# Radius of the sun sphere drawn at the origin, in scene units
SUN_RADIUS_SCENE: float = 8.0
