"""
Built-in planet list in the planet-list record shape.

Radii are already in scene units (no distance scaling); orbitalSpeed is the
per-tick angle increment used by the accumulated-angle policy; periods are
in days. `color` is a presentation hint only.
"""

from __future__ import annotations

from typing import Any, Dict, List

PLANET_RECORDS: List[Dict[str, Any]] = [
    {"name": "Mercury", "size": 2.0, "color": 0xAAAAAA, "orbitalRadius": 10.0, "orbitalSpeed": 0.02, "orbitalPeriod": 88.0},
    {"name": "Venus", "size": 3.0, "color": 0xFFDD99, "orbitalRadius": 20.0, "orbitalSpeed": 0.015, "orbitalPeriod": 225.0},
    {"name": "Earth", "size": 3.5, "color": 0x0000FF, "orbitalRadius": 30.0, "orbitalSpeed": 0.01, "orbitalPeriod": 365.0},
    {"name": "Mars", "size": 2.5, "color": 0xC1440E, "orbitalRadius": 40.0, "orbitalSpeed": 0.008, "orbitalPeriod": 687.0},
    {"name": "Jupiter", "size": 7.0, "color": 0xD8CA9D, "orbitalRadius": 60.0, "orbitalSpeed": 0.004, "orbitalPeriod": 4333.0},
    {"name": "Saturn", "size": 6.0, "color": 0xE3E0C0, "orbitalRadius": 80.0, "orbitalSpeed": 0.003, "orbitalPeriod": 10759.0},
    {"name": "Uranus", "size": 4.5, "color": 0x7FDBFF, "orbitalRadius": 100.0, "orbitalSpeed": 0.002, "orbitalPeriod": 30687.0},
    {"name": "Neptune", "size": 4.5, "color": 0x3F54BA, "orbitalRadius": 120.0, "orbitalSpeed": 0.0015, "orbitalPeriod": 60190.0},
]


def planet_colors() -> Dict[str, str]:
    """Body ID -> CSS hex color, for the viewers."""
    return {rec["name"]: f"#{rec['color']:06x}" for rec in PLANET_RECORDS}
