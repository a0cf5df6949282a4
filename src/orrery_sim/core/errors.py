from __future__ import annotations


class OrreryError(Exception):
    """Base class for errors raised by orrery_sim."""


class InvalidElements(OrreryError, ValueError):
    """
    Orbital elements are missing, unparseable or outside the supported range
    (zero period, eccentricity outside [0, 1), non-positive axis...).
    """


class InvalidParameter(OrreryError, ValueError):
    """A sampling or stepping parameter is out of range."""


class ConfigurationError(InvalidParameter):
    """Simulation settings are invalid or inconsistent."""
