"""Orbit propagation and overpass prediction."""

from .model import OrbitModel, eci_to_geodetic, gmst
from .scheduler import OverpassScheduler
from .search import DEFAULT_MAX_STEPS, DEFAULT_STEP, OverpassSearch

__all__ = [
    "OrbitModel",
    "eci_to_geodetic",
    "gmst",
    "OverpassSearch",
    "OverpassScheduler",
    "DEFAULT_STEP",
    "DEFAULT_MAX_STEPS",
]
