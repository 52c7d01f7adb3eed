"""Configuration helpers for search presets and run settings."""

from .presets import DEFAULT_PRESET, LocationPreset, get_preset, iter_presets
from .settings import RunSettings

__all__ = [
    "DEFAULT_PRESET",
    "LocationPreset",
    "RunSettings",
    "get_preset",
    "iter_presets",
]
