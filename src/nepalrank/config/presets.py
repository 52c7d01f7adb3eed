"""Location presets for supported search populations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple


@dataclass(frozen=True)
class LocationPreset:
    name: str
    title: str
    include: Tuple[str, ...]
    exclude: Tuple[str, ...] = ()
    min_followers: int = 0


_PRESETS: Dict[str, LocationPreset] = {
    "nepal": LocationPreset(
        name="nepal",
        title="Nepal",
        include=(
            "nepal",
            "kathmandu",
            "pokhara",
            "lalitpur",
            "bharatpur",
            "birgunj",
            "biratnagar",
            "janakpur",
            "ghorahi",
        ),
    ),
    "nepal-country": LocationPreset(
        name="nepal-country",
        title="Nepal",
        include=("Nepal",),
    ),
}

DEFAULT_PRESET = "nepal-country"


def iter_presets() -> Iterable[LocationPreset]:
    """Return an iterator of all configured presets."""

    return _PRESETS.values()


def get_preset(name: str) -> LocationPreset:
    """Fetch a preset by name, raising KeyError if missing."""

    key = name.strip().lower()
    if key not in _PRESETS:
        raise KeyError(f"No location preset configured for name={name!r}")
    return _PRESETS[key]
