"""Run settings resolved from the environment and CLI overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from nepalrank.artifacts.writer import DEFAULT_BADGE_LABEL
from nepalrank.search.query import SearchCriteria

from .presets import DEFAULT_PRESET, get_preset


logger = logging.getLogger(__name__)

TOKEN_ENV = "GITHUB_TOKEN"
MAX_USERS_ENV = "NEPALRANK_MAX_USERS"
OUTPUT_DIR_ENV = "NEPALRANK_OUTPUT_DIR"

DEFAULT_MAX_USERS = 1000


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _default_criteria() -> SearchCriteria:
    preset = get_preset(DEFAULT_PRESET)
    return SearchCriteria(
        locations=preset.include,
        exclude_locations=preset.exclude,
        min_followers=preset.min_followers,
    )


@dataclass(frozen=True)
class RunSettings:
    token: str | None
    criteria: SearchCriteria = field(default_factory=_default_criteria)
    output_dir: Path = Path(".")
    max_users: int = DEFAULT_MAX_USERS
    page_size: int = 100
    max_retries: int = 5
    backoff_base: float = 1.0
    backoff_cap: float = 30.0
    page_delay: float = 1.0
    badge_label: str = DEFAULT_BADGE_LABEL

    @classmethod
    def from_env(cls, **overrides: Any) -> "RunSettings":
        """Build settings from process environment, then apply explicit overrides.

        ``None`` overrides are ignored so CLI defaults do not mask the environment.
        """

        output_dir = os.getenv(OUTPUT_DIR_ENV)
        settings = cls(
            token=os.getenv(TOKEN_ENV) or None,
            output_dir=Path(output_dir) if output_dir else Path("."),
            max_users=_env_int(MAX_USERS_ENV, DEFAULT_MAX_USERS, min_value=1),
        )
        return settings.with_overrides(**overrides)

    def with_overrides(self, **overrides: Any) -> "RunSettings":
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self
