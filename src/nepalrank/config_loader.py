"""Persist and load CLI search profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError
from pydantic.config import ConfigDict

from nepalrank.errors import ConfigError


class _ProfilePayload(BaseModel):
    locations: List[str] = Field(default_factory=list)
    exclude_locations: List[str] = Field(default_factory=list)
    min_followers: Optional[int] = Field(default=None, ge=0)
    max_users: Optional[int] = Field(default=None, ge=1)

    model_config = ConfigDict(strict=True)


@dataclass
class SearchProfile:
    locations: List[str] = field(default_factory=list)
    exclude_locations: List[str] = field(default_factory=list)
    min_followers: Optional[int] = None
    max_users: Optional[int] = None

    @classmethod
    def load(cls, path: Path) -> "SearchProfile":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Unable to read search profile {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Search profile {path} must contain a JSON object")
        try:
            payload = _ProfilePayload.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid search profile {path}: {exc}") from exc
        return cls(
            locations=payload.locations,
            exclude_locations=payload.exclude_locations,
            min_followers=payload.min_followers,
            max_users=payload.max_users,
        )

    def save(self, path: Path) -> None:
        payload = {
            "locations": self.locations,
            "exclude_locations": self.exclude_locations,
            "min_followers": self.min_followers,
            "max_users": self.max_users,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
