"""Canonical account models shared across search, ranking and artifact layers."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Tuple

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


def _mapping(value: Any, field: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"{field} must be an object, got {type(value).__name__}")
    return value


def _count(payload: Any, key: str, field: str) -> int:
    value = _mapping(payload, field).get(key)
    return int(value) if value is not None else 0


class AccountRecord(BaseModel):
    """Normalized account payload harvested from one search result."""

    username: str = Field(..., min_length=1)
    display_name: str = ""
    avatar_url: str = ""
    follower_count: int = Field(0, ge=0)
    commit_count: int = Field(0, ge=0)
    # calendar total minus restricted contributions; upstream data can push it below zero
    public_contribution_count: int = 0
    total_contribution_count: int = Field(0, ge=0)
    organizations: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _default_display_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("display_name"):
            data = dict(data)
            data["display_name"] = data.get("username", "")
        return data

    @classmethod
    def from_search_node(cls, node: Mapping[str, Any]) -> "AccountRecord":
        """Build a record from a GraphQL ``search`` edge node."""

        contributions = _mapping(node.get("contributionsCollection"), "contributionsCollection")
        calendar_total = _count(
            contributions.get("contributionCalendar"), "totalContributions", "contributionCalendar"
        )
        restricted = _count(contributions, "restrictedContributionsCount", "contributionsCollection")
        organizations = _mapping(node.get("organizations"), "organizations").get("nodes") or []
        return cls(
            username=node["login"],
            display_name=node.get("name") or "",
            avatar_url=node.get("avatarUrl") or "",
            follower_count=_count(node.get("followers"), "totalCount", "followers"),
            commit_count=_count(contributions, "totalCommitContributions", "contributionsCollection"),
            public_contribution_count=calendar_total - restricted,
            total_contribution_count=calendar_total,
            organizations=tuple(
                org["login"]
                for org in organizations
                if _mapping(org, "organization").get("login")
            ),
        )


class RankedRecord(AccountRecord):
    """Account record with its position in the final ranking."""

    rank: int = Field(..., ge=1)

    @classmethod
    def from_account(cls, record: AccountRecord, rank: int) -> "RankedRecord":
        return cls(**record.model_dump(), rank=rank)


class RunMetadata(BaseModel):
    """Description of one successful pipeline execution."""

    generated_at: datetime
    total_users: int = Field(..., ge=0)
    locations: Tuple[str, ...]
    min_followers: int = Field(0, ge=0)

    model_config = ConfigDict(frozen=True)
