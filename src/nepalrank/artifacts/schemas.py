"""Pydantic models for the published JSON documents."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal

from pydantic import BaseModel, Field

from nepalrank.models import RankedRecord, RunMetadata
from nepalrank.ranking import badge_color


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RankingEntry(BaseModel):
    rank: int
    username: str
    name: str
    avatar_url: str = Field(serialization_alias="avatarUrl")
    commits: int
    public_contributions: int = Field(serialization_alias="publicContributions")
    all_contributions: int = Field(serialization_alias="allContributions")
    followers: int

    @classmethod
    def from_record(cls, record: RankedRecord) -> "RankingEntry":
        return cls(
            rank=record.rank,
            username=record.username,
            name=record.display_name,
            avatar_url=record.avatar_url,
            commits=record.commit_count,
            public_contributions=record.public_contribution_count,
            all_contributions=record.total_contribution_count,
            followers=record.follower_count,
        )


class AccountDetail(RankingEntry):
    organizations: List[str]

    @classmethod
    def from_record(cls, record: RankedRecord) -> "AccountDetail":
        entry = RankingEntry.from_record(record)
        return cls(**entry.model_dump(), organizations=list(record.organizations))


class BadgeDocument(BaseModel):
    """Shields.io endpoint badge payload."""

    schema_version: Literal[1] = Field(default=1, serialization_alias="schemaVersion")
    label: str
    message: str
    color: str

    @classmethod
    def from_record(cls, record: RankedRecord, *, label: str) -> "BadgeDocument":
        return cls(label=label, message=f"#{record.rank}", color=badge_color(record.rank))


class MetadataDocument(BaseModel):
    generated_at: str = Field(serialization_alias="generatedAt")
    total_users: int = Field(serialization_alias="totalUsers")
    locations: List[str]
    min_followers: int = Field(serialization_alias="minFollowers")

    @classmethod
    def from_metadata(cls, metadata: RunMetadata) -> "MetadataDocument":
        return cls(
            generated_at=format_timestamp(metadata.generated_at),
            total_users=metadata.total_users,
            locations=list(metadata.locations),
            min_followers=metadata.min_followers,
        )
