"""Domain models for harvested accounts and pipeline runs."""

from .account import AccountRecord, RankedRecord, RunMetadata

__all__ = ["AccountRecord", "RankedRecord", "RunMetadata"]
