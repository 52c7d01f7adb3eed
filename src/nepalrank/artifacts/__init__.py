"""Static JSON artifacts consumed by the ranking site."""

from .schemas import AccountDetail, BadgeDocument, MetadataDocument, RankingEntry, format_timestamp
from .writer import ArtifactReport, ArtifactWriter

__all__ = [
    "AccountDetail",
    "ArtifactReport",
    "ArtifactWriter",
    "BadgeDocument",
    "MetadataDocument",
    "RankingEntry",
    "format_timestamp",
]
