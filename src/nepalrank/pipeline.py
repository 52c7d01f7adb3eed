"""Run the search, rank and publish steps once."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from nepalrank.artifacts import ArtifactReport, ArtifactWriter
from nepalrank.config import RunSettings
from nepalrank.errors import ConfigError
from nepalrank.models import RankedRecord, RunMetadata
from nepalrank.ranking import rank_accounts
from nepalrank.search import SearchClient


logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    total_users: int
    ranked: List[RankedRecord] = field(default_factory=list)
    artifacts: Optional[ArtifactReport] = None
    metadata: Optional[RunMetadata] = None


def build_client(settings: RunSettings) -> SearchClient:
    return SearchClient(
        settings.token or "",
        max_users=settings.max_users,
        page_size=settings.page_size,
        max_retries=settings.max_retries,
        backoff_base=settings.backoff_base,
        backoff_cap=settings.backoff_cap,
        page_delay=settings.page_delay,
    )


def run_pipeline(
    settings: RunSettings,
    *,
    client: SearchClient | None = None,
    writer: ArtifactWriter | None = None,
    generated_at: datetime | None = None,
) -> RunSummary:
    """Fetch, rank and write artifacts for one search run.

    An empty search result is a successful no-op and writes nothing. Any
    failure propagates before ``data/metadata.json`` is produced.
    """

    if not settings.token or not settings.token.strip():
        raise ConfigError("GITHUB_TOKEN environment variable is required")

    owns_client = client is None
    search_client = client or build_client(settings)
    try:
        accounts = search_client.fetch_all(settings.criteria)
    finally:
        if owns_client:
            search_client.close()

    if not accounts:
        logger.info("No users found matching criteria")
        return RunSummary(total_users=0)

    ranked = rank_accounts(accounts)

    metadata = RunMetadata(
        generated_at=generated_at or datetime.now(timezone.utc),
        total_users=len(ranked),
        locations=settings.criteria.locations,
        min_followers=settings.criteria.min_followers,
    )
    artifact_writer = writer or ArtifactWriter(settings.output_dir, badge_label=settings.badge_label)
    report = artifact_writer.write(ranked, metadata)

    logger.info("Generation complete: %s users ranked", len(ranked))
    return RunSummary(total_users=len(ranked), ranked=ranked, artifacts=report, metadata=metadata)
