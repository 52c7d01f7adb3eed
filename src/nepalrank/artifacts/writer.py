"""Write ranking artifacts to a static output tree."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Sequence

from pydantic import BaseModel

from nepalrank.errors import WriteError
from nepalrank.models import RankedRecord, RunMetadata

from .schemas import AccountDetail, BadgeDocument, MetadataDocument, RankingEntry


logger = logging.getLogger(__name__)

DEFAULT_BADGE_LABEL = "Nepal Rank"


@dataclass
class ArtifactReport:
    root: Path
    rankings_path: Path | None = None
    metadata_path: Path | None = None
    user_files: List[Path] = field(default_factory=list)
    badge_files: List[Path] = field(default_factory=list)


def _dump(payload: Any) -> str:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", by_alias=True)
    elif isinstance(payload, list):
        payload = [
            item.model_dump(mode="json", by_alias=True) if isinstance(item, BaseModel) else item
            for item in payload
        ]
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


class ArtifactWriter:
    """Lays out ``data/`` and ``badges/`` under ``root``.

    Writes are fail-fast: the first ``OSError`` becomes a :class:`WriteError`
    and files already on disk stay in place. Metadata is written last.
    """

    def __init__(self, root: Path | str, *, badge_label: str = DEFAULT_BADGE_LABEL):
        self.root = Path(root)
        self.badge_label = badge_label

    @property
    def data_dir(self) -> Path:
        return self.root / "data"

    @property
    def users_dir(self) -> Path:
        return self.data_dir / "users"

    @property
    def badges_dir(self) -> Path:
        return self.root / "badges"

    def _ensure_dirs(self) -> None:
        for directory in (self.data_dir, self.users_dir, self.badges_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise WriteError(f"Unable to create directory {directory}: {exc}", path=directory) from exc

    def _write(self, path: Path, payload: Any) -> Path:
        try:
            path.write_text(_dump(payload), encoding="utf-8")
        except OSError as exc:
            raise WriteError(f"Unable to write {path}: {exc}", path=path) from exc
        return path

    def write(self, ranked: Sequence[RankedRecord], metadata: RunMetadata) -> ArtifactReport:
        report = ArtifactReport(root=self.root)
        self._ensure_dirs()

        logger.info("Generating output files in %s", self.root)

        rankings = [RankingEntry.from_record(record) for record in ranked]
        report.rankings_path = self._write(self.data_dir / "rankings.json", rankings)
        logger.info("Generated %s", report.rankings_path)

        for record in ranked:
            report.user_files.append(
                self._write(self.users_dir / f"{record.username}.json", AccountDetail.from_record(record))
            )
            report.badge_files.append(
                self._write(
                    self.badges_dir / f"{record.username}.json",
                    BadgeDocument.from_record(record, label=self.badge_label),
                )
            )

        logger.info("Generated %s user data files", len(report.user_files))
        logger.info("Generated %s badge files", len(report.badge_files))

        report.metadata_path = self._write(
            self.data_dir / "metadata.json", MetadataDocument.from_metadata(metadata)
        )
        logger.info("Generated %s", report.metadata_path)
        return report
