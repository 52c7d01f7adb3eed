"""Command-line interface for generating the account ranking artifacts."""

from __future__ import annotations

import argparse
import csv
import logging
import os
import sys
from pathlib import Path
from typing import Sequence, TextIO

from nepalrank.config import DEFAULT_PRESET, RunSettings, get_preset
from nepalrank.config_loader import SearchProfile
from nepalrank.errors import ConfigError, NepalRankError
from nepalrank.models import RankedRecord
from nepalrank.pipeline import run_pipeline
from nepalrank.ranking import top_accounts
from nepalrank.search import SearchCriteria


LOG_LEVEL_ENV = "NEPALRANK_LOG_LEVEL"

logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rank GitHub users by location and publish JSON artifacts")
    parser.add_argument("--token", default=None, help="GitHub token (defaults to $GITHUB_TOKEN)")
    parser.add_argument("--preset", default=DEFAULT_PRESET, help="Location preset name (e.g., nepal)")
    parser.add_argument(
        "--location",
        action="append",
        default=[],
        help="Location to include; repeat to OR several (overrides the preset)",
    )
    parser.add_argument(
        "--exclude-location",
        action="append",
        default=[],
        help="Location to exclude from the search",
    )
    parser.add_argument("--min-followers", type=int, default=None, help="Minimum follower count")
    parser.add_argument("--max-users", type=int, default=None, help="Maximum number of users to fetch")
    parser.add_argument("--output-dir", type=Path, default=None, help="Root directory for data/ and badges/")
    parser.add_argument("--badge-label", default=None, help="Label shown on generated badges")
    parser.add_argument("--amount", type=int, default=5, help="Number of users to show in the summary")
    parser.add_argument(
        "--format",
        choices=("plain", "csv"),
        default="plain",
        help="Summary output format",
    )
    parser.add_argument("--file", type=Path, default=None, help="Write the summary to a file instead of stdout")
    parser.add_argument("--load-profile", type=Path, help="Load search profile JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save search profile JSON", default=None)
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to $NEPALRANK_LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def _configure_logging(level_name: str | None) -> None:
    level_name = (level_name or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _resolve_profile(args: argparse.Namespace) -> SearchProfile:
    try:
        preset = get_preset(args.preset)
    except KeyError as exc:
        raise ConfigError(str(exc.args[0])) from exc

    profile = SearchProfile(
        locations=list(preset.include),
        exclude_locations=list(preset.exclude),
        min_followers=preset.min_followers,
    )
    if args.load_profile:
        loaded = SearchProfile.load(args.load_profile)
        profile = SearchProfile(
            locations=loaded.locations or profile.locations,
            exclude_locations=loaded.exclude_locations or profile.exclude_locations,
            min_followers=loaded.min_followers if loaded.min_followers is not None else profile.min_followers,
            max_users=loaded.max_users,
        )
    if args.location:
        profile.locations = list(args.location)
    if args.exclude_location:
        profile.exclude_locations = list(args.exclude_location)
    if args.min_followers is not None:
        profile.min_followers = args.min_followers
    if args.max_users is not None:
        profile.max_users = args.max_users
    return profile


def _build_settings(args: argparse.Namespace, profile: SearchProfile) -> RunSettings:
    try:
        criteria = SearchCriteria(
            locations=tuple(profile.locations),
            exclude_locations=tuple(profile.exclude_locations),
            min_followers=profile.min_followers or 0,
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(str(exc)) from exc
    if profile.max_users is not None and profile.max_users < 1:
        raise ConfigError(f"max_users must be at least 1, got {profile.max_users}")
    return RunSettings.from_env(
        token=args.token,
        criteria=criteria,
        output_dir=args.output_dir,
        max_users=profile.max_users,
        badge_label=args.badge_label,
    )


def _write_summary(
    ranked: Sequence[RankedRecord],
    amount: int,
    output_format: str,
    stream: TextIO,
) -> None:
    leaders = top_accounts(ranked, amount)
    if output_format == "csv":
        writer = csv.writer(stream)
        writer.writerow(["rank", "username", "name", "commits", "allContributions", "followers"])
        for record in leaders:
            writer.writerow([
                record.rank,
                record.username,
                record.display_name,
                record.commit_count,
                record.total_contribution_count,
                record.follower_count,
            ])
        return

    stream.write(f"Top {len(leaders)} users:\n")
    for record in leaders:
        stream.write(f"  #{record.rank}: {record.username} ({record.commit_count} commits)\n")


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    _configure_logging(args.log_level)

    try:
        profile = _resolve_profile(args)
        settings = _build_settings(args, profile)
        if args.save_profile:
            profile.save(args.save_profile)
            print(f"Saved search profile to {args.save_profile}")

        logger.info("Starting GitHub user ranking generation")
        summary = run_pipeline(settings)
    except NepalRankError as exc:
        logger.error("%s", exc)
        raise SystemExit(f"Error: {exc}") from exc

    if summary.total_users == 0:
        return

    if args.file:
        try:
            with args.file.open("w", newline="", encoding="utf-8") as f:
                _write_summary(summary.ranked, args.amount, args.format, f)
        except OSError as exc:
            raise SystemExit(f"Error: unable to write summary to {args.file}: {exc}") from exc
        print(f"Wrote summary to {args.file}")
    else:
        _write_summary(summary.ranked, args.amount, args.format, sys.stdout)
    if summary.artifacts is not None:
        print(f"Wrote {summary.total_users} users to {summary.artifacts.root}")


if __name__ == "__main__":
    main()
