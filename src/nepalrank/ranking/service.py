"""Composite ranking of harvested accounts."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from nepalrank.models import AccountRecord, RankedRecord


_BADGE_TIERS: Tuple[Tuple[int, str], ...] = (
    (10, "brightgreen"),
    (50, "green"),
    (100, "blue"),
)
_BADGE_FALLBACK = "lightgrey"


def _sort_key(record: AccountRecord) -> Tuple[int, int, int]:
    return (
        -record.commit_count,
        -record.total_contribution_count,
        -record.follower_count,
    )


def rank_accounts(records: Iterable[AccountRecord]) -> List[RankedRecord]:
    """Order by commits, then total contributions, then followers, all descending.

    Ties on every key keep their input order. Ranks run 1..N without gaps.
    """

    ordered = sorted(records, key=_sort_key)
    return [RankedRecord.from_account(record, rank) for rank, record in enumerate(ordered, start=1)]


def badge_color(rank: int) -> str:
    """Map a rank onto one of four ordered badge colors."""

    if rank < 1:
        raise ValueError(f"rank must be positive, got {rank}")
    for threshold, color in _BADGE_TIERS:
        if rank <= threshold:
            return color
    return _BADGE_FALLBACK


def top_accounts(ranked: Sequence[RankedRecord], amount: int) -> List[RankedRecord]:
    return list(ranked[: max(0, amount)])
