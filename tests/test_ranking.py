import random

import pytest

from nepalrank.models import AccountRecord
from nepalrank.ranking import badge_color, rank_accounts, top_accounts


def _record(username, commits, total, followers):
    return AccountRecord(
        username=username,
        commit_count=commits,
        total_contribution_count=total,
        follower_count=followers,
    )


def _random_records(count, seed=7):
    rng = random.Random(seed)
    return [
        _record(f"user{idx}", rng.randint(0, 5), rng.randint(0, 5), rng.randint(0, 3))
        for idx in range(count)
    ]


def test_rank_accounts_composite_order():
    rec1 = _record("rec1", 10, 50, 5)
    rec2 = _record("rec2", 10, 60, 1)
    rec3 = _record("rec3", 8, 90, 9)

    ranked = rank_accounts([rec1, rec2, rec3])

    assert [(r.username, r.rank) for r in ranked] == [("rec2", 1), ("rec1", 2), ("rec3", 3)]


def test_rank_accounts_followers_break_remaining_ties():
    ranked = rank_accounts([_record("few", 3, 3, 1), _record("many", 3, 3, 8)])
    assert [r.username for r in ranked] == ["many", "few"]


def test_rank_accounts_is_stable_for_full_ties():
    records = [_record(name, 4, 4, 4) for name in ("zed", "amy", "kim")]

    ranked = rank_accounts(records)

    assert [r.username for r in ranked] == ["zed", "amy", "kim"]


def test_rank_accounts_is_deterministic_and_contiguous():
    records = _random_records(200)

    first = rank_accounts(records)
    second = rank_accounts(records)

    assert first == second
    assert [r.rank for r in first] == list(range(1, len(records) + 1))


def test_rank_accounts_adjacent_pairs_ordered():
    ranked = rank_accounts(_random_records(300, seed=11))

    for earlier, later in zip(ranked, ranked[1:]):
        assert (
            earlier.commit_count,
            earlier.total_contribution_count,
            earlier.follower_count,
        ) >= (
            later.commit_count,
            later.total_contribution_count,
            later.follower_count,
        )


def test_rank_accounts_does_not_mutate_input():
    records = [_record("b", 1, 1, 1), _record("a", 9, 9, 9)]
    snapshot = list(records)

    rank_accounts(records)

    assert records == snapshot


def test_rank_accounts_empty():
    assert rank_accounts([]) == []


def test_badge_color_tiers():
    colors = {rank: badge_color(rank) for rank in (1, 10, 11, 50, 51, 100, 101)}

    assert colors[1] == colors[10]
    assert colors[11] == colors[50]
    assert colors[51] == colors[100]
    assert len({colors[1], colors[11], colors[51], colors[101]}) == 4
    assert colors[101] == badge_color(5000)


def test_badge_color_rejects_non_positive_rank():
    with pytest.raises(ValueError):
        badge_color(0)


def test_top_accounts_slices_leaders():
    ranked = rank_accounts(_random_records(10))

    assert [r.rank for r in top_accounts(ranked, 3)] == [1, 2, 3]
    assert top_accounts(ranked, 0) == []
    assert len(top_accounts(ranked, 50)) == 10
