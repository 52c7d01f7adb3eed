import pytest
from pydantic import ValidationError

from nepalrank.models import AccountRecord, RankedRecord


def _node(**overrides):
    node = {
        "login": "octo",
        "name": "Octo Cat",
        "avatarUrl": "https://avatars.example/octo",
        "followers": {"totalCount": 12},
        "contributionsCollection": {
            "contributionCalendar": {"totalContributions": 300},
            "totalCommitContributions": 120,
            "restrictedContributionsCount": 40,
        },
        "organizations": {"nodes": [{"login": "acme"}, {"login": "globex"}]},
    }
    node.update(overrides)
    return node


def test_account_record_is_frozen():
    record = AccountRecord(username="octo", follower_count=3)

    with pytest.raises((TypeError, ValidationError)):
        record.username = "other"  # type: ignore[misc]


def test_display_name_falls_back_to_username():
    assert AccountRecord(username="octo").display_name == "octo"
    assert AccountRecord(username="octo", display_name="").display_name == "octo"
    assert AccountRecord(username="octo", display_name="Octo").display_name == "Octo"


def test_from_search_node_maps_counts():
    record = AccountRecord.from_search_node(_node())

    assert record.username == "octo"
    assert record.display_name == "Octo Cat"
    assert record.follower_count == 12
    assert record.commit_count == 120
    assert record.total_contribution_count == 300
    assert record.public_contribution_count == 260
    assert record.organizations == ("acme", "globex")


def test_from_search_node_without_name_uses_login():
    record = AccountRecord.from_search_node(_node(name=None))
    assert record.display_name == "octo"


def test_public_contributions_are_not_clamped():
    node = _node(
        contributionsCollection={
            "contributionCalendar": {"totalContributions": 5},
            "totalCommitContributions": 1,
            "restrictedContributionsCount": 9,
        }
    )

    assert AccountRecord.from_search_node(node).public_contribution_count == -4


def test_duplicate_organizations_are_preserved():
    node = _node(organizations={"nodes": [{"login": "acme"}, {"login": "acme"}]})
    assert AccountRecord.from_search_node(node).organizations == ("acme", "acme")


def test_negative_followers_rejected():
    with pytest.raises(ValidationError):
        AccountRecord(username="octo", follower_count=-1)


def test_ranked_record_requires_positive_rank():
    record = AccountRecord(username="octo")

    assert RankedRecord.from_account(record, 1).rank == 1
    with pytest.raises(ValidationError):
        RankedRecord.from_account(record, 0)
