import json
from pathlib import Path

import pytest

from nepalrank.config import RunSettings
from nepalrank.config_loader import SearchProfile
from nepalrank.errors import ConfigError


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("GITHUB_TOKEN", "env-token")
    monkeypatch.setenv("NEPALRANK_MAX_USERS", "250")
    monkeypatch.setenv("NEPALRANK_OUTPUT_DIR", str(tmp_path))

    settings = RunSettings.from_env()

    assert settings.token == "env-token"
    assert settings.max_users == 250
    assert settings.output_dir == tmp_path
    assert settings.criteria.locations == ("Nepal",)


def test_settings_invalid_int_falls_back(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.setenv("NEPALRANK_MAX_USERS", "lots")

    settings = RunSettings.from_env()

    assert settings.token is None
    assert settings.max_users == 1000


def test_settings_overrides_ignore_none(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("GITHUB_TOKEN", "env-token")

    settings = RunSettings.from_env(token=None, max_users=10, badge_label=None)

    assert settings.token == "env-token"
    assert settings.max_users == 10
    assert settings.badge_label == "Nepal Rank"


def test_search_profile_round_trip(tmp_path: Path):
    path = tmp_path / "profile.json"
    SearchProfile(locations=["Pokhara"], exclude_locations=["Ohio"], min_followers=5).save(path)

    profile = SearchProfile.load(path)

    assert profile.locations == ["Pokhara"]
    assert profile.exclude_locations == ["Ohio"]
    assert profile.min_followers == 5
    assert profile.max_users is None


def test_search_profile_rejects_invalid_json(tmp_path: Path):
    path = tmp_path / "profile.json"
    path.write_text("[1, 2", encoding="utf-8")

    with pytest.raises(ConfigError):
        SearchProfile.load(path)


@pytest.mark.parametrize(
    "payload",
    [
        {"locations": "Nepal"},
        {"exclude_locations": "Ohio"},
        {"locations": ["Nepal", 3]},
        {"min_followers": "5"},
        {"min_followers": -1},
        {"max_users": 0},
        {"max_users": True},
    ],
)
def test_search_profile_rejects_wrong_types(tmp_path: Path, payload):
    path = tmp_path / "profile.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(ConfigError):
        SearchProfile.load(path)
