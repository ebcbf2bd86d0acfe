"""Unit tests for reconciling the labeler configuration."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from issue_labeler.configuration.env import Settings
from issue_labeler.configuration.exceptions import RequiredConfigurationElementError
from issue_labeler.configuration.reconcile import parse_cutoff, reconcile_labeler_configuration


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "GITHUB_REPOSITORY": "octocat/Hello-World",
        "GITHUB_SHA": "env-sha",
        "GITHUB_EVENT_PATH": Path("/github/workflow/event.json"),
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "value, expected",
    [
        pytest.param("2024-01-01T00:00:00Z", datetime(2024, 1, 1, tzinfo=timezone.utc), id="iso datetime utc"),
        pytest.param("2024-01-01T02:00:00+02:00", datetime(2024, 1, 1, tzinfo=timezone.utc), id="iso datetime with offset"),
        pytest.param("2024-01-01T00:00:00", datetime(2024, 1, 1, tzinfo=timezone.utc), id="naive datetime as utc"),
        pytest.param("2024-01-01", datetime(2024, 1, 1, tzinfo=timezone.utc), id="date only"),
        pytest.param("1704067200", datetime(2024, 1, 1, tzinfo=timezone.utc), id="unix timestamp"),
    ],
)
def test_parse_cutoff_valid(value: str, expected: datetime) -> None:
    """Test that supported timestamp formats parse to the same instant."""
    cutoff = parse_cutoff(value)
    assert cutoff is not None
    assert cutoff.utcoffset() is not None
    assert cutoff - expected == timedelta(0)


@pytest.mark.parametrize(
    "value",
    [
        pytest.param(None, id="none"),
        pytest.param("", id="empty"),
        pytest.param("   ", id="blank"),
        pytest.param("not a date", id="garbage"),
    ],
)
def test_parse_cutoff_disabled(value: str | None) -> None:
    """Test that empty or unparseable values disable the cutoff."""
    assert parse_cutoff(value) is None


def test_reconcile_prefers_cli_values() -> None:
    """Test that values given on the command line win over the Actions environment."""
    config = reconcile_labeler_configuration(
        cli_github_token="token",
        cli_configuration_path=".github/labeler.yml",
        cli_not_before="2024-01-01",
        cli_repo="owner/other",
        cli_ref="cli-sha",
        cli_event_path=Path("event.json"),
        settings=make_settings(),
    )
    assert config.repo == "owner/other"
    assert config.ref == "cli-sha"
    assert config.event_path == Path("event.json")
    assert config.not_before == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_reconcile_falls_back_to_actions_environment() -> None:
    """Test that the repository, ref and event path come from the Actions environment by default."""
    config = reconcile_labeler_configuration(
        cli_github_token="token",
        cli_configuration_path=".github/labeler.yml",
        settings=make_settings(GITHUB_API_URL="https://ghes.example.com/api/v3"),
    )
    assert config.repo == "octocat/Hello-World"
    assert config.ref == "env-sha"
    assert config.event_path == Path("/github/workflow/event.json")
    assert config.github_api_url == "https://ghes.example.com/api/v3"
    assert config.not_before is None


@pytest.mark.parametrize(
    "token, path, repo, missing",
    [
        pytest.param(None, "labeler.yml", "owner/repo", "GitHub token", id="missing token"),
        pytest.param("token", None, "owner/repo", "configuration path", id="missing configuration path"),
        pytest.param("token", "labeler.yml", None, "repository", id="missing repository"),
    ],
)
def test_reconcile_missing_required_element(token: str | None, path: str | None, repo: str | None, missing: str) -> None:
    """Test that missing required elements are reported by name."""
    with pytest.raises(RequiredConfigurationElementError) as exc_info:
        reconcile_labeler_configuration(
            cli_github_token=token,
            cli_configuration_path=path,
            cli_repo=repo,
            settings=make_settings(GITHUB_REPOSITORY=None),
        )
    assert exc_info.value.name == missing
