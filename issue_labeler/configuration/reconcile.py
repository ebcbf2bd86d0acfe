"""Reconciles configuration between CLI arguments and the GitHub Actions environment."""

from datetime import datetime, timezone
from pathlib import Path

import structlog
from pydantic import TypeAdapter, ValidationError

from issue_labeler.configuration.env import Settings
from issue_labeler.configuration.exceptions import RequiredConfigurationElementError
from issue_labeler.configuration.models import LabelerConfig

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

_datetime_adapter: TypeAdapter[datetime] = TypeAdapter(datetime)


def parse_cutoff(value: str | None) -> datetime | None:
    """Parse the not-before cutoff into an aware datetime.

    Accepts ISO-8601 datetimes, ISO-8601 dates and Unix timestamps. Naive values
    are taken as UTC. An empty value disables the cutoff, and so does an
    unparseable one, with a warning.
    """
    if value is None or not value.strip():
        return None
    try:
        cutoff = _datetime_adapter.validate_python(value.strip())
    except ValidationError:
        logger.warning("Ignoring not-before value that is not a valid timestamp", not_before=value)
        return None
    if cutoff.tzinfo is None:
        cutoff = cutoff.replace(tzinfo=timezone.utc)
    return cutoff


def reconcile_labeler_configuration(
    cli_github_token: str | None,
    cli_configuration_path: str | None,
    cli_not_before: str | None = None,
    cli_repo: str | None = None,
    cli_ref: str | None = None,
    cli_github_api_url: str | None = None,
    cli_event_path: Path | None = None,
    cli_debug: bool = False,
    settings: Settings | None = None,
) -> LabelerConfig:
    """Resolve the run configuration, preferring CLI values over the Actions environment.

    Raises:
        RequiredConfigurationElementError: If the token, configuration path or
            repository cannot be determined.
    """
    if settings is None:
        settings = Settings()

    if not cli_github_token:
        raise RequiredConfigurationElementError("GitHub token", "--repo-token", "GITHUB_TOKEN")
    if not cli_configuration_path:
        raise RequiredConfigurationElementError("configuration path", "--configuration-path", "CONFIGURATION_PATH")

    repo = cli_repo or settings.GITHUB_REPOSITORY
    if not repo:
        raise RequiredConfigurationElementError("repository", "--repo", "GITHUB_REPOSITORY")

    config = LabelerConfig(
        debug=cli_debug or settings.DEBUG,
        github_api_url=cli_github_api_url or settings.GITHUB_API_URL,
        github_token=cli_github_token,
        repo=repo,
        configuration_path=cli_configuration_path,
        not_before=parse_cutoff(cli_not_before),
        ref=cli_ref or settings.GITHUB_SHA,
        event_path=cli_event_path or settings.GITHUB_EVENT_PATH,
    )
    logger.debug(
        "Reconciled labeler configuration",
        repo=config.repo,
        configuration_path=config.configuration_path,
        not_before=config.not_before.isoformat() if config.not_before else None,
        ref=config.ref,
        event_path=str(config.event_path) if config.event_path else None,
        github_api_url=config.github_api_url,
    )
    return config
