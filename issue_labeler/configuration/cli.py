"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import logging
import os
import sys
from pathlib import Path

import structlog
import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from issue_labeler.configuration.exceptions import RequiredConfigurationElementError
from issue_labeler.configuration.reconcile import reconcile_labeler_configuration
from issue_labeler.processing.exceptions import ConfigError
from issue_labeler.processing.rules_processor import load_label_rules_from_file
from issue_labeler.synchronize.driver import run_label_issue_workflow
from issue_labeler.synchronize.labels import decide_label_delta
from issue_labeler.synchronize.models import RunOutcome
from issue_labeler.utils.constants import DEFAULT_GITHUB_API_URL, EXIT_CODE_FAILURE, EXIT_CODE_NEUTRAL, EXIT_CODE_SUCCESS

load_dotenv()

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


def configure_logging(debug: bool) -> None:
    """Send structured log events to stderr at INFO, or DEBUG when requested."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def fail(message: str) -> typer.Exit:
    """Report a failed run and return the exit to raise."""
    typer.echo(message, err=True)
    if os.environ.get("GITHUB_ACTIONS") == "true":
        typer.echo(f"::error::{message}", err=True)
    return typer.Exit(EXIT_CODE_FAILURE)


@typer_app.command(name="label-issue")
def label_issue_cli(
    repo_token: Annotated[str | None, Option("--repo-token", envvar="GITHUB_TOKEN", help="Token used to call the GitHub API.")] = None,
    configuration_path: Annotated[
        str | None,
        Option("--configuration-path", envvar="CONFIGURATION_PATH", help="Repository path of the YAML file mapping labels to regexes."),
    ] = None,
    not_before: Annotated[
        str | None,
        Option("--not-before", envvar="NOT_BEFORE", help="Issues created before this timestamp are left alone (ISO-8601 or Unix time)."),
    ] = None,
    repo: Annotated[str | None, Option("--repo", envvar="GITHUB_REPOSITORY", help="Repository name (owner/repo).")] = None,
    ref: Annotated[str | None, Option("--ref", envvar="GITHUB_SHA", help="Commit, branch or tag to read the configuration from.")] = None,
    github_api_url: Annotated[str, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = DEFAULT_GITHUB_API_URL,
    event_path: Annotated[Path | None, Option("--event-path", envvar="GITHUB_EVENT_PATH", help="Path to the triggering event payload.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Apply or remove labels on the issue of the triggering event based on regex matches against its body."""
    configure_logging(debug)
    try:
        config = reconcile_labeler_configuration(
            cli_github_token=repo_token,
            cli_configuration_path=configuration_path,
            cli_not_before=not_before,
            cli_repo=repo,
            cli_ref=ref,
            cli_github_api_url=github_api_url,
            cli_event_path=event_path,
            cli_debug=debug,
        )
    except RequiredConfigurationElementError as e:
        raise fail(str(e)) from e

    try:
        result = asyncio.run(run_label_issue_workflow(config))
    except ConfigError as e:
        logger.error("Invalid label configuration", label=e.label, error=str(e))
        raise fail(str(e)) from e
    except Exception as e:
        logger.exception("Labeling run failed", error=str(e), error_type=type(e).__name__)
        raise fail(str(e)) from e

    if result.skipped:
        typer.echo(result.message or result.outcome.value)
        raise typer.Exit(EXIT_CODE_NEUTRAL)
    if result.outcome is RunOutcome.APPLIED and result.delta is not None and result.snapshot is not None:
        typer.echo(f"Labels to add to issue #{result.snapshot.number}: {', '.join(result.delta.to_add) or '(none)'}")
        typer.echo(f"Labels to remove from issue #{result.snapshot.number}: {', '.join(result.delta.to_remove) or '(none)'}")
    raise typer.Exit(EXIT_CODE_SUCCESS)


@typer_app.command(name="preview")
def preview_cli(
    config_file: Annotated[Path, Argument(help="Local YAML file mapping labels to regexes.")],
    body: Annotated[str | None, Option("--body", help="Issue body text to evaluate.")] = None,
    body_file: Annotated[Path | None, Option("--body-file", help="File holding the issue body text to evaluate.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Show which labels an issue body would gain and lose, without calling GitHub."""
    configure_logging(debug)
    if (body is None) == (body_file is None):
        raise fail("Provide exactly one of --body or --body-file.")
    if body_file is not None:
        if not body_file.is_file():
            raise fail(f"Body file not found: {body_file.absolute()}")
        body = body_file.read_text(encoding="utf-8")
    if not config_file.is_file():
        raise fail(f"Configuration file not found: {config_file.absolute()}")

    try:
        rules = load_label_rules_from_file(config_file)
    except ConfigError as e:
        raise fail(str(e)) from e

    delta = decide_label_delta(rules, body or "")
    for label in delta.to_add:
        typer.echo(f"+ {label}")
    for label in delta.to_remove:
        typer.echo(f"- {label}")


@typer_app.command(name="validate-config")
def validate_config_cli(
    config_file: Annotated[Path, Argument(help="Local YAML file mapping labels to regexes.")],
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Check that a label configuration file parses and every regex compiles."""
    configure_logging(debug)
    if not config_file.is_file():
        raise fail(f"Configuration file not found: {config_file.absolute()}")
    try:
        rules = load_label_rules_from_file(config_file)
    except ConfigError as e:
        raise fail(str(e)) from e

    typer.echo(f"Configuration is valid: {len(rules.rules)} label rule(s)")
    for label, patterns in rules.items():
        typer.echo(f"  {label}: {', '.join(patterns)}")


if __name__ == "__main__":
    typer_app()
