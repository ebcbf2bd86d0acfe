"""Orchestrates a single labeling run for the issue of a triggering event."""

import time
from datetime import datetime

import structlog

from issue_labeler.configuration.models import LabelerConfig
from issue_labeler.github.abc import IssueTrackerClientBase
from issue_labeler.github.adapter import PyGithubAdapter
from issue_labeler.github.event import get_event_issue, load_event_payload
from issue_labeler.processing.exceptions import ContentError
from issue_labeler.processing.rules_processor import fetch_label_rules
from issue_labeler.schemas.event import EventIssueModel
from issue_labeler.synchronize.gate import is_before_cutoff
from issue_labeler.synchronize.labels import decide_label_delta, sync_issue_labels
from issue_labeler.synchronize.models import IssueSnapshot, RunOutcome
from issue_labeler.synchronize.results import LabelIssueResult

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def label_issue(
    client: IssueTrackerClientBase,
    event_issue: EventIssueModel | None,
    configuration_path: str,
    not_before: datetime | None = None,
    ref: str | None = None,
) -> LabelIssueResult:
    """Run the label-issue workflow against one issue.

    Remote calls happen in a fixed order: the issue (only when a cutoff is
    set), the labels currently on the issue, the configuration file, then the
    add call and one remove call per label. The body is taken from the event.

    Skip conditions are returned as a result outcome rather than raised, so
    the caller decides how to exit. ConfigError and remote failures propagate.
    """
    if event_issue is None or event_issue.number is None or not event_issue.body:
        logger.info("Could not get issue number or issue body from context, exiting")
        return LabelIssueResult(RunOutcome.NO_ISSUE, message="Could not get issue number or issue body from context")

    issue_number = event_issue.number
    created_at = event_issue.created_at
    if not_before is not None:
        issue = await client.get_issue(issue_number)
        created_at = issue.created_at
        if is_before_cutoff(created_at, not_before):
            logger.info(
                "Issue was created before the cutoff, skipping",
                issue_number=issue_number,
                created_at=created_at.isoformat() if created_at else None,
                not_before=not_before.isoformat(),
            )
            return LabelIssueResult(RunOutcome.CUTOFF_SKIPPED, message=f"Issue #{issue_number} was created before {not_before.isoformat()}")

    current_labels = await client.list_labels_on_issue(issue_number)
    snapshot = IssueSnapshot(
        number=issue_number,
        body=event_issue.body,
        created_at=created_at,
        labels=frozenset(current_labels),
    )
    logger.info("Loaded issue", issue_number=issue_number, current_labels=sorted(snapshot.labels))

    try:
        rules = await fetch_label_rules(client, configuration_path, ref=ref)
    except ContentError as e:
        logger.error("The configuration path provided is not a valid file, exiting", path=e.path, reason=e.reason)
        return LabelIssueResult(RunOutcome.INVALID_CONFIGURATION_PATH, snapshot=snapshot, message=str(e))

    delta = decide_label_delta(rules, snapshot.body)
    logger.info(
        "Computed label delta",
        issue_number=issue_number,
        to_add=list(delta.to_add),
        to_remove=list(delta.to_remove),
    )

    start_time = time.time()
    sync_result = await sync_issue_labels(client, snapshot, delta)
    logger.info(
        "Applied label delta",
        issue_number=issue_number,
        added=sync_result.added,
        removed=sync_result.removed,
        not_attached=sync_result.not_attached,
        duration=round(time.time() - start_time, 2),
    )
    return LabelIssueResult(RunOutcome.APPLIED, snapshot=snapshot, delta=delta, sync_result=sync_result)


async def run_label_issue_workflow(config: LabelerConfig, client: IssueTrackerClientBase | None = None) -> LabelIssueResult:
    """Run the label-issue workflow for the event described by a resolved configuration."""
    payload = load_event_payload(config.event_path)
    event_issue = get_event_issue(payload)
    if event_issue is None:
        logger.info("Could not get issue number or issue body from context, exiting")
        return LabelIssueResult(RunOutcome.NO_ISSUE, message="Could not get issue number or issue body from context")

    if client is None:
        client = PyGithubAdapter.create(
            repo=config.repo,
            github_token=config.github_token,
            github_api_url=config.github_api_url,
        )
    return await label_issue(
        client,
        event_issue,
        configuration_path=config.configuration_path,
        not_before=config.not_before,
        ref=config.ref,
    )
