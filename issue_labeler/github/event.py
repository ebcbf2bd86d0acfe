"""Reads the triggering event payload GitHub Actions writes for a workflow run."""

from pathlib import Path

import structlog

from issue_labeler.schemas.event import EventIssueModel, IssueEventModel

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def load_event_payload(event_path: Path | None) -> IssueEventModel:
    """Load the event payload from disk; a missing path yields an empty payload.

    Raises:
        pydantic.ValidationError: If the file is not a valid JSON event payload.
    """
    if event_path is None:
        logger.warning("No event payload path provided")
        return IssueEventModel()
    if not event_path.is_file():
        logger.warning("Event payload file not found", event_path=str(event_path))
        return IssueEventModel()
    return IssueEventModel.model_validate_json(event_path.read_text(encoding="utf-8"))


def get_event_issue(payload: IssueEventModel) -> EventIssueModel | None:
    """Return the issue of the event if it exposes both a number and a body."""
    issue = payload.issue
    if issue is None:
        return None
    if not issue.number or not issue.body:
        return None
    return issue
