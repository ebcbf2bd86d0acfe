"""Pydantic schema for the parts of a GitHub webhook event payload that the labeler reads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class EventIssueModel(BaseModel):
    """The `issue` object of an `issues` event payload."""

    model_config = ConfigDict(extra="ignore")

    number: int | None = None
    body: str | None = None
    created_at: datetime | None = None


class IssueEventModel(BaseModel):
    """A triggering event payload; only the issue is of interest."""

    model_config = ConfigDict(extra="ignore")

    issue: EventIssueModel | None = None
