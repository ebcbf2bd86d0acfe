"""Internal data models for a labeling run."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class RunOutcome(Enum):
    """How a labeling run ended."""

    APPLIED = "applied"
    NO_ISSUE = "no-issue"
    CUTOFF_SKIPPED = "cutoff-skipped"
    INVALID_CONFIGURATION_PATH = "invalid-configuration-path"


@dataclass(frozen=True)
class IssueSnapshot:
    """The state of an issue as read once at the start of a run."""

    number: int
    body: str
    created_at: datetime | None = None
    labels: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class LabelDelta:
    """Labels to add and labels to remove, in configuration order.

    The two collections are disjoint and together cover every label of the
    rule set they were computed from.
    """

    to_add: tuple[str, ...] = ()
    to_remove: tuple[str, ...] = ()
