"""Contains the label decision and reconciliation logic for an issue."""

import re
from collections.abc import Sequence

import structlog

from issue_labeler.github.abc import IssueTrackerClientBase
from issue_labeler.schemas.rules import LabelRuleSet
from issue_labeler.synchronize.models import IssueSnapshot, LabelDelta
from issue_labeler.synchronize.results import LabelSyncResult

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def matches(body: str, patterns: Sequence[str]) -> bool:
    """Return True if every pattern matches somewhere in the body.

    Patterns are searched for, not full-matched. The first pattern that does
    not match short-circuits to False.
    """
    for pattern in patterns:
        if re.search(pattern, body) is None:
            return False
    return True


def decide_label_delta(rules: LabelRuleSet, body: str) -> LabelDelta:
    """Compute which labels an issue body calls for and which it does not.

    Every label of the rule set lands in exactly one of the two collections,
    whatever the issue currently carries.
    """
    to_add: list[str] = []
    to_remove: list[str] = []
    for label, patterns in rules.items():
        if matches(body, patterns):
            logger.debug("Label rule matched", label=label)
            to_add.append(label)
        else:
            logger.debug("Label rule did not match", label=label)
            to_remove.append(label)
    return LabelDelta(to_add=tuple(to_add), to_remove=tuple(to_remove))


async def sync_issue_labels(client: IssueTrackerClientBase, snapshot: IssueSnapshot, delta: LabelDelta) -> LabelSyncResult:
    """Apply a label delta to an issue.

    All labels to add go in a single call, skipped when there are none. Each
    label to remove gets its own call; removing a label that is not attached is
    a no-op. A failing call propagates, and labels already added stay added.
    """
    result = LabelSyncResult()

    if delta.to_add:
        already_attached = [label for label in delta.to_add if label in snapshot.labels]
        logger.info(
            "Adding labels to issue",
            issue_number=snapshot.number,
            labels=list(delta.to_add),
            already_attached=already_attached,
        )
        await client.add_labels_to_issue(snapshot.number, list(delta.to_add))
        result.added = [label for label in delta.to_add if label not in snapshot.labels]

    for label in delta.to_remove:
        logger.info("Removing label from issue", issue_number=snapshot.number, label=label)
        if await client.remove_label_from_issue(snapshot.number, label):
            result.removed.append(label)
        else:
            result.not_attached.append(label)

    return result
