"""Contains results of a labeling run."""

from issue_labeler.synchronize.models import IssueSnapshot, LabelDelta, RunOutcome


class LabelSyncResult:
    """Contains the labels the remote confirmed as changed when applying a delta."""

    def __init__(self, added: list[str] | None = None, removed: list[str] | None = None, not_attached: list[str] | None = None) -> None:
        """Initialize the result with added, removed and already-absent label names."""
        self.added = added or []
        self.removed = removed or []
        self.not_attached = not_attached or []


class LabelIssueResult:
    """Contains results of the label-issue workflow."""

    def __init__(
        self,
        outcome: RunOutcome,
        snapshot: IssueSnapshot | None = None,
        delta: LabelDelta | None = None,
        sync_result: LabelSyncResult | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize the result with the outcome and whatever the run got as far as computing."""
        self.outcome = outcome
        self.snapshot = snapshot
        self.delta = delta
        self.sync_result = sync_result
        self.message = message

    @property
    def skipped(self) -> bool:
        """Whether the run was intentionally skipped rather than applied or a no-op."""
        return self.outcome in (RunOutcome.CUTOFF_SKIPPED, RunOutcome.INVALID_CONFIGURATION_PATH)
