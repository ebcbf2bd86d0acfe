"""Base ABC for issue tracker clients."""

from abc import ABC, abstractmethod
from typing import Any


class IssueTrackerClientBase(ABC):
    """The remote operations a labeling run consumes.

    Components receive an instance explicitly, so tests can substitute a fake
    without network access.
    """

    # Issues
    @abstractmethod
    async def get_issue(self, issue_number: int) -> Any:
        """Get an issue by number."""
        pass

    # Repository contents
    @abstractmethod
    async def get_file_content(self, path: str, ref: str | None = None) -> str:
        """Get the decoded text of a file in the repository.

        Raises ContentError if the path does not resolve to a retrievable file.
        """
        pass

    # Issue labels
    @abstractmethod
    async def list_labels_on_issue(self, issue_number: int) -> list[str]:
        """List the names of the labels attached to an issue."""
        pass

    @abstractmethod
    async def add_labels_to_issue(self, issue_number: int, labels: list[str]) -> None:
        """Add labels to an issue in a single call."""
        pass

    @abstractmethod
    async def remove_label_from_issue(self, issue_number: int, name: str) -> bool:
        """Remove a label from an issue.

        Returns False, without raising, if the label was not attached.
        """
        pass
