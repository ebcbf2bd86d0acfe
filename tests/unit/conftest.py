"""Fixtures for unit tests."""

from datetime import datetime
from types import SimpleNamespace
from typing import Any, Generator

import pytest
import structlog

from issue_labeler.github.abc import IssueTrackerClientBase
from issue_labeler.processing.exceptions import ContentError


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


class FakeIssueTrackerClient(IssueTrackerClientBase):
    """In-memory issue tracker recording every call made against it."""

    def __init__(
        self,
        files: dict[str, str] | None = None,
        labels: list[str] | None = None,
        created_at: datetime | None = None,
    ) -> None:
        self.files = files or {}
        self.labels = list(labels or [])
        self.created_at = created_at
        self.calls: list[tuple[Any, ...]] = []

    @property
    def mutation_calls(self) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] in ("add_labels_to_issue", "remove_label_from_issue")]

    async def get_issue(self, issue_number: int) -> Any:
        self.calls.append(("get_issue", issue_number))
        return SimpleNamespace(number=issue_number, created_at=self.created_at)

    async def get_file_content(self, path: str, ref: str | None = None) -> str:
        self.calls.append(("get_file_content", path, ref))
        if path not in self.files:
            raise ContentError(path, "not found")
        return self.files[path]

    async def list_labels_on_issue(self, issue_number: int) -> list[str]:
        self.calls.append(("list_labels_on_issue", issue_number))
        return list(self.labels)

    async def add_labels_to_issue(self, issue_number: int, labels: list[str]) -> None:
        self.calls.append(("add_labels_to_issue", issue_number, list(labels)))
        for label in labels:
            if label not in self.labels:
                self.labels.append(label)

    async def remove_label_from_issue(self, issue_number: int, name: str) -> bool:
        self.calls.append(("remove_label_from_issue", issue_number, name))
        if name not in self.labels:
            return False
        self.labels.remove(name)
        return True


@pytest.fixture
def fake_client_factory() -> type[FakeIssueTrackerClient]:
    """Return the fake issue tracker client class so tests can build one with their own state."""
    return FakeIssueTrackerClient
