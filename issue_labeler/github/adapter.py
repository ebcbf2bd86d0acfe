"""GitHub client adapter for the PyGithub library.

PyGithub is blocking, so every call runs in a worker thread and the adapter
exposes the same coroutine interface as the rest of the workflow. Calls are
still made one at a time.
"""

import asyncio
from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from github.ContentFile import ContentFile
from github.GithubException import GithubException, UnknownObjectException
from github.Issue import Issue
from github.Repository import Repository

from issue_labeler.processing.exceptions import ContentError
from issue_labeler.utils.constants import DEFAULT_GITHUB_API_URL
from issue_labeler.utils.github import split_repository
from issue_labeler.utils.retry import retry_on_rate_limit

from .abc import IssueTrackerClientBase
from .client import get_github_token_client

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_github_422(func: F) -> F:
    """Decorator to handle GitHub 422 Unprocessable Entity errors, logging and raising with details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except GithubException as exc:
            if exc.status == 422:
                error_data = exc.data if isinstance(exc.data, dict) else {}
                message = error_data.get("message", "Unprocessable Entity")
                errors = error_data.get("errors", [])
                logger.error(
                    "GitHub 422 Unprocessable Entity",
                    function=func.__name__,
                    message=message,
                    errors=errors,
                    status_code=422,
                )
                raise ValueError(f"GitHub 422 error in {func.__name__}: {message} | errors: {errors}") from exc
            raise

    return wrapper  # type: ignore


class PyGithubAdapter(IssueTrackerClientBase):
    """GitHub client adapter for the PyGithub library."""

    def __init__(self, repository: Repository) -> None:
        """Initialize the adapter with an already-resolved repository."""
        self.repository = repository
        self._issues: dict[int, Issue] = {}

    @classmethod
    def create(cls, repo: str, github_token: str, github_api_url: str = DEFAULT_GITHUB_API_URL) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_token: Token used to authenticate against the GitHub API
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured PyGithubAdapter instance

        Raises:
            ValueError: If the repository is not in 'owner/repo' format
        """
        owner, repo_name = split_repository(repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = get_github_token_client(github_token, github_api_url)
        return cls(client.get_repo(f"{owner}/{repo_name}"))

    async def _issue(self, issue_number: int) -> Issue:
        """Resolve an issue once and reuse it for the label endpoints.

        The client is lazy, so this only builds the issue URL; the label
        endpoints never need the issue's own attributes.
        """
        if issue_number not in self._issues:
            self._issues[issue_number] = await asyncio.to_thread(self.repository.get_issue, issue_number)
        return self._issues[issue_number]

    # Issues
    @retry_on_rate_limit()
    async def get_issue(self, issue_number: int) -> Issue:
        """Get an issue from the repository with its attributes loaded."""
        issue = await self._issue(issue_number)
        # A failed load leaves the issue incomplete, so a retry requests it again.
        return await asyncio.to_thread(issue.complete)

    # Repository contents
    @retry_on_rate_limit()
    async def get_file_content(self, path: str, ref: str | None = None) -> str:
        """Get the decoded text of a file in the repository, optionally at a specific ref."""
        try:
            if ref is None:
                content = await asyncio.to_thread(self.repository.get_contents, path)
            else:
                content = await asyncio.to_thread(self.repository.get_contents, path, ref=ref)
        except UnknownObjectException as exc:
            logger.warning("Repository path not found", path=path, ref=ref)
            raise ContentError(path, "not found") from exc

        # Directories come back as a list; symlinks and submodules carry no content.
        if not isinstance(content, ContentFile) or content.type != "file" or not content.content:
            logger.warning("Repository path is not a file with content", path=path, ref=ref)
            raise ContentError(path, "not a file with content")
        if content.encoding != "base64":
            raise ContentError(path, f"unsupported content encoding {content.encoding!r}")
        try:
            return content.decoded_content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ContentError(path, f"content is not UTF-8 text: {exc}") from exc

    # Issue labels
    @retry_on_rate_limit()
    async def list_labels_on_issue(self, issue_number: int) -> list[str]:
        """List the names of all labels on an issue; PyGithub handles pagination."""
        issue = await self._issue(issue_number)

        def _names() -> list[str]:
            return [label.name for label in issue.get_labels()]

        return await asyncio.to_thread(_names)

    @handle_github_422
    @retry_on_rate_limit()
    async def add_labels_to_issue(self, issue_number: int, labels: list[str]) -> None:
        """Add labels to an issue (or pull request - GitHub considers them the same for label purposes)."""
        issue = await self._issue(issue_number)
        await asyncio.to_thread(issue.add_to_labels, *labels)

    @retry_on_rate_limit()
    async def remove_label_from_issue(self, issue_number: int, name: str) -> bool:
        """Remove a label from an issue; a label that is not attached is a no-op."""
        issue = await self._issue(issue_number)
        try:
            await asyncio.to_thread(issue.remove_from_labels, name)
        except UnknownObjectException:
            logger.debug("Label not attached to issue, nothing to remove", issue_number=issue_number, label=name)
            return False
        return True
