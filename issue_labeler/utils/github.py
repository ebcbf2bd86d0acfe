"""Contains utility functions for GitHub interactions."""


def split_repository(repo: str | None) -> tuple[str, str]:
    """Splits an 'owner/repo' string into owner and repository."""
    if repo is None:
        raise ValueError("A repository in the format 'owner/repo' is required.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository
