"""Sets up the authenticated PyGithub client."""

from github import Auth, Github

from issue_labeler.utils.constants import DEFAULT_GITHUB_API_URL, DEFAULT_LABELS_PER_PAGE


def get_github_token_client(github_token: str, github_api_url: str = DEFAULT_GITHUB_API_URL) -> Github:
    """Returns an authenticated GitHub client using a token (PAT or the workflow's GITHUB_TOKEN).

    Supports a custom base URL for GitHub Enterprise Server (GHES).
    """
    if not github_token:
        raise RuntimeError("GitHub token authentication requires a token.")
    # Lazy objects defer requests to the adapter methods, which retry rate limits.
    return Github(auth=Auth.Token(github_token), base_url=github_api_url, per_page=DEFAULT_LABELS_PER_PAGE, retry=None, lazy=True)
