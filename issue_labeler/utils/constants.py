"""Shared constants used across the application."""

# Exit Codes
# ----------

EXIT_CODE_SUCCESS = 0
"""The run completed, or there was nothing to do."""

EXIT_CODE_FAILURE = 1
"""The run failed."""

EXIT_CODE_NEUTRAL = 78
"""The run was intentionally skipped (GitHub Actions' historical "neutral" status)."""

# GitHub Defaults
# ---------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default GitHub REST API URL."""

DEFAULT_LABELS_PER_PAGE = 100
"""Page size used for paginated listings such as the labels attached to an issue."""
