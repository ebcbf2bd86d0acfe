"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_GITHUB_API_URL,
    EXIT_CODE_FAILURE,
    EXIT_CODE_NEUTRAL,
    EXIT_CODE_SUCCESS,
)
from .retry import retry_on_rate_limit

__all__ = [
    "DEFAULT_GITHUB_API_URL",
    "EXIT_CODE_FAILURE",
    "EXIT_CODE_NEUTRAL",
    "EXIT_CODE_SUCCESS",
    "retry_on_rate_limit",
]
