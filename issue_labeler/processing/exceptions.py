"""Custom exceptions for the processing module."""


class ConfigError(Exception):
    """Raised when the label rule configuration is malformed."""

    def __init__(self, message: str, label: str | None = None) -> None:
        """Initializes the exception with the label whose rule is malformed, if any."""
        super().__init__(message)
        self.label = label


class ContentError(Exception):
    """Raised when the configuration path does not resolve to a retrievable file."""

    def __init__(self, path: str, reason: str) -> None:
        """Initializes the exception with the offending repository path."""
        super().__init__(f"The configuration path '{path}' is not a valid file: {reason}")
        self.path = path
        self.reason = reason
