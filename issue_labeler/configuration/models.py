"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass
class LabelerConfig:
    """Resolved configuration for a single labeling run."""

    debug: bool
    github_api_url: str
    github_token: str
    repo: str
    configuration_path: str
    not_before: datetime | None
    ref: str | None
    event_path: Path | None
