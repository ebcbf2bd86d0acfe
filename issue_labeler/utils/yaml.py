"""Contains utility functions for working with YAML documents."""

from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

yaml = YAML(typ="safe")


def load_yaml_text(text: str) -> Any:
    """Parses YAML text and returns the loaded document (None for an empty document)."""
    return yaml.load(text)


def load_yaml_file(path: Path) -> Any:
    """Loads a YAML file and returns the loaded document."""
    with open(path, encoding="utf-8") as f:
        return yaml.load(f)
