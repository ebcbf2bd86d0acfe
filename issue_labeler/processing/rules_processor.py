"""Loads the label rule configuration and validates it into a LabelRuleSet.

The configuration is a YAML mapping of label name to either a single regular
expression or a list of regular expressions. Parsing is a single validation
step: it either returns a LabelRuleSet or raises a ConfigError naming the label
whose rule is malformed, so no untyped value leaves this module.
"""

import re
from pathlib import Path
from typing import Any

import structlog
from ruamel.yaml.error import YAMLError
from structlog.stdlib import BoundLogger

from issue_labeler.github.abc import IssueTrackerClientBase
from issue_labeler.processing.exceptions import ConfigError
from issue_labeler.schemas.rules import LabelRuleSet
from issue_labeler.utils.yaml import load_yaml_file, load_yaml_text

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore


def normalize_patterns(label: str, value: Any) -> tuple[str, ...]:
    """Normalize one rule value into a non-empty tuple of valid patterns.

    Raises:
        ConfigError: If the value is neither a string nor a list of strings, if
            the list is empty, or if a pattern is not a valid regular expression.
    """
    if isinstance(value, str):
        patterns: tuple[str, ...] = (value,)
    elif isinstance(value, list):
        if not value:
            raise ConfigError(f"found an empty list of regex for label {label} (should be string or array of regex)", label=label)
        for pattern in value:
            if not isinstance(pattern, str):
                raise ConfigError(
                    f"found unexpected type {type(pattern).__name__} in the regex list for label {label} (should be string or array of regex)",
                    label=label,
                )
        patterns = tuple(value)
    else:
        raise ConfigError(
            f"found unexpected type {type(value).__name__} for label {label} (should be string or array of regex)",
            label=label,
        )

    for pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as e:
            raise ConfigError(f"invalid regex {pattern!r} for label {label}: {e}", label=label) from e
    return patterns


def parse_label_rules(document: Any, source: str = "<config>") -> LabelRuleSet:
    """Validate a loaded YAML document into a LabelRuleSet.

    Args:
        document: The loaded YAML document; expected to be a mapping or empty.
        source: Where the document came from, used in log events.

    Raises:
        ConfigError: If the document or any of its rule values is malformed.
    """
    if document is None:
        logger.warning("Label configuration is empty, no labels will be managed", source=source)
        return LabelRuleSet()
    if not isinstance(document, dict):
        raise ConfigError(f"label configuration in {source} must be a mapping of label name to regex, got {type(document).__name__}")

    rules: dict[str, tuple[str, ...]] = {}
    for key, value in document.items():
        label = str(key)
        rules[label] = normalize_patterns(label, value)
        logger.debug("Loaded label rule", source=source, label=label, patterns=list(rules[label]))
    logger.info("Loaded label configuration", source=source, label_count=len(rules))
    return LabelRuleSet(rules=rules)


def parse_label_rules_text(text: str, source: str = "<config>") -> LabelRuleSet:
    """Parse YAML text into a LabelRuleSet."""
    try:
        document = load_yaml_text(text)
    except YAMLError as e:
        raise ConfigError(f"failed to parse label configuration {source}: {e}") from e
    return parse_label_rules(document, source=source)


def load_label_rules_from_file(path: Path) -> LabelRuleSet:
    """Load a LabelRuleSet from a local YAML file."""
    try:
        document = load_yaml_file(path)
    except YAMLError as e:
        raise ConfigError(f"failed to parse label configuration {path}: {e}") from e
    return parse_label_rules(document, source=str(path))


async def fetch_label_rules(client: IssueTrackerClientBase, path: str, ref: str | None = None) -> LabelRuleSet:
    """Fetch the configuration file from the repository and parse it.

    Raises:
        ContentError: If the path does not resolve to a retrievable file.
        ConfigError: If the file content is not a valid label configuration.
    """
    logger.info("Fetching label configuration", path=path, ref=ref)
    text = await client.get_file_content(path, ref=ref)
    return parse_label_rules_text(text, source=path)
