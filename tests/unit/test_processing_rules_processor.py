"""Unit tests for loading and validating the label rule configuration."""

from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from issue_labeler.processing.exceptions import ConfigError, ContentError
from issue_labeler.processing.rules_processor import (
    fetch_label_rules,
    load_label_rules_from_file,
    normalize_patterns,
    parse_label_rules,
    parse_label_rules_text,
)
from issue_labeler.schemas.rules import LabelRuleSet
from issue_labeler.synchronize.labels import decide_label_delta

EXAMPLE_CONFIG = """\
bug: "crash"
needs-info:
  - "question"
  - "\\\\?"
"""


def test_parse_label_rules_text_example() -> None:
    """Test parsing the example configuration with a scalar and a list value."""
    rules = parse_label_rules_text(EXAMPLE_CONFIG)
    assert rules.rules == {"bug": ("crash",), "needs-info": ("question", "\\?")}
    assert rules.labels == ["bug", "needs-info"]


def test_scalar_value_is_normalized_to_single_element_list() -> None:
    """Test that a scalar string value yields the same rule as a one-element list."""
    scalar = parse_label_rules({"bug": "crash"})
    sequence = parse_label_rules({"bug": ["crash"]})
    assert scalar == sequence
    for body in ["it crashed", "all good", ""]:
        assert decide_label_delta(scalar, body) == decide_label_delta(sequence, body)


@pytest.mark.parametrize(
    "value, type_name",
    [
        pytest.param(42, "int", id="integer"),
        pytest.param(True, "bool", id="boolean"),
        pytest.param(None, "NoneType", id="null"),
        pytest.param({"pattern": "crash"}, "dict", id="mapping"),
        pytest.param(1.5, "float", id="float"),
    ],
)
def test_unexpected_value_type_raises_config_error_naming_label(value: Any, type_name: str) -> None:
    """Test that a value that is neither a string nor a list fails with the label name."""
    with pytest.raises(ConfigError) as exc_info:
        parse_label_rules({"ok": "fine", "broken-label": value})
    assert exc_info.value.label == "broken-label"
    assert "broken-label" in str(exc_info.value)
    assert type_name in str(exc_info.value)


def test_non_string_list_element_raises_config_error() -> None:
    """Test that a list holding a non-string pattern fails with the label name."""
    with pytest.raises(ConfigError) as exc_info:
        parse_label_rules({"bug": ["crash", 3]})
    assert exc_info.value.label == "bug"


def test_empty_list_raises_config_error() -> None:
    """Test that a label with no patterns at all is rejected."""
    with pytest.raises(ConfigError) as exc_info:
        parse_label_rules({"bug": []})
    assert exc_info.value.label == "bug"
    assert "empty" in str(exc_info.value)


def test_invalid_regex_raises_config_error() -> None:
    """Test that a pattern that does not compile is rejected up front."""
    with pytest.raises(ConfigError) as exc_info:
        normalize_patterns("bug", ["crash", "(unclosed"])
    assert exc_info.value.label == "bug"
    assert "(unclosed" in str(exc_info.value)


def test_empty_document_yields_empty_rule_set() -> None:
    """Test that an empty configuration file manages no labels."""
    assert parse_label_rules_text("").rules == {}


@pytest.mark.parametrize(
    "text",
    [
        pytest.param("- bug\n- crash\n", id="top-level list"),
        pytest.param("just a string\n", id="top-level scalar"),
    ],
)
def test_non_mapping_document_raises_config_error(text: str) -> None:
    """Test that a document whose top level is not a mapping is rejected."""
    with pytest.raises(ConfigError) as exc_info:
        parse_label_rules_text(text)
    assert exc_info.value.label is None


def test_malformed_yaml_raises_config_error() -> None:
    """Test that YAML that does not parse is reported as a configuration error."""
    with pytest.raises(ConfigError, match="failed to parse"):
        parse_label_rules_text("bug: [crash\n")


def test_duplicate_label_raises_config_error() -> None:
    """Test that a label name defined twice is rejected."""
    with pytest.raises(ConfigError):
        parse_label_rules_text("bug: crash\nbug: error\n")


def test_non_string_keys_are_used_as_label_names() -> None:
    """Test that numeric label names are kept as strings."""
    rules = parse_label_rules_text("123: crash\n")
    assert rules.labels == ["123"]


def test_rule_set_is_frozen() -> None:
    """Test that a loaded rule set cannot be reassigned."""
    rules = parse_label_rules({"bug": "crash"})
    with pytest.raises(Exception):  # noqa: B017
        rules.rules = {}  # type: ignore[misc]


def test_rule_set_mapping_is_read_only() -> None:
    """Test that the rules inside a loaded rule set cannot be changed in place."""
    rules = parse_label_rules({"bug": "crash"})
    with pytest.raises(TypeError):
        rules.rules["question"] = ("\\?",)  # type: ignore[index]
    assert rules.labels == ["bug"]


def test_rule_set_rejects_label_without_patterns() -> None:
    """Test that a rule set cannot be built with a label that has no pattern."""
    with pytest.raises(ValidationError, match="bug"):
        LabelRuleSet(rules={"bug": ()})


def test_load_label_rules_from_file(tmp_path: Path) -> None:
    """Test loading the configuration from a local file."""
    config_file = tmp_path / "labeler.yml"
    config_file.write_text(EXAMPLE_CONFIG, encoding="utf-8")
    rules = load_label_rules_from_file(config_file)
    assert rules.labels == ["bug", "needs-info"]


@pytest.mark.asyncio
async def test_fetch_label_rules_reads_path_at_ref(fake_client_factory: Any) -> None:
    """Test that the configuration is fetched from the repository at the given ref."""
    client = fake_client_factory(files={".github/labeler.yml": EXAMPLE_CONFIG})
    rules = await fetch_label_rules(client, ".github/labeler.yml", ref="abc123")
    assert rules.labels == ["bug", "needs-info"]
    assert client.calls == [("get_file_content", ".github/labeler.yml", "abc123")]


@pytest.mark.asyncio
async def test_fetch_label_rules_missing_path_raises_content_error(fake_client_factory: Any) -> None:
    """Test that an unresolvable path surfaces as a ContentError."""
    client = fake_client_factory()
    with pytest.raises(ContentError) as exc_info:
        await fetch_label_rules(client, "missing.yml")
    assert exc_info.value.path == "missing.yml"
