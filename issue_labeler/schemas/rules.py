"""Pydantic schema for the validated label rule configuration."""

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LabelRuleSet(BaseModel):
    """Mapping of label name to the regular expressions that must all match for the label to apply.

    Rules keep the order of the configuration document. Every rule holds at
    least one pattern, and the mapping is read-only once validated.
    """

    model_config = ConfigDict(frozen=True)

    rules: Mapping[str, tuple[str, ...]] = Field(default_factory=dict, validate_default=True)

    @field_validator("rules")
    @classmethod
    def _freeze_non_empty_rules(cls, value: Mapping[str, tuple[str, ...]]) -> Mapping[str, tuple[str, ...]]:
        empty = [label for label, patterns in value.items() if not patterns]
        if empty:
            raise ValueError(f"labels without any pattern: {', '.join(empty)}")
        return MappingProxyType(dict(value))

    def items(self) -> list[tuple[str, tuple[str, ...]]]:
        """Return (label, patterns) pairs in document order."""
        return list(self.rules.items())

    @property
    def labels(self) -> list[str]:
        """Label names in document order."""
        return list(self.rules)
