"""Rules file models and loader.

A rules file declares uniqueness rules per record property, e.g.::

    rules:
      - property: singles
        fields: [group, name]
        target_path: singles
      - property: "[orders]"
        fields: "[customer][email]"
        message: "Customer email must be unique."
        groups: [checkout]

Loading a file yields a ready ``RecordValidator``.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from unique_rule.constraint import DEFAULT_GROUP, DEFAULT_MESSAGE, UniqueInCollection
from unique_rule.property_access import PropertyAccessor
from unique_rule.registry import RecordValidator
from unique_rule.utils.logger import log_error, log_info


class RuleEntry(BaseModel):
    """One uniqueness rule attached to a record property."""

    property: str = Field(..., description="Property path of the collection inside the record")
    fields: List[str] = Field(..., description="Field paths forming the composite key")
    message: str = Field(DEFAULT_MESSAGE, description="Message reported for each duplicate")
    target_path: Optional[str] = Field(None, description="Path appended to the item index in violations")
    groups: List[str] = Field(default_factory=lambda: [DEFAULT_GROUP], description="Validation groups")

    @field_validator("fields", mode="before")
    @classmethod
    def wrap_single_field(cls, v):
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("fields", mode="after")
    @classmethod
    def validate_fields(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("fields must contain at least one field path")
        if any(not path.strip() for path in v):
            raise ValueError("field paths cannot be blank")
        return v

    @field_validator("property", mode="after")
    @classmethod
    def validate_property(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("property cannot be blank")
        return v

    def to_constraint(self) -> UniqueInCollection:
        return UniqueInCollection.from_field_list(
            self.fields,
            message=self.message,
            target_path=self.target_path,
            groups=self.groups,
        )


class RulesFile(BaseModel):
    """Root container for a rules file."""

    rules: List[RuleEntry] = Field(default_factory=list, description="Rules to register")

    def build_validator(self, accessor: Optional[PropertyAccessor] = None) -> RecordValidator:
        validator = RecordValidator(accessor)
        for entry in self.rules:
            validator.register(entry.property, entry.to_constraint())
        return validator


def load_document(path: Union[str, Path]):
    """Read a YAML (or JSON) document."""
    with open(path, "r", encoding="utf-8") as fh:
        return yaml.safe_load(fh)


def load_rules_file(path: Union[str, Path]) -> RulesFile:
    """Load and validate a rules file."""
    try:
        raw = load_document(path) or {}
        cfg = RulesFile(**raw)
    except Exception as exc:
        log_error("Failed to load rules file", error=str(exc), path=str(path))
        raise
    log_info("Loaded rules file", path=str(path), rule_count=len(cfg.rules))
    return cfg
