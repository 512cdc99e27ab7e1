"""Exceptions raised by the uniqueness rule.

Two families are kept apart on purpose: setup failures (this module) abort a
check before any item is inspected, while duplicates are reported as
``Violation`` records and never raised.
"""

from __future__ import annotations

from typing import Any


class UniqueRuleError(Exception):
    """Base class for rule setup failures."""


class ConfigurationError(UniqueRuleError):
    """The rule descriptor cannot be used as configured."""


class TypeMismatch(UniqueRuleError, TypeError):
    """An argument does not provide the expected capability."""

    def __init__(self, value: Any, expected: str):
        self.value = value
        self.expected = expected
        super().__init__(
            f'Expected argument of type "{expected}", "{type(value).__name__}" given'
        )


class UnresolvablePathError(UniqueRuleError, LookupError):
    """A field path does not resolve on an item (strict policy only)."""

    def __init__(self, path: str, segment: str, reason: str):
        self.path = path
        self.segment = segment
        super().__init__(f'Cannot resolve "{segment}" of path "{path}": {reason}')


class KeyEncodingError(UniqueRuleError, ValueError):
    """A field value cannot be turned into a composite key."""

    def __init__(self, value: Any, reason: str):
        self.value = value
        super().__init__(f'Field value of type "{type(value).__name__}" is {reason}')
