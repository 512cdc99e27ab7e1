"""Uniqueness rule for the items of a collection.

Usage::

    from unique_rule import UniqueInCollection, check

    violations = check(users, UniqueInCollection("email"))
"""

from unique_rule.dedup import UniqueInCollectionValidator, Violation, check
from unique_rule.constraint import DEFAULT_MESSAGE, UniqueInCollection
from unique_rule.context import CallbackSink, CollectingSink, ViolationSink
from unique_rule.errors import (
    ConfigurationError,
    KeyEncodingError,
    TypeMismatch,
    UniqueRuleError,
    UnresolvablePathError,
)
from unique_rule.property_access import PropertyAccessor, PropertyPath, get_value
from unique_rule.registry import RecordValidator

__all__ = [
    "DEFAULT_MESSAGE",
    "CallbackSink",
    "CollectingSink",
    "ConfigurationError",
    "KeyEncodingError",
    "PropertyAccessor",
    "PropertyPath",
    "RecordValidator",
    "TypeMismatch",
    "UniqueInCollection",
    "UniqueInCollectionValidator",
    "UniqueRuleError",
    "UnresolvablePathError",
    "Violation",
    "ViolationSink",
    "check",
    "get_value",
]
