"""Duplicate detection across the items of a collection.

``UniqueInCollectionValidator`` walks a collection once, builds a composite
key per item from the rule's field paths and reports every item whose key was
already seen. The first occurrence of a key is never reported; each later
occurrence is reported once, in collection order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Iterator, List, Optional, Set, Tuple

from unique_rule.constraint import UniqueInCollection
from unique_rule.context import CollectingSink, ViolationSink
from unique_rule.dedup.keys import compute_key
from unique_rule.dedup.result import Violation
from unique_rule.errors import ConfigurationError, TypeMismatch
from unique_rule.property_access import PropertyAccessor, PropertyPath
from unique_rule.utils.logger import log_debug, log_duplicate_detection, log_info

COLLECTION_CAPABILITY = "Iterable|Mapping"


def _iter_items(collection: Any) -> Iterator[Tuple[Any, Any]]:
    if isinstance(collection, Mapping):
        return iter(collection.items())
    if isinstance(collection, (str, bytes, bytearray)) or not isinstance(collection, Iterable):
        raise TypeMismatch(collection, COLLECTION_CAPABILITY)
    return enumerate(collection)


def _compile_fields(constraint: UniqueInCollection) -> Tuple[PropertyPath, ...]:
    fields = constraint.get_fields()
    if not fields:
        raise ConfigurationError("Fields cannot be null or empty")
    return tuple(PropertyPath.parse(field) for field in fields)


class UniqueInCollectionValidator:
    """Check a collection against a ``UniqueInCollection`` rule.

    Args:
        accessor: Resolver used to read field values from items. Defaults to
            a ``PropertyAccessor`` following the ``MISSING_PATH_POLICY``
            setting.

    Usage::

        validator = UniqueInCollectionValidator()
        violations = validator.check(users, UniqueInCollection("email"))
        for v in violations:
            print(v.location(), v.message)
    """

    def __init__(self, accessor: Optional[PropertyAccessor] = None):
        self.accessor = accessor if accessor is not None else PropertyAccessor()

    def validate(self, collection: Any, constraint: UniqueInCollection, sink: ViolationSink) -> None:
        """Push one violation per duplicate item into ``sink``.

        Raises:
            TypeMismatch: ``constraint`` is not a ``UniqueInCollection`` or
                ``collection`` is not an iterable of items.
            ConfigurationError: The rule has no fields, or a field path is
                malformed.
            KeyEncodingError: A field value is nested too deeply to build a
                composite key.
        """
        if not isinstance(constraint, UniqueInCollection):
            raise TypeMismatch(constraint, UniqueInCollection.__name__)

        if collection is None:
            return

        items = _iter_items(collection)
        paths = _compile_fields(constraint)
        target_path = constraint.get_target_path()
        message = constraint.get_message()

        log_debug("Starting uniqueness check", fields=[p.path for p in paths])

        seen: Set[str] = set()
        count = 0
        duplicates = 0
        for index, item in items:
            count += 1
            key = compute_key(self.accessor.get_value(item, path) for path in paths)

            if key in seen:
                duplicates += 1
                violation_path = f"[{index}].{target_path}" if target_path is not None else None
                log_duplicate_detection(index, message, path=violation_path)
                sink.report(Violation(index=index, message=message, path=violation_path))

            seen.add(key)

        if duplicates:
            log_info(
                "Duplicates found in collection",
                fields=[p.path for p in paths],
                items=count,
                duplicates=duplicates,
            )

    def check(self, collection: Any, constraint: UniqueInCollection) -> List[Violation]:
        """Return the violations for ``collection`` as a list."""
        sink = CollectingSink()
        self.validate(collection, constraint, sink)
        return sink.violations


def check(collection: Any, constraint: UniqueInCollection) -> List[Violation]:
    """Check ``collection`` with a default ``UniqueInCollectionValidator``."""
    return UniqueInCollectionValidator().check(collection, constraint)
