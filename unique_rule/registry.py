"""Explicit registration of uniqueness rules on record properties.

A ``RecordValidator`` holds ``(property_path, UniqueInCollection)`` pairs.
Validating a record resolves each property, checks the collection found
there, and reports violations with paths relative to the record, e.g. a rule
on ``singles`` with ``target_path="singles"`` reports ``singles[1].singles``.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, List, Optional, Tuple, Union

from unique_rule.constraint import DEFAULT_GROUP, UniqueInCollection
from unique_rule.dedup.detector import UniqueInCollectionValidator
from unique_rule.dedup.result import Violation
from unique_rule.errors import TypeMismatch
from unique_rule.property_access import PropertyAccessor, PropertyPath
from unique_rule.utils.logger import log_debug


def join_path(base: str, path: Optional[str]) -> str:
    """Append ``path`` to ``base`` using property-path syntax."""
    if not path:
        return base
    if not base:
        return path
    if path.startswith("["):
        return f"{base}{path}"
    return f"{base}.{path}"


class RecordValidator:
    """Validate records against rules registered per property.

    Args:
        accessor: Resolver shared by property lookup and field lookup.
    """

    def __init__(self, accessor: Optional[PropertyAccessor] = None):
        self.accessor = accessor if accessor is not None else PropertyAccessor()
        self.validator = UniqueInCollectionValidator(self.accessor)
        self._rules: List[Tuple[PropertyPath, UniqueInCollection]] = []

    def register(self, property_path: str, constraint: UniqueInCollection) -> RecordValidator:
        """Attach ``constraint`` to the collection at ``property_path``."""
        if not isinstance(constraint, UniqueInCollection):
            raise TypeMismatch(constraint, UniqueInCollection.__name__)
        self._rules.append((PropertyPath.parse(property_path), constraint))
        return self

    @property
    def rules(self) -> List[Tuple[str, UniqueInCollection]]:
        return [(path.path, constraint) for path, constraint in self._rules]

    def validate(self, record: Any, groups: Union[str, Iterable[str], None] = None) -> List[Violation]:
        """Run every rule active in ``groups`` (default ``"Default"``) against ``record``."""
        if groups is None:
            active = {DEFAULT_GROUP}
        elif isinstance(groups, str):
            active = {groups}
        else:
            active = set(groups)

        violations: List[Violation] = []
        for path, constraint in self._rules:
            if not active.intersection(constraint.get_groups()):
                continue
            collection = self.accessor.get_value(record, path)
            log_debug("Validating property", property=path.path, groups=sorted(active))
            for violation in self.validator.check(collection, constraint):
                violations.append(replace(violation, path=join_path(path.path, violation.path)))
        return violations
