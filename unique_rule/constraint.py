"""Immutable rule descriptor for the unique-in-collection check.

``UniqueInCollection`` only carries configuration: which field paths make up
the composite key, the message reported for each duplicate, an optional path
appended to the item index, and the validation groups the rule belongs to.
All normalization happens at construction; the accessors are pure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Tuple, Type, Union

from unique_rule.errors import ConfigurationError

if TYPE_CHECKING:
    from unique_rule.dedup.detector import UniqueInCollectionValidator

DEFAULT_MESSAGE = "Must be unique within collection."
DEFAULT_GROUP = "Default"

_OPTION_KEYS = {"fields", "message", "target_path", "targetPath", "groups"}

FieldsOption = Union[str, Iterable[str], None]


def _normalize_fields(fields: FieldsOption) -> Optional[Tuple[str, ...]]:
    if fields is None:
        return None
    if isinstance(fields, str):
        return (fields,)
    if isinstance(fields, Mapping) or not isinstance(fields, Iterable):
        raise ConfigurationError(
            f"fields must be a field path or a list of field paths, got {type(fields).__name__}"
        )
    normalized = tuple(fields)
    for path in normalized:
        if not isinstance(path, str):
            raise ConfigurationError(f"Field paths must be strings, got {path!r}")
    return normalized


def _normalize_groups(groups: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    if groups is None:
        return (DEFAULT_GROUP,)
    if isinstance(groups, str):
        return (groups,)
    normalized = tuple(str(g) for g in groups)
    return normalized or (DEFAULT_GROUP,)


@dataclass(frozen=True)
class UniqueInCollection:
    """Require the composite value of ``fields`` to be unique across a collection.

    Attributes:
        fields: Field paths forming the composite key. ``None`` means no
            fields were configured, which is a configuration error once a
            check runs.
        message: Message reported for every duplicate item.
        target_path: When set, violations are reported at
            ``[<index>].<target_path>`` instead of the item itself.
        groups: Validation groups the rule is active in.

    Examples::

        UniqueInCollection("email")
        UniqueInCollection.from_field_list(["[category]", "[code]"])
        UniqueInCollection.from_options({"fields": ["group"]}, target_path="singles")
    """

    fields: Optional[Tuple[str, ...]] = None
    message: str = DEFAULT_MESSAGE
    target_path: Optional[str] = None
    groups: Tuple[str, ...] = (DEFAULT_GROUP,)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", _normalize_fields(self.fields))
        object.__setattr__(self, "groups", _normalize_groups(self.groups))
        if not isinstance(self.message, str):
            raise ConfigurationError("message must be a string")
        if self.target_path is not None and not isinstance(self.target_path, str):
            raise ConfigurationError("target_path must be a string")

    # ------------------------------------------------------------------
    # Factory helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_field_list(
        cls,
        fields: FieldsOption,
        message: Optional[str] = None,
        target_path: Optional[str] = None,
        groups: Union[str, Iterable[str], None] = None,
    ) -> UniqueInCollection:
        """Build a rule from a field path or list of field paths."""
        return cls(
            fields=fields,
            message=message if message is not None else DEFAULT_MESSAGE,
            target_path=target_path,
            groups=groups,
        )

    @classmethod
    def from_options(
        cls,
        options: Union[str, Mapping[str, Any], None] = None,
        groups: Union[str, Iterable[str], None] = None,
        target_path: Optional[str] = None,
    ) -> UniqueInCollection:
        """Build a rule from a loosely-typed options value.

        ``options`` may be a single field path, a mapping with a ``fields``
        entry (plus optional ``message``, ``target_path``/``targetPath`` and
        ``groups``), or ``None``. Explicit ``groups``/``target_path``
        arguments win over the values in the mapping.
        """
        if options is None:
            return cls(groups=groups, target_path=target_path)
        if isinstance(options, str):
            return cls(fields=options, groups=groups, target_path=target_path)
        if not isinstance(options, Mapping):
            raise ConfigurationError(
                f"options must be a field path, a mapping or None, got {type(options).__name__}"
            )

        unknown = sorted(str(k) for k in options if k not in _OPTION_KEYS)
        if unknown:
            raise ConfigurationError(f"Unknown options for UniqueInCollection: {unknown}")

        mapped_target = options.get("target_path", options.get("targetPath"))
        return cls(
            fields=options.get("fields"),
            message=options.get("message", DEFAULT_MESSAGE),
            target_path=target_path if target_path is not None else mapped_target,
            groups=groups if groups is not None else options.get("groups"),
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_fields(self) -> Optional[Tuple[str, ...]]:
        return self.fields

    def get_message(self) -> str:
        return self.message

    def get_target_path(self) -> Optional[str]:
        return self.target_path

    def get_groups(self) -> Tuple[str, ...]:
        return self.groups

    def in_group(self, group: str) -> bool:
        return group in self.groups

    def validated_by(self) -> Type[UniqueInCollectionValidator]:
        """Return the validator class that enforces this rule."""
        from unique_rule.dedup.detector import UniqueInCollectionValidator

        return UniqueInCollectionValidator
