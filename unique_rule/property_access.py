"""Field-path resolution over mappings, sequences and plain objects.

A path is a chain of segments:

* ``[key]`` reads an index: a mapping key (an integer key is tried when the
  text is a number) or a sequence position.
* ``name`` reads a property: a mapping key, or on objects one of the getter
  methods ``get_name``/``getName``/``is_name``/``isName``/``has_name``/
  ``hasName``, falling back to the attribute itself.

Segments are joined with ``.`` (before a name) or written back to back
(before an index), e.g. ``[customer][email]``, ``customer.email``,
``orders[0].total``.

A segment that cannot be read, or a ``None`` intermediate, resolves the whole
path to ``None`` by default. With ``strict=True`` it raises
``UnresolvablePathError`` instead.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from unique_rule.config import get_config
from unique_rule.errors import ConfigurationError, UnresolvablePathError

_NAME_RE = re.compile(r"[^.\[\]]+")
_INT_RE = re.compile(r"-?\d+")

_MISSING = object()


@dataclass(frozen=True)
class PathSegment:
    name: str
    is_index: bool

    def __str__(self) -> str:
        return f"[{self.name}]" if self.is_index else self.name


@dataclass(frozen=True)
class PropertyPath:
    """A parsed field path."""

    path: str
    segments: Tuple[PathSegment, ...]

    @classmethod
    def parse(cls, path: str) -> PropertyPath:
        if not isinstance(path, str):
            raise ConfigurationError(f"Field path must be a string, got {type(path).__name__}")
        return _parse(path)

    def __str__(self) -> str:
        return self.path


@lru_cache(maxsize=256)
def _parse(path: str) -> PropertyPath:
    if not path:
        raise ConfigurationError("Field path cannot be empty")

    segments = []
    pos = 0
    size = len(path)
    while pos < size:
        if path[pos] == "[":
            end = path.find("]", pos)
            if end == -1:
                raise ConfigurationError(f'Unclosed "[" in field path "{path}"')
            key = path[pos + 1:end]
            if not key:
                raise ConfigurationError(f'Empty index in field path "{path}"')
            segments.append(PathSegment(key, is_index=True))
            pos = end + 1
        else:
            match = _NAME_RE.match(path, pos)
            if match is None:
                raise ConfigurationError(f'Unexpected "{path[pos]}" at offset {pos} in field path "{path}"')
            segments.append(PathSegment(match.group(0), is_index=False))
            pos = match.end()

        if pos < size:
            if path[pos] == ".":
                pos += 1
                if pos >= size or path[pos] in ".[]":
                    raise ConfigurationError(f'Expected a property name after "." in field path "{path}"')
            elif path[pos] != "[":
                raise ConfigurationError(f'Unexpected "{path[pos]}" at offset {pos} in field path "{path}"')

    return PropertyPath(path=path, segments=tuple(segments))


def _camelize(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _lookup_key(mapping: Mapping, key: str) -> Any:
    if key in mapping:
        return mapping[key]
    if _INT_RE.fullmatch(key):
        int_key = int(key)
        if int_key in mapping:
            return mapping[int_key]
    return _MISSING


def _lookup_position(sequence: Sequence, key: str) -> Any:
    if not _INT_RE.fullmatch(key):
        return _MISSING
    position = int(key)
    if 0 <= position < len(sequence):
        return sequence[position]
    return _MISSING


class PropertyAccessor:
    """Read values from items by field path.

    Args:
        strict: Raise ``UnresolvablePathError`` on unresolvable segments
            instead of yielding ``None``. Defaults to the
            ``MISSING_PATH_POLICY`` setting.
    """

    def __init__(self, strict: Optional[bool] = None):
        self.strict = get_config().strict_paths if strict is None else strict

    def get_value(self, item: Any, path: Union[str, PropertyPath]) -> Any:
        property_path = path if isinstance(path, PropertyPath) else PropertyPath.parse(path)

        current = item
        for segment in property_path.segments:
            if current is None:
                return self._miss(property_path, segment, "intermediate value is None")
            if segment.is_index:
                current = self._read_index(current, segment.name)
            else:
                current = self._read_property(current, segment.name)
            if current is _MISSING:
                return self._miss(property_path, segment, "no such key or attribute")
        return current

    def is_readable(self, item: Any, path: Union[str, PropertyPath]) -> bool:
        """Return True when every segment of ``path`` resolves on ``item``."""
        try:
            PropertyAccessor(strict=True).get_value(item, path)
        except UnresolvablePathError:
            return False
        return True

    def _miss(self, path: PropertyPath, segment: PathSegment, reason: str) -> None:
        if self.strict:
            raise UnresolvablePathError(path.path, str(segment), reason)
        return None

    @staticmethod
    def _read_index(current: Any, key: str) -> Any:
        if isinstance(current, Mapping):
            return _lookup_key(current, key)
        if _is_sequence(current):
            return _lookup_position(current, key)
        if isinstance(current, (str, bytes, bytearray)) or not hasattr(current, "__getitem__"):
            return _MISSING
        try:
            return current[key]
        except (KeyError, IndexError, TypeError):
            return _MISSING

    @staticmethod
    def _read_property(current: Any, name: str) -> Any:
        if isinstance(current, Mapping):
            return _lookup_key(current, name)
        if _is_sequence(current):
            return _lookup_position(current, name)

        camel = _camelize(name)
        for getter in (f"get_{name}", f"get{camel}", f"is_{name}", f"is{camel}", f"has_{name}", f"has{camel}"):
            method = getattr(current, getter, None)
            if callable(method):
                return method()
        return getattr(current, name, _MISSING)


def get_value(item: Any, path: Union[str, PropertyPath], strict: Optional[bool] = None) -> Any:
    """Resolve ``path`` on ``item`` with a fresh ``PropertyAccessor``."""
    return PropertyAccessor(strict=strict).get_value(item, path)
