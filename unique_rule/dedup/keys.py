"""Composite key canonicalization.

Each value is written as a type-tagged, length-prefixed token so that the
encoding of a tuple is unambiguous: ``"12" + "3"`` and ``"1" + "23"`` produce
different keys, and so do ``"123"`` and ``123`` or ``1`` and ``1.0``.
Containers are encoded structurally; mapping and set members are sorted by
their own encoding, so insertion order does not affect the key.

Other objects are encoded from the state pickle would capture
(``__reduce_ex__``), which covers ``__dict__``, ``__slots__`` and C-level
values such as ``datetime`` or ``Decimal`` and their subclasses. Objects that
cannot be reduced (functions, modules) fall back to their ``repr``.
"""

from __future__ import annotations

import dataclasses
import enum
import hashlib
import pickle
from collections.abc import Mapping, Set
from typing import Any, Iterable, List, Optional, Sequence

from unique_rule.errors import KeyEncodingError


def _type_name(value: Any) -> str:
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


def _text(tag: str, text: str) -> str:
    return f"{tag}{len(text)}:{text}"


def _collection(tag: str, parts: List[str]) -> str:
    return f"{tag}{len(parts)}[{''.join(parts)}]"


def _callable_name(func: Any) -> str:
    module = getattr(func, "__module__", None) or ""
    name = getattr(func, "__qualname__", None) or repr(func)
    return f"{module}.{name}"


def _reduced_state(value: Any) -> Optional[tuple]:
    try:
        reduced = value.__reduce_ex__(2)
    except (TypeError, pickle.PicklingError):
        return None
    if isinstance(reduced, str):
        return (reduced,)
    constructor, args = reduced[0], reduced[1]
    state = reduced[2] if len(reduced) > 2 else None
    name = constructor if isinstance(constructor, type) else _callable_name(constructor)
    return (name, args, state)


def _object_state(value: Any) -> Any:
    if dataclasses.is_dataclass(value):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if hasattr(value, "model_dump"):
        return value.model_dump()
    return _reduced_state(value)


def _encode(value: Any, active: set) -> str:
    if value is None:
        return "N"
    # bool before int: bool is an int subclass.
    if isinstance(value, bool):
        return "B1" if value else "B0"
    if type(value) is int:
        return _text("I", str(value))
    if type(value) is float:
        return _text("F", repr(value))
    if type(value) is str:
        return _text("S", value)
    if isinstance(value, (bytes, bytearray)):
        return _text("Y" if isinstance(value, bytes) else "A", value.hex())
    if isinstance(value, enum.Enum):
        return _text("E", _type_name(value)) + _encode(value.value, active)
    if isinstance(value, type):
        return _text("C", f"{value.__module__}.{value.__qualname__}")
    if isinstance(value, (int, float, str)):
        base = int if isinstance(value, int) else float if isinstance(value, float) else str
        return _text("V", _type_name(value)) + _encode(base(value), active)

    marker = id(value)
    if marker in active:
        return "R"
    active.add(marker)
    try:
        return _encode_composite(value, active)
    finally:
        active.discard(marker)


def _encode_composite(value: Any, active: set) -> str:
    if type(value) in (list, tuple):
        tag = "L" if type(value) is list else "T"
        return _collection(tag, [_encode(v, active) for v in value])
    if isinstance(value, (list, tuple)):
        return _text("Q", _type_name(value)) + _collection("", [_encode(v, active) for v in value])
    if isinstance(value, Mapping):
        items = sorted(_encode(k, active) + _encode(v, active) for k, v in value.items())
        return _text("M", _type_name(value)) + _collection("", items)
    if isinstance(value, Set):
        members = sorted(_encode(v, active) for v in value)
        return _text("Z", _type_name(value)) + _collection("", members)

    state = _object_state(value)
    if state is not None:
        return _text("O", _type_name(value)) + _encode(state, active)
    return _text("X", _type_name(value)) + _text("", repr(value))


def encode_value(value: Any) -> str:
    """Return the canonical token for a single value.

    Raises:
        KeyEncodingError: The value is nested deeper than the interpreter
            recursion limit allows.
    """
    try:
        return _encode(value, set())
    except RecursionError:
        raise KeyEncodingError(value, "nested too deeply to build a key") from None


def encode_key(values: Sequence[Any]) -> str:
    """Encode an ordered tuple of field values."""
    return _collection("K", [encode_value(v) for v in values])


def compute_key(values: Iterable[Any]) -> str:
    """Return the composite key (SHA-1 of the canonical encoding) for field values."""
    encoded = encode_key(list(values))
    return hashlib.sha1(encoded.encode("utf-8", "surrogatepass")).hexdigest()
