"""Data classes for duplicate detection results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Violation:
    """A duplicate item found in a collection.

    Attributes:
        index: Position of the duplicate item. For mapping collections this
            is the item's key.
        message: Message configured on the rule.
        path: Violation path (``[<index>].<target_path>``) when the rule has a
            target path, otherwise ``None`` and the caller picks the default.
    """

    index: Any
    message: str
    path: Optional[str] = None

    def location(self) -> str:
        """Return the path, defaulting to the item index (``[<index>]``)."""
        return self.path if self.path is not None else f"[{self.index}]"
