"""Violation sinks: where the checker pushes the duplicates it finds."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Callable, List, Optional

if TYPE_CHECKING:
    from unique_rule.dedup.result import Violation


class ViolationSink(abc.ABC):
    """Abstract receiver of violations."""

    @abc.abstractmethod
    def report(self, violation: Violation) -> None:
        """Accept one violation. Called in collection order."""


class CollectingSink(ViolationSink):
    """Keep every reported violation in ``violations``."""

    def __init__(self) -> None:
        self.violations: List[Violation] = []

    def report(self, violation: Violation) -> None:
        self.violations.append(violation)

    def __len__(self) -> int:
        return len(self.violations)


class CallbackSink(ViolationSink):
    """Adapt a host framework ``report(message, path)`` callable.

    The callable receives the violation path, or ``None`` when the rule has
    no target path.
    """

    def __init__(self, callback: Callable[[str, Optional[str]], None]):
        self.callback = callback

    def report(self, violation: Violation) -> None:
        self.callback(violation.message, violation.path)
