"""Duplicate detection for the unique-in-collection rule.

The detector resolves a composite key per item and reports every item whose
key already appeared earlier in the collection.
"""

from unique_rule.dedup.result import Violation
from unique_rule.dedup.detector import UniqueInCollectionValidator, check

__all__ = ["Violation", "UniqueInCollectionValidator", "check"]
