"""Demo runner for the unique-in-collection rule.

Builds small record fixtures (a named collection of ``Single`` items), attaches
uniqueness rules to the ``singles`` property and checks that the expected
number of issues is reported.

Usage:
    python main.py group            # rule on "group": 1 issue expected
    python main.py group-and-name   # rule on "group" + "name": 0, 1, 1 issues expected
"""
from dotenv import load_dotenv
import argparse
import sys
from dataclasses import dataclass, field
from typing import List, Optional

# Load environment variables first, before any other imports
load_dotenv()

from unique_rule import RecordValidator, UniqueInCollection, Violation
from unique_rule.config import get_config
from unique_rule.utils.logger import configure_logging, log_error, log_info


@dataclass
class Single:
    id: int
    name: str
    group: int


@dataclass
class Collection:
    name: Optional[str] = None
    singles: List[Single] = field(default_factory=list)


def group_validator() -> RecordValidator:
    return RecordValidator().register(
        "singles", UniqueInCollection.from_options({"fields": ["group"]}, target_path="singles")
    )


def group_and_name_validator() -> RecordValidator:
    return RecordValidator().register(
        "singles", UniqueInCollection.from_options({"fields": ["group", "name"]}, target_path="singles")
    )


def _report(label: str, issues: List[Violation]) -> None:
    log_info("Collection validated", collection=label, issues=len(issues))
    for issue in issues:
        print(f"  {issue.path}: {issue.message}")


def run_group() -> bool:
    collection = Collection("1st Collection", [Single(1, "First", 1), Single(2, "Second", 1)])
    issues = group_validator().validate(collection)
    _report(collection.name, issues)
    return len(issues) == 1


def run_group_and_name() -> bool:
    validator = group_and_name_validator()
    cases = [
        (Collection("2nd Collection", [Single(1, "First", 1), Single(2, "Second", 1)]), 0),
        (Collection("3rd Collection", [Single(1, "First", 1), Single(2, "First", 1)]), 1),
        # Same name but a different group: only the second item is a duplicate
        (Collection("4th Collection", [Single(1, "First", 1), Single(2, "First", 1), Single(3, "First", 2)]), 1),
    ]
    for collection, expected in cases:
        issues = validator.validate(collection)
        _report(collection.name, issues)
        if len(issues) != expected:
            log_error("Unexpected issue count", collection=collection.name, expected=expected, actual=len(issues))
            return False
    return True


SCENARIOS = {
    "group": run_group,
    "group-and-name": run_group_and_name,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the unique-in-collection demo scenarios.")
    parser.add_argument("scenario", choices=sorted(SCENARIOS), help="Scenario to run.")
    args = parser.parse_args(argv)

    config = get_config()
    configure_logging(config.log_level, config.log_format)
    config.log_configuration()
    for issue in config.validate_configuration():
        log_info(f"Configuration note: {issue}")

    ok = SCENARIOS[args.scenario]()
    print("OK" if ok else "FAILED")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
