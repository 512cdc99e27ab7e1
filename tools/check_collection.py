"""Check a YAML/JSON document for duplicate items.

Usage:
    python -m tools.check_collection users.yaml --field email
    python -m tools.check_collection order.json --property items --field "[sku]" --field "[size]"
    python -m tools.check_collection record.yaml --rules rules.yaml
    python -m tools.check_collection --schema -o schema/rules.schema.json

Exit codes: 0 when every item is unique, 1 when duplicates were found,
2 when the input or the rule configuration is invalid.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from unique_rule.config import get_config
from unique_rule.constraint import DEFAULT_MESSAGE, UniqueInCollection
from unique_rule.dedup.detector import UniqueInCollectionValidator
from unique_rule.dedup.result import Violation
from unique_rule.errors import KeyEncodingError, UniqueRuleError, UnresolvablePathError
from unique_rule.property_access import PropertyAccessor
from unique_rule.rules_file import RulesFile, load_document, load_rules_file

EXIT_OK = 0
EXIT_DUPLICATES = 1
EXIT_INVALID = 2


def check_file(
    path: Path,
    fields: Optional[List[str]] = None,
    message: str = DEFAULT_MESSAGE,
    target_path: Optional[str] = None,
    property_path: Optional[str] = None,
    rules_path: Optional[Path] = None,
    groups: Optional[List[str]] = None,
) -> Tuple[int, List[str]]:
    """Check a document and return ``(exit_code, messages)``."""
    if not path.exists():
        return EXIT_INVALID, [f"File not found: {path}"]

    try:
        document = load_document(path)
    except yaml.YAMLError as exc:
        return EXIT_INVALID, [f"Parse error: {exc}"]

    try:
        violations = _run(document, fields, message, target_path, property_path, rules_path, groups)
    except FileNotFoundError as exc:
        return EXIT_INVALID, [f"File not found: {exc.filename}"]
    except UnresolvablePathError as exc:
        return EXIT_INVALID, [f"Property not found: {exc.path}"]
    except KeyEncodingError as exc:
        return EXIT_INVALID, [f"Invalid document: {exc}"]
    except UniqueRuleError as exc:
        return EXIT_INVALID, [f"Invalid rule: {exc}"]
    except (yaml.YAMLError, ValidationError, TypeError) as exc:
        return EXIT_INVALID, [f"Invalid rules file: {exc}"]

    if not violations:
        return EXIT_OK, ["All items are unique"]

    limit = get_config().max_reported_violations
    shown = violations if limit == 0 else violations[:limit]
    messages = [f"{v.location()}: {v.message}" for v in shown]
    if len(shown) < len(violations):
        messages.append(f"... {len(violations) - len(shown)} more violation(s)")
    return EXIT_DUPLICATES, messages


def _run(document, fields, message, target_path, property_path, rules_path, groups) -> List[Violation]:
    if rules_path is not None:
        rules = load_rules_file(rules_path)
        return rules.build_validator().validate(document, groups=groups)

    if not fields:
        raise UniqueRuleError("Either --field or --rules is required")

    collection = document
    if property_path:
        accessor = PropertyAccessor()
        if not accessor.is_readable(document, property_path):
            raise UnresolvablePathError(property_path, property_path, "not found in document")
        collection = accessor.get_value(document, property_path)
    constraint = UniqueInCollection.from_field_list(fields, message=message, target_path=target_path)
    return UniqueInCollectionValidator().check(collection, constraint)


def generate_schema() -> dict:
    """Generate JSON Schema from the RulesFile Pydantic model."""
    return RulesFile.model_json_schema()


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Check a YAML/JSON collection for duplicate items")
    parser.add_argument("file", nargs="?", help="Path to the YAML or JSON document")
    parser.add_argument("-f", "--field", dest="fields", action="append", help="Field path (repeat for a composite key)")
    parser.add_argument("--message", default=DEFAULT_MESSAGE, help="Message reported for each duplicate")
    parser.add_argument("--target-path", help="Path appended to the item index in violations")
    parser.add_argument("--property", dest="property_path", help="Path of the collection inside the document")
    parser.add_argument("--rules", type=Path, help="Rules file to validate the document as a record")
    parser.add_argument("--group", dest="groups", action="append", help="Validation group (with --rules)")
    parser.add_argument("--schema", action="store_true", help="Output the rules file JSON Schema and exit")
    parser.add_argument("-o", "--output", type=str, help="Write schema to file instead of stdout")
    args = parser.parse_args(argv)

    if args.schema:
        output = json.dumps(generate_schema(), indent=2)
        if args.output:
            Path(args.output).parent.mkdir(parents=True, exist_ok=True)
            Path(args.output).write_text(output + "\n")
            print(f"Schema written to {args.output}")
        else:
            print(output)
        sys.exit(EXIT_OK)

    if not args.file:
        parser.error("file is required unless --schema is given")

    code, messages = check_file(
        Path(args.file),
        fields=args.fields,
        message=args.message,
        target_path=args.target_path,
        property_path=args.property_path,
        rules_path=args.rules,
        groups=args.groups,
    )
    symbol = "OK" if code == EXIT_OK else "ERROR"
    for msg in messages:
        print(f"[{symbol}] {msg}")

    sys.exit(code)


if __name__ == "__main__":
    main()
