#!/usr/bin/env python3
"""Test runner script for unique-rule."""

import sys
import subprocess
from pathlib import Path


def main():
    """Run tests with pytest."""
    project_root = Path(__file__).parent

    # Check if pytest is available
    try:
        import pytest  # noqa: F401
    except ImportError:
        print("pytest is not installed. Please install it with:")
        print("   pip install -e '.[test]'")
        sys.exit(1)

    target = project_root / "tests"
    if len(sys.argv) > 1 and sys.argv[1] in ("unit", "e2e"):
        target = target / sys.argv[1]

    cmd = [
        sys.executable,
        "-m",
        "pytest",
        str(target),
        "-v",
        "--tb=short",
        "--color=yes",
    ]

    print(f"Running tests: {' '.join(cmd)}")

    try:
        result = subprocess.run(cmd, cwd=project_root)
        sys.exit(result.returncode)
    except KeyboardInterrupt:
        print("\nTests interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
