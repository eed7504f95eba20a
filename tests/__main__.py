#!/usr/bin/env python3
"""
Test runner for graphite-ci.

This module allows running the test suite using:
    python -m tests
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def main():
    """Run the test suite using pytest."""
    try:
        import pytest
    except ImportError:
        print("Error: pytest is not installed.")
        print("Please install it with: pip install -e .[dev]")
        return 1

    tests_dir = Path(__file__).parent

    args = [
        str(tests_dir),
        "-v",
        "--tb=short",
    ]

    # Replace the defaults with any arguments passed to the module
    if len(sys.argv) > 1:
        args = sys.argv[1:]

    exit_code = pytest.main(args)

    if exit_code == 0:
        print("\nAll tests passed!")
    else:
        print(f"\nTests failed with exit code: {exit_code}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
