#!/usr/bin/env python3
"""
Bump the statebox version.

Rewrites the version in pyproject.toml and statebox/__init__.py together so
the two never drift apart.

Usage:
    python scripts/bump_version.py 0.2.0
    python scripts/bump_version.py 0.2.0 --dry-run
"""

import argparse
import re
import sys
from pathlib import Path

VERSION_FILES = (
    (Path("pyproject.toml"), r'^version\s*=\s*".*?"$', 'version = "{}"'),
    (Path("statebox/__init__.py"), r'^__version__\s*=\s*".*?"$', '__version__ = "{}"'),
)


def replace_version(path: Path, pattern: str, template: str, version: str, dry_run: bool) -> None:
    if not path.exists():
        sys.exit(f"Error: {path} not found")

    content = path.read_text()
    if not re.search(pattern, content, re.MULTILINE):
        sys.exit(f"Error: no version line found in {path}")

    if dry_run:
        print(f"Would set {path} to {version}")
        return

    path.write_text(re.sub(pattern, template.format(version), content, count=1, flags=re.MULTILINE))
    print(f"Set {path} to {version}")


def main():
    parser = argparse.ArgumentParser(description="Bump the statebox version")
    parser.add_argument("version", help="New version number (x.y.z)")
    parser.add_argument("--dry-run", action="store_true", help="Only report what would change")
    args = parser.parse_args()

    if not re.match(r"^\d+\.\d+\.\d+$", args.version):
        sys.exit(f"Error: invalid version '{args.version}', expected x.y.z")

    for path, pattern, template in VERSION_FILES:
        replace_version(path, pattern, template, args.version, args.dry_run)


if __name__ == "__main__":
    main()
