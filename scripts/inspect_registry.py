#!/usr/bin/env python3
"""
Helper script to inspect the user registry.

Safe utility for debugging and support. Prints public fields only;
stored secrets are never shown.

Usage:
    python scripts/inspect_registry.py [--path PATH] [--lookup NAME_OR_PHONE]
"""

import argparse
import sys
from typing import Optional
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import Config  # noqa: E402
from infra.logging_setup import configure_logging  # noqa: E402
from registry import JsonRegistryStore, RegistryPersistenceError  # noqa: E402
from registry.validation import shorten_address  # noqa: E402


def inspect_registry(store: JsonRegistryStore, lookup: Optional[str] = None) -> int:
    """
    Print registry contents, or a single entry.

    Returns:
        Process exit code
    """
    try:
        if lookup:
            record = store.lookup_by_identifier(lookup)
            if record is None:
                print(f"✗ No user registered as {lookup!r}")
                return 1
            print(f"Name:    {record.name}")
            print(f"Phone:   {record.phone}")
            print(f"Address: {record.address}")
            print(f"Secret:  {'stored' if record.secret else 'none'}")
            return 0

        users = store.list_all()
    except RegistryPersistenceError as e:
        print(f"✗ Registry error: {e}")
        return 2

    print(f"Registry: {store.path}")
    print(f"Total users: {len(users)}")
    print()

    if not users:
        print("(Empty - no users registered yet)")
        return 0

    print("-" * 72)
    for i, user in enumerate(users, 1):
        print(f"[{i}] {user.name:<20} {user.phone:<16} {shorten_address(user.address)}")
    print("-" * 72)
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Inspect the name/phone/address registry"
    )
    parser.add_argument(
        "--path",
        default=Config.REGISTRY_PATH,
        help=f"Path to registry JSON file (default: {Config.REGISTRY_PATH})",
    )
    parser.add_argument(
        "--lookup",
        default=None,
        help="Show a single user by name or phone",
    )

    args = parser.parse_args(argv)
    configure_logging(Config.LOG_LEVEL)

    if not Path(args.path).exists():
        print(f"✗ Registry file not found: {args.path}")
        return 1

    return inspect_registry(JsonRegistryStore(args.path), lookup=args.lookup)


if __name__ == "__main__":
    sys.exit(main())
