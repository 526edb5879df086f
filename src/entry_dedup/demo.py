"""Scripted walk-through of accept/reject behaviour against a real store file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from entry_dedup.app import configure_logging, open_store
from entry_dedup.config import Settings, get_settings
from entry_dedup.handler import InputProcessor

SCRIPT: list[tuple[str, str, bool]] = [
    ('Adding "Hello World"', "Hello World", True),
    ('Adding "Hello World" again (should fail)', "Hello World", False),
    ('Adding "HELLO WORLD" (should fail - case insensitive)', "HELLO WORLD", False),
    ('Adding "hello  world" with extra spaces (should fail)', "hello  world", False),
    ('Adding "Different Entry" (should succeed)', "Different Entry", True),
    ('Adding "JavaScript is awesome!" (should succeed)', "JavaScript is awesome!", True),
]


def run(settings: Settings) -> list[bool]:
    print("=== User Input Database App - Demo ===\n", flush=True)
    store = open_store(settings)
    processor = InputProcessor(store, hash_preview_length=settings.hash_preview_length)

    outcomes: list[bool] = []
    for number, (title, text, expected) in enumerate(SCRIPT, start=1):
        print(f"\nTEST {number}: {title}")
        added = processor.process(text)
        if added != expected:
            print(f"⚠ Unexpected outcome for TEST {number}")
        outcomes.append(added)
        if number == 1:
            print()
            processor.show_all()

    print("\nFINAL DATABASE STATE:")
    processor.show_all()
    print(f"\nDatabase saved to {store.path}", flush=True)
    return outcomes


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the scripted dedup demo")
    parser.add_argument("--db-file", help="Backing JSON file (overrides DB_FILE)")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete existing store file before the run",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    if args.db_file:
        settings = settings.with_overrides(db_file=args.db_file)
    configure_logging(settings.log_level)

    db_file = Path(settings.db_file)
    if args.reset and db_file.exists():
        db_file.unlink()
        print(f"[demo] Removed existing store file: {db_file}", flush=True)

    run(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
