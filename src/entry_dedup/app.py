from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable

from entry_dedup.config import Settings, get_settings
from entry_dedup.handler import InputProcessor
from entry_dedup.store import EntryStore, StorePersistError

logger = logging.getLogger("entry_dedup")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
PROMPT = "Enter input: "


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def open_store(settings: Settings) -> EntryStore:
    store = EntryStore(settings.db_file, strict=settings.strict_load)
    if store.load():
        print("Database loaded from file", flush=True)
    else:
        print("New database created", flush=True)
    return store


def save_on_exit(store: EntryStore) -> None:
    print("\nSaving database and exiting...", flush=True)
    try:
        store.persist()
    except StorePersistError as exc:
        logger.error("Final save failed: %s", exc)
        print(f"Error saving database: {exc}", flush=True)


def run(settings: Settings, read_line: Callable[[str], str] | None = None) -> int:
    read_line = read_line or input
    store = open_store(settings)
    processor = InputProcessor(store, hash_preview_length=settings.hash_preview_length)

    print("=== User Input Database App ===")
    print("Commands:")
    print("  - Type any text to add to database")
    print('  - Type "list" to show all entries')
    print('  - Type "exit" to quit\n', flush=True)

    while True:
        try:
            line = read_line(PROMPT)
        except (EOFError, KeyboardInterrupt):
            logger.info("Input closed")
            break

        command = line.strip()
        if command == "exit":
            break
        if command == "list":
            print()
            processor.show_all()
        elif not command:
            print("Please enter some text")
        else:
            print()
            processor.process(command)

    save_on_exit(store)
    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive deduplicating note log")
    parser.add_argument("--db-file", help="Backing JSON file (overrides DB_FILE)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    if args.db_file:
        settings = settings.with_overrides(db_file=args.db_file)
    configure_logging(settings.log_level)
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
