from __future__ import annotations

import logging
from collections.abc import Callable

from entry_dedup.normalizer import transform
from entry_dedup.store import Entry, EntryStore

logger = logging.getLogger(__name__)


def format_entry(entry: Entry) -> str:
    return (
        f'ID: {entry.id} | Original: "{entry.original_input}" '
        f'| Transformed: "{entry.transformed_input}"'
    )


class InputProcessor:
    def __init__(
        self,
        store: EntryStore,
        hash_preview_length: int = 16,
        echo: Callable[[str], None] = print,
    ) -> None:
        self.store = store
        self.hash_preview_length = hash_preview_length
        self._echo = echo

    def process(self, text: str) -> bool:
        """Normalize, check and insert one submission. Returns True if it was added."""
        self._echo("--- Processing Input ---")
        self._echo(f"Original: {text}")
        try:
            result = transform(text)
            self._echo(f"Transformed: {result.transformed}")
            self._echo(f"Hash: {result.hash[: self.hash_preview_length]}...")

            if self.store.exists(result.transformed):
                logger.debug("Rejected duplicate %r", result.transformed)
                self._echo("❌ Entry already exists in database - not added")
                return False

            entry_id = self.store.insert(result.original, result.transformed, result.hash)
        except Exception as exc:
            logger.exception("Failed to process input")
            self._echo(f"Error processing input: {exc}")
            return False

        logger.info("Added entry %s (%r)", entry_id, result.transformed)
        self._echo(f"✅ New unique entry added to database (ID: {entry_id})")
        return True

    def show_all(self) -> None:
        self._echo("--- All Database Entries ---")
        entries = self.store.list_sorted()
        if not entries:
            self._echo("No entries in database")
            return
        for entry in entries:
            self._echo(format_entry(entry))
