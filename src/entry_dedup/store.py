from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger(__name__)


class StoreError(Exception):
    pass


class StoreLoadError(StoreError):
    pass


class StorePersistError(StoreError):
    pass


class Entry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    original_input: str
    transformed_input: str
    hash: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


class StoreSnapshot(BaseModel):
    entries: list[Entry] = Field(default_factory=list)
    # Files written by the earlier implementation keep the counter under "nextId".
    next_id: int = Field(default=1, ge=1, validation_alias=AliasChoices("next_id", "nextId"))

    @model_validator(mode="after")
    def validate_ids(self) -> StoreSnapshot:
        ids = [entry.id for entry in self.entries]
        if len(ids) != len(set(ids)):
            raise ValueError("entry ids must be unique")
        if ids and self.next_id <= max(ids):
            self.next_id = max(ids) + 1
        return self


def utcnow() -> datetime:
    return datetime.now(UTC)


class EntryStore:
    """Flat JSON file of unique entries.

    The whole file is read by ``load()`` and rewritten by every ``persist()``.
    Lookups are a linear scan over the normalized text.
    """

    def __init__(
        self,
        path: str | Path,
        strict: bool = False,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.path = Path(path)
        self.strict = strict
        self._clock = clock
        self._snapshot = StoreSnapshot()
        self._last_created_at: datetime | None = None

    @property
    def entries(self) -> list[Entry]:
        return list(self._snapshot.entries)

    @property
    def next_id(self) -> int:
        return self._snapshot.next_id

    def __len__(self) -> int:
        return len(self._snapshot.entries)

    def load(self) -> bool:
        """Read the backing file. Returns False when starting from an empty store."""
        self._snapshot = StoreSnapshot()
        self._last_created_at = None
        if not self.path.exists():
            logger.info("No store at %s, starting empty", self.path)
            return False

        try:
            raw = self.path.read_text(encoding="utf-8")
            snapshot = StoreSnapshot.model_validate_json(raw)
        except (OSError, UnicodeDecodeError, ValidationError) as exc:
            if self.strict:
                raise StoreLoadError(f"Failed to load {self.path}: {exc}") from exc
            logger.warning("Failed to load %s (%s). Starting with an empty store.", self.path, exc)
            self._backup_unreadable()
            return False

        self._snapshot = snapshot
        logger.info("Loaded %s entries from %s", len(snapshot.entries), self.path)
        return True

    def exists(self, transformed: str) -> bool:
        return any(entry.transformed_input == transformed for entry in self._snapshot.entries)

    def insert(self, original: str, transformed: str, digest: str) -> int:
        entry_id = self._snapshot.next_id
        self._snapshot.next_id += 1
        entry = Entry(
            id=entry_id,
            original_input=original,
            transformed_input=transformed,
            hash=digest,
            created_at=self._next_timestamp(),
        )
        self._snapshot.entries.append(entry)

        try:
            self.persist()
        except StorePersistError as exc:
            # memory stays ahead of disk until the next successful persist
            logger.error("Entry %s not saved to disk: %s", entry_id, exc)
        return entry_id

    def list_sorted(self) -> list[Entry]:
        return sorted(
            self._snapshot.entries,
            key=lambda entry: (entry.created_at, entry.id),
            reverse=True,
        )

    def persist(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            content = self._snapshot.model_dump_json(indent=2)
            self.path.write_text(f"{content}\n", encoding="utf-8")
        except OSError as exc:
            raise StorePersistError(f"Failed to write {self.path}: {exc}") from exc
        logger.debug("Persisted %s entries to %s", len(self._snapshot.entries), self.path)

    @property
    def backup_path(self) -> Path:
        return self.path.with_name(f"{self.path.name}.bak")

    def _backup_unreadable(self) -> None:
        # the next persist overwrites the unreadable file
        try:
            shutil.copyfile(self.path, self.backup_path)
        except OSError as exc:
            logger.error("Could not back up %s: %s", self.path, exc)
            return
        logger.warning("Unreadable store copied to %s", self.backup_path)

    def _next_timestamp(self) -> datetime:
        now = self._clock()
        now = now.replace(tzinfo=UTC) if now.tzinfo is None else now.astimezone(UTC)
        if self._last_created_at is not None and now < self._last_created_at:
            now = self._last_created_at
        self._last_created_at = now
        return now
