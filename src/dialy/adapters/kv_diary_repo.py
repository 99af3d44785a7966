"""Diary repository backed by one versioned document in a key-value slot."""

import logging
from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaError

from dialy.core.dates import parse_iso_date, to_iso_date
from dialy.core.diary import DEFAULT_PAST_YEARS, entries_by_same_date, sort_by_date_desc
from dialy.core.entry import DiaryEntry
from dialy.errors import DuplicateDateEntryError, ValidationError
from dialy.ports.kv_store import KeyValueStore

from .memory_kv import MemoryKeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "dialy_entries"
STORAGE_VERSION = "1.0.0"


class StoredDiaryEntry(BaseModel):
    """Serialized form of a DiaryEntry."""

    model_config = ConfigDict(strict=True, populate_by_name=True)

    id: str
    date: str
    content: str
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class DiaryDocument(BaseModel):
    """The whole persisted aggregate: a schema version plus every entry."""

    model_config = ConfigDict(strict=True)

    version: str
    entries: list[StoredDiaryEntry]

    @classmethod
    def empty(cls) -> "DiaryDocument":
        return cls(version=STORAGE_VERSION, entries=[])


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with a Z suffix."""
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid timestamp: {value!r}", cause=e)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def serialize_entry(entry: DiaryEntry) -> StoredDiaryEntry:
    return StoredDiaryEntry(
        id=entry.id,
        date=to_iso_date(entry.date),
        content=entry.content,
        created_at=format_timestamp(entry.created_at),
        updated_at=format_timestamp(entry.updated_at),
    )


def deserialize_entry(stored: StoredDiaryEntry) -> DiaryEntry:
    """Rebuild an entry; the date is read as a plain local calendar date."""
    return DiaryEntry.reconstruct(
        id=stored.id,
        date=parse_iso_date(stored.date),
        content=stored.content,
        created_at=parse_timestamp(stored.created_at),
        updated_at=parse_timestamp(stored.updated_at),
    )


class KeyValueDiaryRepository:
    """
    Diary storage in a single key-value slot.

    Implements DiaryRepository protocol. All entries live in one JSON
    document under a fixed key. The last document read or written is cached
    on the instance until invalidate_cache() or the next write.
    """

    def __init__(self, store: KeyValueStore | None = None, key: str = STORAGE_KEY):
        self.store = store if store is not None else MemoryKeyValueStore()
        self.key = key
        self._cache: DiaryDocument | None = None

    async def save(self, entry: DiaryEntry) -> None:
        """Insert or replace an entry, keeping one entry per date."""
        document = self._load()
        entry_date = to_iso_date(entry.date)

        if any(s.date == entry_date and s.id != entry.id for s in document.entries):
            raise DuplicateDateEntryError()

        serialized = serialize_entry(entry)
        entries = list(document.entries)
        for index, stored in enumerate(entries):
            if stored.id == entry.id:
                entries[index] = serialized
                break
        else:
            entries.append(serialized)

        self._persist(DiaryDocument(version=STORAGE_VERSION, entries=entries))
        logger.debug(f"Saved entry {entry.id} for {entry_date}")

    async def find_by_id(self, entry_id: str) -> DiaryEntry | None:
        """Find an entry by id. Returns None if not found."""
        for stored in self._load().entries:
            if stored.id == entry_id:
                return deserialize_entry(stored)
        return None

    async def find_by_date(self, target_date: date) -> DiaryEntry | None:
        """Find the entry for a calendar date. Returns None if not found."""
        target = to_iso_date(target_date)
        for stored in self._load().entries:
            if stored.date == target:
                return deserialize_entry(stored)
        return None

    async def find_by_same_date(
        self, target_date: date, years: int = DEFAULT_PAST_YEARS
    ) -> list[DiaryEntry]:
        """Entries on the same month/day in the previous N years, newest first."""
        return entries_by_same_date(self._entries(), target_date, years)

    async def delete(self, entry_id: str) -> None:
        """Remove an entry by id. Unknown ids are ignored."""
        document = self._load()
        entries = [s for s in document.entries if s.id != entry_id]
        self._persist(DiaryDocument(version=STORAGE_VERSION, entries=entries))
        logger.debug(f"Deleted entry {entry_id}")

    async def find_all(self) -> list[DiaryEntry]:
        """All entries, newest first."""
        return sort_by_date_desc(self._entries())

    def invalidate_cache(self) -> None:
        """Drop the cached document so the next read hits the store."""
        self._cache = None

    def migrate_document(self, document: DiaryDocument) -> DiaryDocument:
        """
        Upgrade an older document to STORAGE_VERSION.

        Override to transform entries; the default only restamps the version.
        """
        return DiaryDocument(version=STORAGE_VERSION, entries=list(document.entries))

    def _entries(self) -> list[DiaryEntry]:
        return [deserialize_entry(s) for s in self._load().entries]

    def _load(self) -> DiaryDocument:
        """Return the cached document, reading (and migrating) it if needed."""
        if self._cache is not None:
            return self._cache

        raw = self.store.get(self.key)
        if not raw:
            document = DiaryDocument.empty()
        else:
            try:
                document = DiaryDocument.model_validate_json(raw)
            except SchemaError as e:
                logger.warning(
                    f"Ignoring unreadable diary document under {self.key!r} "
                    f"({e.error_count()} problem(s)); starting empty"
                )
                document = DiaryDocument.empty()
            else:
                document = self._check_version(document)

        self._cache = document
        return document

    def _check_version(self, document: DiaryDocument) -> DiaryDocument:
        if document.version == STORAGE_VERSION:
            return document

        logger.info(f"Migrating diary document from {document.version} to {STORAGE_VERSION}")
        migrated = self.migrate_document(document)
        self._persist(migrated)
        return migrated

    def _persist(self, document: DiaryDocument) -> None:
        """Overwrite the whole slot, then cache what was written."""
        self.store.set(self.key, document.model_dump_json(by_alias=True))
        self._cache = document
