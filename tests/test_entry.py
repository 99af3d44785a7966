"""Tests for the DiaryEntry entity."""

import dataclasses
import uuid
from datetime import date, datetime, timedelta, timezone

import pytest

from dialy.core.entry import MAX_CONTENT_LENGTH, DiaryEntry
from dialy.errors import ContentTooLongError, FutureDateError, ValidationError

ENTRY_ID = "550e8400-e29b-41d4-a716-446655440000"
CREATED = datetime(2025, 2, 8, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def entry():
    return DiaryEntry.reconstruct(
        id=ENTRY_ID,
        date=date(2025, 2, 8),
        content="A quiet Saturday.",
        created_at=CREATED,
        updated_at=CREATED,
    )


class TestCreate:
    def test_assigns_id_and_timestamps(self):
        now = datetime(2025, 2, 8, 21, 0, tzinfo=timezone.utc)
        entry = DiaryEntry.create(date(2025, 2, 8), "hello", now=now)

        assert uuid.UUID(entry.id).version == 4
        assert entry.date == date(2025, 2, 8)
        assert entry.content == "hello"
        assert entry.created_at == now
        assert entry.updated_at == now

    def test_defaults_timestamps_to_now(self):
        before = datetime.now(timezone.utc)
        entry = DiaryEntry.create(date(2025, 2, 8), "hello")
        after = datetime.now(timezone.utc)

        assert before <= entry.created_at <= after
        assert entry.created_at == entry.updated_at

    def test_ids_are_unique(self):
        first = DiaryEntry.create(date(2025, 2, 8), "a")
        second = DiaryEntry.create(date(2025, 2, 8), "b")
        assert first.id != second.id

    def test_accepts_today(self):
        entry = DiaryEntry.create(date.today(), "today")
        assert entry.date == date.today()

    def test_normalizes_datetime_to_date(self):
        entry = DiaryEntry.create(datetime(2025, 2, 8, 18, 45), "evening")
        assert entry.date == date(2025, 2, 8)
        assert type(entry.date) is date

    def test_rejects_future_date(self):
        with pytest.raises(FutureDateError):
            DiaryEntry.create(date.today() + timedelta(days=1), "tomorrow")

    def test_accepts_content_at_limit(self):
        entry = DiaryEntry.create(date(2025, 2, 8), "a" * MAX_CONTENT_LENGTH)
        assert entry.character_count == MAX_CONTENT_LENGTH

    def test_rejects_content_over_limit(self):
        with pytest.raises(ContentTooLongError):
            DiaryEntry.create(date(2025, 2, 8), "a" * (MAX_CONTENT_LENGTH + 1))

    def test_content_too_long_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            DiaryEntry.create(date(2025, 2, 8), "a" * (MAX_CONTENT_LENGTH + 1))

    def test_accepts_empty_content(self):
        assert DiaryEntry.create(date(2025, 2, 8), "").content == ""


class TestReconstruct:
    def test_restores_all_fields(self, entry):
        assert entry.id == ENTRY_ID
        assert entry.date == date(2025, 2, 8)
        assert entry.content == "A quiet Saturday."
        assert entry.created_at == CREATED
        assert entry.updated_at == CREATED

    @pytest.mark.parametrize("bad_id", ["", "   "])
    def test_rejects_empty_id(self, bad_id):
        with pytest.raises(ValidationError, match="ID is required"):
            DiaryEntry.reconstruct(bad_id, date(2025, 2, 8), "x", CREATED, CREATED)

    def test_rejects_invalid_date(self):
        with pytest.raises(ValidationError, match="Invalid date"):
            DiaryEntry.reconstruct(ENTRY_ID, "2025-02-08", "x", CREATED, CREATED)

    def test_rejects_invalid_created_at(self):
        with pytest.raises(ValidationError, match="Invalid createdAt"):
            DiaryEntry.reconstruct(ENTRY_ID, date(2025, 2, 8), "x", "yesterday", CREATED)

    def test_rejects_invalid_updated_at(self):
        with pytest.raises(ValidationError, match="Invalid updatedAt"):
            DiaryEntry.reconstruct(ENTRY_ID, date(2025, 2, 8), "x", CREATED, None)

    def test_rejects_future_date(self):
        with pytest.raises(FutureDateError):
            DiaryEntry.reconstruct(ENTRY_ID, date(2999, 1, 1), "x", CREATED, CREATED)

    def test_rejects_content_over_limit(self):
        with pytest.raises(ContentTooLongError):
            DiaryEntry.reconstruct(
                ENTRY_ID, date(2025, 2, 8), "a" * (MAX_CONTENT_LENGTH + 1), CREATED, CREATED
            )

    def test_naive_timestamps_become_aware(self):
        naive = datetime(2025, 2, 8, 9, 0)
        entry = DiaryEntry.reconstruct(ENTRY_ID, date(2025, 2, 8), "x", naive, naive)
        assert entry.created_at.tzinfo is not None


class TestUpdate:
    def test_returns_new_instance(self, entry):
        now = datetime(2025, 2, 9, 7, 0, tzinfo=timezone.utc)
        updated = entry.update("Rewritten.", now=now)

        assert updated is not entry
        assert updated.id == entry.id
        assert updated.date == entry.date
        assert updated.created_at == entry.created_at
        assert updated.content == "Rewritten."
        assert updated.updated_at == now

    def test_original_is_unchanged(self, entry):
        entry.update("Rewritten.")
        assert entry.content == "A quiet Saturday."
        assert entry.updated_at == CREATED

    def test_rejects_content_over_limit(self, entry):
        with pytest.raises(ContentTooLongError):
            entry.update("a" * (MAX_CONTENT_LENGTH + 1))

    def test_fields_cannot_be_assigned(self, entry):
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.content = "mutated"


class TestQueries:
    def test_is_same_date(self, entry):
        assert entry.is_same_date(date(2025, 2, 8))
        assert entry.is_same_date(datetime(2025, 2, 8, 23, 0))
        assert not entry.is_same_date(date(2024, 2, 8))

    def test_year(self, entry):
        assert entry.year == 2025

    def test_character_count(self, entry):
        assert entry.character_count == len("A quiet Saturday.")

    def test_preview_unchanged_when_short(self, entry):
        assert entry.preview_text(100) == "A quiet Saturday."

    def test_preview_unchanged_at_limit(self, entry):
        assert entry.preview_text(len(entry.content)) == entry.content

    def test_preview_truncates_with_ellipsis(self, entry):
        assert entry.preview_text(7) == "A quiet..."

    def test_preview_default_length(self):
        long_entry = DiaryEntry.create(date(2025, 2, 8), "x" * 150)
        assert long_entry.preview_text() == "x" * 100 + "..."
