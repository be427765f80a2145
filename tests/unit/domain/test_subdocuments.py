"""Unit tests for embedded list operations."""

from datetime import date
from uuid import uuid4

import pytest

from core.exceptions import SubDocumentNotFound
from domain.entities.profile import ExperienceEntry
from domain.subdocuments import add_entry, remove_entry, update_entry


def _entry(title: str) -> ExperienceEntry:
    return ExperienceEntry(title=title, company="Acme", from_date=date(2020, 1, 1))


class TestAddEntry:
    def test_inserts_at_head(self):
        entries = [_entry("old")]

        result = add_entry(entries, _entry("new"))

        assert [e.title for e in result] == ["new", "old"]

    def test_assigns_fresh_id(self):
        existing = _entry("old")
        candidate = _entry("new")
        candidate.id = existing.id

        result = add_entry([existing], candidate)

        assert result[0].id != existing.id
        assert len({e.id for e in result}) == 2

    def test_does_not_mutate_input(self):
        entries = [_entry("old")]

        add_entry(entries, _entry("new"))

        assert len(entries) == 1


class TestUpdateEntry:
    def test_patches_in_place_keeping_order(self):
        entries = [_entry("a"), _entry("b"), _entry("c")]

        result = update_entry(entries, entries[1].id, {"title": "B", "company": "Initech"})

        assert [e.title for e in result] == ["a", "B", "c"]
        assert result[1].company == "Initech"
        assert result[1].id == entries[1].id

    def test_ignores_id_in_patch(self):
        entries = [_entry("a")]

        result = update_entry(entries, entries[0].id, {"id": uuid4(), "title": "z"})

        assert result[0].id == entries[0].id

    def test_unknown_id_raises(self):
        with pytest.raises(SubDocumentNotFound):
            update_entry([_entry("a")], uuid4(), {"title": "z"})


class TestRemoveEntry:
    def test_removes_matching(self):
        entries = [_entry("a"), _entry("b")]

        result = remove_entry(entries, entries[0].id)

        assert [e.title for e in result] == ["b"]

    def test_unknown_id_is_noop(self):
        entries = [_entry("a"), _entry("b")]

        assert remove_entry(entries, uuid4()) == entries

    def test_add_then_remove_restores_list(self):
        entries = [_entry("a")]

        added = add_entry(entries, _entry("b"))
        restored = remove_entry(added, added[0].id)

        assert restored == entries
