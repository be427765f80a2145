"""Operations over ordered, identifier-keyed lists embedded in an aggregate.

Entries are dataclasses carrying a ``UUID`` ``id``. All functions return new
lists and never reorder entries they do not touch.
"""

from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any, Protocol, TypeVar
from uuid import UUID, uuid4

from core.exceptions import SubDocumentNotFound


class Identified(Protocol):
    id: UUID


EntryT = TypeVar("EntryT", bound=Identified)


def add_entry(entries: Sequence[EntryT], entry: EntryT) -> list[EntryT]:
    """Give ``entry`` a fresh id and insert it at the head."""
    taken = {existing.id for existing in entries}
    new_id = uuid4()
    while new_id in taken:
        new_id = uuid4()
    return [replace(entry, id=new_id), *entries]  # type: ignore[type-var]


def update_entry(
    entries: Sequence[EntryT],
    entry_id: UUID,
    patch: Mapping[str, Any],
) -> list[EntryT]:
    """Apply ``patch`` to the entry with ``entry_id``, keeping its position.

    Raises:
        SubDocumentNotFound: no entry carries ``entry_id``
    """
    changes = {key: value for key, value in patch.items() if key != "id"}
    updated = list(entries)
    for index, existing in enumerate(updated):
        if existing.id == entry_id:
            updated[index] = replace(existing, **changes)  # type: ignore[type-var]
            return updated
    raise SubDocumentNotFound(str(entry_id))


def remove_entry(entries: Sequence[EntryT], entry_id: UUID) -> list[EntryT]:
    """Drop the entry with ``entry_id``. Unknown ids are a no-op."""
    return [existing for existing in entries if existing.id != entry_id]
