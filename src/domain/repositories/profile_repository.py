"""Developer profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import DeveloperProfile


class IProfileRepository(Protocol):
    """Repository interface for the profile aggregate."""

    async def get_by_owner(self, owner_id: UUID) -> DeveloperProfile | None:
        """Get the profile owned by an account."""
        ...

    async def get_all(self) -> list[DeveloperProfile]:
        """Get every profile."""
        ...

    async def get_by_experience_id(self, entry_id: UUID) -> DeveloperProfile | None:
        """Get the profile whose experience list contains ``entry_id``."""
        ...

    async def get_by_education_id(self, entry_id: UUID) -> DeveloperProfile | None:
        """Get the profile whose education list contains ``entry_id``."""
        ...

    async def upsert(self, profile: DeveloperProfile) -> DeveloperProfile:
        """Atomically create or replace the scalar fields keyed on owner.

        Embedded experience and education entries of an existing profile are
        left untouched.
        """
        ...

    async def save(self, profile: DeveloperProfile) -> DeveloperProfile:
        """Persist the whole aggregate, including embedded entry lists."""
        ...

    async def delete_for_owner(self, owner_id: UUID) -> bool:
        """Delete the owner's profile and return whether one existed."""
        ...
