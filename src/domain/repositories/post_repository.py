"""Post repository protocol."""

from typing import Protocol
from uuid import UUID


class IPostRepository(Protocol):
    """Repository interface for Post entities."""

    async def delete_all_for_author(self, author_id: UUID) -> int:
        """Delete every post by an author and return how many were removed."""
        ...
