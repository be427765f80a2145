"""Account repository protocol."""

from typing import Protocol
from uuid import UUID


class IAccountRepository(Protocol):
    """Repository interface for accounts. Accounts are provisioned elsewhere."""

    async def delete(self, id: UUID) -> bool:
        """Delete an account and return whether one existed."""
        ...
