"""SQLAlchemy implementation of Account repository."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import AccountModel


class SQLAlchemyAccountRepository:
    """SQLAlchemy implementation of IAccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def delete(self, id: UUID) -> bool:
        """Delete an account."""
        model = await self._session.get(AccountModel, id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True
