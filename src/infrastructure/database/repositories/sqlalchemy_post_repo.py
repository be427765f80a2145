"""SQLAlchemy implementation of Post repository."""

from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import PostModel


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def delete_all_for_author(self, author_id: UUID) -> int:
        """Delete every post written by ``author_id``."""
        stmt = delete(PostModel).where(PostModel.author_id == author_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount or 0
