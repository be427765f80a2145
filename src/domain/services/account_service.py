"""Account service layer: owner removal across dependent records."""

from typing import Callable
from uuid import UUID

import structlog

from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class AccountService:
    """Service layer for account-level operations."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def delete_owner(self, owner_id: UUID) -> None:
        """Remove posts, then the profile, then the account.

        Every step commits on its own. If a step fails the remaining steps are
        skipped and the earlier ones stay committed; calling again finishes the
        job since each step tolerates already-missing rows.
        """
        async with self._uow_factory() as uow:
            posts_deleted = await uow.posts.delete_all_for_author(owner_id)
            await uow.commit()
        logger.info("owner_posts_deleted", owner_id=str(owner_id), count=posts_deleted)

        async with self._uow_factory() as uow:
            profile_deleted = await uow.profiles.delete_for_owner(owner_id)
            await uow.commit()
        logger.info("owner_profile_deleted", owner_id=str(owner_id), deleted=profile_deleted)

        async with self._uow_factory() as uow:
            account_deleted = await uow.accounts.delete(owner_id)
            await uow.commit()
        logger.info("owner_account_deleted", owner_id=str(owner_id), deleted=account_deleted)
