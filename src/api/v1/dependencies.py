"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from domain.services.account_service import AccountService
from domain.services.github_service import GitHubService
from domain.services.profile_service import ProfileService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.github.client import GitHubClient


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory())


@lru_cache
def get_account_service() -> AccountService:
    """Get Account service instance."""
    return AccountService(get_uow_factory())


@lru_cache
def get_github_service() -> GitHubService:
    """Get GitHub enrichment service instance."""
    return GitHubService(GitHubClient())
