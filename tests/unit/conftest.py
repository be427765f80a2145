"""Shared fixtures for unit tests."""

from datetime import date
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.profile import DeveloperProfile, EducationEntry, ExperienceEntry


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.accounts = AsyncMock()
        self.posts = AsyncMock()
        self.committed = False
        self.commit_count = 0
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True
        self.commit_count += 1

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


def echo_save(uow: FakeUnitOfWork) -> None:
    """Make ``profiles.save`` and ``profiles.upsert`` return what they are given."""

    async def _echo(profile: DeveloperProfile) -> DeveloperProfile:
        return profile

    uow.profiles.save.side_effect = _echo
    uow.profiles.upsert.side_effect = _echo


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def owner_id() -> UUID:
    """A random owner ID."""
    return uuid4()


@pytest.fixture
def profile(owner_id: UUID) -> DeveloperProfile:
    """A profile with one experience and one education entry."""
    return DeveloperProfile(
        owner_id=owner_id,
        status="Developer",
        skills=["python"],
        experience=[
            ExperienceEntry(title="Dev", company="Initech", from_date=date(2018, 1, 1)),
        ],
        education=[
            EducationEntry(
                school="MIT",
                degree="BSc",
                fieldofstudy="CS",
                from_date=date(2012, 9, 1),
                to_date=date(2016, 6, 1),
            ),
        ],
    )
