"""Integration tests for the SQLAlchemy profile repository."""

from datetime import date
from uuid import uuid4

import pytest

from domain.entities.profile import DeveloperProfile, EducationEntry, ExperienceEntry
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def _profile(owner_id, **overrides) -> DeveloperProfile:
    values = {"owner_id": owner_id, "status": "Developer", "skills": ["python"]}
    values.update(overrides)
    return DeveloperProfile(**values)


class TestSQLAlchemyProfileRepository:
    @pytest.mark.asyncio
    async def test_upsert_creates_then_replaces(self, uow_factory, test_account, test_user):
        async with uow_factory() as uow:
            created = await uow.profiles.upsert(_profile(test_user.id))
            await uow.commit()

        async with uow_factory() as uow:
            replaced = await uow.profiles.upsert(
                _profile(test_user.id, status="Senior", skills=["go"])
            )
            await uow.commit()

        assert replaced.id == created.id
        assert replaced.created_at == created.created_at
        assert replaced.status == "Senior"
        assert replaced.skills == ["go"]

    @pytest.mark.asyncio
    async def test_owner_summary_is_populated(self, uow_factory, test_account, test_user):
        async with uow_factory() as uow:
            profile = await uow.profiles.upsert(_profile(test_user.id))
            await uow.commit()

        assert profile.owner is not None
        assert profile.owner.display_name == "Test User"
        assert profile.owner.avatar_url == "https://gravatar.com/avatar/test"

    @pytest.mark.asyncio
    async def test_save_keeps_entry_order_and_ids(self, uow_factory, test_account, test_user):
        async with uow_factory() as uow:
            profile = await uow.profiles.upsert(_profile(test_user.id))
            await uow.commit()

        newest = ExperienceEntry(title="Lead", company="Globex", from_date=date(2021, 1, 1))
        oldest = ExperienceEntry(title="Dev", company="Initech", from_date=date(2018, 1, 1))
        profile.experience = [newest, oldest]
        profile.education = [
            EducationEntry(school="MIT", degree="BSc", fieldofstudy="CS", from_date=date(2012, 9, 1))
        ]
        async with uow_factory() as uow:
            await uow.profiles.save(profile)
            await uow.commit()

        async with uow_factory() as uow:
            loaded = await uow.profiles.get_by_owner(test_user.id)

        assert loaded is not None
        assert [e.id for e in loaded.experience] == [newest.id, oldest.id]
        assert loaded.education[0].school == "MIT"

    @pytest.mark.asyncio
    async def test_save_drops_removed_entries(self, uow_factory, test_account, test_user):
        keep = ExperienceEntry(title="Keep", company="A", from_date=date(2019, 1, 1))
        drop = ExperienceEntry(title="Drop", company="B", from_date=date(2018, 1, 1))
        async with uow_factory() as uow:
            profile = await uow.profiles.upsert(_profile(test_user.id))
            profile.experience = [keep, drop]
            await uow.profiles.save(profile)
            await uow.commit()

        profile.experience = [keep]
        async with uow_factory() as uow:
            await uow.profiles.save(profile)
            await uow.commit()

        async with uow_factory() as uow:
            loaded = await uow.profiles.get_by_owner(test_user.id)
            by_dropped = await uow.profiles.get_by_experience_id(drop.id)
            by_kept = await uow.profiles.get_by_experience_id(keep.id)

        assert [e.title for e in loaded.experience] == ["Keep"]
        assert by_dropped is None
        assert by_kept is not None and by_kept.id == profile.id

    @pytest.mark.asyncio
    async def test_get_by_education_id(self, uow_factory, test_account, test_user):
        entry = EducationEntry(
            school="ETH", degree="MSc", fieldofstudy="CS", from_date=date(2016, 9, 1)
        )
        async with uow_factory() as uow:
            profile = await uow.profiles.upsert(_profile(test_user.id))
            profile.education = [entry]
            await uow.profiles.save(profile)
            await uow.commit()

        async with uow_factory() as uow:
            found = await uow.profiles.get_by_education_id(entry.id)
            missing = await uow.profiles.get_by_education_id(uuid4())

        assert found is not None and found.owner_id == test_user.id
        assert missing is None

    @pytest.mark.asyncio
    async def test_delete_for_owner(self, uow_factory, test_account, test_user):
        async with uow_factory() as uow:
            await uow.profiles.upsert(_profile(test_user.id))
            await uow.commit()

        async with uow_factory() as uow:
            deleted = await uow.profiles.delete_for_owner(test_user.id)
            await uow.commit()
        async with uow_factory() as uow:
            again = await uow.profiles.delete_for_owner(test_user.id)
            remaining = await uow.profiles.get_all()

        assert deleted is True
        assert again is False
        assert remaining == []

    @pytest.mark.asyncio
    async def test_get_by_owner_missing(self, uow_factory):
        async with uow_factory() as uow:
            assert await uow.profiles.get_by_owner(uuid4()) is None


class TestSQLAlchemyUnitOfWork:
    @pytest.mark.asyncio
    async def test_repositories_require_context(self, session_factory):
        uow = SQLAlchemyUnitOfWork(session_factory)

        with pytest.raises(RuntimeError):
            uow.profiles

    @pytest.mark.asyncio
    async def test_uncommitted_work_is_discarded(self, uow_factory, test_account, test_user):
        async with uow_factory() as uow:
            await uow.profiles.upsert(_profile(test_user.id))

        async with uow_factory() as uow:
            assert await uow.profiles.get_by_owner(test_user.id) is None


class TestAccountAndPostRepositories:
    @pytest.mark.asyncio
    async def test_account_delete(self, uow_factory, session_factory, test_account, test_user):
        from infrastructure.database.models import AccountModel

        async with uow_factory() as uow:
            deleted = await uow.accounts.delete(test_user.id)
            await uow.commit()

        async with uow_factory() as uow:
            deleted_again = await uow.accounts.delete(test_user.id)
        async with session_factory() as session:
            remaining = await session.get(AccountModel, test_user.id)

        assert deleted is True
        assert deleted_again is False
        assert remaining is None

    @pytest.mark.asyncio
    async def test_delete_all_posts_for_author(
        self, uow_factory, session_factory, test_account, test_user
    ):
        from infrastructure.database.models import PostModel

        async with session_factory() as session:
            session.add_all(
                [
                    PostModel(author_id=test_user.id, text="one"),
                    PostModel(author_id=test_user.id, text="two"),
                ]
            )
            await session.commit()

        async with uow_factory() as uow:
            removed = await uow.posts.delete_all_for_author(test_user.id)
            await uow.commit()
        async with uow_factory() as uow:
            removed_again = await uow.posts.delete_all_for_author(test_user.id)

        assert removed == 2
        assert removed_again == 0


@pytest.fixture
async def file_session_factory(tmp_path):
    """SQLite file database so concurrent units of work get separate connections."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

    from infrastructure.database.models import Base

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'profiles.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


class TestConcurrentUpsert:
    @pytest.mark.asyncio
    async def test_two_upserts_for_one_owner_leave_one_whole_row(self, file_session_factory):
        import asyncio

        from domain.services.profile_service import ProfileService
        from infrastructure.database.models import AccountModel

        owner_id = uuid4()
        async with file_session_factory() as session:
            session.add(AccountModel(id=owner_id, email="race@example.com"))
            await session.commit()

        service = ProfileService(lambda: SQLAlchemyUnitOfWork(file_session_factory))
        payloads = [
            {"status": "Developer", "skills": "python", "website": "ada.dev", "bio": "one"},
            {"status": "Manager", "skills": "go, sql", "website": "grace.dev", "bio": "two"},
        ]

        await asyncio.gather(*(service.upsert(owner_id, **payload) for payload in payloads))

        profiles = await service.get_all()
        assert len(profiles) == 1
        stored = profiles[0]
        snapshot = (stored.status, stored.skills, stored.website, stored.bio)
        assert snapshot in [
            ("Developer", ["python"], "https://ada.dev", "one"),
            ("Manager", ["go", "sql"], "https://grace.dev", "two"),
        ]
