"""SQLAlchemy implementation of the profile repository."""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import (
    DeveloperProfile,
    EducationEntry,
    ExperienceEntry,
    OwnerSummary,
    empty_social,
)
from infrastructure.database.models import (
    DeveloperProfileModel,
    EducationModel,
    ExperienceModel,
)

# Columns an upsert overwrites on conflict; id, owner_id and created_at stay.
_REPLACED_COLUMNS = (
    "company",
    "website",
    "location",
    "status",
    "skills",
    "bio",
    "githubusername",
    "social",
    "updated_at",
)

ChildT = TypeVar("ChildT", ExperienceModel, EducationModel)


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_owner(self, owner_id: UUID) -> DeveloperProfile | None:
        """Get the profile owned by an account."""
        model = await self._get_model(owner_id)
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[DeveloperProfile]:
        """Get every profile, oldest first."""
        stmt = select(DeveloperProfileModel).order_by(DeveloperProfileModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_by_experience_id(self, entry_id: UUID) -> DeveloperProfile | None:
        """Get the profile whose experience list contains ``entry_id``."""
        stmt = (
            select(DeveloperProfileModel)
            .join(ExperienceModel, ExperienceModel.profile_id == DeveloperProfileModel.id)
            .where(ExperienceModel.id == entry_id)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_education_id(self, entry_id: UUID) -> DeveloperProfile | None:
        """Get the profile whose education list contains ``entry_id``."""
        stmt = (
            select(DeveloperProfileModel)
            .join(EducationModel, EducationModel.profile_id == DeveloperProfileModel.id)
            .where(EducationModel.id == entry_id)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def upsert(self, profile: DeveloperProfile) -> DeveloperProfile:
        """Create or replace scalar fields with one INSERT .. ON CONFLICT."""
        dialect = self._session.get_bind().dialect.name
        insert = pg_insert if dialect == "postgresql" else sqlite_insert

        now = datetime.utcnow()
        stmt = insert(DeveloperProfileModel).values(
            id=profile.id,
            owner_id=profile.owner_id,
            company=profile.company,
            website=profile.website,
            location=profile.location,
            status=profile.status,
            skills=list(profile.skills),
            bio=profile.bio,
            githubusername=profile.githubusername,
            social=dict(profile.social),
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[DeveloperProfileModel.owner_id],
            set_={column: stmt.excluded[column] for column in _REPLACED_COLUMNS},
        )
        await self._session.execute(stmt)

        model = await self._get_model(profile.owner_id)
        if model is None:
            raise ValueError(f"Profile for owner {profile.owner_id} vanished after upsert")
        return self._to_entity(model)

    async def save(self, profile: DeveloperProfile) -> DeveloperProfile:
        """Write the aggregate back, reconciling embedded entries by id."""
        model = await self._get_model(profile.owner_id)
        if not model:
            raise ValueError(f"Profile for owner {profile.owner_id} not found")

        model.company = profile.company
        model.website = profile.website
        model.location = profile.location
        model.status = profile.status
        model.skills = list(profile.skills)
        model.bio = profile.bio
        model.githubusername = profile.githubusername
        model.social = dict(profile.social)
        model.updated_at = profile.updated_at

        model.experience = self._reconcile(
            model.experience, profile.experience, ExperienceModel, self._copy_experience
        )
        model.education = self._reconcile(
            model.education, profile.education, EducationModel, self._copy_education
        )

        await self._session.flush()
        return self._to_entity(model)

    async def delete_for_owner(self, owner_id: UUID) -> bool:
        """Delete the owner's profile together with its entries."""
        model = await self._get_model(owner_id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _get_model(self, owner_id: UUID) -> DeveloperProfileModel | None:
        stmt = (
            select(DeveloperProfileModel)
            .where(DeveloperProfileModel.owner_id == owner_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _reconcile(
        current: Sequence[ChildT],
        entries: Sequence[Any],
        model_cls: type[ChildT],
        copy: Callable[[ChildT, Any], None],
    ) -> list[ChildT]:
        """Map entries onto child rows: reuse by id, create new, drop the rest."""
        by_id = {child.id: child for child in current}
        children: list[ChildT] = []
        for position, entry in enumerate(entries):
            child = by_id.get(entry.id) or model_cls(id=entry.id)
            copy(child, entry)
            child.position = position
            children.append(child)
        return children

    @staticmethod
    def _copy_experience(model: ExperienceModel, entry: ExperienceEntry) -> None:
        model.title = entry.title
        model.company = entry.company
        model.location = entry.location
        model.from_date = entry.from_date
        model.to_date = entry.to_date
        model.current = entry.current
        model.description = entry.description

    @staticmethod
    def _copy_education(model: EducationModel, entry: EducationEntry) -> None:
        model.school = entry.school
        model.degree = entry.degree
        model.fieldofstudy = entry.fieldofstudy
        model.from_date = entry.from_date
        model.to_date = entry.to_date
        model.current = entry.current
        model.description = entry.description

    def _to_entity(self, model: DeveloperProfileModel) -> DeveloperProfile:
        """Convert ORM model to domain entity."""
        owner = (
            OwnerSummary(
                id=model.owner.id,
                display_name=model.owner.display_name,
                avatar_url=model.owner.avatar_url,
            )
            if model.owner
            else None
        )
        return DeveloperProfile(
            id=model.id,
            owner_id=model.owner_id,
            company=model.company,
            website=model.website or "",
            location=model.location,
            status=model.status,
            skills=list(model.skills or []),
            bio=model.bio,
            githubusername=model.githubusername,
            social={**empty_social(), **(model.social or {})},
            experience=[
                ExperienceEntry(
                    id=exp.id,
                    title=exp.title,
                    company=exp.company,
                    location=exp.location,
                    from_date=exp.from_date,
                    to_date=exp.to_date,
                    current=bool(exp.current),
                    description=exp.description,
                )
                for exp in model.experience
            ],
            education=[
                EducationEntry(
                    id=edu.id,
                    school=edu.school,
                    degree=edu.degree,
                    fieldofstudy=edu.fieldofstudy,
                    from_date=edu.from_date,
                    to_date=edu.to_date,
                    current=bool(edu.current),
                    description=edu.description,
                )
                for edu in model.education
            ],
            owner=owner,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
