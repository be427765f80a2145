"""Profile service layer: the single entry point for aggregate mutation."""

from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any, Callable, List, Optional
from uuid import UUID

import structlog

from core.exceptions import (
    EducationNotFoundError,
    ExperienceNotFoundError,
    InvalidIdentifierError,
    ProfileNotFoundError,
    SubDocumentNotFound,
    ValidationFailure,
)
from domain.entities.profile import DeveloperProfile, EducationEntry, ExperienceEntry
from domain.normalizers import normalize_skills, normalize_social, normalize_url
from domain.repositories.unit_of_work import IUnitOfWork
from domain.subdocuments import add_entry, remove_entry, update_entry

logger = structlog.get_logger()

FROM_DATE_MESSAGE = "From date is required and needs to be from the past"


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_required(
    errors: list[dict[str, str]], values: Mapping[str, Any], required: Mapping[str, str]
) -> None:
    for field_name, message in required.items():
        if _blank(values.get(field_name)):
            errors.append({"field": field_name, "message": message})


def _check_date_range(
    errors: list[dict[str, str]], from_date: date | None, to_date: date | None
) -> None:
    if from_date is None:
        errors.append({"field": "from_date", "message": FROM_DATE_MESSAGE})
    elif to_date is not None and not from_date < to_date:
        errors.append({"field": "from_date", "message": FROM_DATE_MESSAGE})


def validate_experience(entry: ExperienceEntry) -> None:
    """Raise ValidationFailure unless the entry satisfies its field rules."""
    errors: list[dict[str, str]] = []
    _check_required(
        errors,
        {"title": entry.title, "company": entry.company},
        {"title": "Title is required", "company": "Company is required"},
    )
    _check_date_range(errors, entry.from_date, entry.to_date)
    if errors:
        raise ValidationFailure(errors)


def validate_education(entry: EducationEntry) -> None:
    """Raise ValidationFailure unless the entry satisfies its field rules."""
    errors: list[dict[str, str]] = []
    _check_required(
        errors,
        {"school": entry.school, "degree": entry.degree, "fieldofstudy": entry.fieldofstudy},
        {
            "school": "School is required",
            "degree": "Degree is required",
            "fieldofstudy": "Field of study is required",
        },
    )
    _check_date_range(errors, entry.from_date, entry.to_date)
    if errors:
        raise ValidationFailure(errors)


class ProfileService:
    """Service layer for the developer profile aggregate."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    # --- reads ---

    async def get_by_owner(self, owner_id: UUID) -> DeveloperProfile:
        """Get the profile of the authenticated owner."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_owner(owner_id)
            if not profile:
                raise ProfileNotFoundError(str(owner_id))
            return profile

    async def get_all(self) -> List[DeveloperProfile]:
        """List every profile."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_all()  # type: ignore[no-any-return]

    async def get_by_owner_id(self, public_id: str) -> DeveloperProfile:
        """Get a profile by its owner's public identifier.

        The identifier is checked for syntax before any lookup happens.
        """
        try:
            owner_id = UUID(public_id)
        except (TypeError, ValueError) as e:
            raise InvalidIdentifierError(public_id) from e
        return await self.get_by_owner(owner_id)

    # --- scalar fields ---

    async def upsert(
        self,
        owner_id: UUID,
        *,
        status: Optional[str],
        skills: str | Sequence[str] | None,
        company: Optional[str] = None,
        website: Optional[str] = None,
        location: Optional[str] = None,
        bio: Optional[str] = None,
        githubusername: Optional[str] = None,
        social: Optional[Mapping[str, Optional[str]]] = None,
    ) -> DeveloperProfile:
        """Create the owner's profile or replace its scalar fields."""
        normalized_skills = normalize_skills(skills)
        errors: list[dict[str, str]] = []
        if _blank(status):
            errors.append({"field": "status", "message": "Status is required"})
        if not normalized_skills:
            errors.append({"field": "skills", "message": "Skills is required"})
        if errors:
            raise ValidationFailure(errors)

        profile = DeveloperProfile(
            owner_id=owner_id,
            status=status.strip(),  # type: ignore[union-attr]
            company=company,
            website=normalize_url(website, field="website"),
            location=location,
            skills=normalized_skills,
            bio=bio,
            githubusername=githubusername,
            social=normalize_social(social),
        )

        async with self._uow_factory() as uow:
            stored = await uow.profiles.upsert(profile)
            await uow.commit()

        logger.info("profile_upserted", owner_id=str(owner_id), profile_id=str(stored.id))
        return stored  # type: ignore[no-any-return]

    # --- experience ---

    async def add_experience(
        self,
        owner_id: UUID,
        *,
        title: str,
        company: str,
        from_date: date,
        location: Optional[str] = None,
        to_date: Optional[date] = None,
        current: bool = False,
        description: Optional[str] = None,
    ) -> DeveloperProfile:
        """Insert a new experience entry at the head of the owner's list."""
        entry = ExperienceEntry(
            title=title,
            company=company,
            from_date=from_date,
            location=location,
            to_date=to_date,
            current=current,
            description=description,
        )
        validate_experience(entry)

        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, owner_id)
            profile.experience = add_entry(profile.experience, entry)
            profile.touch()
            saved = await uow.profiles.save(profile)
            await uow.commit()

        logger.info(
            "experience_added",
            owner_id=str(owner_id),
            entry_id=str(saved.experience[0].id),
        )
        return saved  # type: ignore[no-any-return]

    async def update_experience(
        self, entry_id: UUID, patch: Mapping[str, Any]
    ) -> DeveloperProfile:
        """Patch an experience entry wherever it lives.

        The lookup spans every profile and is not scoped to the caller.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_experience_id(entry_id)
            if not profile:
                raise ExperienceNotFoundError(str(entry_id))
            try:
                profile.experience = update_entry(profile.experience, entry_id, patch)
            except SubDocumentNotFound as e:
                raise ExperienceNotFoundError(str(entry_id)) from e
            validate_experience(_find(profile.experience, entry_id))
            profile.touch()
            saved = await uow.profiles.save(profile)
            await uow.commit()

        logger.info("experience_updated", entry_id=str(entry_id), owner_id=str(saved.owner_id))
        return saved  # type: ignore[no-any-return]

    async def remove_experience(self, owner_id: UUID, entry_id: UUID) -> DeveloperProfile:
        """Remove an experience entry from the owner's list. Idempotent."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, owner_id)
            profile.experience = remove_entry(profile.experience, entry_id)
            profile.touch()
            saved = await uow.profiles.save(profile)
            await uow.commit()

        logger.info("experience_removed", owner_id=str(owner_id), entry_id=str(entry_id))
        return saved  # type: ignore[no-any-return]

    # --- education ---

    async def add_education(
        self,
        owner_id: UUID,
        *,
        school: str,
        degree: str,
        fieldofstudy: str,
        from_date: date,
        to_date: Optional[date] = None,
        current: bool = False,
        description: Optional[str] = None,
    ) -> DeveloperProfile:
        """Insert a new education entry at the head of the owner's list."""
        entry = EducationEntry(
            school=school,
            degree=degree,
            fieldofstudy=fieldofstudy,
            from_date=from_date,
            to_date=to_date,
            current=current,
            description=description,
        )
        validate_education(entry)

        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, owner_id)
            profile.education = add_entry(profile.education, entry)
            profile.touch()
            saved = await uow.profiles.save(profile)
            await uow.commit()

        logger.info(
            "education_added",
            owner_id=str(owner_id),
            entry_id=str(saved.education[0].id),
        )
        return saved  # type: ignore[no-any-return]

    async def update_education(
        self, entry_id: UUID, patch: Mapping[str, Any]
    ) -> DeveloperProfile:
        """Patch an education entry wherever it lives (same lookup as experience)."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_education_id(entry_id)
            if not profile:
                raise EducationNotFoundError(str(entry_id))
            try:
                profile.education = update_entry(profile.education, entry_id, patch)
            except SubDocumentNotFound as e:
                raise EducationNotFoundError(str(entry_id)) from e
            validate_education(_find(profile.education, entry_id))
            profile.touch()
            saved = await uow.profiles.save(profile)
            await uow.commit()

        logger.info("education_updated", entry_id=str(entry_id), owner_id=str(saved.owner_id))
        return saved  # type: ignore[no-any-return]

    async def remove_education(self, owner_id: UUID, entry_id: UUID) -> DeveloperProfile:
        """Remove an education entry from the owner's list. Idempotent."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, owner_id)
            profile.education = remove_entry(profile.education, entry_id)
            profile.touch()
            saved = await uow.profiles.save(profile)
            await uow.commit()

        logger.info("education_removed", owner_id=str(owner_id), entry_id=str(entry_id))
        return saved  # type: ignore[no-any-return]

    async def _require_profile(self, uow: IUnitOfWork, owner_id: UUID) -> DeveloperProfile:
        """Load the owner's profile; sub-document writes never create one."""
        profile = await uow.profiles.get_by_owner(owner_id)
        if not profile:
            raise ProfileNotFoundError(str(owner_id))
        return profile


def _find(entries: Sequence[Any], entry_id: UUID) -> Any:
    return next(entry for entry in entries if entry.id == entry_id)
