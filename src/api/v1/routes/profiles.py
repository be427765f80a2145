"""Profile API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import (
    get_account_service,
    get_github_service,
    get_profile_service,
)
from api.v1.schemas.common import ErrorResponse, MessageResponse
from api.v1.schemas.profile import (
    EducationCreate,
    EducationUpdate,
    ExperienceCreate,
    ExperienceUpdate,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileResponse,
    ProfileUpsert,
    RepoListResponse,
    RepoSummaryResponse,
)
from core.exceptions import InvalidIdentifierError
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import DeveloperProfile
from domain.services.account_service import AccountService
from domain.services.github_service import GitHubService
from domain.services.profile_service import ProfileService

router = APIRouter(
    prefix="/profiles",
    tags=["profiles"],
    responses={500: {"model": ErrorResponse, "description": "Server error"}},
)


def _detail(profile: DeveloperProfile) -> ProfileDetailResponse:
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile))


def _entry_id(value: str, kind: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as e:
        raise InvalidIdentifierError(value, kind=kind) from e


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get my profile",
    responses={404: {"description": "No profile for this user"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the authenticated user's profile."""
    return _detail(await service.get_by_owner(user.id))


@router.post(
    "",
    response_model=ProfileDetailResponse,
    summary="Create or update my profile",
    responses={400: {"description": "Missing status or skills, or malformed URL"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Create the profile on first call, replace its scalar fields afterwards."""
    profile = await service.upsert(
        user.id,
        status=body.status,
        skills=body.skills,
        company=body.company,
        website=body.website,
        location=body.location,
        bio=body.bio,
        githubusername=body.githubusername,
        social=body.social_links(),
    )
    return _detail(profile)


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Get every developer profile."""
    profiles = await service.get_all()
    return ProfileListResponse(
        data=[ProfileResponse.model_validate(profile) for profile in profiles]
    )


@router.get(
    "/user/{user_id}",
    response_model=ProfileDetailResponse,
    summary="Get a profile by user ID",
    responses={
        400: {"description": "Invalid user ID"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get a profile by its owner's ID."""
    return _detail(await service.get_by_owner_id(user_id))


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete my profile, posts and account",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """Remove posts, profile and account, in that order."""
    await service.delete_owner(user.id)
    return MessageResponse(message="User deleted")


# --- experience ---


@router.put(
    "/experience",
    response_model=ProfileDetailResponse,
    summary="Add an experience entry",
    responses={
        400: {"description": "Missing fields or from date not before to date"},
        404: {"description": "No profile for this user"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Add an experience entry at the top of the list."""
    profile = await service.add_experience(user.id, **body.model_dump())
    return _detail(profile)


@router.put(
    "/experience/{exp_id}",
    response_model=ProfileDetailResponse,
    summary="Update an experience entry",
    responses={404: {"description": "Experience not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_experience(
    request: Request,
    exp_id: str,
    body: ExperienceUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Patch the fields supplied in the body."""
    profile = await service.update_experience(
        _entry_id(exp_id, "experience"), body.model_dump(exclude_unset=True)
    )
    return _detail(profile)


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileDetailResponse,
    summary="Delete an experience entry",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_experience(
    request: Request,
    exp_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Remove an experience entry. Unknown IDs leave the profile unchanged."""
    profile = await service.remove_experience(user.id, _entry_id(exp_id, "experience"))
    return _detail(profile)


# --- education ---


@router.put(
    "/education",
    response_model=ProfileDetailResponse,
    summary="Add an education entry",
    responses={
        400: {"description": "Missing fields or from date not before to date"},
        404: {"description": "No profile for this user"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Add an education entry at the top of the list."""
    profile = await service.add_education(user.id, **body.model_dump())
    return _detail(profile)


@router.put(
    "/education/{edu_id}",
    response_model=ProfileDetailResponse,
    summary="Update an education entry",
    responses={404: {"description": "Education not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_education(
    request: Request,
    edu_id: str,
    body: EducationUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Patch the fields supplied in the body."""
    profile = await service.update_education(
        _entry_id(edu_id, "education"), body.model_dump(exclude_unset=True)
    )
    return _detail(profile)


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileDetailResponse,
    summary="Delete an education entry",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_education(
    request: Request,
    edu_id: str,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Remove an education entry. Unknown IDs leave the profile unchanged."""
    profile = await service.remove_education(user.id, _entry_id(edu_id, "education"))
    return _detail(profile)


# --- GitHub enrichment ---


@router.get(
    "/github/{username}",
    response_model=RepoListResponse,
    summary="List a GitHub user's public repositories",
    responses={404: {"description": "No Github profile found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_github_repos(
    request: Request,
    username: str,
    service: GitHubService = Depends(get_github_service),
) -> RepoListResponse:
    """Get the five oldest public repositories of a GitHub user."""
    repos = await service.fetch_public_repos(username)
    return RepoListResponse(data=[RepoSummaryResponse.model_validate(repo) for repo in repos])
