"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

_FROM = AliasChoices("from", "from_date")
_TO = AliasChoices("to", "to_date")


class ProfileUpsert(BaseModel):
    """Schema for creating or replacing a profile.

    ``skills`` may be a list or a comma-separated string.
    """

    status: str = Field(..., min_length=1, max_length=255)
    skills: list[str] | str
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=2048)
    location: str | None = Field(None, max_length=255)
    bio: str | None = None
    githubusername: str | None = Field(None, max_length=100)
    youtube: str | None = Field(None, max_length=2048)
    twitter: str | None = Field(None, max_length=2048)
    instagram: str | None = Field(None, max_length=2048)
    linkedin: str | None = Field(None, max_length=2048)
    facebook: str | None = Field(None, max_length=2048)

    def social_links(self) -> dict[str, str | None]:
        """Social network links keyed by network name."""
        return {
            "youtube": self.youtube,
            "twitter": self.twitter,
            "instagram": self.instagram,
            "linkedin": self.linkedin,
            "facebook": self.facebook,
        }


class ExperienceCreate(BaseModel):
    """Schema for adding an experience entry."""

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)
    from_date: date = Field(..., validation_alias=_FROM)
    to_date: date | None = Field(None, validation_alias=_TO)
    current: bool = False
    description: str | None = None


class ExperienceUpdate(BaseModel):
    """Schema for patching an experience entry (all fields optional)."""

    title: str | None = Field(None, min_length=1, max_length=255)
    company: str | None = Field(None, min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)
    from_date: date | None = Field(None, validation_alias=_FROM)
    to_date: date | None = Field(None, validation_alias=_TO)
    current: bool = False
    description: str | None = None


class EducationCreate(BaseModel):
    """Schema for adding an education entry."""

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    fieldofstudy: str = Field(..., min_length=1, max_length=255)
    from_date: date = Field(..., validation_alias=_FROM)
    to_date: date | None = Field(None, validation_alias=_TO)
    current: bool = False
    description: str | None = None


class EducationUpdate(BaseModel):
    """Schema for patching an education entry (all fields optional)."""

    school: str | None = Field(None, min_length=1, max_length=255)
    degree: str | None = Field(None, min_length=1, max_length=255)
    fieldofstudy: str | None = Field(None, min_length=1, max_length=255)
    from_date: date | None = Field(None, validation_alias=_FROM)
    to_date: date | None = Field(None, validation_alias=_TO)
    current: bool = False
    description: str | None = None


class ExperienceResponse(BaseModel):
    """Schema for an experience entry."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    company: str
    location: str | None
    from_date: date = Field(serialization_alias="from")
    to_date: date | None = Field(serialization_alias="to")
    current: bool
    description: str | None


class EducationResponse(BaseModel):
    """Schema for an education entry."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    school: str
    degree: str
    fieldofstudy: str
    from_date: date = Field(serialization_alias="from")
    to_date: date | None = Field(serialization_alias="to")
    current: bool
    description: str | None


class OwnerResponse(BaseModel):
    """Public view of the owning account."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    display_name: str | None
    avatar_url: str | None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "owner_id": "223e4567-e89b-12d3-a456-426614174000",
                "owner": {
                    "id": "223e4567-e89b-12d3-a456-426614174000",
                    "display_name": "Ada Lovelace",
                    "avatar_url": None,
                },
                "company": "Analytical Engines",
                "website": "https://ada.dev",
                "location": "London",
                "status": "Developer",
                "skills": ["python", "sql"],
                "bio": None,
                "githubusername": "ada",
                "social": {
                    "youtube": "",
                    "twitter": "https://twitter.com/ada",
                    "instagram": "",
                    "linkedin": "",
                    "facebook": "",
                },
                "experience": [],
                "education": [],
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    owner_id: UUID
    owner: OwnerResponse | None = None
    company: str | None
    website: str
    location: str | None
    status: str
    skills: list[str]
    bio: str | None
    githubusername: str | None
    social: dict[str, str]
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    created_at: datetime
    updated_at: datetime


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class ProfileListResponse(BaseModel):
    """Schema for list of Profiles."""

    data: list[ProfileResponse]


class RepoSummaryResponse(BaseModel):
    """Schema for a public GitHub repository."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    full_name: str
    html_url: str
    description: str | None
    language: str | None
    stargazers_count: int
    watchers_count: int
    forks_count: int
    created_at: datetime | None


class RepoListResponse(BaseModel):
    """Schema for list of GitHub repositories."""

    data: list[RepoSummaryResponse]
