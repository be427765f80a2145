"""Developer profile aggregate and its embedded entries."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4

SOCIAL_NETWORKS: tuple[str, ...] = ("youtube", "twitter", "instagram", "linkedin", "facebook")


def empty_social() -> dict[str, str]:
    """Social mapping with every supported network present and unset."""
    return {network: "" for network in SOCIAL_NETWORKS}


@dataclass
class ExperienceEntry:
    """A single work-experience entry embedded in a profile."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class EducationEntry:
    """A single education entry embedded in a profile."""

    school: str
    degree: str
    fieldofstudy: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class OwnerSummary:
    """Public view of the account that owns a profile."""

    id: UUID
    display_name: str | None = None
    avatar_url: str | None = None


@dataclass
class DeveloperProfile:
    """Profile aggregate: one per owner, holding scalars and ordered entries."""

    owner_id: UUID
    status: str
    id: UUID = field(default_factory=uuid4)
    company: str | None = None
    website: str = ""
    location: str | None = None
    skills: list[str] = field(default_factory=list)
    bio: str | None = None
    githubusername: str | None = None
    social: dict[str, str] = field(default_factory=empty_social)
    experience: list[ExperienceEntry] = field(default_factory=list)
    education: list[EducationEntry] = field(default_factory=list)
    owner: OwnerSummary | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def touch(self) -> None:
        """Bump the modification timestamp."""
        self.updated_at = datetime.utcnow()
