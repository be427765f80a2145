"""Public GitHub repository summary."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class RepoSummary:
    """The handful of repository attributes shown next to a profile."""

    id: int
    name: str
    full_name: str
    html_url: str
    description: str | None = None
    language: str | None = None
    stargazers_count: int = 0
    watchers_count: int = 0
    forks_count: int = 0
    created_at: datetime | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "RepoSummary":
        """Build from a GitHub REST repository object.

        Raises:
            KeyError, TypeError, ValueError: payload is not a repository object
        """
        created_at = payload.get("created_at")
        return cls(
            id=int(payload["id"]),
            name=str(payload["name"]),
            full_name=str(payload["full_name"]),
            html_url=str(payload["html_url"]),
            description=payload.get("description"),
            language=payload.get("language"),
            stargazers_count=int(payload.get("stargazers_count") or 0),
            watchers_count=int(payload.get("watchers_count") or 0),
            forks_count=int(payload.get("forks_count") or 0),
            created_at=(
                datetime.fromisoformat(created_at.replace("Z", "+00:00"))
                if created_at
                else None
            ),
        )
