"""GitHub enrichment service.

Independent of the profile store: it is keyed by public GitHub handle and any
failure collapses to ``EnrichmentUnavailableError``.
"""

import re
from typing import Any, List, Protocol

import httpx
import structlog

from core.exceptions import EnrichmentUnavailableError
from domain.entities.repo_summary import RepoSummary

logger = structlog.get_logger()

# GitHub logins: alphanumerics and single hyphens, at most 39 characters.
_HANDLE_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9]|-(?=[A-Za-z0-9])){0,38}$")


class IGitHubClient(Protocol):
    """Anything able to list a user's public repositories."""

    async def list_public_repos(self, username: str) -> Any:
        ...


class GitHubService:
    """Service layer for public repository enrichment."""

    def __init__(self, client: IGitHubClient) -> None:
        self._client = client

    async def fetch_public_repos(self, username: str) -> List[RepoSummary]:
        """List a handle's public repositories, oldest first."""
        if not _HANDLE_RE.match(username):
            logger.warning("github_lookup_rejected", username=username, reason="invalid_handle")
            raise EnrichmentUnavailableError(username)

        try:
            payload = await self._client.list_public_repos(username)
        except httpx.HTTPStatusError as e:
            logger.warning(
                "github_lookup_failed",
                username=username,
                status_code=e.response.status_code,
            )
            raise EnrichmentUnavailableError(username) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(
                "github_lookup_failed",
                username=username,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise EnrichmentUnavailableError(username) from e

        try:
            if not isinstance(payload, list):
                raise TypeError(f"expected a list, got {type(payload).__name__}")
            return [RepoSummary.from_payload(item) for item in payload]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(
                "github_payload_malformed",
                username=username,
                error=str(e),
            )
            raise EnrichmentUnavailableError(username) from e
