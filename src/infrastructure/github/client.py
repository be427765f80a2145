"""GitHub REST client for public repository listings."""

from typing import Any, Optional
from urllib.parse import quote

import httpx

from core.config import settings


class GitHubClient:
    """Thin async client over the GitHub REST API.

    Errors are not handled here: transport failures, timeouts and non-2xx
    responses surface as ``httpx`` exceptions for the caller to interpret.
    """

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        client_id: str = settings.github_client_id,
        client_secret: str = settings.github_client_secret,
        timeout: float = settings.github_timeout_seconds,
        per_page: int = settings.github_repos_per_page,
        user_agent: str = settings.github_user_agent,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth = (client_id, client_secret) if client_id and client_secret else None
        self._timeout = timeout
        self._per_page = per_page
        self._user_agent = user_agent
        self._transport = transport

    async def list_public_repos(self, username: str) -> Any:
        """Fetch the oldest ``per_page`` public repositories of ``username``."""
        url = f"{self._base_url}/users/{quote(username, safe='')}/repos"
        params = {
            "per_page": self._per_page,
            "sort": "created",
            "direction": "asc",
        }
        headers = {
            "User-Agent": self._user_agent,
            "Accept": "application/vnd.github+json",
        }

        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.get(
                url,
                params=params,
                headers=headers,
                auth=self._auth,
            )
            response.raise_for_status()
            return response.json()
