"""Async GitHub API client.

Covers the handful of endpoints reviewer inference needs: the pull request
diff, the repository config file, organization membership, user lookups,
email search, and posting the final comment.

When ``enable_caching_for_debugging`` is set in the bot config, GET
responses are written to ``cache_dir`` and replayed on later runs, so the
algorithm can be iterated on without hammering (and getting banned by) the
API.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

import httpx

from blamewho.config import BotConfig
from blamewho.exceptions import GitHubError

logger = logging.getLogger("blamewho.github")

JSON_MEDIA_TYPE = "application/vnd.github.v3+json"
DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"
RAW_MEDIA_TYPE = "application/vnd.github.v3.raw"


class GitHubClient:
    """Thin async wrapper over the GitHub REST API."""

    def __init__(
        self,
        config: BotConfig,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self.token = token or config.github_token
        self.cache_dir = (
            Path(config.cache_dir) if config.enable_caching_for_debugging else None
        )

        headers = {"Accept": JSON_MEDIA_TYPE}
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        else:
            logger.warning("No GitHub token provided. Rate limits will be much lower.")

        self._client = httpx.AsyncClient(
            base_url=config.ghe.api_url,
            headers=headers,
            timeout=httpx.Timeout(30.0),
            transport=transport,
        )

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # -- reads ---------------------------------------------------------------

    async def fetch_diff(self, repo: str, number: int) -> str:
        """Unified diff of a pull request, or "" when it can't be fetched."""
        try:
            return await self._get_text(
                f"/repos/{repo}/pulls/{number}", accept=DIFF_MEDIA_TYPE
            )
        except (httpx.HTTPError, GitHubError) as e:
            logger.warning(f"Could not fetch diff for {repo}#{number}: {e}")
            return ""

    async def get_file_content(self, repo: str, path: str) -> str | None:
        """Raw contents of `path` on the default branch, None if it doesn't exist."""
        try:
            return await self._get_text(
                f"/repos/{repo}/contents/{path}", accept=RAW_MEDIA_TYPE
            )
        except GitHubError as e:
            if e.status_code == 404:
                return None
            raise

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return json.loads(await self._get_text(path, params=params))

    async def user_orgs(self, login: str) -> set[str]:
        orgs = await self.get_json(f"/users/{login}/orgs")
        return {org["login"] for org in orgs}

    async def search_user_by_email(self, email: str) -> str | None:
        result = await self.get_json("/search/users", params={"q": f"{email} in:email"})
        items = result.get("items") or []
        if not items:
            return None
        return items[0]["login"]

    async def get_user(self, login: str) -> dict[str, Any]:
        return await self.get_json(f"/users/{login}")

    # -- writes --------------------------------------------------------------

    async def create_comment(self, repo: str, number: int, body: str) -> None:
        try:
            response = await self._client.post(
                f"/repos/{repo}/issues/{number}/comments", json={"body": body}
            )
        except httpx.HTTPError as e:
            raise GitHubError(f"Could not comment on {repo}#{number}: {e}") from e
        if response.status_code >= 400:
            raise GitHubError(
                f"Could not comment on {repo}#{number}: {response.status_code}",
                status_code=response.status_code,
            )

    # -- internals -----------------------------------------------------------

    async def _get_text(
        self,
        path: str,
        accept: str = JSON_MEDIA_TYPE,
        params: dict[str, Any] | None = None,
    ) -> str:
        request = self._client.build_request(
            "GET", path, params=params, headers={"Accept": accept}
        )
        cache_file = self._cache_file(f"{request.url} {accept}")
        if cache_file is not None and cache_file.exists():
            logger.debug(f"Cache hit for {request.url}")
            return cache_file.read_text()

        logger.debug(f"GET {request.url}")
        response = await self._client.send(request)
        if response.status_code >= 400:
            raise GitHubError(
                f"GET {request.url} failed with {response.status_code}",
                status_code=response.status_code,
            )

        if cache_file is not None:
            cache_file.parent.mkdir(parents=True, exist_ok=True)
            cache_file.write_text(response.text)
        return response.text

    def _cache_file(self, key: str) -> Path | None:
        if self.cache_dir is None:
            return None
        return self.cache_dir / re.sub(r"[^a-zA-Z0-9\-_.]", "-", key)
