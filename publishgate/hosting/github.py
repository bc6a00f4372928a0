# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Repository visibility lookup against the GitHub REST API.

The deploy-once coordinator needs to know whether a repository is private,
because private and public repositories are built on different Travis
endpoints. This module answers that one question and nothing else.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from publishgate.exceptions import HttpError
from publishgate.hosting.repo_url import RepoSlug
from publishgate.logging.logger import get_logger

_logger: logging.Logger = get_logger(__name__)

DEFAULT_GITHUB_URL = "https://api.github.com"
USER_AGENT = "publishgate/1.0"


class RepositoryMetadataLookup(ABC):
    """
    Contract for anything that can tell whether a repository is private.

    Implementations raise on failure; the gate forwards the exception as-is.
    """

    @abstractmethod
    async def is_private(self, slug: RepoSlug) -> bool:
        ...


def build_api_base(url: Optional[str], api_path_prefix: Optional[str]) -> str:
    """Join the API base URL and an Enterprise path prefix, without doubled slashes."""
    base = (url or DEFAULT_GITHUB_URL).rstrip("/")
    prefix = (api_path_prefix or "").strip("/")
    return f"{base}/{prefix}" if prefix else base


class GitHubRepositoryLookup(RepositoryMetadataLookup):
    """
    Reads `GET /repos/{owner}/{repo}` and returns its `private` field.

    Args:
        token: API token, sent as `Authorization: token <token>`.
        url: API base URL; defaults to https://api.github.com.
        api_path_prefix: Extra path segment for GitHub Enterprise (e.g. "api/v3").
        client: Optional pre-built httpx.AsyncClient. When omitted, a client
            is opened and closed per call.
        timeout: Request timeout in seconds for the self-managed client.
    """

    def __init__(
        self,
        token: Optional[str],
        url: Optional[str] = None,
        api_path_prefix: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ) -> None:
        self._token = token
        self._base = build_api_base(url, api_path_prefix)
        self._client = client
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
        if self._token:
            headers["Authorization"] = f"token {self._token}"
        return headers

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        return await client.get(url, headers=self._headers())

    async def is_private(self, slug: RepoSlug) -> bool:
        url = f"{self._base}/repos/{slug.owner}/{slug.repo}"

        if self._client is not None:
            response = await self._get(self._client, url)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await self._get(client, url)

        if response.status_code >= 400:
            _logger.error(
                "Repository lookup failed",
                extra={"repository": str(slug), "status": response.status_code},
            )
            raise HttpError(
                response.status_code,
                f"GitHub API returned {response.status_code} for {slug}",
                url=url,
            )

        private = bool(response.json().get("private", False))
        _logger.debug(
            "Repository visibility resolved",
            extra={"repository": str(slug), "private": private},
        )
        return private
