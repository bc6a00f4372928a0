# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Extract owner and repository name from a git remote URL.

Accepted forms:
  https://github.com/owner/repo
  https://github.com/owner/repo.git
  git+https://user@github.com/owner/repo.git
  ssh://git@github.com/owner/repo.git
  git@github.com:owner/repo.git

Anything else yields None and the gate reports INVALID_REPO_URL.
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

_SCP_LIKE = re.compile(r"^(?:[\w.-]+@)?(?P<host>[\w.-]+):(?P<path>[^/].*)$")


@dataclass(frozen=True)
class RepoSlug:
    """Owner/repo pair as the hosting API expects it."""

    owner: str
    repo: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}"


def _split_path(path: str) -> Optional[RepoSlug]:
    parts = [p for p in path.strip("/").split("/") if p]
    if len(parts) < 2:
        return None

    owner, repo = parts[0], parts[1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not owner or not repo:
        return None
    return RepoSlug(owner=owner, repo=repo)


def parse_repository_url(url: Optional[str]) -> Optional[RepoSlug]:
    """Return the owner/repo of `url`, or None if it cannot be extracted."""
    if not url:
        return None
    url = url.strip()

    if "://" in url:
        parts = urlsplit(url)
        if not parts.hostname:
            return None
        return _split_path(parts.path)

    match = _SCP_LIKE.match(url)
    if match is None:
        return None
    return _split_path(match.group("path"))
