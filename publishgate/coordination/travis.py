# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Deploy-once coordination through the Travis CI API.

Every job of the build matrix runs this. The flow for one job:
  1. List the jobs of the current build.
  2. A build with a single job is its own leader; its own test result decides.
  3. Elect the leader: the job named by BUILD_LEADER_ID, or else the job with
     the highest number in the build. Every other job returns None and stops.
  4. The leader returns False straight away if its own tests failed.
  5. Otherwise it polls the job list until every sibling has finished, and
     returns True only if each sibling passed or is allowed to fail.

Waiting for siblings is the only loop here. A failing request is not
retried; it raises HttpError and the gate reports it.
"""

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Awaitable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Callable, Optional

import httpx

from publishgate.config.schema import PublishGateConfig
from publishgate.coordination.base import BuildLeaderCoordinator, ElectionOptions
from publishgate.exceptions import CoordinatorError, CoordinatorTimeoutError, HttpError
from publishgate.logging.logger import get_logger

_logger: logging.Logger = get_logger(__name__)

TRAVIS_COM_API = "https://api.travis-ci.com"
TRAVIS_ORG_API = "https://api.travis-ci.org"
USER_AGENT = "publishgate/1.0"

FINISHED_STATES: frozenset[str] = frozenset({"passed", "failed", "errored", "canceled"})


@dataclass(frozen=True)
class TravisJob:
    """The bits of a Travis job record the election cares about."""

    id: int
    number: str
    state: str
    allow_failure: bool = False

    @property
    def index(self) -> int:
        return job_index(self.number)

    @property
    def finished(self) -> bool:
        return self.state in FINISHED_STATES


def job_index(number: str) -> int:
    """
    Position of a job inside its build.

    Travis numbers jobs "<build>.<job>", e.g. "1234.3" is the third job of
    build 1234. A bare "3" is accepted too.
    """
    tail = number.rsplit(".", 1)[-1]
    try:
        return int(tail)
    except ValueError as err:
        raise CoordinatorError(f"Cannot parse Travis job number '{number}'") from err


def _parse_jobs(payload: Any) -> list[TravisJob]:
    if not isinstance(payload, dict) or not isinstance(payload.get("jobs"), list):
        raise CoordinatorError("Travis API response has no 'jobs' list")
    return [
        TravisJob(
            id=int(raw["id"]),
            number=str(raw["number"]),
            state=str(raw.get("state", "")),
            allow_failure=bool(raw.get("allow_failure", False)),
        )
        for raw in payload["jobs"]
    ]


class TravisDeployOnceCoordinator(BuildLeaderCoordinator):
    """
    Elects the publishing job by looking at the build's job list.

    Args:
        token: Travis API token. If unset, the hosting token from the
            election options is exchanged for one.
        url: Travis API base for Enterprise installs. If unset, the
            repository visibility picks travis-ci.com (private) or
            travis-ci.org (public).
        api_path_prefix: Path appended to `url`.
        poll_interval: Seconds between job-list polls while waiting.
        max_wait: Give up after this many seconds of waiting. None waits
            until the CI system's own job timeout kills us.
        timeout: Per-request timeout for the self-managed client.
        client: Optional pre-built httpx.AsyncClient.
        sleep: Awaitable sleep used between polls.
    """

    name = "travis_deploy_once"

    def __init__(
        self,
        token: Optional[str] = None,
        url: Optional[str] = None,
        api_path_prefix: str = "",
        poll_interval: float = 10.0,
        max_wait: Optional[float] = None,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._token = token
        self._url = url
        self._api_path_prefix = api_path_prefix
        self._poll_interval = poll_interval
        self._max_wait = max_wait
        self._timeout = timeout
        self._client = client
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: PublishGateConfig) -> "TravisDeployOnceCoordinator":
        travis = config.travis
        return cls(
            token=travis.token,
            url=travis.url,
            api_path_prefix=travis.api_path_prefix or "",
            poll_interval=travis.poll_interval_seconds,
            max_wait=travis.max_wait_seconds,
            timeout=travis.request_timeout_seconds,
        )

    def api_base(self, is_private: Optional[bool]) -> str:
        if self._url:
            base = self._url.rstrip("/")
            prefix = self._api_path_prefix.strip("/")
            return f"{base}/{prefix}" if prefix else base
        return TRAVIS_COM_API if is_private else TRAVIS_ORG_API

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            yield client

    async def _access_token(
        self,
        client: httpx.AsyncClient,
        base: str,
        github_token: Optional[str],
    ) -> Optional[str]:
        if self._token:
            return self._token
        if not github_token:
            return None

        url = f"{base}/auth/github"
        response = await client.post(
            url,
            json={"github_token": github_token},
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )
        if response.status_code >= 400:
            raise HttpError(
                response.status_code,
                f"Travis token exchange returned {response.status_code}",
                url=url,
            )
        token = response.json().get("access_token")
        if not token:
            raise CoordinatorError("Travis token exchange returned no access_token")
        return str(token)

    async def _fetch_jobs(
        self,
        client: httpx.AsyncClient,
        base: str,
        build_id: str,
        token: Optional[str],
    ) -> list[TravisJob]:
        url = f"{base}/build/{build_id}/jobs"
        headers = {"Travis-API-Version": "3", "User-Agent": USER_AGENT}
        if token:
            headers["Authorization"] = f"token {token}"

        response = await client.get(url, headers=headers)
        if response.status_code >= 400:
            raise HttpError(
                response.status_code,
                f"Travis API returned {response.status_code} for build {build_id}",
                url=url,
            )
        return _parse_jobs(response.json())

    @staticmethod
    def _leader_index(jobs: list[TravisJob], leader_id: Optional[str]) -> int:
        if leader_id:
            return job_index(leader_id)
        return max(job.index for job in jobs)

    async def elect(self, options: ElectionOptions) -> Optional[bool]:
        env = options.environment
        if not env.build_id or not env.job_number:
            raise CoordinatorError(
                "TRAVIS_BUILD_ID and TRAVIS_JOB_NUMBER must be set to elect a build leader"
            )

        own_index = job_index(env.job_number)
        own_tests_failed = env.test_result == "1"
        base = self.api_base(options.is_private)

        async with self._session() as client:
            token = await self._access_token(client, base, options.github_token)
            jobs = await self._fetch_jobs(client, base, env.build_id, token)

            if len(jobs) <= 1:
                _logger.info("Single job build, no election needed")
                return not own_tests_failed

            leader = self._leader_index(jobs, env.leader_id)
            if own_index != leader:
                _logger.info(
                    "Not the build leader",
                    extra={"job_number": env.job_number, "leader_index": leader},
                )
                return None

            if own_tests_failed:
                _logger.info("Build leader's own tests failed")
                return False

            started = time.monotonic()
            while True:
                others = [job for job in jobs if job.index != own_index]
                pending = [job for job in others if not job.finished]
                if not pending:
                    break

                if self._max_wait is not None and time.monotonic() - started >= self._max_wait:
                    raise CoordinatorTimeoutError(
                        f"Gave up after {self._max_wait}s waiting for "
                        f"{len(pending)} job(s) in build {env.build_id}"
                    )

                _logger.info(
                    "Waiting for sibling jobs",
                    extra={
                        "build_id": env.build_id,
                        "pending": [job.number for job in pending],
                    },
                )
                await self._sleep(self._poll_interval)
                jobs = await self._fetch_jobs(client, base, env.build_id, token)

        failed = [job.number for job in others if not (job.allow_failure or job.state == "passed")]
        if failed:
            _logger.info("Sibling jobs failed", extra={"failed_jobs": failed})
            return False
        return True
