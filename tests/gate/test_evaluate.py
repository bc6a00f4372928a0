# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the full gate: election results and the visibility lookup variant.

Every test here starts from an environment that passes the local guards,
so the outcome depends only on the collaborators.
"""

import asyncio
from typing import Optional

import pytest

from publishgate.config.schema import GateConfig, GitHubConfig, PublishGateConfig
from publishgate.coordination.base import BuildLeaderCoordinator, ElectionOptions
from publishgate.environment import EnvironmentSnapshot
from publishgate.exceptions import HttpError
from publishgate.gate import codes
from publishgate.gate.core import evaluate
from publishgate.gate.outcome import Blocked, Failed, Proceed
from publishgate.hosting.github import RepositoryMetadataLookup
from publishgate.hosting.repo_url import RepoSlug


class RecordingCoordinator(BuildLeaderCoordinator):
    """Returns a fixed result (or raises) and remembers what it was asked."""

    name = "recording"

    def __init__(self, result: Optional[bool] = True, error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[ElectionOptions] = []

    async def elect(self, options: ElectionOptions) -> Optional[bool]:
        self.calls.append(options)
        if self.error is not None:
            raise self.error
        return self.result


class FixedLookup(RepositoryMetadataLookup):
    def __init__(self, private: bool = False, error: Optional[Exception] = None) -> None:
        self.private = private
        self.error = error
        self.slugs: list[RepoSlug] = []

    async def is_private(self, slug: RepoSlug) -> bool:
        self.slugs.append(slug)
        if self.error is not None:
            raise self.error
        return self.private


def _run(config, env, coordinator, lookup=None):  # type: ignore[no-untyped-def]
    return asyncio.run(evaluate(config, env, coordinator, repo_lookup=lookup))


class TestElectionResults:
    def test_true_proceeds(self, master_config, release_env) -> None:  # type: ignore[no-untyped-def]
        outcome = _run(master_config, release_env, RecordingCoordinator(True))
        assert isinstance(outcome, Proceed)
        assert outcome.ok

    def test_none_is_not_leader(self, master_config, release_env) -> None:  # type: ignore[no-untyped-def]
        outcome = _run(master_config, release_env, RecordingCoordinator(None))
        assert isinstance(outcome, Blocked)
        assert outcome.code == codes.NOT_LEADER

    def test_false_is_others_failed(self, master_config, release_env) -> None:  # type: ignore[no-untyped-def]
        outcome = _run(master_config, release_env, RecordingCoordinator(False))
        assert isinstance(outcome, Blocked)
        assert outcome.code == codes.OTHERS_FAILED

    def test_error_is_passed_through_unwrapped(self, master_config, release_env) -> None:  # type: ignore[no-untyped-def]
        error = RuntimeError("ledger unreachable")
        outcome = _run(master_config, release_env, RecordingCoordinator(error=error))
        assert isinstance(outcome, Failed)
        assert outcome.error is error

    def test_coordinator_receives_environment_and_token(self, release_env) -> None:  # type: ignore[no-untyped-def]
        config = PublishGateConfig(github=GitHubConfig(token="gh-secret"))
        coordinator = RecordingCoordinator(True)
        _run(config, release_env, coordinator)

        assert len(coordinator.calls) == 1
        options = coordinator.calls[0]
        assert options.environment is release_env
        assert options.github_token == "gh-secret"
        assert options.is_private is None


class TestVisibilityLookup:
    def _config(self, url: Optional[str]) -> PublishGateConfig:
        return PublishGateConfig(gate=GateConfig(repository_url=url))

    def test_private_flag_is_forwarded(self, release_env) -> None:  # type: ignore[no-untyped-def]
        coordinator = RecordingCoordinator(True)
        lookup = FixedLookup(private=True)
        outcome = _run(
            self._config("https://github.com/owner/repo.git"), release_env, coordinator, lookup
        )

        assert isinstance(outcome, Proceed)
        assert lookup.slugs == [RepoSlug("owner", "repo")]
        assert coordinator.calls[0].is_private is True

    def test_public_flag_is_forwarded(self, release_env) -> None:  # type: ignore[no-untyped-def]
        coordinator = RecordingCoordinator(True)
        _run(
            self._config("git@github.com:owner/repo.git"),
            release_env,
            coordinator,
            FixedLookup(private=False),
        )
        assert coordinator.calls[0].is_private is False

    def test_http_failure_short_circuits(self, release_env) -> None:  # type: ignore[no-untyped-def]
        coordinator = RecordingCoordinator(True)
        error = HttpError(401, "Bad credentials")
        outcome = _run(
            self._config("https://github.com/owner/repo.git"),
            release_env,
            coordinator,
            FixedLookup(error=error),
        )

        assert isinstance(outcome, Failed)
        assert outcome.error is error
        assert outcome.code == 401
        assert coordinator.calls == []

    @pytest.mark.parametrize("url", ["invalid_url", None, "https://github.com/owner"])
    def test_unparsable_url_blocks_without_network(self, release_env, url) -> None:  # type: ignore[no-untyped-def]
        coordinator = RecordingCoordinator(True)
        lookup = FixedLookup()
        outcome = _run(self._config(url), release_env, coordinator, lookup)

        assert isinstance(outcome, Blocked)
        assert outcome.code == codes.INVALID_REPO_URL
        assert lookup.slugs == []
        assert coordinator.calls == []

    def test_url_is_ignored_without_lookup(self, release_env) -> None:  # type: ignore[no-untyped-def]
        outcome = _run(self._config("invalid_url"), release_env, RecordingCoordinator(True))
        assert isinstance(outcome, Proceed)

    def test_guards_run_before_lookup(self) -> None:
        lookup = FixedLookup()
        env = EnvironmentSnapshot({"TRAVIS": "true", "TRAVIS_PULL_REQUEST": "3"})
        outcome = _run(
            self._config("https://github.com/owner/repo"), env, RecordingCoordinator(), lookup
        )
        assert isinstance(outcome, Blocked)
        assert outcome.code == codes.PULL_REQUEST
        assert lookup.slugs == []
