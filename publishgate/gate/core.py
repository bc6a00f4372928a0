# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The publish gate.

Answers one question: may this CI job publish a new version?

Checks performed (in order, first failure wins):
1. Running on Travis CI
2. Not a pull request build
3. Not a tag build
4. On the configured release branch
5. Repository visibility lookup (only when a lookup is supplied)
6. Build-leader election

Guards 1-4 only look at the environment snapshot and config. Steps 5 and 6
talk to the network, strictly one after the other since the lookup result
parametrizes the election.
"""

import logging
from typing import Optional

import semver

from publishgate.config.schema import PublishGateConfig
from publishgate.coordination.base import BuildLeaderCoordinator, ElectionOptions
from publishgate.environment import EnvironmentSnapshot
from publishgate.gate import codes
from publishgate.gate.outcome import Blocked, Failed, Outcome, Proceed
from publishgate.hosting.github import RepositoryMetadataLookup
from publishgate.hosting.repo_url import parse_repository_url
from publishgate.logging.logger import get_logger

_logger: logging.Logger = get_logger(__name__)

CI_MARKER = "true"
NO_PULL_REQUEST = "false"

SELF_TRIGGERED_TAG_NOTE = (
    "\nIt is very likely that this tag was created by a previous publish run.\n"
    "Everything is okay. For log output of the actual publishing process "
    "look at the build that ran before this one."
)


def is_semver_tag(tag: str) -> bool:
    """True for tags like "1.2.3" or "v1.2.3-beta.1"."""
    candidate = tag.strip()
    if candidate[:1] == "v":
        candidate = candidate[1:]
    return semver.Version.is_valid(candidate)


def check_ci_vendor(env: EnvironmentSnapshot) -> Optional[Blocked]:
    if env.ci_flag != CI_MARKER:
        return Blocked(
            codes.NOT_CI,
            "The release did not run on Travis CI and therefore a new version won't be published.",
        )
    return None


def check_pull_request(env: EnvironmentSnapshot) -> Optional[Blocked]:
    if env.pull_request is not None and env.pull_request != NO_PULL_REQUEST:
        return Blocked(
            codes.PULL_REQUEST,
            "This test run was triggered by a pull request and therefore a new version won't be published.",
        )
    return None


def check_git_tag(env: EnvironmentSnapshot) -> Optional[Blocked]:
    tag = env.tag
    if not tag:
        return None

    message = "This test run was triggered by a git tag and therefore a new version won't be published."
    if is_semver_tag(tag):
        message += SELF_TRIGGERED_TAG_NOTE
    return Blocked(codes.GIT_TAG, message)


def check_branch(config: PublishGateConfig, env: EnvironmentSnapshot) -> Optional[Blocked]:
    target = config.gate.branch
    actual = env.branch
    if actual != target:
        return Blocked(
            codes.BRANCH_MISMATCH,
            f"This test run was triggered on the branch {actual if actual is not None else '<unset>'}, "
            f"while publishing is configured to only happen from {target}.",
        )
    return None


def _log_blocked(outcome: Blocked) -> Blocked:
    _logger.info("Publish blocked", extra={"code": outcome.code, "reason": outcome.message})
    return outcome


def evaluate_guards(
    config: PublishGateConfig,
    environment: EnvironmentSnapshot,
) -> Optional[Blocked]:
    """
    Run the local guards only (CI vendor, pull request, tag, branch).

    Returns the first Blocked outcome, or None when every guard passes.
    Makes no network calls.
    """
    blocked = (
        check_ci_vendor(environment)
        or check_pull_request(environment)
        or check_git_tag(environment)
        or check_branch(config, environment)
    )
    if blocked is not None:
        return _log_blocked(blocked)
    return None


async def evaluate(
    config: PublishGateConfig,
    environment: EnvironmentSnapshot,
    coordinator: BuildLeaderCoordinator,
    repo_lookup: Optional[RepositoryMetadataLookup] = None,
) -> Outcome:
    """
    Decide whether this job may publish.

    Args:
        config: Resolved configuration (branch, repository URL, tokens).
        environment: Snapshot of the job's environment variables.
        coordinator: Build-leader strategy consulted after the guards pass.
        repo_lookup: Optional visibility lookup. When given, the configured
            repository URL must parse, and its privacy flag is passed to
            the coordinator.

    Returns:
        Proceed, Blocked(code, message), or Failed(error) where `error` is
        exactly what the lookup or coordinator raised.
    """
    blocked = evaluate_guards(config, environment)
    if blocked is not None:
        return blocked

    is_private: Optional[bool] = None
    if repo_lookup is not None:
        slug = parse_repository_url(config.gate.repository_url)
        if slug is None:
            return _log_blocked(
                Blocked(
                    codes.INVALID_REPO_URL,
                    f"The repository URL '{config.gate.repository_url}' is not a valid "
                    "git URL with an owner and a repository name.",
                )
            )
        try:
            is_private = await repo_lookup.is_private(slug)
        except Exception as err:
            _logger.error(
                "Repository lookup failed",
                extra={"repository": str(slug), "error": str(err)},
            )
            return Failed(err)

    options = ElectionOptions(
        environment=environment,
        is_private=is_private,
        github_token=config.github.token,
    )

    try:
        result = await coordinator.elect(options)
    except Exception as err:
        _logger.error(
            "Build leader election failed",
            extra={"coordinator": coordinator.name, "error": str(err)},
        )
        return Failed(err)

    if result is None:
        return _log_blocked(
            Blocked(
                codes.NOT_LEADER,
                "This test run is not the build leader and therefore a new version won't be published.",
            )
        )

    if result is False:
        return _log_blocked(
            Blocked(
                codes.OTHERS_FAILED,
                "In this test run not all jobs passed and therefore a new version won't be published.",
            )
        )

    _logger.info("Publish allowed", extra={"branch": environment.branch})
    return Proceed()
