# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Immutable snapshot of the CI job's environment variables.

Nothing in the gate reads `os.environ` directly. The CLI takes one snapshot
at startup and passes it down; tests build snapshots from plain dicts. That
way a decision depends only on its arguments.
"""

import os
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Optional

# Variables set by Travis CI on every job.
TRAVIS = "TRAVIS"
TRAVIS_PULL_REQUEST = "TRAVIS_PULL_REQUEST"
TRAVIS_TAG = "TRAVIS_TAG"
TRAVIS_BRANCH = "TRAVIS_BRANCH"
TRAVIS_BUILD_ID = "TRAVIS_BUILD_ID"
TRAVIS_JOB_ID = "TRAVIS_JOB_ID"
TRAVIS_JOB_NUMBER = "TRAVIS_JOB_NUMBER"
TRAVIS_TEST_RESULT = "TRAVIS_TEST_RESULT"

# Set by an outer build-matrix helper in the older cooperation protocol.
BUILD_LEADER = "BUILD_LEADER"
BUILD_AGGREGATE_STATUS = "BUILD_AGGREGATE_STATUS"

# Pins the leader to a job-number suffix instead of "highest job wins".
BUILD_LEADER_ID = "BUILD_LEADER_ID"


class EnvironmentSnapshot(Mapping[str, str]):
    """
    Read-only view of environment variables with named accessors.

    Behaves like a Mapping, so `"TRAVIS_TAG" in env` and `env.get(...)` work
    the way they do on `os.environ`.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Mapping[str, str]] = None) -> None:
        self._values = MappingProxyType(dict(values or {}))

    @classmethod
    def from_os(cls) -> "EnvironmentSnapshot":
        """Copy the current process environment."""
        return cls(os.environ)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"EnvironmentSnapshot({len(self._values)} variables)"

    @property
    def ci_flag(self) -> Optional[str]:
        return self._values.get(TRAVIS)

    @property
    def pull_request(self) -> Optional[str]:
        return self._values.get(TRAVIS_PULL_REQUEST)

    @property
    def tag(self) -> Optional[str]:
        return self._values.get(TRAVIS_TAG)

    @property
    def branch(self) -> Optional[str]:
        return self._values.get(TRAVIS_BRANCH)

    @property
    def build_id(self) -> Optional[str]:
        return self._values.get(TRAVIS_BUILD_ID)

    @property
    def job_id(self) -> Optional[str]:
        return self._values.get(TRAVIS_JOB_ID)

    @property
    def job_number(self) -> Optional[str]:
        return self._values.get(TRAVIS_JOB_NUMBER)

    @property
    def test_result(self) -> Optional[str]:
        return self._values.get(TRAVIS_TEST_RESULT)

    @property
    def build_leader(self) -> Optional[str]:
        return self._values.get(BUILD_LEADER)

    @property
    def aggregate_status(self) -> Optional[str]:
        return self._values.get(BUILD_AGGREGATE_STATUS)

    @property
    def leader_id(self) -> Optional[str]:
        return self._values.get(BUILD_LEADER_ID)
