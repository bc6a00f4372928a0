# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the BUILD_LEADER / BUILD_AGGREGATE_STATUS protocol.
"""

import asyncio
from typing import Optional

import pytest

from publishgate.coordination.base import ElectionOptions
from publishgate.coordination.flags import EnvironmentFlagCoordinator
from publishgate.environment import EnvironmentSnapshot


def _elect(env: dict[str, str]) -> Optional[bool]:
    options = ElectionOptions(environment=EnvironmentSnapshot(env))
    return asyncio.run(EnvironmentFlagCoordinator().elect(options))


class TestFlagProtocol:
    def test_no_leader_flag_means_single_job(self) -> None:
        assert _elect({}) is True

    @pytest.mark.parametrize("flag", ["NO", "", "yes", "MINION"])
    def test_non_leader_gets_none(self, flag: str) -> None:
        assert _elect({"BUILD_LEADER": flag, "BUILD_AGGREGATE_STATUS": "others_succeeded"}) is None

    def test_leader_with_failed_siblings_gets_false(self) -> None:
        assert _elect({"BUILD_LEADER": "YES", "BUILD_AGGREGATE_STATUS": "others_failed"}) is False

    def test_leader_without_aggregate_status_gets_false(self) -> None:
        assert _elect({"BUILD_LEADER": "YES"}) is False

    def test_leader_with_succeeded_siblings_gets_true(self) -> None:
        assert _elect({"BUILD_LEADER": "YES", "BUILD_AGGREGATE_STATUS": "others_succeeded"}) is True
