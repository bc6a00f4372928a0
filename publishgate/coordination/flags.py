# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Leader election from environment flags set by an outer matrix helper.

This is the older cooperation protocol: a wrapper script runs in every job,
waits for its siblings, and exports two variables before the gate runs:

  BUILD_LEADER            "YES" in the one job that should publish
  BUILD_AGGREGATE_STATUS  "others_succeeded" when every sibling passed

When BUILD_LEADER is not set at all, no helper is in use and the job is
treated as a single-job build.
"""

import logging
from typing import Optional

from publishgate.coordination.base import BuildLeaderCoordinator, ElectionOptions
from publishgate.logging.logger import get_logger

_logger: logging.Logger = get_logger(__name__)

LEADER_MARKER = "YES"
OTHERS_SUCCEEDED = "others_succeeded"


class EnvironmentFlagCoordinator(BuildLeaderCoordinator):
    """Reads BUILD_LEADER / BUILD_AGGREGATE_STATUS from the snapshot."""

    name = "build_leader_flags"

    async def elect(self, options: ElectionOptions) -> Optional[bool]:
        env = options.environment

        if env.build_leader is None:
            _logger.debug("No build leader flag set, treating as single job")
            return True

        if env.build_leader != LEADER_MARKER:
            return None

        if env.aggregate_status != OTHERS_SUCCEEDED:
            _logger.info(
                "Sibling jobs did not all succeed",
                extra={"aggregate_status": env.aggregate_status},
            )
            return False

        return True
