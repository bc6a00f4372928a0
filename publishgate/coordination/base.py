# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Abstract base class for build-leader coordinators.

Contract:
    await elect(options) -> True | False | None

  True   this job is the sole publisher and every sibling job succeeded
  False  this job is the publisher, but at least one sibling failed
  None   this job is not the elected publisher

Implementations may suspend on network I/O and may raise. The gate treats
whatever they raise as opaque and forwards it unchanged.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from publishgate.config.schema import PublishGateConfig
from publishgate.environment import EnvironmentSnapshot


@dataclass(frozen=True)
class ElectionOptions:
    """Everything a coordinator gets from the gate for one election."""

    environment: EnvironmentSnapshot
    is_private: Optional[bool] = None
    github_token: Optional[str] = None


class BuildLeaderCoordinator(ABC):
    """Base class for all build-leader strategies."""

    name: str = ""

    @classmethod
    def from_config(cls, config: PublishGateConfig) -> "BuildLeaderCoordinator":
        """Build an instance from resolved config. Strategies without settings need not override."""
        return cls()

    @abstractmethod
    async def elect(self, options: ElectionOptions) -> Optional[bool]:
        ...
