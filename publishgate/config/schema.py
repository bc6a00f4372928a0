# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for publishgate.

Each config section gets its own frozen pydantic model. Frozen means once
you create it, you cannot mutate it. Filling in values from the environment
produces a new object (see `publishgate.config.resolve`), it never patches
an existing one.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat

DEFAULT_COORDINATOR = "travis_deploy_once"


class GlobalConfig(BaseModel):
    """Cross-cutting settings: schema version and observability."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        default="1.0.0",
        description="Schema version for compatibility tracking, e.g. '1.0.0'",
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )


class GateConfig(BaseModel):
    """
    What the gate itself needs to know.

    `branch` is the only branch a release may be published from.
    `repository_url` switches on the visibility lookup: when it is set, the
    gate asks the hosting API whether the repository is private before the
    election and hands the answer to the coordinator.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    branch: str = Field(default="master", min_length=1, description="Branch to publish from")
    repository_url: Optional[str] = Field(
        default=None,
        description="Repository URL, e.g. https://github.com/owner/repo.git",
    )
    coordinator: str = Field(
        default=DEFAULT_COORDINATOR,
        description="Build-leader strategy: travis_deploy_once or build_leader_flags",
    )


class GitHubConfig(BaseModel):
    """Hosting API access. Every field can also come from the environment."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    token: Optional[str] = Field(default=None, description="API token (GH_TOKEN / GITHUB_TOKEN)")
    url: Optional[str] = Field(default=None, description="API base URL (GH_URL / GITHUB_URL)")
    api_path_prefix: Optional[str] = Field(
        default=None,
        description="API path prefix for GitHub Enterprise (GH_PREFIX / GITHUB_PREFIX)",
    )


class TravisConfig(BaseModel):
    """
    Settings for the Travis CI deploy-once coordinator.

    `url` points at a Travis Enterprise installation. When it is unset the
    coordinator picks travis-ci.com or travis-ci.org from the repository
    visibility.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    token: Optional[str] = Field(default=None, description="Travis API token (TRAVIS_TOKEN)")
    url: Optional[str] = Field(default=None, description="Travis API base URL (TRAVIS_URL)")
    api_path_prefix: Optional[str] = Field(
        default=None,
        description="Travis API path prefix (TRAVIS_PREFIX)",
    )
    poll_interval_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Seconds between job-list polls while the leader waits",
    )
    max_wait_seconds: Optional[PositiveFloat] = Field(
        default=None,
        description="Give up waiting for sibling jobs after this long (None waits forever)",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for a single API request",
    )


class PublishGateConfig(BaseModel):
    """
    Top-level config container.

    Every section has defaults, so an empty YAML mapping (or no file at all)
    yields a usable config: publish from master, elect via Travis.
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", validate_default=True, populate_by_name=True
    )

    global_config: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    gate: GateConfig = Field(default_factory=GateConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    travis: TravisConfig = Field(default_factory=TravisConfig)
