# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for publishgate tests.

Fixtures here are available to every test file automatically.
We keep them minimal — just the stuff that multiple test modules need.
"""

import textwrap
from pathlib import Path

import pytest

from publishgate.config.schema import PublishGateConfig
from publishgate.environment import EnvironmentSnapshot


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """A small valid config YAML file in a temp directory."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          log_level: "DEBUG"
        gate:
          branch: "master"
          coordinator: "build_leader_flags"
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """A config file that's valid YAML but fails schema validation (wrong type)."""
    config_content = textwrap.dedent("""\
        travis:
          poll_interval_seconds: "soon"
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file


@pytest.fixture()
def master_config() -> PublishGateConfig:
    """Defaults: publish from master."""
    return PublishGateConfig()


@pytest.fixture()
def release_env() -> EnvironmentSnapshot:
    """A push build on master that passes every local guard."""
    return EnvironmentSnapshot(
        {
            "TRAVIS": "true",
            "TRAVIS_PULL_REQUEST": "false",
            "TRAVIS_BRANCH": "master",
            "TRAVIS_BUILD_ID": "4242",
            "TRAVIS_JOB_NUMBER": "17.3",
        }
    )
