# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for config loader — the entry point for all config loading.

We test:
  1. Valid YAML loads into a frozen, correct config object
  2. Wrong types and unknown fields raise ConfigValidationError
  3. Broken YAML or missing files raise ConfigLoadError
  4. Loaded config is truly immutable
"""

import textwrap
from pathlib import Path

import pytest

from publishgate.config.exceptions import ConfigLoadError, ConfigValidationError
from publishgate.config.loader import load_config


class TestLoadValidConfig:
    def test_loads_minimal_valid_config(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        assert config.global_config.log_level == "DEBUG"
        assert config.gate.branch == "master"
        assert config.gate.coordinator == "build_leader_flags"

    def test_missing_sections_get_defaults(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        assert config.gate.repository_url is None
        assert config.github.token is None
        assert config.travis.poll_interval_seconds == 10.0

    def test_empty_file_is_all_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("", encoding="utf-8")

        config = load_config(config_file)
        assert config.gate.branch == "master"
        assert config.gate.coordinator == "travis_deploy_once"

    def test_comment_only_file_is_all_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "commented.yaml"
        config_file.write_text("# gate:\n#   branch: main\n", encoding="utf-8")

        config = load_config(config_file)
        assert config.gate.branch == "master"
        assert config.travis.max_wait_seconds is None

    def test_loads_full_config_with_all_sections(self, tmp_path: Path) -> None:
        content = textwrap.dedent("""\
            global:
              config_version: "1.0.0"
              log_level: "WARNING"
              log_file: "logs/gate.log"
            gate:
              branch: "main"
              repository_url: "https://github.com/owner/repo.git"
              coordinator: "travis_deploy_once"
            github:
              url: "https://ghe.example.com"
              api_path_prefix: "api/v3"
            travis:
              url: "https://travis.example.com"
              api_path_prefix: "api"
              poll_interval_seconds: 5
              max_wait_seconds: 600
        """)
        config_file = tmp_path / "full.yaml"
        config_file.write_text(content, encoding="utf-8")

        config = load_config(config_file)
        assert config.gate.branch == "main"
        assert config.gate.repository_url == "https://github.com/owner/repo.git"
        assert config.github.api_path_prefix == "api/v3"
        assert config.travis.max_wait_seconds == 600


class TestLoadInvalidConfig:
    def test_wrong_type_raises_validation_error(self, invalid_config_file: Path) -> None:
        with pytest.raises(ConfigValidationError):
            load_config(invalid_config_file)

    def test_unknown_field_raises_validation_error(self, tmp_path: Path) -> None:
        content = textwrap.dedent("""\
            gate:
              branch: "master"
              publish_everything: true
        """)
        config_file = tmp_path / "unknown_field.yaml"
        config_file.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigValidationError):
            load_config(config_file)

    def test_non_mapping_raises_load_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- master\n- main\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError):
            load_config(config_file)

    def test_broken_yaml_raises_load_error(self, broken_yaml_file: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(broken_yaml_file)

    def test_nonexistent_file_raises_load_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(tmp_path / "does_not_exist.yaml")

    def test_directory_path_raises_load_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError):
            load_config(tmp_path)


class TestConfigImmutability:
    def test_cannot_mutate_frozen_config(self, tmp_config_file: Path) -> None:
        config = load_config(tmp_config_file)
        with pytest.raises(Exception):
            config.gate.branch = "anything"  # type: ignore[misc]
