# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Fill unset config values from the environment snapshot.

Tokens and enterprise URLs usually live in CI secrets rather than in a
committed YAML file. Precedence is always: explicit config value first, then
the environment variables in the order listed below.

    github.token            GH_TOKEN, GITHUB_TOKEN
    github.url              GH_URL, GITHUB_URL
    github.api_path_prefix  GH_PREFIX, GITHUB_PREFIX
    travis.token            TRAVIS_TOKEN
    travis.url              TRAVIS_URL
    travis.api_path_prefix  TRAVIS_PREFIX (falls back to "")
"""

from collections.abc import Mapping
from typing import Optional

from publishgate.config.schema import PublishGateConfig


def _first_set(explicit: Optional[str], env: Mapping[str, str], *names: str) -> Optional[str]:
    """Return `explicit` if it is non-empty, else the first non-empty env var."""
    if explicit:
        return explicit
    for name in names:
        value = env.get(name)
        if value:
            return value
    return None


def resolve_config(config: PublishGateConfig, env: Mapping[str, str]) -> PublishGateConfig:
    """
    Return a copy of `config` with unset hosting and CI settings filled from `env`.

    The input config is frozen and is left untouched.
    """
    github = config.github.model_copy(
        update={
            "token": _first_set(config.github.token, env, "GH_TOKEN", "GITHUB_TOKEN"),
            "url": _first_set(config.github.url, env, "GH_URL", "GITHUB_URL"),
            "api_path_prefix": _first_set(
                config.github.api_path_prefix, env, "GH_PREFIX", "GITHUB_PREFIX"
            ),
        }
    )

    travis_prefix = config.travis.api_path_prefix
    if travis_prefix is None:
        travis_prefix = env.get("TRAVIS_PREFIX") or ""

    travis = config.travis.model_copy(
        update={
            "token": _first_set(config.travis.token, env, "TRAVIS_TOKEN"),
            "url": _first_set(config.travis.url, env, "TRAVIS_URL"),
            "api_path_prefix": travis_prefix,
        }
    )

    return config.model_copy(update={"github": github, "travis": travis})
