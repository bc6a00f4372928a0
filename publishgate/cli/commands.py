# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the publishgate CLI.

Each function here corresponds to one CLI subcommand and returns an exit
code. This is the only place that reads the process environment; everything
below it works on the snapshot taken here.

No print() calls. Everything goes through the structured logger.
"""

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Optional

from publishgate.cli.exit_codes import (
    CONFIG_ERROR,
    NOT_PUBLISHABLE,
    RUNTIME_ERROR,
    SUCCESS,
)
from publishgate.config.exceptions import ConfigError
from publishgate.config.loader import load_config
from publishgate.config.resolve import resolve_config
from publishgate.config.schema import PublishGateConfig
from publishgate.coordination.registry import build_coordinator
from publishgate.environment import EnvironmentSnapshot
from publishgate.gate.core import evaluate, evaluate_guards
from publishgate.gate.outcome import Blocked, Failed, Outcome
from publishgate.hosting.github import GitHubRepositoryLookup, RepositoryMetadataLookup
from publishgate.logging.logger import configure_logging, get_logger

_REDACTED = "***"


def _load_and_resolve(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, Optional[PublishGateConfig], EnvironmentSnapshot, logging.Logger]:
    """
    The shared setup every command needs: snapshot env, load config, fill gaps.

    Returns (exit_code, config, environment, logger). If exit_code is not
    SUCCESS, the caller should return it immediately.
    """
    logger = get_logger(f"publishgate.cli.{command_name}", log_level=args.log_level or "INFO")
    environment = EnvironmentSnapshot.from_os()

    config = PublishGateConfig()
    if args.config is not None:
        try:
            config = load_config(Path(args.config))
        except ConfigError as err:
            logger.error(
                "Configuration error",
                extra={"command": command_name, "error": str(err)},
            )
            return CONFIG_ERROR, None, environment, logger
    else:
        logger.debug("No config provided, running with defaults", extra={"command": command_name})

    if args.branch is not None:
        config = config.model_copy(
            update={"gate": config.gate.model_copy(update={"branch": args.branch})}
        )

    config = resolve_config(config, environment)

    log_file = Path(config.global_config.log_file) if config.global_config.log_file else None
    level = args.log_level if args.log_level is not None else config.global_config.log_level
    try:
        configure_logging(level, log_file)
    except ValueError as err:
        logger.error("Configuration error", extra={"command": command_name, "error": str(err)})
        return CONFIG_ERROR, None, environment, logger

    return SUCCESS, config, environment, logger


def _build_repo_lookup(config: PublishGateConfig) -> Optional[RepositoryMetadataLookup]:
    if config.gate.repository_url is None:
        return None
    return GitHubRepositoryLookup(
        token=config.github.token,
        url=config.github.url,
        api_path_prefix=config.github.api_path_prefix,
    )


def outcome_to_exit_code(outcome: Optional[Outcome]) -> int:
    """Proceed (or no guard objection in a dry run) is SUCCESS."""
    if isinstance(outcome, Blocked):
        return NOT_PUBLISHABLE
    if isinstance(outcome, Failed):
        return RUNTIME_ERROR
    return SUCCESS


def handle_check(args: argparse.Namespace) -> int:
    """Run the gate and turn its outcome into an exit code."""
    exit_code, config, environment, logger = _load_and_resolve(args, "check")
    if exit_code != SUCCESS or config is None:
        return exit_code

    if args.dry_run:
        blocked = evaluate_guards(config, environment)
        logger.info(
            "Dry run, skipped repository lookup and build leader election",
            extra={"command": "check", "code": blocked.code if blocked else None},
        )
        return outcome_to_exit_code(blocked)

    try:
        coordinator = build_coordinator(config)
    except KeyError as err:
        logger.error("Configuration error", extra={"command": "check", "error": str(err)})
        return CONFIG_ERROR

    outcome = asyncio.run(
        evaluate(config, environment, coordinator, repo_lookup=_build_repo_lookup(config))
    )

    if isinstance(outcome, Failed):
        logger.error(
            "Gate failed",
            extra={
                "command": "check",
                "error": str(outcome.error),
                "error_type": type(outcome.error).__name__,
                "code": outcome.code,
            },
        )
    elif isinstance(outcome, Blocked):
        logger.info(
            "Not publishing",
            extra={"command": "check", "code": outcome.code, "reason": outcome.message},
        )
    else:
        logger.info("Publishing allowed", extra={"command": "check"})

    return outcome_to_exit_code(outcome)


def handle_info(args: argparse.Namespace) -> int:
    """Log the resolved configuration and the environment facts the gate reads."""
    exit_code, config, environment, logger = _load_and_resolve(args, "info")
    if exit_code != SUCCESS or config is None:
        return exit_code

    resolved = config.model_dump(by_alias=True)
    for section in ("github", "travis"):
        if resolved[section].get("token"):
            resolved[section]["token"] = _REDACTED

    logger.info("Resolved configuration", extra={"config": resolved})
    logger.info(
        "Environment",
        extra={
            "ci": environment.ci_flag,
            "pull_request": environment.pull_request,
            "tag": environment.tag,
            "branch": environment.branch,
            "build_id": environment.build_id,
            "job_number": environment.job_number,
            "build_leader": environment.build_leader,
            "aggregate_status": environment.aggregate_status,
        },
    )
    return SUCCESS
