# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Coordinator registry for publishgate.

The strategy is selected by config string alone (`gate.coordinator`). The
registry maps that string to the concrete class. Built-in strategies are
registered once at import time via ``_register_builtins()``; third-party
strategies can be added with ``register_coordinator``.
"""

import logging

from publishgate.config.schema import PublishGateConfig
from publishgate.coordination.base import BuildLeaderCoordinator
from publishgate.coordination.flags import EnvironmentFlagCoordinator
from publishgate.coordination.travis import TravisDeployOnceCoordinator
from publishgate.logging.logger import get_logger

_logger: logging.Logger = get_logger(__name__)

_COORDINATOR_REGISTRY: dict[str, type[BuildLeaderCoordinator]] = {}


def register_coordinator(name: str, cls: type[BuildLeaderCoordinator]) -> None:
    """
    Register a coordinator class under a unique name.

    Args:
        name: Config-level identifier (e.g. ``"travis_deploy_once"``).
        cls: The ``BuildLeaderCoordinator`` subclass to register.

    Raises:
        ValueError: If ``name`` is already registered.
        TypeError: If ``cls`` is not a ``BuildLeaderCoordinator`` subclass.
    """
    if not (isinstance(cls, type) and issubclass(cls, BuildLeaderCoordinator)):
        raise TypeError(f"{cls!r} is not a BuildLeaderCoordinator subclass")
    if name in _COORDINATOR_REGISTRY:
        raise ValueError(
            f"Coordinator '{name}' is already registered to {_COORDINATOR_REGISTRY[name].__name__}"
        )
    _COORDINATOR_REGISTRY[name] = cls
    _logger.debug("Registered coordinator", extra={"coordinator": name, "cls": cls.__name__})


def get_coordinator(name: str) -> type[BuildLeaderCoordinator]:
    """
    Retrieve a registered coordinator class by name.

    Raises:
        KeyError: If ``name`` is not registered.
    """
    if name not in _COORDINATOR_REGISTRY:
        available = sorted(_COORDINATOR_REGISTRY.keys())
        raise KeyError(f"Unknown coordinator '{name}'. Available: {available}")
    return _COORDINATOR_REGISTRY[name]


def list_coordinators() -> list[str]:
    """Return sorted list of all registered coordinator names."""
    return sorted(_COORDINATOR_REGISTRY.keys())


def build_coordinator(config: PublishGateConfig) -> BuildLeaderCoordinator:
    """Instantiate the coordinator named by ``config.gate.coordinator``."""
    cls = get_coordinator(config.gate.coordinator)
    return cls.from_config(config)


def _register_builtins() -> None:
    register_coordinator(TravisDeployOnceCoordinator.name, TravisDeployOnceCoordinator)
    register_coordinator(EnvironmentFlagCoordinator.name, EnvironmentFlagCoordinator)


_register_builtins()
