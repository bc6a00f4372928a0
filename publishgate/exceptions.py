# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Exceptions raised by the gate and its collaborators.

Configuration problems have their own hierarchy in
`publishgate.config.exceptions`; everything here is about talking to the
outside world or reporting a decision.
"""

from typing import Optional


class PublishGateError(Exception):
    """Base for all publishgate runtime errors."""


class GateBlockedError(PublishGateError):
    """
    A publish was refused by one of the guards.

    Only raised by `Outcome.raise_for_outcome()`, for callers that would
    rather handle a soft stop as an exception than match on the outcome.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class HttpError(PublishGateError):
    """
    A hosting or CI API answered with a non-success status.

    `code` is the HTTP status itself, so callers can tell a 401 from a 404
    the same way they tell gate codes apart.
    """

    def __init__(self, status: int, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status
        self.code = status
        self.url = url


class CoordinatorError(PublishGateError):
    """The build-leader coordinator could not reach a decision."""


class CoordinatorTimeoutError(CoordinatorError):
    """The leader gave up waiting for sibling jobs to finish."""
