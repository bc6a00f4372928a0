# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Decision outcomes returned by the gate.

Exactly three shapes:
  Proceed  — this job may publish
  Blocked  — do not publish; a normal, expected stop with a stable code
  Failed   — something went wrong while deciding; `error` is the original
             exception object, never wrapped
"""

from dataclasses import dataclass
from typing import Union

from publishgate.exceptions import GateBlockedError


@dataclass(frozen=True)
class Proceed:
    """All guards passed and this job won the election."""

    @property
    def ok(self) -> bool:
        return True

    def raise_for_outcome(self) -> None:
        return None


@dataclass(frozen=True)
class Blocked:
    """A guard refused the publish."""

    code: str
    message: str

    @property
    def ok(self) -> bool:
        return False

    def raise_for_outcome(self) -> None:
        raise GateBlockedError(self.code, self.message)


@dataclass(frozen=True)
class Failed:
    """A collaborator raised while the gate was deciding."""

    error: Exception

    @property
    def ok(self) -> bool:
        return False

    @property
    def code(self) -> object:
        """The error's own `code` attribute if it has one (HTTP status, etc.)."""
        return getattr(self.error, "code", None)

    def raise_for_outcome(self) -> None:
        raise self.error


Outcome = Union[Proceed, Blocked, Failed]
