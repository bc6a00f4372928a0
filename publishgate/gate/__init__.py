# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The publish gate: ordered guards, then the build-leader election.

Callers normally only need `evaluate` and the outcome types.
"""

from publishgate.gate.core import evaluate, evaluate_guards
from publishgate.gate.outcome import Blocked, Failed, Outcome, Proceed

__all__ = ["Blocked", "Failed", "Outcome", "Proceed", "evaluate", "evaluate_guards"]
