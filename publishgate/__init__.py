# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
publishgate — decides whether a CI run may publish a new release.

Subsystems:
  - gate: the ordered guard chain and the decision outcome types
  - coordination: build-leader strategies (who in the matrix publishes)
  - hosting: repository URL parsing and the GitHub visibility lookup
  - config: YAML + pydantic configuration
  - logging: structured JSON logging
  - cli: the `publishgate` command
"""

__version__ = "1.0.0"
