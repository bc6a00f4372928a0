# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Stable decision codes for a blocked publish.

Release tooling matches on these strings, so they never change once shipped.
Anything not listed here reaches the caller as a passthrough error instead.
"""

NOT_CI: str = "NOT_CI"
PULL_REQUEST: str = "PULL_REQUEST"
GIT_TAG: str = "GIT_TAG"
BRANCH_MISMATCH: str = "BRANCH_MISMATCH"
NOT_LEADER: str = "NOT_LEADER"
OTHERS_FAILED: str = "OTHERS_FAILED"
INVALID_REPO_URL: str = "INVALID_REPO_URL"

ALL_CODES: frozenset[str] = frozenset(
    {
        NOT_CI,
        PULL_REQUEST,
        GIT_TAG,
        BRANCH_MISMATCH,
        NOT_LEADER,
        OTHERS_FAILED,
        INVALID_REPO_URL,
    }
)
