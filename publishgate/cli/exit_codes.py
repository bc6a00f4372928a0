# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI exit codes.

Release scripts branch on these, so they are the only exit codes the CLI
uses. NOT_PUBLISHABLE is a soft stop: the build is fine, it just must not
publish.
"""

SUCCESS: int = 0
USER_ERROR: int = 1
CONFIG_ERROR: int = 2
RUNTIME_ERROR: int = 3
NOT_PUBLISHABLE: int = 5
