# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Repository hosting: URL parsing and the visibility lookup."""
