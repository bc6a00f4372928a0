# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Build-leader coordination.

A build matrix runs the same commit in several jobs at once. Each job reaches
the gate independently, and exactly one of them may publish. The strategies
here decide which one, and whether its siblings succeeded.
"""
