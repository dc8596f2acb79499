# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI exit codes.

USER_ERROR covers bad invocations and missing toolchains, CONFIG_ERROR a
broken harness config or `.args` sidecar, RUNTIME_ERROR a failed discovery,
compile or timing run, and VALIDATION_ERROR a variant that failed in test
mode.
"""

SUCCESS: int = 0
USER_ERROR: int = 1
CONFIG_ERROR: int = 2
RUNTIME_ERROR: int = 3
VALIDATION_ERROR: int = 4
