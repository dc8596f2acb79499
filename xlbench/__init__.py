# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
xlbench: compile one benchmark problem in many languages and time them with hyperfine.
"""

__version__ = "0.1.0"
