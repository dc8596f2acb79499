# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Language registry: which toolchains exist and how each one builds and runs.
"""

from xlbench.languages.descriptors import LanguageDescriptor
from xlbench.languages.registry import CONFIG_EXT, DESCRIPTORS, Language

__all__ = ["CONFIG_EXT", "DESCRIPTORS", "Language", "LanguageDescriptor"]
