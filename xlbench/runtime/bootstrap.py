# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for xlbench.

The one-time setup every CLI command goes through before touching the suite:
  1. Validate the interpreter version
  2. Apply the configured log level (and optional log file) to every
     xlbench logger, including ones from modules imported later
  3. Log what machine we're on, since results are only comparable per host
  4. Make sure the output roots exist, unless this is a dry run
"""

import logging

from xlbench.config.schema import HarnessConfig
from xlbench.logging.logger import configure_logging, get_logger
from xlbench.runtime.environment import check_minimum_python, get_system_info
from xlbench.utils.paths import ensure_directory


def bootstrap(config: HarnessConfig, prepare_outputs: bool = True) -> logging.Logger:
    """
    Put the process into a known state for a harness run.

    With prepare_outputs=False (dry runs) no output directories are created.

    Returns:
        The runtime logger, already configured.
    """
    check_minimum_python()

    configure_logging(config.log_level, config.log_file)
    logger = get_logger("xlbench.runtime")

    system_info = get_system_info()
    logger.info(
        "xlbench bootstrap complete",
        extra={
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
            "suite_root": str(config.paths.suite_root),
        },
    )

    if prepare_outputs:
        ensure_directory(config.paths.binary_root)
        ensure_directory(config.paths.results_root)
    return logger
