# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Logging setup for the bestbind command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOG_FORMAT = "%(message)s"
_DATE_FORMAT = "[%X]"


def setup_rich_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route the ``bestbind`` loggers through a rich handler on stderr.

    Transfer program output is not logged here, it goes to the ``--log`` file.

    Args:
        verbose: Enable DEBUG level instead of INFO
        console: Console to render to (defaults to a stderr console)
    """
    level = logging.DEBUG if verbose else logging.INFO
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))

    root_logger = logging.getLogger("bestbind")
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    root_logger.propagate = False
