# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import sys
from typing import NoReturn

from rich.console import Console
from rich.panel import Panel
from rich.text import Text


def raise_startup_error_and_exit(
    message: str,
    title: str = "Error",
    exit_code: int = 1,
    console: Console | None = None,
) -> NoReturn:
    """Print a startup error in a red panel on stderr and exit."""
    console = console or Console(stderr=True)
    console.print(Panel(Text(message), title=title, border_style="red", title_align="left"))
    sys.exit(exit_code)
