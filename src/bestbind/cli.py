# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Command line entry point of bestbind."""

import sys
from typing import Annotated

from cyclopts import App, Parameter

from bestbind import __version__
from bestbind.common.config import BenchmarkConfig

app = App(
    name="bestbind",
    help="Benchmark an upstream across local addresses or container networks and rank them by bandwidth.",
    version=__version__,
)


@app.default
def benchmark(
    upstream: Annotated[
        str,
        Parameter(help="Upstream path. Will be given to the transfer program."),
    ],
    config: Annotated[BenchmarkConfig | None, Parameter(name="*")] = None,
) -> int:
    """Run the benchmark against UPSTREAM."""
    from bestbind.cli_runner import run_benchmark

    return run_benchmark(upstream, config or BenchmarkConfig())


def main() -> None:
    sys.exit(app())
