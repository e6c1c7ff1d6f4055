# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO

from rich.console import Console

from bestbind.cli_utils import raise_startup_error_and_exit
from bestbind.common.cancellation import CancellationSource
from bestbind.common.config import BenchmarkConfig, load_profile
from bestbind.common.constants import EXIT_CODE_CANCELLED
from bestbind.common.exceptions import (
    BestBindError,
    ConfigurationError,
    LaunchError,
    TerminationError,
)
from bestbind.common.logging import setup_rich_logging
from bestbind.exporters import ConsoleReporter, JsonReportExporter
from bestbind.orchestrator.orchestrator import BenchmarkOrchestrator
from bestbind.runners import get_runner

logger = logging.getLogger(__name__)

_ERROR_TITLES: dict[type[BestBindError], str] = {
    ConfigurationError: "Configuration Error",
    LaunchError: "Launch Error",
    TerminationError: "Termination Error",
}


@contextmanager
def _open_log(path: Path) -> Iterator[IO[bytes]]:
    try:
        log_file = open(path, "wb")
    except OSError as e:
        raise ConfigurationError(f"Cannot open log file {path}: {e}") from e
    with log_file:
        yield log_file


def run_benchmark(
    upstream: str,
    config: BenchmarkConfig,
    cancel_source: CancellationSource | None = None,
    console: Console | None = None,
) -> int:
    """Run a complete benchmark from parsed command line options.

    Configuration, launch and termination errors abort the benchmark with a
    startup error panel. Failed transfers do not.

    Returns:
        Process exit code: 0 on success, 130 if cancelled by the user
    """
    setup_rich_logging(config.verbose)
    console = console or Console()

    if cancel_source is None:
        cancel_source = CancellationSource()
        cancel_source.install_signal_handlers()

    try:
        run_config = config.to_run_config(upstream)
        profile = load_profile(config.profile, config.config)
        logger.debug(f"Profile '{config.profile}': {profile.format} with {len(profile.uses)} bindings")

        with _open_log(config.log) as log_file:
            runner = get_runner(profile, run_config)
            reporter = ConsoleReporter(run_config.program, console)
            orchestrator = BenchmarkOrchestrator(
                runner,
                run_config,
                cancel_source.token,
                log_sink=log_file,
                observer=reporter,
            )
            report = orchestrator.execute()
    except BestBindError as e:
        logger.debug("Benchmark aborted", exc_info=True)
        raise_startup_error_and_exit(str(e), title=_ERROR_TITLES.get(type(e), "Error"))

    if config.export is not None:
        try:
            JsonReportExporter(report, run_config, config.export).export()
        except OSError as e:
            raise_startup_error_and_exit(
                f"Cannot write results to {config.export}: {e}", title="Export Error"
            )

    if report.failed_runs:
        logger.warning(
            f"{len(report.failed_runs)} run(s) failed, use --log to capture the program output"
        )

    if report.cancelled:
        return EXIT_CODE_CANCELLED

    reporter.print_ranking(report.scores)
    return 0
