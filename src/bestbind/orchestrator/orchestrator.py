# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Multi-pass benchmark orchestrator."""

import logging
import subprocess
from collections.abc import Sequence
from typing import Protocol

from bestbind.common.cancellation import CancellationToken
from bestbind.common.config import RunConfig
from bestbind.common.constants import BYTES_PER_KIB
from bestbind.common.enums import RunOutcome
from bestbind.orchestrator.aggregation import AggregationStrategy, TrimmedMeanAggregation
from bestbind.orchestrator.models import Binding, BenchmarkReport, RunResult
from bestbind.orchestrator.scratch import measure_size, scratch_destination
from bestbind.process.spawn import LogSink
from bestbind.runners.base import FormatRunner

logger = logging.getLogger(__name__)

__all__ = [
    "BenchmarkObserver",
    "BenchmarkOrchestrator",
    "classify_outcome",
    "compute_bandwidth_kbps",
]


class BenchmarkObserver(Protocol):
    """Receives progress notifications, e.g. for console reporting."""

    def on_pass_started(self, pass_index: int, pass_count: int) -> None: ...

    def on_run_completed(self, result: RunResult) -> None: ...

    def on_pass_completed(self, pass_index: int, results: Sequence[RunResult]) -> None: ...

    def on_cancelled(self) -> None: ...


def compute_bandwidth_kbps(transferred_bytes: int, elapsed_seconds: float) -> float:
    """Bandwidth in KiB per second. A zero-length run has no measurable bandwidth."""
    if elapsed_seconds <= 0:
        return 0.0
    return transferred_bytes / elapsed_seconds / BYTES_PER_KIB


def classify_outcome(
    returncode: int | None,
    elapsed_seconds: float,
    timeout_seconds: float,
    forcefully_terminated: bool = False,
) -> RunOutcome:
    """Classify a finished run.

    Reaching the timeout is the expected way for a long transfer to end and
    takes precedence over the exit status of the terminated program. A program
    stopped early (by cancellation) counts as killed whatever code it exited with,
    e.g. rsync exits with 20 on SIGTERM.
    """
    if elapsed_seconds >= timeout_seconds:
        return RunOutcome.EXPECTED_TIMEOUT
    if returncode == 0:
        return RunOutcome.OK
    if returncode is None or returncode < 0 or forcefully_terminated:
        return RunOutcome.KILLED_BY_SIGNAL
    return RunOutcome.EXIT_CODE_FAILURE


class BenchmarkOrchestrator:
    """Runs every binding once per pass, strictly sequentially, and ranks them.

    Cancellation is checked before every run and inside every run's wait loop.
    When it is observed the benchmark stops: the pass in progress is discarded
    and no aggregation takes place.
    """

    def __init__(
        self,
        runner: FormatRunner,
        run_config: RunConfig,
        cancel_token: CancellationToken,
        log_sink: LogSink = subprocess.DEVNULL,
        aggregation: AggregationStrategy | None = None,
        observer: BenchmarkObserver | None = None,
    ):
        """Initialize BenchmarkOrchestrator.

        Args:
            runner: Strategy starting transfers through a binding
            run_config: Resolved benchmark settings
            cancel_token: Read-only cancellation flag
            log_sink: Destination of the transfer programs' output
            aggregation: Aggregation strategy, trimmed mean by default
            observer: Optional progress observer
        """
        self.runner = runner
        self.run_config = run_config
        self.cancel_token = cancel_token
        self.log_sink = log_sink
        self.aggregation = aggregation or TrimmedMeanAggregation()
        self.observer = observer

    def execute(self) -> BenchmarkReport:
        """Run all passes and aggregate them.

        Returns:
            BenchmarkReport with every completed pass and, unless cancelled, the ranking

        Raises:
            LaunchError: If a transfer could not be spawned
            TerminationError: If a transfer could not be confirmed stopped
        """
        bindings = self.runner.bindings
        pass_count = self.run_config.pass_count
        passes: list[list[RunResult]] = []

        logger.info(
            f"Starting benchmark: {len(bindings)} bindings, {pass_count} passes, "
            f"{self.run_config.program} with {self.run_config.timeout_seconds}s timeout"
        )

        for pass_index in range(pass_count):
            if self.observer is not None:
                self.observer.on_pass_started(pass_index, pass_count)

            results: list[RunResult] = []
            for binding in bindings:
                if self.cancel_token.is_cancelled:
                    return self._cancelled(passes)
                result = self._execute_single_run(binding, pass_index)
                results.append(result)
                if self.observer is not None:
                    self.observer.on_run_completed(result)

            # A run cut short by cancellation leaves the pass incomplete
            if self.cancel_token.is_cancelled:
                return self._cancelled(passes)

            passes.append(results)
            failed = sum(1 for r in results if not r.success)
            logger.debug(
                f"Pass {pass_index} complete: {len(results) - failed}/{len(results)} successful"
            )
            if self.observer is not None:
                self.observer.on_pass_completed(pass_index, results)

        scores = self.aggregation.aggregate(bindings, passes)
        logger.info(f"All {pass_count} passes complete")
        return BenchmarkReport(passes=passes, scores=scores)

    def _cancelled(self, passes: list[list[RunResult]]) -> BenchmarkReport:
        logger.warning(
            f"Terminated by user after {len(passes)} complete pass(es), skipping aggregation"
        )
        if self.observer is not None:
            self.observer.on_cancelled()
        return BenchmarkReport(passes=passes, cancelled=True)

    def _execute_single_run(self, binding: Binding, pass_index: int) -> RunResult:
        """Transfer once from ``binding`` into a fresh scratch destination."""
        timeout = self.run_config.timeout_seconds

        with scratch_destination(
            self.runner.destination_is_directory, self.run_config.scratch_root_dir
        ) as scratch:
            handle = self.runner.run(binding.identifier, scratch, self.log_sink)
            status = handle.wait_with_timeout(timeout, self.cancel_token)
            transferred = measure_size(scratch)

        outcome = classify_outcome(
            status.returncode,
            status.elapsed_seconds,
            timeout,
            forcefully_terminated=status.forcefully_terminated,
        )
        result = RunResult(
            binding=binding,
            pass_index=pass_index,
            state=status.state,
            returncode=status.returncode,
            elapsed_seconds=status.elapsed_seconds,
            transferred_bytes=transferred,
            bandwidth_kbps=compute_bandwidth_kbps(transferred, status.elapsed_seconds),
            outcome=outcome,
            cancelled=self.cancel_token.is_cancelled,
        )

        if not result.success:
            logger.warning(
                f"[pass {pass_index}] {binding}: {self.run_config.program} {outcome} "
                f"(exit status {status.returncode})"
            )
        return result
