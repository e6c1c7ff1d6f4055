# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bestbind.common.enums import RunOutcome, TransferProgram
from bestbind.orchestrator.models import AggregatedScore, RunResult


def format_run_status(result: RunResult, program: TransferProgram) -> str:
    """Short human readable status of a run, e.g. "❌ rsync failed with code 23"."""
    match result.outcome:
        case RunOutcome.EXPECTED_TIMEOUT:
            status = f"✅ {program} timeout as expected"
        case RunOutcome.OK:
            status = "✅ OK"
        case RunOutcome.EXIT_CODE_FAILURE:
            status = f"❌ {program} failed with code {result.returncode}"
        case _:
            status = f"❌ {program} killed by signal"
    if result.cancelled:
        status += " (terminated by user)"
    return status


class ConsoleReporter:
    """Prints benchmark progress and the final ranking with rich.

    Implements the BenchmarkObserver protocol of the orchestrator.
    """

    def __init__(self, program: TransferProgram, console: Console | None = None) -> None:
        self.program = program
        self.console = console or Console()

    def on_pass_started(self, pass_index: int, pass_count: int) -> None:
        self.console.print(f"[bold]Pass {pass_index + 1}:[/bold]")

    def on_run_completed(self, result: RunResult) -> None:
        style = "green" if result.success else "red"
        self.console.print(
            f"  {escape(str(result.binding))}: "
            f"[{style}]{result.bandwidth_kbps:.2f} KB/s[/{style}] "
            f"({escape(format_run_status(result, self.program))})"
        )

    def on_pass_completed(self, pass_index: int, results: Sequence[RunResult]) -> None:
        pass

    def on_cancelled(self) -> None:
        self.console.print("[yellow]Terminated by user.[/yellow]")

    def print_ranking(self, scores: Sequence[AggregatedScore]) -> None:
        table = Table(
            title="Final Results (remove min and max if feasible, and take average)"
        )
        table.add_column("#", justify="right")
        table.add_column("Binding")
        table.add_column("Label")
        table.add_column("KB/s", justify="right")
        for rank, score in enumerate(scores, start=1):
            table.add_row(
                str(rank),
                escape(score.binding.identifier),
                escape(score.binding.label),
                f"{score.ranked_value_kbps:.2f}",
            )
        self.console.print(table)
