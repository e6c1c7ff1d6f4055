# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Data models for multi-pass benchmarking."""

from pydantic import BaseModel, ConfigDict, Field

from bestbind.common.enums import HandleState, RunOutcome


class Binding(BaseModel):
    """A candidate egress point under test.

    Attributes:
        identifier: Local IP address, or container network name
        label: Human-readable comment from the profile
    """

    model_config = ConfigDict(frozen=True)

    identifier: str
    label: str = ""

    def __str__(self) -> str:
        return f"{self.identifier} ({self.label})"


class RunResult(BaseModel):
    """Result of one transfer, for one binding in one pass.

    Attributes:
        binding: Binding the transfer originated from
        pass_index: Zero-based pass number
        state: Terminal state of the process handle
        returncode: Exit status; negative values are signal numbers
        elapsed_seconds: Wall-clock time from spawn until the handle reached its terminal state
        transferred_bytes: Size of the scratch destination after the run
        bandwidth_kbps: transferred_bytes / elapsed_seconds in KiB per second
        outcome: Classification used for reporting
        cancelled: Whether the run was cut short by user cancellation
    """

    model_config = ConfigDict(frozen=True)

    binding: Binding
    pass_index: int = Field(ge=0)
    state: HandleState
    returncode: int | None
    elapsed_seconds: float = Field(ge=0)
    transferred_bytes: int = Field(ge=0)
    bandwidth_kbps: float = Field(ge=0)
    outcome: RunOutcome
    cancelled: bool = False

    @property
    def success(self) -> bool:
        return self.outcome.is_success


class AggregatedScore(BaseModel):
    """Final score of one binding across all passes.

    Attributes:
        binding: The binding being ranked
        ranked_value_kbps: Trimmed mean bandwidth in KiB per second
        num_samples: Number of pass samples the score was computed from
    """

    model_config = ConfigDict(frozen=True)

    binding: Binding
    ranked_value_kbps: float
    num_samples: int = Field(ge=1)


class BenchmarkReport(BaseModel):
    """Everything a benchmark invocation produced.

    Attributes:
        passes: One list of RunResult per fully completed pass, in binding order
        scores: Ranking, best first. Empty when the benchmark was cancelled
        cancelled: Whether the user stopped the benchmark early
    """

    passes: list[list[RunResult]] = Field(default_factory=list)
    scores: list[AggregatedScore] = Field(default_factory=list)
    cancelled: bool = False

    @property
    def failed_runs(self) -> list[RunResult]:
        return [r for results in self.passes for r in results if not r.success]
