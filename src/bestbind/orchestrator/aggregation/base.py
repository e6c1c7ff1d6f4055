# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Base class for aggregation strategies."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from bestbind.orchestrator.models import AggregatedScore, Binding, RunResult


class AggregationStrategy(ABC):
    """Turns per-pass samples into one ranked score per binding."""

    @abstractmethod
    def get_aggregation_type(self) -> str:
        """Return aggregation type identifier."""
        pass

    @abstractmethod
    def aggregate(
        self,
        bindings: Sequence[Binding],
        passes: Sequence[Sequence[RunResult]],
    ) -> list[AggregatedScore]:
        """Aggregate completed passes.

        Args:
            bindings: Bindings in pass order
            passes: One sequence of RunResult per completed pass, aligned with bindings

        Returns:
            Scores ordered best first
        """
        pass
