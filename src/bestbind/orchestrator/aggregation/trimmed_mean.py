# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Trimmed mean aggregation of bandwidth samples."""

import logging
from collections.abc import Sequence

import numpy as np

from bestbind.orchestrator.aggregation.base import AggregationStrategy
from bestbind.orchestrator.models import AggregatedScore, Binding, RunResult

logger = logging.getLogger(__name__)

# Fewer samples than this are averaged without trimming
MIN_SAMPLES_FOR_TRIM = 3


def trimmed_mean(samples: Sequence[float]) -> float:
    """Mean after discarding exactly one minimum and one maximum sample.

    With fewer than three samples nothing is discarded.

    Raises:
        ValueError: If samples is empty
    """
    values = np.asarray(samples, dtype=np.float64)
    if values.size == 0:
        raise ValueError("Cannot aggregate an empty sample set")
    if values.size >= MIN_SAMPLES_FOR_TRIM:
        return float((values.sum() - values.min() - values.max()) / (values.size - 2))
    return float(values.mean())


def rank_scores(scores: Sequence[AggregatedScore]) -> list[AggregatedScore]:
    """Sort scores best first. Ties keep binding order."""
    return sorted(scores, key=lambda s: s.ranked_value_kbps, reverse=True)


class TrimmedMeanAggregation(AggregationStrategy):
    """Ranks bindings by the trimmed mean of their per-pass bandwidth.

    Every run contributes, including failed ones: a binding whose transfer
    fails moves little data and is ranked accordingly.
    """

    def get_aggregation_type(self) -> str:
        return "trimmed_mean"

    def aggregate(
        self,
        bindings: Sequence[Binding],
        passes: Sequence[Sequence[RunResult]],
    ) -> list[AggregatedScore]:
        """Aggregate completed passes into a ranking.

        Raises:
            ValueError: If there are no passes, or a pass is not aligned with bindings
        """
        if not passes:
            raise ValueError("No completed passes to aggregate")

        for pass_index, results in enumerate(passes):
            identifiers = [r.binding.identifier for r in results]
            expected = [b.identifier for b in bindings]
            if identifiers != expected:
                raise ValueError(
                    f"Pass {pass_index} is not aligned with the bindings: "
                    f"expected {expected}, got {identifiers}"
                )

        # rows are passes, columns are bindings
        samples = np.array(
            [[r.bandwidth_kbps for r in results] for results in passes],
            dtype=np.float64,
        )
        logger.debug(f"Aggregating {samples.shape[0]} passes x {samples.shape[1]} bindings")

        scores = [
            AggregatedScore(
                binding=binding,
                ranked_value_kbps=trimmed_mean(samples[:, column]),
                num_samples=samples.shape[0],
            )
            for column, binding in enumerate(bindings)
        ]
        return rank_scores(scores)
