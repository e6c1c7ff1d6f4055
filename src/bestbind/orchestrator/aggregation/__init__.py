# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Aggregation strategies for multi-pass results."""

from bestbind.orchestrator.aggregation.base import AggregationStrategy
from bestbind.orchestrator.aggregation.trimmed_mean import (
    TrimmedMeanAggregation,
    rank_scores,
    trimmed_mean,
)

__all__ = [
    "AggregationStrategy",
    "TrimmedMeanAggregation",
    "rank_scores",
    "trimmed_mean",
]
