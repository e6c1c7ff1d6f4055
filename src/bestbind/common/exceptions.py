# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for bestbind.

Only conditions that must abort the whole benchmark are exceptions. A transfer
that exits non-zero, dies from a signal or times out is recorded as data on its
RunResult instead.
"""


class BestBindError(Exception):
    """Base class for all bestbind errors."""


class ConfigurationError(BestBindError):
    """Invalid configuration or missing dependency, detected before any transfer starts."""


class LaunchError(BestBindError):
    """A transfer process or container could not be spawned."""


class TerminationError(BestBindError):
    """A running transfer could not be confirmed terminated."""
