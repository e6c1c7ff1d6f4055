# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Runner strategies: how a transfer is made to leave through a binding."""

from bestbind.common.config import Profile, RunConfig
from bestbind.common.enums import RunnerFormat
from bestbind.runners.base import FormatRunner
from bestbind.runners.isolated_network import ContainerNetworkRunner
from bestbind.runners.local_bind import LocalBindRunner

__all__ = [
    "ContainerNetworkRunner",
    "FormatRunner",
    "LocalBindRunner",
    "get_runner",
]


def get_runner(profile: Profile, run_config: RunConfig) -> FormatRunner:
    """Create the runner for the profile's format.

    Raises:
        ConfigurationError: If the runner's one-time setup fails
    """
    if profile.format == RunnerFormat.DOCKER:
        return ContainerNetworkRunner(profile, run_config)
    return LocalBindRunner(profile, run_config)
