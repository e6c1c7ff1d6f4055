# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Environment variable settings for bestbind.

Each group is a pydantic-settings class with its own prefix, exposed through the
``Environment`` singleton, e.g. ``Environment.PROCESS.TERMINATE_GRACE_PERIOD`` is
read from ``BESTBIND_PROCESS_TERMINATE_GRACE_PERIOD``.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _ProcessSettings(BaseSettings):
    """Transfer process supervision tunables."""

    model_config = SettingsConfigDict(env_prefix="BESTBIND_PROCESS_")

    POLL_INITIAL_INTERVAL: float = Field(
        default=0.001,
        gt=0,
        description="First sleep (seconds) of the exponential backoff used while polling a running transfer.",
    )
    POLL_MAX_INTERVAL: float = Field(
        default=0.1,
        gt=0,
        description="Ceiling (seconds) of the polling backoff. Bounds the reaction time to timeout and cancellation.",
    )
    TERMINATE_GRACE_PERIOD: float = Field(
        default=5.0,
        ge=0,
        description="How long (seconds) a gracefully terminated transfer may take to exit before it is SIGKILLed.",
    )
    TERMINATE_POLL_INTERVAL: float = Field(
        default=0.1,
        gt=0,
        description="Poll interval (seconds) while waiting out the termination grace period.",
    )
    CONTAINER_EXIT_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="How long (seconds) the container runtime client may take to exit after its container is killed.",
    )


class _BinderSettings(BaseSettings):
    """Interposition library used to bind git's outbound connections."""

    model_config = SettingsConfigDict(env_prefix="BESTBIND_BINDER_")

    PATH: Path | None = Field(
        default=None,
        description="Explicit path to libbinder.so. Overrides the well-known search locations.",
    )


class _Environment(BaseSettings):
    """Root of all bestbind environment settings."""

    PROCESS: _ProcessSettings = Field(default_factory=_ProcessSettings)
    BINDER: _BinderSettings = Field(default_factory=_BinderSettings)


Environment = _Environment()
