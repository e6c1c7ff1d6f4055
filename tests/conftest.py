# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for bestbind tests."""

import pytest

from bestbind.common.cancellation import CancellationSource, CancellationToken
from bestbind.common.config import Profile, RunConfig
from bestbind.common.enums import RunnerFormat, TransferProgram


@pytest.fixture
def run_config() -> RunConfig:
    """RunConfig for an rsync benchmark with three passes."""
    return RunConfig(
        upstream="rsync://mirror.example.org/debian/ls-lR.gz",
        program=TransferProgram.RSYNC,
        extra_args=(),
        timeout_seconds=30,
        pass_count=3,
    )


@pytest.fixture
def ip_profile() -> Profile:
    """Profile with two local addresses."""
    return Profile(
        format=RunnerFormat.IP,
        uses={"192.0.2.10": "ISP A", "2001:db8::1": "ISP B"},
    )


@pytest.fixture
def docker_profile() -> Profile:
    """Profile with two container networks."""
    return Profile(
        format=RunnerFormat.DOCKER,
        image="example/transfer-tools:latest",
        docker="docker",
        uses={"net-a": "via tunnel", "net-b": "direct"},
    )


@pytest.fixture
def cancel_source() -> CancellationSource:
    return CancellationSource()


@pytest.fixture
def never_cancelled() -> CancellationToken:
    return CancellationToken.never()
