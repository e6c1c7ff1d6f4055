# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Spawning, supervising and terminating transfer processes."""

from bestbind.process.group_controller import ProcessGroupController, reap_orphans
from bestbind.process.handle import (
    ContainerProcessHandle,
    HandleStatus,
    LocalProcessHandle,
    ProcessHandle,
)
from bestbind.process.spawn import LogSink, spawn_process

__all__ = [
    "ContainerProcessHandle",
    "HandleStatus",
    "LocalProcessHandle",
    "LogSink",
    "ProcessGroupController",
    "ProcessHandle",
    "reap_orphans",
    "spawn_process",
]
