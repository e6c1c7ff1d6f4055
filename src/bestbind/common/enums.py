# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Enumerations shared across bestbind."""

from enum import StrEnum


class CaseInsensitiveStrEnum(StrEnum):
    """String enum whose members can be looked up regardless of case."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class TransferProgram(CaseInsensitiveStrEnum):
    """Concrete transfer tools bestbind knows how to drive."""

    RSYNC = "rsync"
    CURL = "curl"
    WGET = "wget"
    GIT = "git"


class TransferKind(CaseInsensitiveStrEnum):
    """Semantic transfer contracts shared by one or more programs."""

    FILE_SYNC = "file_sync"
    HTTP_FETCH = "http_fetch"
    VERSION_CONTROL_CLONE = "version_control_clone"


class TerminationPolicy(CaseInsensitiveStrEnum):
    """How a running transfer is stopped on timeout or cancellation.

    GRACEFUL: SIGTERM the primary process, wait for the grace period, then SIGKILL.
    GROUP_KILL: SIGKILL the whole process group at once, no grace period.
    """

    GRACEFUL = "graceful"
    GROUP_KILL = "group_kill"


class RunnerFormat(CaseInsensitiveStrEnum):
    """Kind of binding a profile lists."""

    IP = "ip"
    DOCKER = "docker"


class HandleState(CaseInsensitiveStrEnum):
    """Lifecycle of a process handle. Both non-RUNNING states are terminal."""

    RUNNING = "running"
    NATURALLY_EXITED = "naturally_exited"
    FORCEFULLY_TERMINATED = "forcefully_terminated"


class RunOutcome(CaseInsensitiveStrEnum):
    """Classification of a single (pass, binding) run for reporting."""

    OK = "ok"
    EXPECTED_TIMEOUT = "expected_timeout"
    EXIT_CODE_FAILURE = "exit_code_failure"
    KILLED_BY_SIGNAL = "killed_by_signal"

    @property
    def is_success(self) -> bool:
        return self in (RunOutcome.OK, RunOutcome.EXPECTED_TIMEOUT)
