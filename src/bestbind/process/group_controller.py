# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""POSIX process and process-group signalling.

All raw ``kill``/``killpg``/``waitpid`` calls of bestbind live here. Callers must
only signal a pid whose latest non-blocking status check said "still running":
until the process has been reaped its pid (and process group id) cannot be
reused by the OS, so the signal cannot reach an unrelated process.
"""

import logging
import os
import signal

from bestbind.common.exceptions import TerminationError

logger = logging.getLogger(__name__)

__all__ = [
    "ProcessGroupController",
    "reap_orphans",
]


def reap_orphans() -> int:
    """Reap every already-terminated child process without blocking.

    Helpers of a forcefully terminated transfer may exit out of order; this makes
    sure none of our own children linger as zombies.

    Returns:
        Number of children reaped
    """
    reaped = 0
    while True:
        try:
            pid, _ = os.waitpid(-1, os.WNOHANG)
        except ChildProcessError:
            break
        if pid == 0:
            break
        logger.debug(f"Reaped orphaned child {pid}")
        reaped += 1
    return reaped


class ProcessGroupController:
    """Signals a transfer process or its whole process group.

    Transfers are spawned as leaders of their own process group, so the group id
    equals the primary pid.
    """

    def signal_primary(self, pid: int, sig: signal.Signals) -> None:
        """Send ``sig`` to the primary process only."""
        logger.debug(f"Sending {sig.name} to process {pid}")
        try:
            os.kill(pid, sig)
        except ProcessLookupError:
            # Unreaped pids always exist, so this only happens if someone else reaped it
            logger.warning(f"Process {pid} vanished before {sig.name} could be delivered")
        except PermissionError as e:
            raise TerminationError(f"Not permitted to send {sig.name} to process {pid}") from e

    def signal_group(self, pgid: int, sig: signal.Signals) -> None:
        """Send ``sig`` to every process of the group ``pgid``."""
        logger.debug(f"Sending {sig.name} to process group {pgid}")
        try:
            os.killpg(pgid, sig)
        except ProcessLookupError:
            logger.warning(f"Process group {pgid} vanished before {sig.name} could be delivered")
        except PermissionError as e:
            raise TerminationError(
                f"Not permitted to send {sig.name} to process group {pgid}"
            ) from e

    def reap_orphans(self) -> int:
        return reap_orphans()
