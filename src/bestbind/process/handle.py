# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Supervision of a single running transfer.

A handle starts in RUNNING and moves exactly once to NATURALLY_EXITED or
FORCEFULLY_TERMINATED. The bounded wait is a poll loop with exponential backoff
rather than a blocking wait, so that cancellation is observed within one backoff
interval.
"""

import logging
import signal
import subprocess
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass

from bestbind.common.cancellation import CancellationToken
from bestbind.common.enums import HandleState, TerminationPolicy, TransferProgram
from bestbind.common.environment import Environment
from bestbind.common.exceptions import TerminationError
from bestbind.process.group_controller import ProcessGroupController
from bestbind.process.spawn import LogSink

logger = logging.getLogger(__name__)

__all__ = [
    "ContainerProcessHandle",
    "HandleStatus",
    "LocalProcessHandle",
    "ProcessHandle",
]


@dataclass(frozen=True, slots=True)
class HandleStatus:
    """Terminal status of a process handle.

    Attributes:
        state: NATURALLY_EXITED or FORCEFULLY_TERMINATED
        returncode: Exit status as reported by subprocess (negative for signals)
        elapsed_seconds: Time from spawn until exit was observed or termination began
    """

    state: HandleState
    returncode: int | None
    elapsed_seconds: float

    @property
    def forcefully_terminated(self) -> bool:
        return self.state == HandleState.FORCEFULLY_TERMINATED


class ProcessHandle(ABC):
    """Owns one spawned transfer and the logic to stop it."""

    def __init__(
        self,
        process: subprocess.Popen,
        program: TransferProgram,
        controller: ProcessGroupController | None = None,
        poll_initial_interval: float | None = None,
        poll_max_interval: float | None = None,
    ) -> None:
        self._process = process
        self.program = program
        self._controller = controller or ProcessGroupController()
        self._poll_initial_interval = (
            poll_initial_interval or Environment.PROCESS.POLL_INITIAL_INTERVAL
        )
        self._poll_max_interval = poll_max_interval or Environment.PROCESS.POLL_MAX_INTERVAL
        self._started_at = time.monotonic()
        self._status: HandleStatus | None = None

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def state(self) -> HandleState:
        if self._status is None:
            return HandleState.RUNNING
        return self._status.state

    def wait_with_timeout(
        self, timeout_seconds: float, cancel_token: CancellationToken
    ) -> HandleStatus:
        """Wait for the transfer to exit, terminating it on timeout or cancellation.

        The deadline is measured from spawn. Once a terminal state is reached,
        further calls return the same status.

        Args:
            timeout_seconds: Wall-clock budget of the transfer
            cancel_token: Checked on every poll; when set, termination starts at once

        Returns:
            HandleStatus of the transfer

        Raises:
            TerminationError: If the transfer could not be confirmed stopped
        """
        if self._status is not None:
            return self._status

        deadline = self._started_at + timeout_seconds
        delay = self._poll_initial_interval

        while True:
            returncode = self._process.poll()
            if returncode is not None:
                return self._finish(
                    HandleState.NATURALLY_EXITED,
                    returncode,
                    time.monotonic() - self._started_at,
                )

            if cancel_token.is_cancelled:
                logger.debug(f"Cancellation requested, stopping {self.program} (pid {self.pid})")
                return self._force_terminate()

            now = time.monotonic()
            if now >= deadline:
                logger.debug(f"{self.program} (pid {self.pid}) reached its {timeout_seconds}s deadline")
                return self._force_terminate()

            time.sleep(min(delay, deadline - now))
            delay = min(delay * 2, self._poll_max_interval)

    def _force_terminate(self) -> HandleStatus:
        # Only reached right after poll() reported the process as still running
        elapsed = time.monotonic() - self._started_at
        returncode = self._terminate()
        return self._finish(HandleState.FORCEFULLY_TERMINATED, returncode, elapsed)

    def _finish(
        self, state: HandleState, returncode: int | None, elapsed: float
    ) -> HandleStatus:
        self._status = HandleStatus(
            state=state, returncode=returncode, elapsed_seconds=elapsed
        )
        return self._status

    @abstractmethod
    def _terminate(self) -> int | None:
        """Stop the running transfer and block until it has exited.

        Returns:
            Exit status of the stopped transfer
        """
        pass


class LocalProcessHandle(ProcessHandle):
    """Handle for a transfer running directly on the host.

    Attributes:
        policy: Termination policy of the transfer program
        grace_period: Seconds a SIGTERMed process may take before it is SIGKILLed
    """

    def __init__(
        self,
        process: subprocess.Popen,
        program: TransferProgram,
        policy: TerminationPolicy,
        controller: ProcessGroupController | None = None,
        grace_period: float | None = None,
        grace_poll_interval: float | None = None,
        **kwargs,
    ) -> None:
        super().__init__(process, program, controller=controller, **kwargs)
        self.policy = policy
        self.grace_period = (
            Environment.PROCESS.TERMINATE_GRACE_PERIOD if grace_period is None else grace_period
        )
        self._grace_poll_interval = (
            grace_poll_interval or Environment.PROCESS.TERMINATE_POLL_INTERVAL
        )

    def _terminate(self) -> int | None:
        pid = self._process.pid

        if self.policy == TerminationPolicy.GROUP_KILL:
            self._controller.signal_group(pid, signal.SIGKILL)
            returncode = self._process.wait()
        else:
            self._controller.signal_primary(pid, signal.SIGTERM)
            returncode = self._wait_for_exit(self.grace_period)
            if returncode is None:
                logger.warning(
                    f"Killing {self.program} with SIGKILL, as it is not exiting with SIGTERM."
                )
                self._controller.signal_primary(pid, signal.SIGKILL)
                returncode = self._process.wait()

        # Helpers that exited after their parent must not stay zombies
        self._controller.reap_orphans()
        return returncode

    def _wait_for_exit(self, grace_period: float) -> int | None:
        """Poll until exit or until the grace period is over.

        Returns:
            Exit status, or None if the process is still running. In that case the
            last poll was the final action, so the pid is still safe to signal.
        """
        deadline = time.monotonic() + grace_period
        while True:
            returncode = self._process.poll()
            if returncode is not None:
                return returncode
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return None
            time.sleep(min(self._grace_poll_interval, remaining))


class ContainerProcessHandle(ProcessHandle):
    """Handle for a transfer running inside a named container.

    The local process is the container runtime client (``docker run``). Stopping
    the transfer means killing the container by name and then making sure the
    client has exited.
    """

    def __init__(
        self,
        process: subprocess.Popen,
        program: TransferProgram,
        container_name: str,
        runtime: str,
        log_sink: LogSink = subprocess.DEVNULL,
        controller: ProcessGroupController | None = None,
        exit_timeout: float | None = None,
        **kwargs,
    ) -> None:
        super().__init__(process, program, controller=controller, **kwargs)
        self.container_name = container_name
        self.runtime = runtime
        self._log_sink = log_sink
        self._exit_timeout = exit_timeout or Environment.PROCESS.CONTAINER_EXIT_TIMEOUT

    def _terminate(self) -> int | None:
        logger.debug(f"Killing container {self.container_name}")
        try:
            result = subprocess.run(
                [self.runtime, "kill", self.container_name],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=self._log_sink,
                check=False,
            )
        except OSError as e:
            self._kill_client()
            raise TerminationError(
                f"Failed to run '{self.runtime} kill {self.container_name}': {e}"
            ) from e

        # A failed kill is fine only if the container already finished on its own
        if result.returncode != 0 and self._process.poll() is None:
            self._kill_client()
            raise TerminationError(
                f"'{self.runtime} kill {self.container_name}' exited with code "
                f"{result.returncode} while the container is still running"
            )

        try:
            self._process.wait(timeout=self._exit_timeout)
        except subprocess.TimeoutExpired:
            logger.warning(
                f"{self.runtime} client for {self.container_name} did not exit, killing it"
            )
            self._controller.signal_primary(self._process.pid, signal.SIGKILL)
            self._process.wait()

        self._controller.reap_orphans()
        return -signal.SIGKILL

    def _kill_client(self) -> None:
        """SIGKILL and reap the runtime client before a fatal error is raised.

        The client runs in its own process group, so nothing else stops it once
        bestbind exits.
        """
        if self._process.poll() is None:
            self._controller.signal_primary(self._process.pid, signal.SIGKILL)
        self._process.wait()
        self._finish(
            HandleState.FORCEFULLY_TERMINATED,
            self._process.returncode,
            time.monotonic() - self._started_at,
        )
