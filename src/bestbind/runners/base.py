# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Runner strategy interface."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from bestbind.common.config import Profile, RunConfig
from bestbind.orchestrator.models import Binding
from bestbind.process.handle import ProcessHandle
from bestbind.process.spawn import LogSink
from bestbind.transfer.programs import ProgramSpec, get_program_spec

logger = logging.getLogger(__name__)

__all__ = [
    "FormatRunner",
]


class FormatRunner(ABC):
    """Starts transfers originating from a given binding.

    A runner decides:
    1. Which bindings exist and whether they are valid (checked once, at construction)
    2. How a transfer is made to leave through a binding
    3. Which kind of ProcessHandle supervises the transfer

    Construction performs all one-time setup and raises ConfigurationError
    before any transfer is started.
    """

    def __init__(self, profile: Profile, run_config: RunConfig) -> None:
        self.run_config = run_config
        self.program_spec: ProgramSpec = get_program_spec(run_config.program)
        self._bindings: tuple[Binding, ...] = profile.bindings()

    @property
    def bindings(self) -> tuple[Binding, ...]:
        """Bindings to benchmark, in the order of every pass."""
        return self._bindings

    @property
    def destination_is_directory(self) -> bool:
        """Whether each run needs a scratch directory rather than a scratch file."""
        return self.program_spec.destination_is_directory

    @abstractmethod
    def run(
        self, binding_identifier: str, scratch_path: Path, log_sink: LogSink
    ) -> ProcessHandle:
        """Start one transfer from ``binding_identifier`` into ``scratch_path``.

        Args:
            binding_identifier: IP address or network name of the binding
            scratch_path: Existing scratch file or directory to write to
            log_sink: Destination of the transfer program's stdout and stderr

        Returns:
            Handle supervising the started transfer

        Raises:
            LaunchError: If the transfer could not be spawned
        """
        pass
