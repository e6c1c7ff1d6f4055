# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Run transfers on the host, bound to a local IP address."""

import ipaddress
import logging
import sys
from pathlib import Path

from bestbind.common.config import Profile, RunConfig
from bestbind.common.constants import BINDER_DOWNLOAD_URL, BINDER_LIBRARY_NAME
from bestbind.common.environment import Environment
from bestbind.common.exceptions import ConfigurationError
from bestbind.process.group_controller import ProcessGroupController
from bestbind.process.handle import LocalProcessHandle
from bestbind.process.spawn import LogSink, spawn_process
from bestbind.runners.base import FormatRunner
from bestbind.transfer.programs import build_program_args

logger = logging.getLogger(__name__)

__all__ = [
    "LocalBindRunner",
    "find_binder_library",
]


def _binder_candidates() -> list[Path]:
    exe_dir = Path(sys.argv[0]).resolve().parent if sys.argv and sys.argv[0] else None
    candidates = []
    if exe_dir is not None:
        candidates.append(exe_dir / BINDER_LIBRARY_NAME)
        candidates.append(exe_dir / "deps" / BINDER_LIBRARY_NAME)
    candidates.append(Path(sys.prefix) / "lib" / BINDER_LIBRARY_NAME)
    candidates.append(Path("/usr/local/lib") / BINDER_LIBRARY_NAME)
    candidates.append(Path("/usr/lib") / BINDER_LIBRARY_NAME)
    return candidates


def find_binder_library(override: Path | None = None) -> Path:
    """Locate libbinder.so, the LD_PRELOAD library that binds git's sockets.

    Args:
        override: Explicit path, defaults to BESTBIND_BINDER_PATH

    Raises:
        ConfigurationError: If the override does not exist or no candidate is found
    """
    override = override if override is not None else Environment.BINDER.PATH
    if override is not None:
        if not override.is_file():
            raise ConfigurationError(
                f"{BINDER_LIBRARY_NAME} not found at {override} (set by BESTBIND_BINDER_PATH)"
            )
        return override.resolve()

    candidates = _binder_candidates()
    for candidate in candidates:
        if candidate.is_file():
            logger.debug(f"Using {candidate}")
            return candidate.resolve()

    searched = "\n".join(f"  {c}" for c in candidates)
    raise ConfigurationError(
        f"{BINDER_LIBRARY_NAME} not found. Searched:\n{searched}\n"
        f"Put it in one of these locations or set BESTBIND_BINDER_PATH. "
        f"You can download the corresponding file from {BINDER_DOWNLOAD_URL}"
    )


class LocalBindRunner(FormatRunner):
    """Runs the transfer program on the host with its source address pinned.

    Programs with native support get a bind flag; git is bound through the
    libbinder interposition library instead.
    """

    def __init__(
        self,
        profile: Profile,
        run_config: RunConfig,
        controller: ProcessGroupController | None = None,
    ) -> None:
        super().__init__(profile, run_config)
        self._controller = controller or ProcessGroupController()

        for binding in self.bindings:
            try:
                ipaddress.ip_address(binding.identifier)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid IP address '{binding.identifier}' ({binding.label}) in profile"
                ) from e

        self.binder_path: Path | None = None
        if not self.program_spec.native_binding:
            self.binder_path = find_binder_library()

    def run(
        self, binding_identifier: str, scratch_path: Path, log_sink: LogSink
    ) -> LocalProcessHandle:
        invocation = build_program_args(
            self.run_config.program,
            self.run_config.upstream,
            scratch_path,
            self.run_config.extra_args,
            bind_address=binding_identifier,
            binder_path=self.binder_path,
        )
        process = spawn_process(invocation.argv, log_sink, extra_env=invocation.env)
        return LocalProcessHandle(
            process,
            self.run_config.program,
            self.program_spec.termination_policy,
            controller=self._controller,
        )
