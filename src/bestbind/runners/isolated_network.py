# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Run transfers inside containers attached to a given container network."""

import logging
import subprocess
import uuid
from pathlib import Path

from bestbind.common.config import Profile, RunConfig
from bestbind.common.constants import CONTAINER_NAME_PREFIX, CONTAINER_SCRATCH_PATH
from bestbind.common.exceptions import ConfigurationError
from bestbind.process.group_controller import ProcessGroupController
from bestbind.process.handle import ContainerProcessHandle
from bestbind.process.spawn import LogSink, spawn_process
from bestbind.runners.base import FormatRunner
from bestbind.transfer.programs import build_program_args

logger = logging.getLogger(__name__)

__all__ = [
    "ContainerNetworkRunner",
    "generate_container_name",
]


def generate_container_name() -> str:
    """Unique per-run container name, so kills never hit an unrelated container."""
    return f"{CONTAINER_NAME_PREFIX}{uuid.uuid4().hex[:16]}"


class ContainerNetworkRunner(FormatRunner):
    """Runs the transfer program in a throwaway container on the target network.

    The container's network identity replaces address binding: each binding is
    the name of a container network. The scratch file or directory is
    bind-mounted at /data.
    """

    def __init__(
        self,
        profile: Profile,
        run_config: RunConfig,
        controller: ProcessGroupController | None = None,
    ) -> None:
        super().__init__(profile, run_config)
        self._controller = controller or ProcessGroupController()
        self.runtime = profile.docker
        self.image = profile.image
        self._ensure_image()

    def _runtime_command(self, *args: str) -> int:
        try:
            result = subprocess.run(
                [self.runtime, *args],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as e:
            raise ConfigurationError(
                f"Cannot run container runtime '{self.runtime}': {e}"
            ) from e
        return result.returncode

    def _ensure_image(self) -> None:
        """Make sure the image is available locally, pulling it if needed.

        Raises:
            ConfigurationError: If the runtime is missing or the pull fails
        """
        if self._runtime_command("image", "inspect", self.image) == 0:
            logger.debug(f"Image {self.image} is available")
            return

        logger.info(f"Image {self.image} not found locally, pulling it...")
        returncode = self._runtime_command("pull", self.image)
        if returncode != 0:
            raise ConfigurationError(
                f"Failed to pull image {self.image} with {self.runtime} (exit code {returncode})"
            )

    def run(
        self, binding_identifier: str, scratch_path: Path, log_sink: LogSink
    ) -> ContainerProcessHandle:
        invocation = build_program_args(
            self.run_config.program,
            self.run_config.upstream,
            CONTAINER_SCRATCH_PATH,
            self.run_config.extra_args,
        )
        container_name = generate_container_name()
        argv = [
            self.runtime,
            "run",
            "--rm",
            "--name",
            container_name,
            "--network",
            binding_identifier,
            "-v",
            f"{scratch_path}:{CONTAINER_SCRATCH_PATH}",
            self.image,
            *invocation.argv,
        ]
        process = spawn_process(argv, log_sink)
        return ContainerProcessHandle(
            process,
            self.run_config.program,
            container_name=container_name,
            runtime=self.runtime,
            log_sink=log_sink,
            controller=self._controller,
        )
