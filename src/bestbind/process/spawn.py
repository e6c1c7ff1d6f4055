# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
import os
import shlex
import subprocess
from collections.abc import Mapping, Sequence
from typing import IO

from bestbind.common.exceptions import LaunchError

logger = logging.getLogger(__name__)

LogSink = IO[bytes] | int


def spawn_process(
    argv: Sequence[str],
    log_sink: LogSink,
    extra_env: Mapping[str, str] | None = None,
) -> subprocess.Popen:
    """Start a transfer process as the leader of a new process group.

    The child gets its own process group so that a terminal SIGINT only reaches
    bestbind, which then stops the transfer in the program-specific way. stdin is
    closed and both output streams go to ``log_sink``.

    Raises:
        LaunchError: If the executable cannot be started
    """
    env = None
    if extra_env:
        env = {**os.environ, **extra_env}

    logger.debug(f"Spawning: {shlex.join(argv)}")
    try:
        process = subprocess.Popen(
            list(argv),
            stdin=subprocess.DEVNULL,
            stdout=log_sink,
            stderr=log_sink,
            env=env,
            process_group=0,
        )
    except OSError as e:
        raise LaunchError(f"Failed to spawn {argv[0]}: {e}") from e

    logger.debug(f"{argv[0]} running as pid {process.pid}")
    return process
