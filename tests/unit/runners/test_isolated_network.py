# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for ContainerNetworkRunner."""

import re
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from bestbind.common.config import RunConfig
from bestbind.common.enums import TransferProgram
from bestbind.common.exceptions import ConfigurationError
from bestbind.process.handle import ContainerProcessHandle
from bestbind.runners import ContainerNetworkRunner, get_runner
from bestbind.runners.isolated_network import generate_container_name


def _completed(returncode: int) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode)


@pytest.fixture
def mock_runtime():
    """Patch the runtime commands run during image setup."""
    with patch("bestbind.runners.isolated_network.subprocess.run") as mock:
        mock.return_value = _completed(0)
        yield mock


class TestGenerateContainerName:
    def test_names_are_prefixed_and_unique(self):
        names = {generate_container_name() for _ in range(100)}
        assert len(names) == 100
        assert all(re.fullmatch(r"bestbind-[0-9a-f]{16}", name) for name in names)


class TestImageSetup:
    """One-time image availability check."""

    def test_present_image_is_not_pulled(self, docker_profile, run_config, mock_runtime):
        runner = get_runner(docker_profile, run_config)

        assert isinstance(runner, ContainerNetworkRunner)
        mock_runtime.assert_called_once()
        assert mock_runtime.call_args.args[0] == [
            "docker",
            "image",
            "inspect",
            "example/transfer-tools:latest",
        ]

    def test_missing_image_is_pulled(self, docker_profile, run_config, mock_runtime):
        mock_runtime.side_effect = [_completed(1), _completed(0)]
        ContainerNetworkRunner(docker_profile, run_config)

        assert mock_runtime.call_count == 2
        assert mock_runtime.call_args.args[0] == [
            "docker",
            "pull",
            "example/transfer-tools:latest",
        ]

    def test_failed_pull_raises(self, docker_profile, run_config, mock_runtime):
        mock_runtime.side_effect = [_completed(1), _completed(125)]
        with pytest.raises(ConfigurationError, match="Failed to pull image"):
            ContainerNetworkRunner(docker_profile, run_config)

    def test_missing_runtime_raises(self, docker_profile, run_config, mock_runtime):
        mock_runtime.side_effect = FileNotFoundError("docker")
        with pytest.raises(ConfigurationError, match="Cannot run container runtime"):
            ContainerNetworkRunner(docker_profile, run_config)


class TestContainerNetworkRunnerRun:
    """Tests for ContainerNetworkRunner.run."""

    @pytest.fixture
    def mock_spawn(self):
        with patch("bestbind.runners.isolated_network.spawn_process") as mock:
            mock.return_value = MagicMock(spec=subprocess.Popen, pid=4242)
            yield mock

    def test_container_command_line(
        self, docker_profile, run_config, mock_runtime, mock_spawn, tmp_path
    ):
        scratch = tmp_path / "out"
        handle = ContainerNetworkRunner(docker_profile, run_config).run(
            "net-b", scratch, subprocess.DEVNULL
        )

        argv = mock_spawn.call_args.args[0]
        name = argv[4]
        assert argv[:4] == ["docker", "run", "--rm", "--name"]
        assert argv[5:10] == [
            "--network",
            "net-b",
            "-v",
            f"{scratch}:/data",
            "example/transfer-tools:latest",
        ]
        # The program writes to the mount point and is not bound itself
        assert argv[10:] == [
            "rsync",
            "-vP",
            "-rLptgoD",
            "--inplace",
            run_config.upstream,
            "/data",
        ]
        assert isinstance(handle, ContainerProcessHandle)
        assert handle.container_name == name
        assert handle.runtime == "docker"

    def test_each_run_gets_its_own_container(
        self, docker_profile, mock_runtime, mock_spawn, tmp_path
    ):
        config = RunConfig(
            upstream="https://git.example.org/project.git",
            program=TransferProgram.GIT,
            timeout_seconds=10,
            pass_count=1,
        )
        runner = ContainerNetworkRunner(docker_profile, config)
        first = runner.run("net-a", tmp_path, subprocess.DEVNULL)
        second = runner.run("net-a", tmp_path, subprocess.DEVNULL)

        assert first.container_name != second.container_name
        assert mock_spawn.call_args.args[0][10:] == [
            "git",
            "clone",
            "--bare",
            config.upstream,
            "/data",
        ]
