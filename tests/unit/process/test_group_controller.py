# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for ProcessGroupController and reap_orphans."""

import signal
import subprocess
import sys
import time
from pathlib import Path
from unittest.mock import patch

import pytest

from bestbind.common.exceptions import TerminationError
from bestbind.process.group_controller import ProcessGroupController, reap_orphans


def _proc_state(pid: int) -> str | None:
    try:
        stat = Path(f"/proc/{pid}/stat").read_text()
    except FileNotFoundError:
        return None
    return stat.rsplit(")", 1)[1].split()[0]


class TestProcessGroupController:
    """Tests for ProcessGroupController signalling."""

    @pytest.fixture
    def controller(self) -> ProcessGroupController:
        return ProcessGroupController()

    def test_signal_primary_sends_signal(self, controller):
        with patch("bestbind.process.group_controller.os.kill") as mock_kill:
            controller.signal_primary(1234, signal.SIGTERM)
        mock_kill.assert_called_once_with(1234, signal.SIGTERM)

    def test_signal_group_sends_signal(self, controller):
        with patch("bestbind.process.group_controller.os.killpg") as mock_killpg:
            controller.signal_group(1234, signal.SIGKILL)
        mock_killpg.assert_called_once_with(1234, signal.SIGKILL)

    def test_vanished_process_is_not_an_error(self, controller):
        with patch(
            "bestbind.process.group_controller.os.kill", side_effect=ProcessLookupError
        ):
            controller.signal_primary(1234, signal.SIGTERM)
        with patch(
            "bestbind.process.group_controller.os.killpg", side_effect=ProcessLookupError
        ):
            controller.signal_group(1234, signal.SIGKILL)

    def test_permission_error_raises_termination_error(self, controller):
        with (
            patch("bestbind.process.group_controller.os.kill", side_effect=PermissionError),
            pytest.raises(TerminationError, match="Not permitted"),
        ):
            controller.signal_primary(1234, signal.SIGTERM)

        with (
            patch("bestbind.process.group_controller.os.killpg", side_effect=PermissionError),
            pytest.raises(TerminationError, match="process group"),
        ):
            controller.signal_group(1234, signal.SIGKILL)


class TestReapOrphans:
    """Tests for reap_orphans."""

    def test_no_children_returns_zero(self):
        with patch(
            "bestbind.process.group_controller.os.waitpid", side_effect=ChildProcessError
        ):
            assert reap_orphans() == 0

    def test_does_not_block_on_running_children(self):
        """Test that a still-running child stops the loop instead of blocking."""
        with patch(
            "bestbind.process.group_controller.os.waitpid", return_value=(0, 0)
        ) as mock_waitpid:
            assert reap_orphans() == 0
        mock_waitpid.assert_called_once()

    def test_counts_reaped_children(self):
        with patch(
            "bestbind.process.group_controller.os.waitpid",
            side_effect=[(101, 0), (102, 9), ChildProcessError],
        ):
            assert reap_orphans() == 2

    @pytest.mark.skipif(not sys.platform.startswith("linux"), reason="requires /proc")
    def test_reaps_exited_child(self):
        process = subprocess.Popen(["true"])
        deadline = time.monotonic() + 5
        while _proc_state(process.pid) != "Z" and time.monotonic() < deadline:
            time.sleep(0.01)
        assert _proc_state(process.pid) == "Z"

        assert reap_orphans() >= 1
        assert _proc_state(process.pid) is None
