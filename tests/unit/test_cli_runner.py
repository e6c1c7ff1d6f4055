# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for cli_runner.py"""

import io
from unittest.mock import MagicMock, patch

import orjson
import pytest
from rich.console import Console

from bestbind.cli_runner import run_benchmark
from bestbind.common.cancellation import CancellationSource
from bestbind.common.config import BenchmarkConfig
from bestbind.common.enums import HandleState, RunOutcome
from bestbind.common.exceptions import LaunchError
from bestbind.orchestrator.models import (
    AggregatedScore,
    BenchmarkReport,
    Binding,
    RunResult,
)

UPSTREAM = "rsync://mirror.example.org/debian/ls-lR.gz"


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "bestbind.conf"
    path.write_text('[default]\nformat = "ip"\nuses = { "192.0.2.10" = "ISP A" }\n')
    return path


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(output) -> Console:
    return Console(file=output, width=200, color_system=None)


def _report(cancelled: bool = False, outcome: RunOutcome = RunOutcome.OK) -> BenchmarkReport:
    binding = Binding(identifier="192.0.2.10", label="ISP A")
    result = RunResult(
        binding=binding,
        pass_index=0,
        state=HandleState.NATURALLY_EXITED,
        returncode=0 if outcome == RunOutcome.OK else 1,
        elapsed_seconds=1.0,
        transferred_bytes=1024,
        bandwidth_kbps=1.0,
        outcome=outcome,
    )
    if cancelled:
        return BenchmarkReport(passes=[[result]], cancelled=True)
    return BenchmarkReport(
        passes=[[result]],
        scores=[AggregatedScore(binding=binding, ranked_value_kbps=1.0, num_samples=1)],
    )


@pytest.fixture
def mock_orchestrator():
    with (
        patch("bestbind.cli_runner.get_runner") as mock_get_runner,
        patch("bestbind.cli_runner.BenchmarkOrchestrator") as mock_class,
    ):
        mock_get_runner.return_value = MagicMock()
        mock_class.return_value.execute.return_value = _report()
        yield mock_class


class TestRunBenchmark:
    """Tests for run_benchmark."""

    def test_success_prints_ranking(
        self, config_file, mock_orchestrator, cancel_source, console, output
    ):
        config = BenchmarkConfig(config=config_file, pass_count=1)
        exit_code = run_benchmark(UPSTREAM, config, cancel_source, console)

        assert exit_code == 0
        assert "Final Results" in output.getvalue()
        runner, run_config, token = mock_orchestrator.call_args.args
        assert run_config.pass_count == 1
        assert token is cancel_source.token

    def test_program_output_goes_to_log_file(
        self, config_file, mock_orchestrator, cancel_source, console, tmp_path
    ):
        log_path = tmp_path / "transfer.log"
        config = BenchmarkConfig(config=config_file, log=log_path)
        run_benchmark(UPSTREAM, config, cancel_source, console)

        log_sink = mock_orchestrator.call_args.kwargs["log_sink"]
        assert str(log_sink.name) == str(log_path)
        assert log_sink.closed
        assert log_path.exists()

    def test_cancelled_returns_130_without_ranking(
        self, config_file, mock_orchestrator, cancel_source, console, output
    ):
        mock_orchestrator.return_value.execute.return_value = _report(cancelled=True)
        config = BenchmarkConfig(config=config_file)

        assert run_benchmark(UPSTREAM, config, cancel_source, console) == 130
        assert "Final Results" not in output.getvalue()

    def test_export_writes_json(
        self, config_file, mock_orchestrator, cancel_source, console, tmp_path
    ):
        export_path = tmp_path / "result.json"
        config = BenchmarkConfig(config=config_file, export=export_path)
        run_benchmark(UPSTREAM, config, cancel_source, console)

        data = orjson.loads(export_path.read_bytes())
        assert data["upstream"] == UPSTREAM
        assert len(data["ranking"]) == 1

    def test_unwritable_export_exits_with_error(
        self, config_file, mock_orchestrator, cancel_source, console, tmp_path, capsys
    ):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        config = BenchmarkConfig(config=config_file, export=blocker / "result.json")
        with pytest.raises(SystemExit) as exc_info:
            run_benchmark(UPSTREAM, config, cancel_source, console)

        assert exc_info.value.code == 1
        assert "Export Error" in capsys.readouterr().err

    def test_failed_runs_do_not_fail_the_benchmark(
        self, config_file, mock_orchestrator, cancel_source, console
    ):
        mock_orchestrator.return_value.execute.return_value = _report(
            outcome=RunOutcome.EXIT_CODE_FAILURE
        )
        config = BenchmarkConfig(config=config_file)
        assert run_benchmark(UPSTREAM, config, cancel_source, console) == 0

    def test_missing_profile_exits_with_error(
        self, config_file, mock_orchestrator, cancel_source, console, capsys
    ):
        config = BenchmarkConfig(config=config_file, profile="elsewhere")
        with pytest.raises(SystemExit) as exc_info:
            run_benchmark(UPSTREAM, config, cancel_source, console)

        assert exc_info.value.code == 1
        assert "Configuration Error" in capsys.readouterr().err
        mock_orchestrator.assert_not_called()

    def test_undetectable_program_exits_before_loading_config(
        self, cancel_source, console, capsys
    ):
        with (
            patch("bestbind.cli_runner.load_profile") as mock_load,
            pytest.raises(SystemExit) as exc_info,
        ):
            run_benchmark("/some/local/path", BenchmarkConfig(), cancel_source, console)

        assert exc_info.value.code == 1
        mock_load.assert_not_called()

    def test_launch_error_exits_with_error(
        self, config_file, mock_orchestrator, cancel_source, console, capsys
    ):
        mock_orchestrator.return_value.execute.side_effect = LaunchError(
            "Failed to spawn rsync"
        )
        config = BenchmarkConfig(config=config_file)
        with pytest.raises(SystemExit) as exc_info:
            run_benchmark(UPSTREAM, config, cancel_source, console)

        assert exc_info.value.code == 1
        assert "Launch Error" in capsys.readouterr().err

    def test_installs_signal_handlers_without_source(
        self, config_file, mock_orchestrator, console
    ):
        with patch.object(CancellationSource, "install_signal_handlers") as mock_install:
            run_benchmark(UPSTREAM, BenchmarkConfig(config=config_file), console=console)
        mock_install.assert_called_once_with()
