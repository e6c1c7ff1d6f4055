# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from pathlib import Path
from typing import Annotated

from pydantic import Field

from bestbind.common.config.base_config import BaseConfig
from bestbind.common.config.cli_parameter import CLIParameter
from bestbind.common.config.config_defaults import BenchmarkDefaults
from bestbind.common.config.groups import Groups
from bestbind.common.config.run_config import RunConfig
from bestbind.common.enums import TransferProgram
from bestbind.transfer.programs import detect_program, parse_extra_args


class BenchmarkConfig(BaseConfig):
    """Command line options of a benchmark invocation."""

    profile: Annotated[
        str,
        Field(
            min_length=1,
            description="Profile (table) name in the config file.",
        ),
        CLIParameter(
            name=("--profile",),
            group=Groups.PROFILE,
        ),
    ] = BenchmarkDefaults.PROFILE

    config: Annotated[
        Path | None,
        Field(
            description="Config file path. When not given, bestbind.conf in the XDG config directory, "
            "then ~/.bestbind.conf, then /etc/bestbind.conf are tried in order.",
        ),
        CLIParameter(
            name=("--config", "-c"),
            group=Groups.PROFILE,
        ),
    ] = None

    pass_count: Annotated[
        int,
        Field(
            ge=1,
            description="Number of passes. Every binding is measured once per pass. "
            "With 3 or more passes the best and worst sample of each binding are discarded.",
        ),
        CLIParameter(
            name=("--pass", "-p"),
            group=Groups.BENCHMARK,
        ),
    ] = BenchmarkDefaults.PASS_COUNT

    timeout: Annotated[
        int,
        Field(
            gt=0,
            description="Time limit of a single transfer in seconds. Reaching it is expected and not a failure.",
        ),
        CLIParameter(
            name=("--timeout", "-t"),
            group=Groups.BENCHMARK,
        ),
    ] = BenchmarkDefaults.TIMEOUT_SECONDS

    tmp_dir: Annotated[
        Path | None,
        Field(
            description="Directory for scratch files. Defaults to the system temporary directory.",
        ),
        CLIParameter(
            name=("--tmp-dir",),
            group=Groups.BENCHMARK,
        ),
    ] = None

    program: Annotated[
        TransferProgram | None,
        Field(
            description="Transfer program to use. Detected from the upstream when not given "
            "(curl is used for plain http(s) URLs).",
        ),
        CLIParameter(
            name=("--program",),
            group=Groups.TRANSFER,
        ),
    ] = None

    extra: Annotated[
        list[str],
        Field(
            description="Extra arguments handed to the transfer program, shell-quoted. May be repeated.",
        ),
        CLIParameter(
            name=("--extra",),
            group=Groups.TRANSFER,
            allow_leading_hyphen=True,
        ),
    ] = Field(default_factory=list)

    log: Annotated[
        Path,
        Field(
            description="File receiving the output of the transfer programs.",
        ),
        CLIParameter(
            name=("--log",),
            group=Groups.OUTPUT,
        ),
    ] = Path(BenchmarkDefaults.LOG_FILE)

    export: Annotated[
        Path | None,
        Field(
            description="Write per-run results and the final ranking of this invocation to a JSON file.",
        ),
        CLIParameter(
            name=("--export",),
            group=Groups.OUTPUT,
        ),
    ] = None

    verbose: Annotated[
        bool,
        Field(
            description="Enable debug logging.",
        ),
        CLIParameter(
            name=("--verbose", "-v"),
            group=Groups.OUTPUT,
            negative=(),
        ),
    ] = False

    def to_run_config(self, upstream: str) -> RunConfig:
        """Resolve the program and extra arguments into a RunConfig.

        Raises:
            ConfigurationError: If the program cannot be detected or the extra
                arguments cannot be parsed
        """
        program = self.program or detect_program(upstream)
        return RunConfig(
            upstream=upstream,
            program=program,
            extra_args=tuple(parse_extra_args(self.extra)),
            timeout_seconds=self.timeout,
            pass_count=self.pass_count,
            scratch_root_dir=self.tmp_dir,
        )
