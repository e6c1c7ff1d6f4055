# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for BenchmarkConfig and its resolution into a RunConfig."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from bestbind.common.config import BenchmarkConfig, RunConfig
from bestbind.common.enums import TransferProgram
from bestbind.common.exceptions import ConfigurationError


class TestBenchmarkConfigDefaults:
    def test_defaults(self):
        config = BenchmarkConfig()
        assert config.profile == "default"
        assert config.config is None
        assert config.pass_count == 3
        assert config.timeout == 30
        assert config.tmp_dir is None
        assert config.program is None
        assert config.extra == []
        assert config.log == Path(os.devnull)
        assert config.export is None
        assert not config.verbose

    @pytest.mark.parametrize(
        "field,value",
        [
            ("pass_count", 0),
            ("timeout", 0),
            ("timeout", -5),
            ("profile", ""),
        ],
    )  # fmt: skip
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            BenchmarkConfig(**{field: value})

    def test_program_is_case_insensitive(self):
        assert BenchmarkConfig(program="Wget").program == TransferProgram.WGET


class TestToRunConfig:
    def test_program_is_detected(self):
        run_config = BenchmarkConfig().to_run_config("https://example.org/big.iso")
        assert run_config.program == TransferProgram.CURL

    def test_explicit_program_wins(self):
        config = BenchmarkConfig(program=TransferProgram.WGET)
        run_config = config.to_run_config("https://example.org/big.iso")
        assert run_config.program == TransferProgram.WGET

    def test_undetectable_program(self):
        with pytest.raises(ConfigurationError, match="--program"):
            BenchmarkConfig().to_run_config("/local/path")

    def test_fields_are_carried_over(self, tmp_path):
        config = BenchmarkConfig(
            pass_count=5,
            timeout=12,
            tmp_dir=tmp_path,
            extra=["--bwlimit=100 -z", "'--exclude=*.tmp'"],
        )
        run_config = config.to_run_config("rsync://mirror.example.org/debian/")

        assert run_config == RunConfig(
            upstream="rsync://mirror.example.org/debian/",
            program=TransferProgram.RSYNC,
            extra_args=("--bwlimit=100", "-z", "--exclude=*.tmp"),
            timeout_seconds=12,
            pass_count=5,
            scratch_root_dir=tmp_path,
        )

    def test_unbalanced_quotes_are_rejected(self):
        config = BenchmarkConfig(extra=["--header 'X-Unclosed"])
        with pytest.raises(ConfigurationError, match="Failed to parse extra arguments"):
            config.to_run_config("https://example.org/f")

    def test_run_config_is_frozen(self, run_config):
        with pytest.raises(ValidationError):
            run_config.pass_count = 10
