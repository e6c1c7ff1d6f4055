# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Argument vectors and metadata for the supported transfer programs."""

from bestbind.transfer.programs import (
    PROGRAM_SPECS,
    ProgramInvocation,
    ProgramSpec,
    build_program_args,
    detect_program,
    get_program_spec,
    parse_extra_args,
)

__all__ = [
    "PROGRAM_SPECS",
    "ProgramInvocation",
    "ProgramSpec",
    "build_program_args",
    "detect_program",
    "get_program_spec",
    "parse_extra_args",
]
