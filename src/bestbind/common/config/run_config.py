# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from pathlib import Path
from typing import Annotated

from pydantic import ConfigDict, Field

from bestbind.common.config.base_config import BaseConfig
from bestbind.common.enums import TransferProgram


class RunConfig(BaseConfig):
    """Fully resolved, read-only settings of one benchmark invocation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    upstream: Annotated[str, Field(min_length=1)]
    program: TransferProgram
    extra_args: tuple[str, ...] = ()
    timeout_seconds: Annotated[int, Field(gt=0)]
    pass_count: Annotated[int, Field(ge=1)]
    scratch_root_dir: Path | None = None
