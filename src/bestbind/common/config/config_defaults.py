# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class BenchmarkDefaults:
    PROFILE = "default"
    PASS_COUNT = 3
    TIMEOUT_SECONDS = 30
    LOG_FILE = os.devnull


@dataclass(frozen=True)
class ProfileDefaults:
    CONTAINER_RUNTIME = "docker"
