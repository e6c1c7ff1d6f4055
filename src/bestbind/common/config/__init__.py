# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from bestbind.common.config.base_config import BaseConfig
from bestbind.common.config.benchmark_config import BenchmarkConfig
from bestbind.common.config.loader import get_config_paths, load_profile, parse_profile
from bestbind.common.config.profile_config import Profile
from bestbind.common.config.run_config import RunConfig

__all__ = [
    "BaseConfig",
    "BenchmarkConfig",
    "Profile",
    "RunConfig",
    "get_config_paths",
    "load_profile",
    "parse_profile",
]
