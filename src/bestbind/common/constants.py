# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Shared constants for bestbind."""

BYTES_PER_KIB = 1024

CONFIG_FILE_NAME = "bestbind.conf"
HOME_CONFIG_FILE_NAME = ".bestbind.conf"
SYSTEM_CONFIG_PATH = "/etc/bestbind.conf"

BINDER_LIBRARY_NAME = "libbinder.so"
BINDER_DOWNLOAD_URL = "https://github.com/taoky/libbinder/releases"
PRELOAD_ENV_VAR = "LD_PRELOAD"
BIND_ADDRESS_ENV_VAR = "BIND_ADDRESS"

# Mount point of the scratch file or directory inside transfer containers
CONTAINER_SCRATCH_PATH = "/data"
CONTAINER_NAME_PREFIX = "bestbind-"

# Exit status used when the benchmark is interrupted by the user (128 + SIGINT)
EXIT_CODE_CANCELLED = 130
