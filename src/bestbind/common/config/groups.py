# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from cyclopts import Group


class Groups:
    """Help panels of the bestbind command line, in display order."""

    PROFILE = Group.create_ordered("Profile")
    BENCHMARK = Group.create_ordered("Benchmark")
    TRANSFER = Group.create_ordered("Transfer")
    OUTPUT = Group.create_ordered("Output")
