# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Console and file reporting of benchmark results."""

from bestbind.exporters.console_exporter import ConsoleReporter, format_run_status
from bestbind.exporters.json_exporter import JsonReportExporter

__all__ = [
    "ConsoleReporter",
    "JsonReportExporter",
    "format_run_status",
]
