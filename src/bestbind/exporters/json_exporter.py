# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""JSON exporter for the results of one benchmark invocation."""

import logging
from pathlib import Path

import orjson

from bestbind.common.config import RunConfig
from bestbind.orchestrator.models import BenchmarkReport

logger = logging.getLogger(__name__)


class JsonReportExporter:
    """Writes a BenchmarkReport to a JSON file.

    Output structure:
    {
        "upstream": "...",
        "program": "rsync",
        "timeout_seconds": 30,
        "pass_count": 3,
        "cancelled": false,
        "passes": [[{...RunResult...}, ...], ...],
        "ranking": [{"binding": {...}, "ranked_value_kbps": 123.4, "num_samples": 3}, ...]
    }
    """

    def __init__(self, report: BenchmarkReport, run_config: RunConfig, output_path: Path) -> None:
        self._report = report
        self._run_config = run_config
        self._output_path = Path(output_path)

    def _generate_content(self) -> bytes:
        output = {
            "upstream": self._run_config.upstream,
            "program": self._run_config.program.value,
            "timeout_seconds": self._run_config.timeout_seconds,
            "pass_count": self._run_config.pass_count,
            "cancelled": self._report.cancelled,
            "passes": [
                [result.model_dump(mode="json") for result in results]
                for results in self._report.passes
            ],
            "ranking": [score.model_dump(mode="json") for score in self._report.scores],
        }
        return orjson.dumps(output, option=orjson.OPT_INDENT_2)

    def export(self) -> Path:
        """Write the report and return the path written."""
        self._output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._output_path, "wb") as f:
            f.write(self._generate_content())
        logger.info(f"Results written to {self._output_path}")
        return self._output_path
