# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Scratch destinations for transfers and measuring what was written to them."""

import logging
import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

__all__ = [
    "measure_size",
    "scratch_destination",
]

_SCRATCH_PREFIX = "bestbind-"


@contextmanager
def scratch_destination(directory: bool, root: Path | None = None) -> Iterator[Path]:
    """Create a fresh scratch file or directory and remove it afterwards.

    Args:
        directory: Create a directory instead of a file
        root: Parent directory, defaults to the system temporary directory
    """
    if directory:
        path = Path(tempfile.mkdtemp(prefix=_SCRATCH_PREFIX, dir=root))
    else:
        fd, name = tempfile.mkstemp(prefix=_SCRATCH_PREFIX, dir=root)
        os.close(fd)
        path = Path(name)

    try:
        yield path
    finally:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path, ignore_errors=True)
        else:
            path.unlink(missing_ok=True)


def measure_size(path: Path) -> int:
    """Size in bytes of a file, or the recursive size of a directory tree.

    Symlinks are not followed. A destination removed by the transfer counts as 0.
    """
    try:
        if not path.is_dir():
            return path.stat().st_size
    except FileNotFoundError:
        return 0

    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for filename in filenames:
            try:
                total += os.lstat(os.path.join(dirpath, filename)).st_size
            except FileNotFoundError:
                logger.debug(f"{filename} vanished while measuring {path}")
    return total
