# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from cyclopts import Group, Parameter


def CLIParameter(  # noqa: N802
    name: tuple[str, ...],
    group: Group,
    **kwargs,
) -> Parameter:
    """Cyclopts parameter metadata for a configuration field.

    The help text is taken from the pydantic ``Field(description=...)``.
    """
    return Parameter(name=name, group=group, **kwargs)
