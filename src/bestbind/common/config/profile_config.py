# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import Annotated

from pydantic import Field, model_validator

from bestbind.common.config.base_config import BaseConfig
from bestbind.common.config.config_defaults import ProfileDefaults
from bestbind.common.enums import RunnerFormat
from bestbind.orchestrator.models import Binding


class Profile(BaseConfig):
    """One named table of the bestbind configuration file.

    Example::

        [default]
        format = "ip"
        uses = { "192.0.2.10" = "ISP A", "198.51.100.7" = "ISP B" }
    """

    format: Annotated[
        RunnerFormat,
        Field(
            description="Kind of binding listed in `uses`: `ip` (local addresses) or `docker` (container networks)."
        ),
    ]

    image: Annotated[
        str,
        Field(
            description="Container image providing the transfer programs. Required for the `docker` format."
        ),
    ] = ""

    docker: Annotated[
        str,
        Field(
            min_length=1,
            description="Container runtime command, e.g. `docker` or `podman`.",
        ),
    ] = ProfileDefaults.CONTAINER_RUNTIME

    uses: Annotated[
        dict[str, str],
        Field(
            min_length=1,
            description="Bindings to benchmark, mapping IP address or network name to a label. "
            "Order is preserved and used for every pass.",
        ),
    ]

    @model_validator(mode="after")
    def validate_image_for_docker(self) -> "Profile":
        if self.format == RunnerFormat.DOCKER and not self.image:
            raise ValueError("Docker format requires 'image' field in profile")
        return self

    def bindings(self) -> tuple[Binding, ...]:
        """Return the bindings in declaration order."""
        return tuple(
            Binding(identifier=identifier, label=label)
            for identifier, label in self.uses.items()
        )
