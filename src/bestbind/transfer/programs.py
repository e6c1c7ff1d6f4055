# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Transfer program descriptors.

Everything here is a pure function of its inputs: no process is started and no
file is touched.
"""

import shlex
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from bestbind.common.constants import BIND_ADDRESS_ENV_VAR, PRELOAD_ENV_VAR
from bestbind.common.enums import TerminationPolicy, TransferKind, TransferProgram
from bestbind.common.exceptions import ConfigurationError

__all__ = [
    "PROGRAM_SPECS",
    "ProgramInvocation",
    "ProgramSpec",
    "build_program_args",
    "detect_program",
    "get_program_spec",
    "parse_extra_args",
]


@dataclass(frozen=True, slots=True)
class ProgramSpec:
    """Static facts about a transfer program.

    Attributes:
        program: The concrete tool
        kind: Semantic transfer contract
        native_binding: Whether the tool can select its source address itself
        destination_is_directory: Whether the tool writes a directory tree instead of one file
        termination_policy: How to stop the tool on timeout or cancellation
    """

    program: TransferProgram
    kind: TransferKind
    native_binding: bool
    destination_is_directory: bool
    termination_policy: TerminationPolicy


# rsync: the generator forwards termination to its receiver, and signalling both at once
# can leave the receiver hung, so only the primary process is signalled.
# git: networking happens in git-remote-* helpers and a gracefully stopped git cleans up
# the partial clone, so the whole group is SIGKILLed.
PROGRAM_SPECS: dict[TransferProgram, ProgramSpec] = {
    TransferProgram.RSYNC: ProgramSpec(
        program=TransferProgram.RSYNC,
        kind=TransferKind.FILE_SYNC,
        native_binding=True,
        destination_is_directory=False,
        termination_policy=TerminationPolicy.GRACEFUL,
    ),
    TransferProgram.CURL: ProgramSpec(
        program=TransferProgram.CURL,
        kind=TransferKind.HTTP_FETCH,
        native_binding=True,
        destination_is_directory=False,
        termination_policy=TerminationPolicy.GRACEFUL,
    ),
    TransferProgram.WGET: ProgramSpec(
        program=TransferProgram.WGET,
        kind=TransferKind.HTTP_FETCH,
        native_binding=True,
        destination_is_directory=False,
        termination_policy=TerminationPolicy.GRACEFUL,
    ),
    TransferProgram.GIT: ProgramSpec(
        program=TransferProgram.GIT,
        kind=TransferKind.VERSION_CONTROL_CLONE,
        native_binding=False,
        destination_is_directory=True,
        termination_policy=TerminationPolicy.GROUP_KILL,
    ),
}


def get_program_spec(program: TransferProgram) -> ProgramSpec:
    return PROGRAM_SPECS[program]


@dataclass(frozen=True, slots=True)
class ProgramInvocation:
    """A ready-to-spawn command line.

    Attributes:
        argv: Full argument vector, program name first
        env: Extra environment variables to set for the child
        destination_is_directory: Whether the destination is a directory tree
    """

    argv: tuple[str, ...]
    env: dict[str, str] = field(default_factory=dict)
    destination_is_directory: bool = False


def build_program_args(
    program: TransferProgram,
    upstream: str,
    destination: Path | str,
    extra_args: Sequence[str] = (),
    bind_address: str | None = None,
    binder_path: Path | None = None,
) -> ProgramInvocation:
    """Build the command line for one transfer.

    Args:
        program: Transfer program to run
        upstream: Upstream locator handed to the program
        destination: Scratch file or directory the program writes to
        extra_args: Additional arguments appended after the required ones
        bind_address: Source address to bind to, if any
        binder_path: Interposition library used when the program cannot bind natively

    Returns:
        ProgramInvocation with argv and environment

    Raises:
        ConfigurationError: If binding is requested for a program without native
            support and no interposition library is given
    """
    spec = get_program_spec(program)
    dest = str(destination)
    argv: list[str] = [program.value]
    env: dict[str, str] = {}

    match program:
        case TransferProgram.RSYNC:
            argv += ["-vP", "-rLptgoD", "--inplace"]
            if bind_address is not None:
                argv += ["--address", bind_address]
            argv += [upstream, dest]
        case TransferProgram.CURL:
            argv += ["-o", dest]
            if bind_address is not None:
                argv += ["--interface", bind_address]
            argv.append(upstream)
        case TransferProgram.WGET:
            argv += ["-O", dest]
            if bind_address is not None:
                argv += ["--bind-address", bind_address]
            argv.append(upstream)
        case TransferProgram.GIT:
            # The address never goes on the command line, see the env below
            argv += ["clone", "--bare", upstream, dest]

    argv.extend(extra_args)

    if bind_address is not None and not spec.native_binding:
        if binder_path is None:
            raise ConfigurationError(
                f"{program} cannot bind to {bind_address} natively and no "
                "interposition library was provided"
            )
        env[PRELOAD_ENV_VAR] = str(binder_path)
        env[BIND_ADDRESS_ENV_VAR] = bind_address

    return ProgramInvocation(
        argv=tuple(argv),
        env=env,
        destination_is_directory=spec.destination_is_directory,
    )


def parse_extra_args(texts: Iterable[str]) -> list[str]:
    """Split shell-quoted extra argument strings into one argument list.

    Raises:
        ConfigurationError: If any text has unbalanced quoting
    """
    args: list[str] = []
    for text in texts:
        try:
            args.extend(shlex.split(text))
        except ValueError as e:
            raise ConfigurationError(
                f"Failed to parse extra arguments {text!r}: {e}"
            ) from e
    return args


def detect_program(upstream: str) -> TransferProgram:
    """Guess the transfer program from the upstream locator.

    Raises:
        ConfigurationError: If the locator matches no known scheme
    """
    lowered = upstream.lower()
    if lowered.startswith("rsync://") or "::" in lowered:
        return TransferProgram.RSYNC
    if lowered.startswith(("http://", "https://")):
        if lowered.endswith(".git"):
            return TransferProgram.GIT
        return TransferProgram.CURL
    if lowered.startswith("git://"):
        return TransferProgram.GIT
    raise ConfigurationError(
        f"Cannot detect upstream program for {upstream!r}. Please specify with --program."
    )
