# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Cooperative cancellation shared between the signal handlers and the benchmark loop."""

import logging
import signal
import threading

logger = logging.getLogger(__name__)

__all__ = [
    "CancellationSource",
    "CancellationToken",
]


class CancellationToken:
    """Read-only view of a cancellation request.

    The benchmark engine only ever checks ``is_cancelled``; setting the flag is
    reserved to the owning CancellationSource.
    """

    __slots__ = ("_event",)

    def __init__(self, event: threading.Event) -> None:
        self._event = event

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    @classmethod
    def never(cls) -> "CancellationToken":
        """Token that is never cancelled."""
        return cls(threading.Event())


class CancellationSource:
    """Owner of a cancellation flag, typically wired to SIGINT/SIGTERM."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self.token = CancellationToken(self._event)

    def cancel(self) -> None:
        self._event.set()

    def install_signal_handlers(
        self, signals: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)
    ) -> None:
        """Cancel on the given signals instead of raising KeyboardInterrupt.

        Must be called from the main thread.
        """

        def _handler(signum, _frame) -> None:
            if not self._event.is_set():
                logger.debug(f"Received {signal.Signals(signum).name}, cancelling")
            self.cancel()

        for sig in signals:
            signal.signal(sig, _handler)
