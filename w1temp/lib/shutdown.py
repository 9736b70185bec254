"""Cooperative shutdown for the acquisition loop.

Reading a sensor retries until the driver reports a good checksum, with no
upper bound. A ShutdownToken is the only way to stop it short of killing
the process: it is cancelled by SIGINT/SIGTERM once handlers are installed,
by an explicit cancel() call, or by an optional deadline.
"""

import signal
import time
from collections.abc import Callable
from types import FrameType

from w1temp.logging import get_logger

logger = get_logger("lib.shutdown")


class ShutdownToken:
    """Cancellation flag checked before every sensor read attempt."""

    def __init__(
        self,
        timeout_sec: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the token.

        Args:
            timeout_sec: Cancel automatically once this many seconds have
                elapsed. None means no deadline.
            clock: Monotonic clock, injectable for tests.
        """
        self._clock = clock
        self._deadline = clock() + timeout_sec if timeout_sec is not None else None
        self._reason: str | None = None

    @property
    def cancelled(self) -> bool:
        if self._reason is None and self._deadline is not None:
            if self._clock() >= self._deadline:
                self._reason = "deadline exceeded"
        return self._reason is not None

    @property
    def reason(self) -> str | None:
        """Why the token was cancelled, or None while it is still live."""
        return self._reason if self.cancelled else None

    def cancel(self, reason: str = "cancelled") -> None:
        if self._reason is None:
            self._reason = reason

    def _handle_signal(self, signum: int, frame: FrameType | None) -> None:
        """Handle shutdown signals gracefully."""
        signal_name = signal.Signals(signum).name
        logger.info("Received %s, stopping acquisition...", signal_name)
        self.cancel(f"received {signal_name}")

    def install_signal_handlers(self) -> None:
        """Register signal handlers that cancel this token."""
        signal.signal(signal.SIGTERM, self._handle_signal)
        signal.signal(signal.SIGINT, self._handle_signal)
