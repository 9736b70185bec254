"""Logging setup for the one-wire logger.

Everything the logger reports goes to stderr under the ``w1temp`` namespace,
so a cron job captures both progress lines and failures in one place.
"""

import logging
import sys

_configured = False

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s - %(message)s"


def configure(level: int = logging.INFO) -> None:
    """Attach the stderr handler to the ``w1temp`` logger.

    Only the first call has an effect.
    """
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger("w1temp")
    package_logger.setLevel(level)
    package_logger.addHandler(handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the ``w1temp.<name>`` logger, e.g. ``get_logger("onewire.run")``."""
    return logging.getLogger(f"w1temp.{name}")
