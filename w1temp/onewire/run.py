"""Read every one-wire probe once and store the samples in each database.

Meant to be run from a scheduler, e.g. every minute from cron:

    * * * * * python -m w1temp.onewire

All samples of a run share the timestamp taken before the first sensor is
read. The same samples are then written to every configured store, in
order. A store that cannot be opened stops the program with exit status 1;
rows already written to earlier stores are kept.
"""

import asyncio
import sys
from collections.abc import Sequence
from datetime import UTC, datetime

from pydantic import ValidationError

from w1temp.lib.config import Settings, get_settings
from w1temp.lib.exceptions import AcquisitionCancelledError, StoreOpenError
from w1temp.lib.shutdown import ShutdownToken
from w1temp.logging import configure, get_logger
from w1temp.onewire.acquisition import acquire_all
from w1temp.onewire.models import Run
from w1temp.onewire.persistence import persist
from w1temp.onewire.reader import SensorReader, W1Reader

logger = get_logger("onewire.run")


async def persist_all(
    run: Run, store_paths: Sequence[str], *, timeout_sec: float | None = None
) -> None:
    """Write the run to every store, stopping at the first one that won't open.

    Raises:
        StoreOpenError: If a store cannot be opened. Later stores are skipped.
    """
    for path in store_paths:
        await persist(run, path, timeout_sec=timeout_sec)


def _create_reader(settings: Settings) -> SensorReader:
    """Create reader based on configuration."""
    if settings.onewire.mock:
        from w1temp.lib.mock import MockW1Reader

        logger.info("Using mock one-wire sensors")
        return MockW1Reader()
    return W1Reader(settings.onewire.devices_dir)


def utcnow_timestamp() -> int:
    """Current Unix time in whole seconds."""
    return int(datetime.now(UTC).timestamp())


def run_once(
    settings: Settings,
    reader: SensorReader,
    shutdown: ShutdownToken | None = None,
) -> Run:
    """Acquire all sensors and persist the run to every store."""
    timestamp = utcnow_timestamp()
    run = acquire_all(
        settings.onewire.sensors, timestamp, reader, shutdown=shutdown
    )
    storage = settings.storage
    asyncio.run(
        persist_all(run, storage.paths, timeout_sec=storage.timeout_sec)
    )
    return run


def main() -> int:
    """Entry point for the one-wire logger."""
    configure()
    logger.info("Starting one-wire sensors logger")

    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    shutdown = ShutdownToken(timeout_sec=settings.acquisition.timeout_sec)
    shutdown.install_signal_handlers()

    try:
        run_once(settings, _create_reader(settings), shutdown)
    except AcquisitionCancelledError as e:
        logger.error("Acquisition cancelled, nothing stored: %s", e)
        return 1
    except StoreOpenError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
