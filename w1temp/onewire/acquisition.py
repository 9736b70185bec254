"""Acquire one sample per sensor for a run.

Sensors are read one after another. A corrupted reading is retried
immediately and without limit, as bus glitches clear within a few reads.
A probe whose status file is missing is skipped for the rest of the run.
"""

from collections.abc import Iterable

from w1temp.lib.exceptions import (
    AcquisitionCancelledError,
    DeviceNotFoundError,
    TransientReadError,
)
from w1temp.lib.shutdown import ShutdownToken
from w1temp.logging import get_logger
from w1temp.onewire.models import Run, Sample, SensorDescriptor
from w1temp.onewire.reader import SensorReader

logger = get_logger("onewire.acquisition")


def read_until_valid(
    reader: SensorReader,
    sensor: SensorDescriptor,
    *,
    shutdown: ShutdownToken | None = None,
) -> int | None:
    """Read a sensor until the driver returns a valid reading.

    Returns:
        The reading in millidegrees Celsius, or None if the device is absent.

    Raises:
        AcquisitionCancelledError: If the shutdown token fires between attempts.
    """
    attempt = 0
    while True:
        if shutdown is not None and shutdown.cancelled:
            raise AcquisitionCancelledError(
                f"sensor {sensor} not read after {attempt} attempts: "
                f"{shutdown.reason}"
            )
        attempt += 1
        try:
            return reader.read(sensor)
        except TransientReadError as e:
            logger.warning(
                "Sensor %d: read error (attempt %d): %s", sensor.id, attempt, e
            )
        except DeviceNotFoundError as e:
            logger.error("Sensor %d: device error: %s", sensor.id, e)
            return None


def acquire_all(
    sensors: Iterable[SensorDescriptor],
    timestamp: int,
    reader: SensorReader,
    *,
    shutdown: ShutdownToken | None = None,
) -> Run:
    """Read every sensor in registry order and collect the samples.

    Args:
        sensors: The sensor registry.
        timestamp: Unix time shared by every sample of the run.
        reader: Source of individual readings.
        shutdown: Optional token that can stop the retry loop.
    """
    run = Run(timestamp=timestamp)

    for sensor in sensors:
        value = read_until_valid(reader, sensor, shutdown=shutdown)
        if value is None:
            run.skipped.append(sensor)
            continue

        sample = Sample(sensor.id, timestamp, value)
        run.samples.append(sample)
        logger.info(
            "Sensor %d: %-10s: %d (%.3f C)",
            sensor.id,
            sensor.name,
            value,
            sample.temperature,
        )

    logger.info(
        "Acquired %d samples (%d sensors skipped)",
        len(run.samples),
        len(run.skipped),
    )
    return run
