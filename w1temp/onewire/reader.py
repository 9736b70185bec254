"""Read DS18B20 probes through the Linux w1 sysfs interface.

The w1_therm driver exposes each probe as a two-line text file:

    2a 00 4b 46 ff ff 0e 10 84 : crc=84 YES
    2a 00 4b 46 ff ff 0e 10 84 t=20875

The first line carries the driver's CRC verdict, the second the
temperature in millidegrees Celsius. The driver already checked the CRC,
so a reading is accepted on the YES marker alone.
"""

import re
from pathlib import Path
from typing import Protocol, TextIO

from w1temp.lib.config.constants import W1_DEVICES_DIR, W1_SLAVE_FILE
from w1temp.lib.exceptions import (
    ChecksumError,
    DeviceNotFoundError,
    TransientReadError,
)
from w1temp.onewire.models import SensorDescriptor

CHECKSUM_OK_MARKER = "YES"

_TEMPERATURE_PATTERN = re.compile(r" t=([+-]?\d+)")


class SensorReader(Protocol):
    """Protocol for anything that can take a single sensor reading."""

    def read(self, sensor: SensorDescriptor) -> int: ...


def is_checksum_valid(line: str) -> bool:
    """Check the driver's CRC verdict on the first status line."""
    return CHECKSUM_OK_MARKER in line


def parse_temperature(line: str) -> int:
    """Extract the millidegree value following ' t=' on the data line.

    Raises:
        TransientReadError: If the marker or the number is missing.
    """
    match = _TEMPERATURE_PATTERN.search(line)
    if match is None:
        raise TransientReadError(f"no temperature in {line.strip()!r}")
    return int(match.group(1))


class W1Reader:
    """Reads temperature probes from the w1 sysfs tree."""

    def __init__(self, devices_dir: str | Path = W1_DEVICES_DIR) -> None:
        self._devices_dir = Path(devices_dir)

    def status_path(self, device_id: str) -> Path:
        return self._devices_dir / device_id / W1_SLAVE_FILE

    def _open(self, device_id: str) -> TextIO:
        return self.status_path(device_id).open("r", encoding="ascii")

    def read(self, sensor: SensorDescriptor) -> int:
        """Take one reading, in millidegrees Celsius.

        Raises:
            DeviceNotFoundError: If the status file cannot be opened.
            ChecksumError: If the driver reports a CRC failure.
            TransientReadError: If the reading is truncated, garbled or
                unparsable.
        """
        try:
            fp = self._open(sensor.device_id)
        except OSError as e:
            raise DeviceNotFoundError(
                f"{self.status_path(sensor.device_id)}: {e.strerror or e}"
            ) from e

        with fp:
            try:
                checksum_line = fp.readline()
                if not checksum_line:
                    raise TransientReadError("empty status file")
                if not is_checksum_valid(checksum_line):
                    raise ChecksumError(
                        f"invalid checksum: {checksum_line.strip()!r}"
                    )
                data_line = fp.readline()
            except OSError as e:
                # w1 bus errors surface as EIO on read
                raise TransientReadError(f"read failed: {e}") from e
            except UnicodeDecodeError as e:
                raise TransientReadError(f"garbled status file: {e}") from e

        if not data_line:
            raise TransientReadError("missing temperature line")
        return parse_temperature(data_line)
