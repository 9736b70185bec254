"""Mock one-wire data for development.

Provides a reader that synthesises w1_slave status text instead of opening
sysfs files, so the checksum and parsing path runs unchanged without
hardware. Used by the logger when MOCK_SENSORS=1 is set.
"""

import io
import random
from typing import TextIO, override

from w1temp.onewire.reader import W1Reader

# Scratchpad bytes are not decoded, any plausible dump will do
_SCRATCHPAD = "2a 00 4b 46 ff ff 0e 10 84"
_BAD_SCRATCHPAD = "ff ff ff ff ff ff ff ff ff"


def _random_walk(
    current: float, drift: float, min_val: float, max_val: float
) -> float:
    """Generate next value using random walk with bounds."""
    change = random.gauss(0, drift)
    new_val = current + change
    return max(min_val, min(max_val, new_val))


def render_status(millidegrees: int, crc_ok: bool = True) -> str:
    """Render the two-line text the w1_therm driver would expose."""
    if not crc_ok:
        return (
            f"{_BAD_SCRATCHPAD} : crc=c9 NO\n"
            f"{_BAD_SCRATCHPAD} t=-62\n"
        )
    return (
        f"{_SCRATCHPAD} : crc=84 YES\n"
        f"{_SCRATCHPAD} t={millidegrees}\n"
    )


class MockW1Reader(W1Reader):
    """Mock w1 reader that generates realistic DS18B20 readings.

    Temperatures follow a random walk with drift=0.15, bounded to 15-30
    degrees Celsius, one walk per device. A fraction of reads report a
    failed CRC, like a noisy bus would.
    """

    def __init__(self, crc_failure_rate: float = 0.1) -> None:
        super().__init__()
        self._crc_failure_rate = crc_failure_rate
        self._temperatures: dict[str, float] = {}

    def _next_temperature(self, device_id: str) -> float:
        current = self._temperatures.get(device_id)
        if current is None:
            current = random.uniform(20.0, 23.0)
        self._temperatures[device_id] = _random_walk(
            current, drift=0.15, min_val=15.0, max_val=30.0
        )
        return self._temperatures[device_id]

    @override
    def _open(self, device_id: str) -> TextIO:
        crc_ok = random.random() >= self._crc_failure_rate
        millidegrees = round(self._next_temperature(device_id) * 1000)
        return io.StringIO(render_status(millidegrees, crc_ok))
