"""Shared pytest fixtures for the test suite."""

import logging
import sqlite3
from datetime import UTC, datetime
from pathlib import Path

import pytest

from w1temp.lib.config import Settings
from w1temp.lib.config.testing import set_settings
from w1temp.lib.mock import render_status
from w1temp.onewire.models import SensorDescriptor

SQL_DIR = Path(__file__).parent.parent / "w1temp" / "lib" / "sql"

_GOOD_STATUS = (
    "2a 00 4b 46 ff ff 0e 10 84 : crc=84 YES\n"
    "2a 00 4b 46 ff ff 0e 10 84 t=20875\n"
)
_BAD_CRC_STATUS = (
    "ff ff ff ff ff ff ff ff ff : crc=c9 NO\n"
    "ff ff ff ff ff ff ff ff ff t=-62\n"
)


def _init_store(path: Path) -> Path:
    """Create a store with the w1temp table, using sync sqlite3."""
    conn = sqlite3.connect(str(path))
    conn.executescript((SQL_DIR / "init_w1temp_table.sql").read_text())
    conn.close()
    return path


def _read_rows(path: Path) -> list[tuple[int, int, int]]:
    """Return all w1temp rows of a store in insertion order."""
    conn = sqlite3.connect(str(path))
    try:
        return conn.execute(
            "SELECT time, id, value FROM w1temp ORDER BY rowid"
        ).fetchall()
    finally:
        conn.close()


@pytest.fixture(autouse=True)
def configure_caplog(caplog):
    """Ensure caplog captures logs from the w1temp namespace."""
    caplog.set_level(logging.INFO, logger="w1temp")


@pytest.fixture(autouse=True)
def reset_settings():
    """Reset global settings after each test to avoid cross-test pollution."""
    yield
    set_settings(None)


@pytest.fixture
def frozen_time():
    """Return a fixed datetime for deterministic tests."""
    return datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def timestamp(frozen_time):
    return int(frozen_time.timestamp())


@pytest.fixture
def sensors():
    """The two probes of the default registry."""
    return (
        SensorDescriptor(1, "ambiant", "10-000802775cc7"),
        SensorDescriptor(2, "rack", "10-000802776315"),
    )


@pytest.fixture
def w1_devices(tmp_path):
    """Fake w1 sysfs tree.

    Returns a function that writes a device's w1_slave file, either from
    raw text or from a millidegree value.
    """
    devices_dir = tmp_path / "w1" / "devices"
    devices_dir.mkdir(parents=True)

    def add_device(
        device_id: str, value: int | None = None, text: str | None = None
    ) -> Path:
        device_dir = devices_dir / device_id
        device_dir.mkdir(exist_ok=True)
        status = device_dir / "w1_slave"
        status.write_text(text if text is not None else render_status(value))
        return status

    add_device.dir = devices_dir
    return add_device


@pytest.fixture
def stores(tmp_path):
    """Primary and fallback stores, both with the w1temp table."""
    return (
        _init_store(tmp_path / "temp.sqlite3"),
        _init_store(tmp_path / "fallback.sqlite3"),
    )


@pytest.fixture
def test_settings(w1_devices, stores):
    """Settings pointing at the fake sysfs tree and the temp stores."""
    settings = Settings(
        w1_devices_dir=str(w1_devices.dir),
        sensors="1:ambiant:10-000802775cc7,2:rack:10-000802776315",
        db_paths=",".join(str(path) for path in stores),
        db_timeout_sec=1.0,
        mock_sensors=False,
        acquisition_timeout_sec=None,
    )
    set_settings(settings)
    return settings


@pytest.fixture
def good_status():
    """Status text of a reading with a valid CRC, 20.875 degrees."""
    return _GOOD_STATUS


@pytest.fixture
def bad_crc_status():
    """Status text of a reading the driver flagged with a CRC failure."""
    return _BAD_CRC_STATUS


@pytest.fixture
def read_rows():
    """Return a function reading all w1temp rows of a store."""
    return _read_rows


@pytest.fixture
def init_store():
    """Return a function creating a store with the w1temp table."""
    return _init_store
