"""Settings models and configuration loading for the w1temp logger."""

import re
from functools import cached_property, lru_cache
from typing import Annotated, Any, Self

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from w1temp.lib.config.constants import (
    DB_BUSY_TIMEOUT_SEC,
    DEFAULT_DB_PATHS,
    DEFAULT_SENSORS,
    W1_DEVICES_DIR,
)
from w1temp.onewire.models import SensorDescriptor

# Patterns
_SENSOR_SPEC_PATTERN = re.compile(
    r"^(?P<id>\d+):(?P<name>[^:]+):(?P<device_id>[0-9A-Za-z]{2}-[0-9A-Za-z]+)$"
)


def _parse_bool(v: Any) -> bool:
    """Parse boolean from string '1'/'0' or actual bool."""
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        return v == "1"
    return bool(v)


_BoolFromStr = Annotated[bool, BeforeValidator(_parse_bool)]


def _split_csv(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def parse_sensor_spec(raw: str) -> SensorDescriptor:
    """Parse one 'id:name:device_id' registry entry.

    Raises:
        ValueError: If the entry is malformed.
    """
    match = _SENSOR_SPEC_PATTERN.match(raw.strip())
    if match is None:
        raise ValueError(
            f"sensor entry must be in 'id:name:device_id' format, got '{raw}'"
        )
    return SensorDescriptor(
        id=int(match.group("id")),
        name=match.group("name").strip(),
        device_id=match.group("device_id"),
    )


def parse_sensor_registry(raw: str) -> tuple[SensorDescriptor, ...]:
    """Parse a comma-separated list of registry entries, keeping their order."""
    return tuple(parse_sensor_spec(entry) for entry in _split_csv(raw))


class OneWireSettings(BaseModel):
    """One-wire bus and sensor registry settings."""

    model_config = ConfigDict(frozen=True)

    devices_dir: str = W1_DEVICES_DIR
    sensors: tuple[SensorDescriptor, ...] = ()
    mock: bool = False


class StorageSettings(BaseModel):
    """SQLite store settings."""

    model_config = ConfigDict(frozen=True)

    paths: tuple[str, ...] = ()
    timeout_sec: float = DB_BUSY_TIMEOUT_SEC


class AcquisitionSettings(BaseModel):
    """Acquisition loop settings."""

    model_config = ConfigDict(frozen=True)

    # None keeps the retry loop unbounded
    timeout_sec: float | None = None


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # One-wire bus
    w1_devices_dir: str = W1_DEVICES_DIR
    sensors: str = DEFAULT_SENSORS
    mock_sensors: _BoolFromStr = False

    # Stores
    db_paths: str = DEFAULT_DB_PATHS
    db_timeout_sec: float = Field(default=DB_BUSY_TIMEOUT_SEC, ge=0)

    # Acquisition
    acquisition_timeout_sec: float | None = Field(default=None, gt=0)

    @field_validator("acquisition_timeout_sec", mode="before")
    @classmethod
    def _empty_is_unset(cls, v: Any) -> Any:
        """Treat an empty environment value as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @cached_property
    def sensor_registry(self) -> tuple[SensorDescriptor, ...]:
        """Get the ordered sensor registry."""
        return parse_sensor_registry(self.sensors)

    @cached_property
    def store_paths(self) -> tuple[str, ...]:
        """Get the ordered store paths, primary first."""
        return tuple(_split_csv(self.db_paths))

    @cached_property
    def onewire(self) -> OneWireSettings:
        """Get one-wire settings as nested object."""
        return OneWireSettings(
            devices_dir=self.w1_devices_dir,
            sensors=self.sensor_registry,
            mock=self.mock_sensors,
        )

    @cached_property
    def storage(self) -> StorageSettings:
        """Get store settings as nested object."""
        return StorageSettings(
            paths=self.store_paths,
            timeout_sec=self.db_timeout_sec,
        )

    @cached_property
    def acquisition(self) -> AcquisitionSettings:
        """Get acquisition settings as nested object."""
        return AcquisitionSettings(timeout_sec=self.acquisition_timeout_sec)

    @model_validator(mode="after")
    def validate_settings(self) -> Self:
        """Validate the sensor registry and store list."""
        errors: list[str] = []

        registry: list[SensorDescriptor] = []
        for entry in _split_csv(self.sensors):
            try:
                registry.append(parse_sensor_spec(entry))
            except ValueError as e:
                errors.append(f"SENSORS: {e}")

        if not registry and not errors:
            errors.append("SENSORS must list at least one sensor")

        ids = [sensor.id for sensor in registry]
        duplicate_ids = sorted({i for i in ids if ids.count(i) > 1})
        if duplicate_ids:
            errors.append(
                f"SENSORS has duplicate ids: {', '.join(map(str, duplicate_ids))}"
            )

        devices = [sensor.device_id for sensor in registry]
        duplicate_devices = sorted({d for d in devices if devices.count(d) > 1})
        if duplicate_devices:
            errors.append(
                f"SENSORS has duplicate devices: {', '.join(duplicate_devices)}"
            )

        if not _split_csv(self.db_paths):
            errors.append("DB_PATHS must list at least one store path")

        if errors:
            raise ValueError(
                "Configuration validation failed:\n  - "
                + "\n  - ".join(errors)
            )

        return self


# Settings override for testing - allows injecting custom Settings without
# modifying environment variables or clearing the lru_cache.
_settings_override: Settings | None = None


@lru_cache(maxsize=1)
def _load_settings() -> Settings:
    """Load settings from environment (cached)."""
    return Settings()


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns the test override if set, otherwise loads from environment
    variables (cached after first load). For testing, use set_settings()
    from w1temp.lib.config.testing to override.
    """
    if _settings_override is not None:
        return _settings_override
    return _load_settings()
