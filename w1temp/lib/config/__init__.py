"""Centralized configuration for the w1temp logger.

This package provides:
- Pydantic settings models for configuration
- Parsing of the sensor registry and store path list
"""

from .settings import (
    AcquisitionSettings,
    OneWireSettings,
    Settings,
    StorageSettings,
    get_settings,
    parse_sensor_registry,
    parse_sensor_spec,
)

__all__ = [
    # Settings models
    "AcquisitionSettings",
    "OneWireSettings",
    "Settings",
    "StorageSettings",
    # Functions
    "get_settings",
    "parse_sensor_registry",
    "parse_sensor_spec",
]
