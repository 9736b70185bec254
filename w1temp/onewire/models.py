"""Domain models for one-wire temperature readings."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class SensorDescriptor:
    """A one-wire temperature probe known to the logger."""

    id: int
    name: str
    device_id: str

    def __str__(self) -> str:
        return f"{self.id}:{self.name}:{self.device_id}"


@dataclass(frozen=True, slots=True)
class Sample:
    """A validated reading for one sensor, in millidegrees Celsius."""

    sensor_id: int
    timestamp: int
    value: int

    @property
    def temperature(self) -> float:
        """Temperature in degrees Celsius, for display."""
        return self.value / 1000

    def as_row(self) -> tuple[int, int, int]:
        """Row parameters in w1temp column order (time, id, value)."""
        return (self.timestamp, self.sensor_id, self.value)


@dataclass(slots=True)
class Run:
    """All samples gathered by one execution, sharing a single timestamp."""

    timestamp: int
    samples: list[Sample] = field(default_factory=list)
    skipped: list[SensorDescriptor] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.samples)
