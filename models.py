"""Snapshot types returned by the metrics provider."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MetricSnapshot:
    """One system-info reading, superseded every poll tick."""
    cpu_usage: float
    memory_usage: float
    used_memory: int
    total_memory: int
    uptime: int

    @classmethod
    def from_payload(cls, payload: dict) -> "MetricSnapshot":
        return cls(
            cpu_usage=float(payload["cpu_usage"]),
            memory_usage=float(payload["memory_usage"]),
            used_memory=int(payload["used_memory"]),
            total_memory=int(payload["total_memory"]),
            uptime=int(payload["uptime"]),
        )


@dataclass(frozen=True)
class TemperatureSnapshot:
    """CPU temperature; celsius is None when the host has no usable sensor."""
    celsius: Optional[float] = None

    @property
    def available(self) -> bool:
        return self.celsius is not None

    @classmethod
    def from_payload(cls, payload: dict) -> "TemperatureSnapshot":
        value = payload["temperature"]
        return cls(celsius=None if value is None else float(value))


@dataclass(frozen=True)
class HardwareSpecs:
    """Static hardware description, fetched once per session."""
    cpu_model: str
    cpu_arch: str
    cpu_cores: int
    total_memory_gb: float
    os_name: str
    os_version: str
    hostname: str

    @classmethod
    def from_payload(cls, payload: dict) -> "HardwareSpecs":
        return cls(
            cpu_model=str(payload["cpu_model"]),
            cpu_arch=str(payload["cpu_arch"]),
            cpu_cores=int(payload["cpu_cores"]),
            total_memory_gb=float(payload["total_memory_gb"]),
            os_name=str(payload["os_name"]),
            os_version=str(payload["os_version"]),
            hostname=str(payload["hostname"]),
        )
