"""Text and tier for every display slot, derived from provider snapshots."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from constants import (PLACEHOLDER, CPU_THRESHOLDS, MEMORY_THRESHOLDS,
                       TEMPERATURE_THRESHOLDS)
from thresholds import Severity, classify

KIB = 1024
MIB = KIB * 1024
GIB = MIB * 1024

READOUT_KEYS = ("cpu", "memory", "temperature", "uptime", "used_memory",
                "total_memory", "process_count", "load_avg")

SPEC_KEYS = ("cpu_model", "cpu_arch", "cpu_cores", "total_memory", "os_info", "hostname")

DEFAULT_THRESHOLDS = {
    "cpu": CPU_THRESHOLDS,
    "memory": MEMORY_THRESHOLDS,
    "temperature": TEMPERATURE_THRESHOLDS,
}


@dataclass(frozen=True)
class Readout:
    text: str
    severity: Optional[Severity] = None
    fill: Optional[float] = None


def format_bytes(num_bytes):
    """Binary units: one-decimal GB from 1 GiB up, whole MB below."""
    gb = num_bytes / GIB
    if gb >= 1:
        return f"{gb:.1f} GB"
    return f"{num_bytes / MIB:.0f} MB"


def format_clock(now=None):
    """24-hour HH:MM:SS."""
    return (now or datetime.now()).strftime("%H:%M:%S")


def format_uptime_hours(seconds):
    return str(int(seconds) // 3600)


def placeholder_readouts():
    board = {key: Readout(PLACEHOLDER) for key in READOUT_KEYS}
    board["memory"] = Readout(PLACEHOLDER, fill=0.0)
    return board


def build_readouts(snapshot, temperature, thresholds=None):
    """Readouts for a successful tick. A missing temperature gets no tier."""
    thresholds = thresholds or DEFAULT_THRESHOLDS
    cpu = round(snapshot.cpu_usage)
    memory = round(snapshot.memory_usage)

    board = placeholder_readouts()
    board["cpu"] = Readout(str(cpu), classify(cpu, *thresholds["cpu"]))
    board["memory"] = Readout(str(memory), classify(memory, *thresholds["memory"]), fill=float(memory))
    board["used_memory"] = Readout(format_bytes(snapshot.used_memory))
    board["total_memory"] = Readout(format_bytes(snapshot.total_memory))
    board["uptime"] = Readout(format_uptime_hours(snapshot.uptime))

    if temperature.available:
        celsius = round(temperature.celsius)
        board["temperature"] = Readout(str(celsius), classify(celsius, *thresholds["temperature"]))
    return board


def format_specs(specs):
    return {
        "cpu_model": specs.cpu_model,
        "cpu_arch": specs.cpu_arch.upper(),
        "cpu_cores": f"{specs.cpu_cores} Cores",
        "total_memory": f"{specs.total_memory_gb:.1f} GB",
        "os_info": f"{specs.os_name} {specs.os_version}",
        "hostname": specs.hostname,
    }


def offline_specs():
    return {
        "cpu_model": "Provider Not Available",
        "cpu_arch": "OFFLINE",
        "cpu_cores": "N/A",
        "total_memory": "N/A",
        "os_info": "Offline Mode",
        "hostname": "localhost",
    }


def failed_specs():
    return {key: "Failed to load" for key in SPEC_KEYS}
