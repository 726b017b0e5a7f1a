from collections import namedtuple

import pytest

import monitor_core as core
from models import HardwareSpecs, MetricSnapshot, TemperatureSnapshot

Sensor = namedtuple("Sensor", "label current high critical")


def test_unknown_command():
    with pytest.raises(ValueError):
        core.invoke("reboot")


def test_system_info_payload(monkeypatch):
    monkeypatch.setattr(core, "CPU_SAMPLE_SEC", None)
    snapshot = MetricSnapshot.from_payload(core.invoke("get_system_info"))
    assert 0 <= snapshot.memory_usage <= 100
    assert snapshot.total_memory > 0
    assert snapshot.uptime >= 0


def test_hardware_specs_payload():
    specs = HardwareSpecs.from_payload(core.invoke("get_hardware_specs"))
    assert specs.cpu_cores > 0
    assert specs.cpu_model


def _sensors(monkeypatch, readings):
    monkeypatch.setattr(core.psutil, "sensors_temperatures", lambda: readings, raising=False)


def test_temperature_prefers_cpu_sensors(monkeypatch):
    _sensors(monkeypatch, {
        "acpitz": [Sensor("", 30.0, None, None)],
        "coretemp": [Sensor("Package id 0", 61.0, 80.0, 100.0)],
    })
    assert core.get_cpu_temperature() == {"temperature": 61.0}


def test_temperature_falls_back_to_thermal_zones(monkeypatch):
    _sensors(monkeypatch, {"thermal_zone0": [Sensor("", 44.0, None, None)]})
    assert core.get_cpu_temperature() == {"temperature": 44.0}


def test_no_sensors_is_a_missing_reading(monkeypatch):
    _sensors(monkeypatch, {})
    reading = TemperatureSnapshot.from_payload(core.get_cpu_temperature())
    assert not reading.available
