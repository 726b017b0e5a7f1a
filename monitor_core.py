import psutil
import subprocess
import platform
import socket
import time
import logging
from functools import lru_cache

logger = logging.getLogger(__name__)

# Sampling window for CPU usage; psutil needs two readings to compute a delta.
CPU_SAMPLE_SEC = 0.2

GIB = 1024 ** 3

# Sensor-name keywords, strongest CPU match first
CPU_SENSOR_KEYWORDS = ('cpu', 'core', 'package', 'k10temp')
GENERIC_SENSOR_KEYWORDS = ('temp', 'thermal')

def _command_output(args, timeout=0.3):
    try:
        return subprocess.check_output(args, stderr=subprocess.DEVNULL, timeout=timeout, text=True).strip()
    except (OSError, subprocess.SubprocessError):
        return None

def _cpuinfo_model():
    try:
        with open("/proc/cpuinfo") as cpuinfo:
            for row in cpuinfo:
                key, _, value = row.partition(":")
                if key.strip() == "model name":
                    return value.strip()
    except OSError:
        return None
    return None

def _wmic_model():
    # "Name=Intel(R) Core(TM) i7-13700K CPU @ 3.40GHz"
    out = _command_output(["wmic", "cpu", "get", "Name", "/value"]) or ""
    for row in out.splitlines():
        if row.startswith("Name="):
            return row[len("Name="):].strip()
    return None

@lru_cache(maxsize=1)
def _cpu_model():
    """Human-readable CPU name; looked up once per process."""
    system = platform.system()
    if system == "Windows":
        model = _wmic_model()
    elif system == "Darwin":
        model = _command_output(["sysctl", "-n", "machdep.cpu.brand_string"])
    else:
        model = _cpuinfo_model()
    return model or platform.processor() or "Unknown CPU"

# ---- Provider commands ----
def get_system_info():
    """CPU load averaged over a short sample, memory usage and uptime."""
    cpu_usage = psutil.cpu_percent(interval=CPU_SAMPLE_SEC)
    mem = psutil.virtual_memory()
    memory_usage = (mem.used / mem.total) * 100.0 if mem.total > 0 else 0.0
    uptime = int(time.time() - psutil.boot_time())
    logger.debug("System info - CPU: %.1f%%, Memory: %.1f%%", cpu_usage, memory_usage)
    return {
        "cpu_usage": cpu_usage,
        "memory_usage": memory_usage,
        "total_memory": mem.total,
        "used_memory": mem.used,
        "uptime": uptime,
    }

def _first_reading(temps, keywords):
    for name, sensors in temps.items():
        if any(kw in name.lower() for kw in keywords):
            for sensor in sensors:
                if sensor.current is not None:
                    return sensor.current
    return None

def get_cpu_temperature():
    """
    Returns {"temperature": celsius} or {"temperature": None} if not available.
    Uses `psutil.sensors_temperatures()`, which only exists on Linux/FreeBSD.
    """
    reader = getattr(psutil, "sensors_temperatures", None)
    temps = reader() if reader else None
    if not temps:
        return {"temperature": None}

    celsius = _first_reading(temps, CPU_SENSOR_KEYWORDS)
    if celsius is None:
        celsius = _first_reading(temps, GENERIC_SENSOR_KEYWORDS)
    return {"temperature": celsius}

def get_hardware_specs():
    mem = psutil.virtual_memory()
    return {
        "cpu_model": _cpu_model(),
        "cpu_cores": psutil.cpu_count(logical=True) or 0,
        "cpu_arch": platform.machine() or "unknown",
        "total_memory_gb": mem.total / GIB,
        "os_name": platform.system() or "Unknown OS",
        "os_version": platform.release() or "Unknown Version",
        "hostname": socket.gethostname() or "Unknown Host",
    }

COMMANDS = {
    "get_system_info": get_system_info,
    "get_cpu_temperature": get_cpu_temperature,
    "get_hardware_specs": get_hardware_specs,
}

def invoke(command):
    """Request channel binding: run a provider command by name."""
    try:
        handler = COMMANDS[command]
    except KeyError:
        raise ValueError(f"Unknown provider command: {command}") from None
    return handler()
