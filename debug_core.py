"""
Provider Diagnostic Tool
Resolves the provider channel, runs every command once and reports status
"""

import time
from datetime import datetime

from channel import resolve_channel
from models import HardwareSpecs, MetricSnapshot, TemperatureSnapshot
from readouts import format_bytes

# ANSI codes for console output
RED = '\033[91m'
GREEN = '\033[92m'
YELLOW = '\033[93m'
MAGENTA = '\033[95m'
CYAN = '\033[96m'
WHITE = '\033[97m'
RESET = '\033[0m'

RULE = "=" * 60
THIN_RULE = "-" * 60

MARKS = {GREEN: "✓", YELLOW: "⚠", RED: "✗"}


class DiagnosticReport:
    """Lines of a diagnostic run, each with an optional ANSI color."""

    def __init__(self):
        self.lines = []

    def line(self, text="", color=None):
        self.lines.append((text, color))

    def section(self, title):
        self.line()
        self.line(f"[{title}]", MAGENTA)
        self.line(THIN_RULE, WHITE)

    def check(self, color, text):
        self.line(f"{MARKS[color]} {text}", color)

    def get_plain_text(self):
        return "".join(f"{text}\n" for text, _ in self.lines)

    def get_colored_text(self):
        return "".join(f"{color}{text}{RESET}\n" if color else f"{text}\n" for text, color in self.lines)


def _describe_specs(payload):
    specs = HardwareSpecs.from_payload(payload)
    return GREEN, f"{specs.cpu_model} | {specs.cpu_cores} cores | {specs.os_name} {specs.os_version}"


def _describe_system(payload):
    snap = MetricSnapshot.from_payload(payload)
    return GREEN, (f"CPU {snap.cpu_usage:.1f}% | MEM {snap.memory_usage:.1f}% "
                   f"({format_bytes(snap.used_memory)} / {format_bytes(snap.total_memory)})")


def _describe_temperature(payload):
    temp = TemperatureSnapshot.from_payload(payload)
    if not temp.available:
        return YELLOW, "no sensor reading"
    return GREEN, f"{temp.celsius:.1f}°C"


CHECKS = (
    ("get_hardware_specs", _describe_specs),
    ("get_system_info", _describe_system),
    ("get_cpu_temperature", _describe_temperature),
)


def _channel_name(channel):
    name = getattr(channel, "__name__", None)
    if name is None:
        return repr(channel)
    return f"{getattr(channel, '__module__', '?')}.{name}"


def run_diagnostics(channel=None, module_name="monitor_core"):
    """Probe each provider command once; returns a DiagnosticReport."""
    report = DiagnosticReport()
    report.line(RULE, CYAN)
    report.line("PROVIDER DIAGNOSTIC", CYAN)
    report.line(datetime.now().strftime("%Y-%m-%d %H:%M:%S"), CYAN)
    report.line(RULE, CYAN)

    report.section("PROVIDER CHANNEL")
    if channel is None:
        channel = resolve_channel(module_name)
    if not channel:
        report.check(RED, "No provider channel found - offline mode")
        return report
    report.check(GREEN, f"Channel: {_channel_name(channel)}")

    report.section("COMMANDS")
    for command, describe in CHECKS:
        started = time.perf_counter()
        try:
            color, summary = describe(channel(command))
        except Exception as e:
            report.check(RED, f"{command:<22} FAILED: {e}")
            continue
        elapsed_ms = (time.perf_counter() - started) * 1000
        report.check(color, f"{command:<22} {summary} [{elapsed_ms:.0f} ms]")

    report.line()
    report.line(RULE, CYAN)
    report.line("DIAGNOSTIC COMPLETE", CYAN)
    report.line(RULE, CYAN)
    return report
