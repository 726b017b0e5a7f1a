import curses
import logging
import time

from app_config import thresholds_from_config
from constants import PLACEHOLDER
from poller import PollingOrchestrator
from readouts import format_clock
from series import SeriesSet
from thresholds import Severity

logger = logging.getLogger(__name__)

# curses color pair numbers
RED, GREEN, YELLOW, CYAN = 1, 2, 3, 4
SEVERITY_PAIRS = {Severity.GOOD: GREEN, Severity.WARNING: YELLOW, Severity.DANGER: RED}

# ==== Helper functions ====
def ascii_bar(value, maxval, width=40, char="█"):
    """Return an ASCII progress bar."""
    if value is None:
        return "[ ? ]"
    filled = int((value / maxval) * width)
    return char * filled + "-" * (width - filled)

def readout_pair(readout):
    return SEVERITY_PAIRS.get(readout.severity, CYAN)

def screen_lines(result, cpu_value=None):
    """(row, col, text, color pair) for one refresh of the console screen."""
    r = result.readouts
    lines = [
        (1, 2, f"Hardware Monitor [{result.status.upper()}]  {format_clock()}", CYAN),
        (3, 2, f"CPU Usage: {r['cpu'].text}%", readout_pair(r["cpu"])),
        (4, 4, ascii_bar(cpu_value if result.ok else None, 100), GREEN),
        (6, 2, f"Memory: {r['memory'].text}% (Used {r['used_memory'].text} / {r['total_memory'].text})",
         readout_pair(r["memory"])),
        (7, 4, ascii_bar(r["memory"].fill if result.ok else None, 100), GREEN),
    ]
    row = 9
    # Temperature only when the host has a reading
    if r["temperature"].text != PLACEHOLDER:
        lines.append((row, 2, f"CPU Temperature: {r['temperature'].text}°C", readout_pair(r["temperature"])))
        row += 1
    lines.append((row, 2, f"Uptime: {r['uptime'].text}h", GREEN))
    return lines

def _put(stdscr, row, col, text, attr):
    # Rows past the bottom of a small terminal are dropped
    try:
        stdscr.addstr(row, col, text, attr)
    except curses.error:
        pass

# ==== Curses drawing loop ====
def draw_screen(stdscr, poller):
    curses.curs_set(0)
    curses.start_color()
    curses.init_pair(RED, curses.COLOR_RED, curses.COLOR_BLACK)
    curses.init_pair(GREEN, curses.COLOR_GREEN, curses.COLOR_BLACK)
    curses.init_pair(YELLOW, curses.COLOR_YELLOW, curses.COLOR_BLACK)
    curses.init_pair(CYAN, curses.COLOR_CYAN, curses.COLOR_BLACK)

    while True:
        result = poller.poll_once()
        cpu_values = poller.series.cpu.values()
        stdscr.clear()
        for row, col, text, pair in screen_lines(result, cpu_values[-1] if cpu_values else None):
            _put(stdscr, row, col, text, curses.color_pair(pair))
        _put(stdscr, curses.LINES - 1, 2, "[CTRL+C to exit]", curses.color_pair(CYAN))
        stdscr.refresh()
        time.sleep(poller.interval_ms / 1000)

def run(channel, config):
    """Console mode: same poll cycle as the window, drawn with curses."""
    poller = PollingOrchestrator(
        channel,
        SeriesSet(config["history_points"]),
        on_cycle=lambda result: logger.debug("Terminal cycle: %s", result.status),
        thresholds=thresholds_from_config(config),
        interval_ms=config["poll_interval_ms"],
    )
    try:
        curses.wrapper(draw_screen, poller)
    except KeyboardInterrupt:
        pass
    finally:
        poller.stop()
