import logging
import time

import ttkbootstrap as tb
from ttkbootstrap.constants import *
from screeninfo import get_monitors
from PIL import Image, ImageTk

from constants import *
from app_config import apply_overrides, ensure_config, parse_args, thresholds_from_config
from channel import RequestFailed, resolve_channel
from chart_graphics import ChartRenderer, THEMES
from fps_meter import FrameRateMonitor
from metrics_layout import build_dashboard
from poller import PollingOrchestrator, fetch_hardware_specs
from readouts import format_clock, format_specs, offline_specs, failed_specs
from scheduling import CancellationToken, RepeatingTask
from series import SeriesSet
from thresholds import severity_color
import debug_core
import terminal_gui

logger = logging.getLogger(__name__)

RESIZE_DEBOUNCE_MS = 100 # Prevents excessive redrawing during resize
TIERED_READOUTS = ("cpu", "memory", "temperature")
TEXT_READOUTS = ("uptime", "used_memory", "total_memory", "process_count", "load_avg")
STATUS_TEXT = {
    "ok": "Monitoring active",
    "offline": "Offline - no metrics provider",
    "failed": "Provider request failed",
}

# ==============================================================================
# ==== Window placement
# ==============================================================================
def get_current_monitor_geometry(root):
    try:
        x, y = root.winfo_x(), root.winfo_y()
        for m in get_monitors():
            if m.x <= x < m.x + m.width and m.y <= y < m.y + m.height:
                return m.width, m.height, m.x, m.y
        primary = [m for m in get_monitors() if m.is_primary][0]
        return primary.width, primary.height, primary.x, primary.y
    except Exception:
        return 1920, 1080, 0, 0

def place_window(root, monitor_idx, w=1100, h=680):
    """Center the window on the configured monitor (1-based; 0 = primary screen)."""
    try:
        monitors = get_monitors()
    except Exception:
        monitors = []
    if 0 < monitor_idx <= len(monitors):
        monitor = monitors[monitor_idx - 1]
        x = monitor.x + (monitor.width - w) // 2
        y = monitor.y + (monitor.height - h) // 2
    else:
        x = (root.winfo_screenwidth() - w) // 2
        y = (root.winfo_screenheight() - h) // 2
    root.geometry(f"{w}x{h}+{x}+{y}")

# ==============================================================================
# ==== Dashboard
# ==============================================================================
class DashboardApp:
    def __init__(self, root, config, channel):
        self.root = root
        self.config = config
        self.channel = channel
        self.colorblind = config.get("colorblind_mode", False)

        self.style = tb.Style()
        configure_app_styles(self.style)
        self.widgets = build_dashboard(root, self.style)

        self.token = CancellationToken()
        self.series = SeriesSet(config["history_points"])
        self.renderer = ChartRenderer(THEMES[config["chart_theme"]])
        self.poller = PollingOrchestrator(
            channel,
            self.series,
            self.on_cycle,
            scheduler=root,
            thresholds=thresholds_from_config(config),
            interval_ms=config["poll_interval_ms"],
            token=self.token,
        )
        self.fps_monitor = FrameRateMonitor(self.on_fps, thresholds=tuple(config["fps_thresholds"]))
        self.clock_task = RepeatingTask(root, CLOCK_INTERVAL_MS, self.update_time, token=self.token, name="clock")
        self.frame_task = None

        self._chart_photo = None  # Tk drops images that are not referenced
        self.last_resize_time = 0
        self.fullscreen = False
        self.prev_geometry = None

    def start(self):
        self.redraw_chart()
        self.load_hardware_specs()
        self.poller.start()
        self.clock_task.start()
        self.frame_task = self.fps_monitor.run(self.root, token=self.token)

        self.root.bind("<F11>", self.toggle_fullscreen)
        self.root.bind("<Escape>", lambda e: self.toggle_fullscreen() if self.fullscreen else None)
        self.root.bind("<Configure>", self.handle_resize)
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

    # ---- Hardware specs (once per session) ----
    def load_hardware_specs(self):
        if not self.channel:
            logger.info("Provider not available, showing placeholder specs")
            self.apply_specs(offline_specs())
            return
        future = self.poller.executor.submit(fetch_hardware_specs, self.channel)
        self._await_specs(future)

    def _await_specs(self, future):
        if self.token.cancelled:
            return
        if not future.done():
            self.root.after(JOIN_CHECK_MS * 4, lambda: self._await_specs(future))
            return
        try:
            texts = format_specs(future.result())
        except RequestFailed as e:
            logger.error("Failed to load hardware specs: %s", e)
            texts = failed_specs()
        self.apply_specs(texts)

    def apply_specs(self, texts):
        for key, lbl in self.widgets["specs"].items():
            lbl.config(text=texts[key])

    # ---- Poll results ----
    def on_cycle(self, result):
        readouts = result.readouts
        for key in TIERED_READOUTS:
            r = readouts[key]
            self.widgets[key].config(text=r.text, foreground=severity_color(r.severity, self.colorblind))
        for key in TEXT_READOUTS:
            self.widgets[key].config(text=readouts[key].text)

        bar = self.widgets["memory_bar"]
        memory = readouts["memory"]
        self.style.configure(bar._style_name, background=severity_color(memory.severity, self.colorblind))
        bar["value"] = memory.fill or 0

        self.widgets["status"].config(text=STATUS_TEXT.get(result.status, result.status))
        if result.ok:
            self.redraw_chart()

    def on_fps(self, fps, severity):
        self.widgets["fps"].config(text=str(fps), foreground=severity_color(severity, self.colorblind))

    def update_time(self):
        self.widgets["time"].config(text=format_clock())

    # ---- Chart ----
    def chart_size(self):
        container = self.widgets["chart"].master
        w, h = container.winfo_width() - 8, container.winfo_height() - 20
        if w < 10 or h < 10:
            return CHART_WIDTH, CHART_HEIGHT
        return w, h

    def redraw_chart(self):
        w, h = self.chart_size()
        surface = self.renderer.render(self.series, w, h)
        # Supersampled surface -> on-screen size
        self._chart_photo = ImageTk.PhotoImage(surface.resize((w, h), Image.Resampling.LANCZOS))
        self.widgets["chart"].configure(image=self._chart_photo)

    # ---- Window handling ----
    def toggle_fullscreen(self, event=None):
        self.fullscreen = not self.fullscreen
        if self.fullscreen:
            self.prev_geometry = self.root.geometry()
            w, h, x, y = get_current_monitor_geometry(self.root)
            self.root.overrideredirect(True)
            self.root.geometry(f"{w}x{h}+{x}+{y}")
        else:
            self.root.overrideredirect(False)
            if self.prev_geometry:
                self.root.geometry(self.prev_geometry)

    def handle_resize(self, event):
        """Debounces resize events and redraws the chart."""
        if event.widget != self.root:
            return
        current_time = time.time() * 1000
        if (current_time - self.last_resize_time) > RESIZE_DEBOUNCE_MS:
            self.last_resize_time = current_time
            self.redraw_chart()

    def on_close(self):
        """Clean shutdown of all loops."""
        self.clock_task.cancel()
        if self.frame_task:
            self.frame_task.cancel()
        self.poller.stop()
        self.root.destroy()

# ==============================================================================
# ==== Application Start
# ==============================================================================
def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level or "INFO",
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = apply_overrides(ensure_config(args.config), args)
    logging.getLogger().setLevel(config["log_level"])

    channel = resolve_channel(config["provider_module"])

    if args.diagnose:
        print(debug_core.run_diagnostics(channel).get_colored_text(), end="")
        return
    if args.terminal:
        terminal_gui.run(channel, config)
        return

    root = tb.Window(themename="darkly")
    root.title("HIVEMIND Hardware Monitor")
    root.minsize(720, 480)
    place_window(root, config.get("monitor_index", 0))

    app = DashboardApp(root, config, channel)
    app.start()
    root.mainloop()

if __name__ == "__main__":
    main()
