# metrics_layout.py
import ttkbootstrap as tb
from ttkbootstrap.constants import *
from constants import *
from widgets import build_readout_card, build_info_rows, build_memory_bar

SPEC_ROWS = [
    ("cpu_model", "CPU"),
    ("cpu_arch", "Arch"),
    ("cpu_cores", "Cores"),
    ("total_memory", "Memory"),
    ("os_info", "OS"),
    ("hostname", "Host"),
]

METRIC_ROWS = [
    ("fps", "FPS"),
    ("process_count", "Processes"),
    ("load_avg", "Load Avg"),
]

# ==== Build dashboard ====
def build_dashboard(root, style):
    """
    Creates and places all frames and widgets into the root window using a
    data-driven approach with .grid() for a responsive layout.
    """
    widgets = {}

    for col in range(4):
        root.columnconfigure(col, weight=1, uniform="column")
    root.rowconfigure(1, weight=1)

    card_list = [
        {"key": "cpu", "title": "CPU", "unit": "%", "col": 0},
        {"key": "memory", "title": "Memory", "unit": "%", "col": 1},
        {"key": "temperature", "title": "Temperature", "unit": "°C", "col": 2},
        {"key": "uptime", "title": "Uptime", "unit": "h", "col": 3},
    ]
    for card in card_list:
        f, value_lbl = build_readout_card(root, card["title"], card["unit"])
        f.grid(row=0, column=card["col"], sticky="nsew", padx=4, pady=4)
        widgets[card["key"]] = value_lbl

    # --- Chart ---
    f_chart = tb.Labelframe(root, text="Performance", bootstyle=FONT_TAB_TITLE_COLOR,
                           width=CHART_WIDTH, height=CHART_HEIGHT)
    # Chart image must not resize its own container
    f_chart.grid_propagate(False)
    f_chart.grid(row=1, column=0, columnspan=3, sticky="nsew", padx=4, pady=4)
    f_chart.rowconfigure(0, weight=1)
    f_chart.columnconfigure(0, weight=1)
    chart_lbl = tb.Label(f_chart, background="black")
    chart_lbl.grid(row=0, column=0, sticky="nsew", padx=2, pady=2)
    widgets["chart"] = chart_lbl

    # --- Hardware specs ---
    f_specs = tb.Labelframe(root, text="Hardware", bootstyle=FONT_TAB_TITLE_COLOR)
    f_specs.grid(row=1, column=3, sticky="nsew", padx=4, pady=4)
    widgets["specs"] = build_info_rows(f_specs, SPEC_ROWS)

    # --- Memory details ---
    f_mem = tb.Labelframe(root, text="Memory Usage", bootstyle=FONT_TAB_TITLE_COLOR)
    f_mem.grid(row=2, column=0, columnspan=2, sticky="nsew", padx=4, pady=4)
    f_mem.columnconfigure(0, weight=1)
    bar = build_memory_bar(f_mem, style)
    bar.grid(row=0, column=0, columnspan=2, sticky="ew", padx=4, pady=(4, 2))
    f_mem_rows = tb.Frame(f_mem)
    f_mem_rows.grid(row=1, column=0, sticky="ew")
    mem_labels = build_info_rows(f_mem_rows, [("used_memory", "Used"), ("total_memory", "Total")])
    widgets["memory_bar"] = bar
    widgets["used_memory"] = mem_labels["used_memory"]
    widgets["total_memory"] = mem_labels["total_memory"]

    # --- Metrics ---
    f_metrics = tb.Labelframe(root, text="Metrics", bootstyle=FONT_TAB_TITLE_COLOR)
    f_metrics.grid(row=2, column=2, sticky="nsew", padx=4, pady=4)
    metric_labels = build_info_rows(f_metrics, METRIC_ROWS)
    widgets.update(metric_labels)

    # --- Time ---
    f_time = tb.Labelframe(root, text="System Time", bootstyle=FONT_TAB_TITLE_COLOR)
    f_time.grid(row=2, column=3, sticky="nsew", padx=4, pady=4)
    f_time.columnconfigure(0, weight=1)
    time_lbl = tb.Label(f_time, text="--:--:--", anchor="center", font=FONT_SYSTIME, foreground=CRT_GREEN)
    time_lbl.grid(row=0, column=0, sticky="ew", padx=4, pady=2)
    status_lbl = tb.Label(f_time, text="Starting...", anchor="center", font=FONT_NOTEB, foreground="#888888")
    status_lbl.grid(row=1, column=0, sticky="ew", padx=4, pady=(0, 4))
    widgets["time"] = time_lbl
    widgets["status"] = status_lbl

    return widgets
