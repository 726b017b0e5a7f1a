# --- Timing ---
POLL_INTERVAL_MS = 2000
CLOCK_INTERVAL_MS = 1000
FRAME_INTERVAL_MS = 16
FPS_WINDOW_MS = 1000
JOIN_CHECK_MS = 25

# --- Chart ---
MAX_POINTS = 50
DEVICE_SCALE = 2
CHART_PADDING = 15
GRID_ROWS = 4
GRID_COLUMNS = 15
CHART_WIDTH = 640
CHART_HEIGHT = 240
PROGRESS_THICKNESS = 24

PLACEHOLDER = "--"

# --- Severity cutoffs (warn, danger) ---
CPU_THRESHOLDS = (70, 85)
MEMORY_THRESHOLDS = (75, 90)
TEMPERATURE_THRESHOLDS = (70, 80)
FPS_THRESHOLDS = (30, 55)

# Color schemes for color blind mode
CRT_GREEN = "#00FF66"
CRT_YELLOW = "#FFFF00"
CRT_RED = "#FF4444"
CRT_GRID  = "#024D02"
CRT_CYAN = "#04AD97"

COLORBLIND_COLORS = {
    'success': '#0173B2',   # Blue
    'warning': '#DE8F05',   # Orange
    'danger': '#CC78BC',    # Pink
    'info': '#029E73'       # Teal
}

NORMAL_COLORS = {
    'success': CRT_GREEN,
    'warning': CRT_YELLOW,
    'danger': CRT_RED,
    'info': CRT_CYAN
}

# --- Chart palette ---
HIVEMIND_CPU = "#00ff88"
HIVEMIND_MEMORY = "#ff6b35"
HIVEMIND_TEMP = "#3498db"

# --- Font styling ---
FONT_TITLE = ("Consolas", 14, "bold")
FONT_VALUE = ("Consolas", 34, "bold")
FONT_SYSTIME = ("Consolas", 40, "bold")
FONT_INFOTXT = ("Consolas", 11, "bold")
FONT_NOTEB = ("Consolas", 8, "bold")
FONT_TAB_TITLE_COLOR = "success"

CHART_FONTS = ("DejaVuSansMono.ttf", "consola.ttf", "Menlo.ttc")

CONFIG_FILE = "dashboard_config.json"

# Configuration defaults
DEFAULT_CONFIG = {
    "monitor_index": 0,
    "poll_interval_ms": POLL_INTERVAL_MS,
    "history_points": MAX_POINTS,
    "chart_theme": "hivemind",
    "colorblind_mode": False,
    "provider_module": "monitor_core",
    "cpu_thresholds": list(CPU_THRESHOLDS),
    "memory_thresholds": list(MEMORY_THRESHOLDS),
    "temperature_thresholds": list(TEMPERATURE_THRESHOLDS),
    "fps_thresholds": list(FPS_THRESHOLDS),
    "log_level": "INFO"
}

def configure_app_styles(style_obj):
    """
    Configure all custom styles for the application.
    Call this once after creating your tb.Style() object.
    """

    # ===== LABELS =====
    style_obj.configure(
        'TLabel',
        foreground=CRT_GREEN,
        font=FONT_NOTEB
    )

    # ===== LABELFRAMES =====
    style_obj.configure(
        'TLabelframe',
        foreground=CRT_GREEN,
        bordercolor=CRT_GREEN,
        borderwidth=1
    )

    style_obj.configure(
        'TLabelframe.Label',
        foreground=CRT_GREEN,
        font=FONT_NOTEB
    )

    # ===== PROGRESSBARS =====
    style_obj.configure(
        'TProgressbar',
        troughcolor='#0a0a0a',
        background=CRT_GREEN,
        borderwidth=0,
        thickness=20
    )
