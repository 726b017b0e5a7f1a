import ttkbootstrap as tb
from ttkbootstrap.constants import *
from constants import (FONT_TITLE, FONT_VALUE, FONT_INFOTXT, FONT_TAB_TITLE_COLOR, CRT_GREEN,
                       PLACEHOLDER, PROGRESS_THICKNESS)

def build_readout_card(parent, title, unit):
    """
    Builds a readout card (big value + unit) using the .grid() layout manager
    so the card stretches with its grid cell.
    """
    f = tb.Labelframe(parent, text=title, bootstyle=FONT_TAB_TITLE_COLOR)
    f.columnconfigure(0, weight=1)

    value_lbl = tb.Label(f, text=PLACEHOLDER, anchor="e", font=FONT_VALUE, foreground=CRT_GREEN)
    value_lbl.grid(row=0, column=0, sticky="ew", padx=4, pady=(4, 2))

    unit_lbl = tb.Label(f, text=unit, anchor="w", font=FONT_TITLE, foreground=CRT_GREEN)
    unit_lbl.grid(row=0, column=1, sticky="sw", padx=(0, 8), pady=(4, 10))

    return f, value_lbl

def build_info_rows(parent, rows, font=FONT_INFOTXT):
    """One "Name: value" row per entry; returns {key: value label}."""
    parent.columnconfigure(1, weight=1)
    labels = {}
    for i, (key, caption) in enumerate(rows):
        tb.Label(parent, text=f"{caption}:", anchor="w", font=font, foreground=CRT_GREEN).grid(
            row=i, column=0, sticky="w", padx=4, pady=1)
        lbl = tb.Label(parent, text="...", anchor="w", font=font, foreground="white")
        lbl.grid(row=i, column=1, sticky="ew", padx=4, pady=1)
        labels[key] = lbl
    return labels

def build_memory_bar(parent, style):
    style_name = "Memory.Horizontal.TProgressbar"
    style.configure(style_name, troughcolor="black", background=CRT_GREEN, thickness=PROGRESS_THICKNESS)
    bar = tb.Progressbar(parent, bootstyle="success", maximum=100, style=style_name)
    bar._style_name = style_name
    return bar
