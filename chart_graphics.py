"""Rolling CPU / memory / temperature chart, rendered with Pillow.

Geometry is computed by ``ChartRenderer.layout`` in logical units and
rasterized by ``ChartRenderer.draw`` onto a supersampled RGBA surface.
"""
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from PIL import Image, ImageChops, ImageColor, ImageDraw, ImageFilter, ImageFont

from constants import (CHART_FONTS, CHART_PADDING, CRT_CYAN, CRT_GREEN, CRT_GRID,
                       DEVICE_SCALE, GRID_COLUMNS, GRID_ROWS, HIVEMIND_CPU,
                       HIVEMIND_MEMORY, HIVEMIND_TEMP)

# Legend sits in the top-right corner, current values in the bottom-left.
LEGEND_OFFSET = 70
LEGEND_ROW = 18
SWATCH_SIZE = (12, 2)
VALUES_OFFSET = 35
VALUES_ROW = 12
PANEL_WIDTH = 80


@dataclass(frozen=True)
class ChartTheme:
    name: str
    background: Tuple[str, str]
    grid_color: str
    label_color: str
    text_color: str
    cpu_color: str
    memory_color: str
    temp_color: str
    grid_alpha: float = 0.3
    panel_alpha: float = 0.3
    line_width: float = 2
    line_alpha: float = 0.9
    glow_blur: float = 3
    font_size: int = 10
    label_font_size: int = 9


HIVEMIND_THEME = ChartTheme(
    name="hivemind",
    background=("#1e1e1e", "#2a2a2a"),
    grid_color="#404040",
    label_color="#888888",
    text_color="#cccccc",
    cpu_color=HIVEMIND_CPU,
    memory_color=HIVEMIND_MEMORY,
    temp_color=HIVEMIND_TEMP,
)

CRT_THEME = ChartTheme(
    name="crt",
    background=("#000000", "#001400"),
    grid_color=CRT_GRID,
    label_color=CRT_GREEN,
    text_color=CRT_GREEN,
    cpu_color=CRT_GREEN,
    memory_color="#FFFFFF",
    temp_color=CRT_CYAN,
    grid_alpha=0.8,
)

THEMES = {theme.name: theme for theme in (HIVEMIND_THEME, CRT_THEME)}


@dataclass(frozen=True)
class Polyline:
    label: str
    color: str
    points: tuple


@dataclass(frozen=True)
class ChartFrame:
    """Everything one redraw puts on the surface, in logical (unscaled) units."""
    width: float
    height: float
    grid_rows: tuple        # (y, label or None)
    grid_columns: tuple     # x
    polylines: tuple
    legend: tuple           # (x, y, label, color)
    value_lines: tuple      # (x, y, text)
    panel: Optional[tuple]  # (x0, y0, x1, y1)


def rescale_temperature(celsius):
    """Map °C onto the shared 0-100 axis (100 °C at the top; hotter runs off the edge)."""
    return (celsius / 100) * 100


def series_points(values, capacity, padding, chart_width, chart_height):
    """Buffer index -> x across the drawable width, value -> y with 100 at the top."""
    points = []
    for i, value in enumerate(values):
        x = padding + (i / (capacity - 1)) * chart_width
        y = padding + chart_height - (value / 100) * chart_height
        points.append((x, y))
    return points


def _rgba(color, alpha=1.0):
    return ImageColor.getrgb(color)[:3] + (round(alpha * 255),)


@lru_cache(maxsize=16)
def _load_font(size):
    for name in CHART_FONTS:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


class ChartRenderer:
    """Draws the CPU / memory / temperature history onto a Pillow surface.

    Surfaces are ``scale`` times the logical size; all geometry is computed
    in logical units and only multiplied out when drawing.
    """

    def __init__(self, theme=HIVEMIND_THEME, scale=DEVICE_SCALE, padding=CHART_PADDING):
        self.theme = theme
        self.scale = scale
        self.padding = padding

    def surface_size(self, width, height):
        return round(width * self.scale), round(height * self.scale)

    def render(self, series, width, height):
        return self.draw(self.layout(series, width, height))

    # ---- Geometry ----
    def layout(self, series, width, height):
        theme = self.theme
        pad = self.padding
        chart_w = width - pad * 2
        chart_h = height - pad * 2
        show_temp = series.has_temperature()

        grid_rows = tuple(
            (pad + i * chart_h / GRID_ROWS, f"{100 - i * 100 // GRID_ROWS}%" if i < GRID_ROWS else None)
            for i in range(GRID_ROWS + 1)
        )
        grid_columns = tuple(i * width / GRID_COLUMNS for i in range(GRID_COLUMNS + 1))

        entries = [
            ("CPU", theme.cpu_color, series.cpu.values()),
            ("Memory", theme.memory_color, series.memory.values()),
        ]
        if show_temp:
            entries.append(("Temp", theme.temp_color,
                            [rescale_temperature(t) for t in series.temperature.values()]))

        polylines = tuple(
            Polyline(label, color, tuple(series_points(values, series.capacity, pad, chart_w, chart_h)))
            for label, color, values in entries
            if len(values) >= 2
        )

        legend_x = width - LEGEND_OFFSET
        legend = tuple(
            (legend_x, 5 + index * LEGEND_ROW, label, color)
            for index, (label, color) in enumerate(
                [("CPU", theme.cpu_color), ("Memory", theme.memory_color), ("Temp", theme.temp_color)])
        )

        value_lines = ()
        panel = None
        cpu_values = series.cpu.values()
        if cpu_values:
            x, y = 5, height - VALUES_OFFSET
            memory_values = series.memory.values()
            temp_values = series.temperature.values()
            lines = [
                f"CPU: {cpu_values[-1]:.1f}%",
                f"MEM: {(memory_values[-1] if memory_values else 0):.1f}%",
            ]
            if show_temp:
                lines.append(f"TEMP: {(temp_values[-1] if temp_values else 0):.1f}°C")
            value_lines = tuple((x, y + i * VALUES_ROW, text) for i, text in enumerate(lines))
            panel = (x - 2, y - 12, x - 2 + PANEL_WIDTH, y - 12 + 2 + len(lines) * VALUES_ROW)

        return ChartFrame(width, height, grid_rows, grid_columns, polylines, legend, value_lines, panel)

    # ---- Drawing ----
    def draw(self, frame):
        theme = self.theme
        s = self.scale
        size = self.surface_size(frame.width, frame.height)
        img = self._background(size)
        hairline = max(1, round(s))

        grid = Image.new("RGBA", size, (0, 0, 0, 0))
        d = ImageDraw.Draw(grid)
        grid_fill = _rgba(theme.grid_color, theme.grid_alpha)
        label_fill = _rgba(theme.label_color, theme.grid_alpha)
        label_font = _load_font(round(theme.label_font_size * s))
        for y, label in frame.grid_rows:
            d.line([(0, y * s), (size[0], y * s)], fill=grid_fill, width=hairline)
            if label:
                d.text((1 * s, (y + 3) * s), label, fill=label_fill, font=label_font, anchor="ls")
        for x in frame.grid_columns:
            d.line([(x * s, 0), (x * s, size[1])], fill=grid_fill, width=hairline)
        img.alpha_composite(grid)

        for polyline in frame.polylines:
            self._stroke(img, polyline)

        font = _load_font(round(theme.font_size * s))
        self._legend(img, frame.legend, font)

        if frame.panel:
            overlay = Image.new("RGBA", size, (0, 0, 0, 0))
            x0, y0, x1, y1 = frame.panel
            ImageDraw.Draw(overlay).rectangle([x0 * s, y0 * s, x1 * s, y1 * s],
                                              fill=(0, 0, 0, round(theme.panel_alpha * 255)))
            img.alpha_composite(overlay)
        d = ImageDraw.Draw(img)
        for x, y, text in frame.value_lines:
            d.text((x * s, y * s), text, fill=theme.text_color, font=font, anchor="ls")
        return img

    def _background(self, size):
        start, end = self.theme.background
        # Diagonal top-left -> bottom-right gradient
        vertical = Image.linear_gradient("L").resize(size)
        horizontal = Image.linear_gradient("L").transpose(Image.Transpose.ROTATE_90).resize(size)
        mask = ImageChops.add(horizontal, vertical, scale=2.0)
        return Image.composite(Image.new("RGBA", size, _rgba(end)), Image.new("RGBA", size, _rgba(start)), mask)

    def _stroke(self, img, polyline):
        s = self.scale
        layer = Image.new("RGBA", img.size, (0, 0, 0, 0))
        ImageDraw.Draw(layer).line(
            [(x * s, y * s) for x, y in polyline.points],
            fill=_rgba(polyline.color, self.theme.line_alpha),
            width=round(self.theme.line_width * s),
            joint="curve",
        )
        # Re-stroke over a blurred copy for the glow
        glow = layer.filter(ImageFilter.GaussianBlur(self.theme.glow_blur * s / 2))
        img.alpha_composite(layer)
        img.alpha_composite(glow)
        img.alpha_composite(layer)

    def _legend(self, img, legend, font):
        s = self.scale
        sw, sh = SWATCH_SIZE
        swatches = Image.new("RGBA", img.size, (0, 0, 0, 0))
        d = ImageDraw.Draw(swatches)
        for x, y, _, color in legend:
            d.rectangle([x * s, y * s, (x + sw) * s, (y + sh) * s], fill=_rgba(color))
        img.alpha_composite(swatches.filter(ImageFilter.GaussianBlur(s)))
        img.alpha_composite(swatches)

        d = ImageDraw.Draw(img)
        for x, y, label, _ in legend:
            d.text(((x + sw + 4) * s, (y + 4) * s), label, fill=self.theme.text_color, font=font, anchor="ls")
