from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from robeen_chart.chart import NO_DATA_MESSAGE, ChartState
from robeen_chart.errors import SurfaceUnavailable
from robeen_chart.palette import to_rgba
from robeen_ui.raster import RGBA, draw_hline, draw_text, draw_vline, fill_rect, new_canvas, text_size

LOGGER = logging.getLogger(__name__)

TICK_SIZE = 6
TICK_PADDING = 3


class RasterSurface:
    """Draws chart geometry into an RGBA numpy canvas."""

    def __init__(
        self,
        width: int | None = None,
        height: int | None = None,
        *,
        background: str = "#FFFFFF",
        axis_color: str = "#333333",
        font_size_px: float = 11.0,
    ) -> None:
        self._size: tuple[int, int] | None = None
        if width is not None and height is not None:
            self.resize(width, height)
        self.background: RGBA = to_rgba(background)
        self.axis_color: RGBA = to_rgba(axis_color)
        self.font_size_px = font_size_px
        self.canvas: np.ndarray | None = None

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("surface width/height must be > 0")
        self._size = (int(width), int(height))

    def bounding_box(self) -> tuple[float, float]:
        if self._size is None:
            raise SurfaceUnavailable("raster surface has no size yet")
        return (float(self._size[0]), float(self._size[1]))

    def mount(self, state: ChartState) -> None:
        width, height = self._require_size()
        canvas = new_canvas(width, height, self.background)
        ox = int(round(state.config.margin.left))
        oy = int(round(state.config.margin.top))
        plot_w = int(round(state.plot_area.width))
        plot_h = int(round(state.plot_area.height))

        if state.no_data:
            self._centered_text(canvas, NO_DATA_MESSAGE, ox + plot_w // 2, oy + plot_h // 2)
            self.canvas = canvas
            return

        geometry = state.geometry
        for line in geometry.x_grid + geometry.y_grid:
            color = self.axis_color[:3] + (int(255 * line.opacity),)
            pos = int(round(line.position))
            length = int(round(line.length))
            if line.orientation == "vertical":
                draw_vline(canvas, ox + pos, oy, oy + length, color)
            else:
                draw_hline(canvas, ox, ox + length, oy + pos, color)

        for bar in geometry.bars:
            x0 = ox + int(round(bar.x))
            y0 = oy + int(round(bar.y))
            fill_rect(canvas, x0, y0, x0 + max(1, int(round(bar.width))), y0 + int(round(bar.height)), to_rgba(bar.color))

        if geometry.x_ticks:
            axis_y = oy + plot_h
            draw_hline(canvas, ox, ox + plot_w, axis_y, self.axis_color)
            for tick in geometry.x_ticks:
                tx = ox + int(round(tick.position))
                draw_vline(canvas, tx, axis_y, axis_y + TICK_SIZE, self.axis_color)
                tw, _ = text_size(tick.text, font_size_px=self.font_size_px)
                draw_text(canvas, tx - tw // 2, axis_y + TICK_SIZE + TICK_PADDING, tick.text, self.axis_color, font_size_px=self.font_size_px)

        if geometry.y_ticks:
            draw_vline(canvas, ox, oy, oy + plot_h, self.axis_color)
            for tick in geometry.y_ticks:
                ty = oy + int(round(tick.position))
                draw_hline(canvas, ox - TICK_SIZE, ox, ty, self.axis_color)
                tw, th = text_size(tick.text, font_size_px=self.font_size_px)
                draw_text(canvas, ox - TICK_SIZE - TICK_PADDING - tw, ty - th // 2, tick.text, self.axis_color, font_size_px=self.font_size_px)

        self.canvas = canvas

    def show_error(self, message: str) -> None:
        LOGGER.warning("chart error: %s", message)
        width, height = self._require_size()
        canvas = new_canvas(width, height, self.background)
        self._centered_text(canvas, message, width // 2, height // 2)
        self.canvas = canvas

    def to_image(self) -> Image.Image:
        if self.canvas is None:
            raise RuntimeError("nothing mounted on the raster surface")
        return Image.fromarray(self.canvas)

    def save_png(self, path: Path) -> None:
        self.to_image().save(path, format="PNG")

    def _require_size(self) -> tuple[int, int]:
        if self._size is None:
            raise SurfaceUnavailable("raster surface has no size yet")
        return self._size

    def _centered_text(self, canvas: np.ndarray, text: str, cx: int, cy: int) -> None:
        tw, th = text_size(text, font_size_px=self.font_size_px)
        draw_text(canvas, cx - tw // 2, cy - th // 2, text, self.axis_color, font_size_px=self.font_size_px)
