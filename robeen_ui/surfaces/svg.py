from __future__ import annotations

import logging
from pathlib import Path
import xml.etree.ElementTree as ET

from robeen_chart.chart import NO_DATA_MESSAGE, ChartState
from robeen_chart.errors import SurfaceUnavailable
from robeen_chart.formatting import format_tick

LOGGER = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
TICK_SIZE = 6.0
TICK_PADDING = 3.0
FONT_SIZE_PX = 10.0


def _num(value: float) -> str:
    return format_tick(round(float(value), 3))


class SVGSurface:
    """Materializes chart geometry as an SVG document.

    The surface is detached until it has a size; ``bounding_box`` raises
    ``SurfaceUnavailable`` until then.
    """

    def __init__(self, width: float | None = None, height: float | None = None, *, axis_color: str = "#000000") -> None:
        self._size: tuple[float, float] | None = None
        if width is not None and height is not None:
            self.resize(width, height)
        self.axis_color = axis_color
        self.markup: str | None = None

    def resize(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("surface width/height must be > 0")
        self._size = (float(width), float(height))

    def bounding_box(self) -> tuple[float, float]:
        if self._size is None:
            raise SurfaceUnavailable("svg surface has no size yet")
        return self._size

    def mount(self, state: ChartState) -> None:
        root, plot = self._new_root(state.config.margin.left, state.config.margin.top)
        if state.no_data:
            self._placeholder(plot, NO_DATA_MESSAGE, state.plot_area.width / 2, state.plot_area.height / 2)
            self.markup = ET.tostring(root, encoding="unicode")
            return

        geometry = state.geometry
        width = state.plot_area.width
        height = state.plot_area.height

        if geometry.x_ticks:
            x_axis = ET.SubElement(plot, "g", {"class": "x axis", "transform": f"translate(0, {_num(height)})"})
            ET.SubElement(x_axis, "path", {"class": "domain", "stroke": self.axis_color, "d": f"M0,{_num(TICK_SIZE)}V0H{_num(width)}V{_num(TICK_SIZE)}"})
            for tick in geometry.x_ticks:
                g = ET.SubElement(x_axis, "g", {"class": "tick", "transform": f"translate({_num(tick.position)}, 0)"})
                ET.SubElement(g, "line", {"stroke": self.axis_color, "y2": _num(TICK_SIZE)})
                label = ET.SubElement(
                    g,
                    "text",
                    {"y": _num(TICK_SIZE + TICK_PADDING + FONT_SIZE_PX), "text-anchor": "middle", "font-size": _num(FONT_SIZE_PX)},
                )
                label.text = tick.text

        if geometry.y_ticks:
            y_axis = ET.SubElement(plot, "g", {"class": "y axis"})
            ET.SubElement(y_axis, "path", {"class": "domain", "stroke": self.axis_color, "d": f"M{_num(-TICK_SIZE)},0H0V{_num(height)}H{_num(-TICK_SIZE)}"})
            for tick in geometry.y_ticks:
                g = ET.SubElement(y_axis, "g", {"class": "tick", "transform": f"translate(0, {_num(tick.position)})"})
                ET.SubElement(g, "line", {"stroke": self.axis_color, "x2": _num(-TICK_SIZE)})
                label = ET.SubElement(
                    g,
                    "text",
                    {"x": _num(-(TICK_SIZE + TICK_PADDING)), "dy": "0.32em", "text-anchor": "end", "font-size": _num(FONT_SIZE_PX)},
                )
                label.text = tick.text

        for lines in (geometry.x_grid, geometry.y_grid):
            if not lines:
                continue
            grid = ET.SubElement(plot, "g", {"class": "grid", "style": f"opacity: {_num(lines[0].opacity)}"})
            for line in lines:
                if line.orientation == "vertical":
                    attrs = {"x1": _num(line.position), "x2": _num(line.position), "y1": "0", "y2": _num(line.length)}
                else:
                    attrs = {"x1": "0", "x2": _num(line.length), "y1": _num(line.position), "y2": _num(line.position)}
                ET.SubElement(grid, "line", {"stroke": self.axis_color, **attrs})

        bars = ET.SubElement(plot, "g", {"class": "bar-group"})
        for bar in geometry.bars:
            ET.SubElement(
                bars,
                "rect",
                {
                    "class": "bar",
                    "data-index": str(bar.data_index),
                    "x": _num(bar.x),
                    "y": _num(bar.y),
                    "width": _num(bar.width),
                    "height": _num(bar.height),
                    "fill": bar.color,
                },
            )
        self.markup = ET.tostring(root, encoding="unicode")

    def show_error(self, message: str) -> None:
        LOGGER.warning("chart error: %s", message)
        root, plot = self._new_root(0.0, 0.0)
        width, height = self._size or (0.0, 0.0)
        self._placeholder(plot, message, width / 2, height / 2)
        self.markup = ET.tostring(root, encoding="unicode")

    def save(self, path: Path) -> None:
        if self.markup is None:
            raise RuntimeError("nothing mounted on the svg surface")
        path.write_text(self.markup, encoding="utf-8")

    def _new_root(self, left: float, top: float) -> tuple[ET.Element, ET.Element]:
        width, height = self.bounding_box()
        root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "width": _num(width),
                "height": _num(height),
                "viewBox": f"0 0 {_num(width)} {_num(height)}",
            },
        )
        plot = ET.SubElement(root, "g", {"transform": f"translate({_num(left)}, {_num(top)})"})
        return root, plot

    def _placeholder(self, parent: ET.Element, message: str, x: float, y: float) -> None:
        text = ET.SubElement(
            parent,
            "text",
            {"class": "placeholder", "x": _num(x), "y": _num(y), "text-anchor": "middle", "font-size": _num(FONT_SIZE_PX)},
        )
        text.text = message
