from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import math
from typing import Literal

from .config import AxisConfig
from .formatting import format_value
from .measurements import Measurement, category_key_of
from .palette import Palette
from .scales import Scales


GRID_OPACITY = 0.1

GridOrientation = Literal["vertical", "horizontal"]


@dataclass(frozen=True)
class TickDescriptor:
    position: float
    text: str


@dataclass(frozen=True)
class GridLine:
    """A gridline at ``position`` spanning ``length`` across the plot.

    Vertical lines sit on x-axis ticks and span the plot height; horizontal
    lines sit on y-axis ticks and span the plot width.
    """

    position: float
    orientation: GridOrientation
    length: float
    opacity: float = GRID_OPACITY


@dataclass(frozen=True)
class BarRect:
    x: float
    y: float
    width: float
    height: float
    color: str
    data_index: int


@dataclass(frozen=True)
class ChartGeometry:
    bars: tuple[BarRect, ...] = ()
    x_ticks: tuple[TickDescriptor, ...] = ()
    y_ticks: tuple[TickDescriptor, ...] = ()
    x_grid: tuple[GridLine, ...] = ()
    y_grid: tuple[GridLine, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.bars


def build_geometry(
    measurements: Sequence[Measurement],
    scales: Scales,
    palette: Palette,
    axis: AxisConfig,
    *,
    tick_count: int = 10,
) -> ChartGeometry:
    linear = scales.linear
    band = scales.band

    x_tick_values = [float(v) for v in linear.ticks(tick_count)] if axis.x.visible or axis.x.grid_visible else []
    x_step = x_tick_values[1] - x_tick_values[0] if len(x_tick_values) > 1 else None
    y_tick_values: list[tuple[str, float]] = []
    for key in band.domain:
        center = band.center(key)
        if center is not None:
            y_tick_values.append((key, center))

    x_ticks: tuple[TickDescriptor, ...] = ()
    if axis.x.visible:
        x_ticks = tuple(
            TickDescriptor(position=linear(v), text=format_value(axis.x.format, v, step=x_step)) for v in x_tick_values
        )

    y_ticks: tuple[TickDescriptor, ...] = ()
    if axis.y.visible:
        y_ticks = tuple(TickDescriptor(position=pos, text=key) for key, pos in y_tick_values)

    x_grid: tuple[GridLine, ...] = ()
    if axis.x.grid_visible:
        x_grid = tuple(
            GridLine(position=linear(v), orientation="vertical", length=band.range_max) for v in x_tick_values
        )

    y_grid: tuple[GridLine, ...] = ()
    if axis.y.grid_visible:
        y_grid = tuple(
            GridLine(position=pos, orientation="horizontal", length=linear.range_max) for _, pos in y_tick_values
        )

    return ChartGeometry(
        bars=build_bars(measurements, scales, palette),
        x_ticks=x_ticks,
        y_ticks=y_ticks,
        x_grid=x_grid,
        y_grid=y_grid,
    )


def build_bars(measurements: Sequence[Measurement], scales: Scales, palette: Palette) -> tuple[BarRect, ...]:
    """Bars in measurement order; bars whose pixel width is not a positive finite number are dropped."""

    bars: list[BarRect] = []
    bar_height = scales.band.bandwidth
    for i, measurement in enumerate(measurements):
        bar_width = scales.linear(measurement.value)
        if not (math.isfinite(bar_width) and bar_width > 0):
            continue
        y = scales.band(category_key_of(measurement.label))
        if y is None:
            continue
        bars.append(
            BarRect(
                x=0.0,
                y=y,
                width=bar_width,
                height=bar_height,
                color=palette.color_at(i),
                data_index=i,
            )
        )
    return tuple(bars)
