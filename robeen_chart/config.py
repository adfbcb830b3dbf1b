from __future__ import annotations

from dataclasses import dataclass, field
import math
from pathlib import Path
import tomllib
from typing import Any, Mapping

from .errors import InvalidConfiguration
from .palette import DEFAULT_COLORS, validate_color

_MARGIN_KEYS = ("top", "right", "bottom", "left")


@dataclass(frozen=True)
class Margin:
    top: float = 20.0
    right: float = 20.0
    bottom: float = 30.0
    left: float = 150.0

    def __post_init__(self) -> None:
        for key in _MARGIN_KEYS:
            v = getattr(self, key)
            if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v) or v < 0:
                raise InvalidConfiguration(f"margin.{key} must be a non-negative number, got {v!r}")


@dataclass(frozen=True)
class AxisOptions:
    visible: bool = True
    grid_visible: bool = False
    format: str | None = None


@dataclass(frozen=True)
class AxisConfig:
    x: AxisOptions = field(default_factory=lambda: AxisOptions(visible=True, grid_visible=True, format="auto"))
    y: AxisOptions = field(default_factory=AxisOptions)


@dataclass(frozen=True)
class ChartConfig:
    margin: Margin = field(default_factory=Margin)
    axis: AxisConfig = field(default_factory=AxisConfig)
    colors: tuple[str, ...] = DEFAULT_COLORS
    padding: float = 0.2
    sort_data: bool = False
    tick_count: int = 10

    def __post_init__(self) -> None:
        if isinstance(self.colors, str):
            raise InvalidConfiguration("palette must be a sequence of colours, not a string")
        if not self.colors:
            raise InvalidConfiguration("palette must not be empty")
        for color in self.colors:
            validate_color(color)
        if isinstance(self.padding, bool) or not isinstance(self.padding, (int, float)) or not 0.0 <= self.padding < 1.0:
            raise InvalidConfiguration(f"padding must be a number in [0, 1), got {self.padding!r}")
        if not isinstance(self.sort_data, bool):
            raise InvalidConfiguration(f"sort_data must be a boolean, got {self.sort_data!r}")
        if isinstance(self.tick_count, bool) or not isinstance(self.tick_count, int) or self.tick_count <= 0:
            raise InvalidConfiguration(f"tick_count must be a positive integer, got {self.tick_count!r}")


DEFAULT_CONFIG = ChartConfig()

_TOP_LEVEL_KEYS = {"margin", "axis", "colors", "padding", "sortData", "tickCount"}
_AXIS_KEYS = {"visible", "gridVisible", "format"}


def validate_chart_config(overrides: Mapping[str, Any] | None = None) -> ChartConfig:
    """Merge external chart options over the defaults and validate them.

    Option names follow the host-facing form: ``margin.top``,
    ``axis.x.gridVisible``, ``axis.x.format``, ``colors``, ``padding``,
    ``sortData`` and ``tickCount``.
    """

    raw = dict(overrides or {})
    for key in raw:
        if key not in _TOP_LEVEL_KEYS:
            raise InvalidConfiguration(f"Unknown chart option: {key}")

    base = DEFAULT_CONFIG
    margin = _validate_margin(raw.get("margin"), base.margin)
    axis_raw = _as_mapping(raw.get("axis"), "axis")
    for key in axis_raw:
        if key not in ("x", "y"):
            raise InvalidConfiguration(f"Unknown chart option: axis.{key}")
    axis = AxisConfig(
        x=_validate_axis(axis_raw.get("x"), base.axis.x, "x"),
        y=_validate_axis(axis_raw.get("y"), base.axis.y, "y"),
    )

    colors = raw.get("colors", base.colors)
    if isinstance(colors, str) or not isinstance(colors, (list, tuple)):
        raise InvalidConfiguration("Option `colors` must be a list of colour strings")
    if not colors:
        raise InvalidConfiguration("palette must not be empty")
    colors = tuple(validate_color(c) for c in colors)

    padding = raw.get("padding", base.padding)
    if isinstance(padding, bool) or not isinstance(padding, (int, float)) or not 0.0 <= float(padding) < 1.0:
        raise InvalidConfiguration("Option `padding` must be a number in [0, 1)")

    sort_data = raw.get("sortData", base.sort_data)
    if not isinstance(sort_data, bool):
        raise InvalidConfiguration("Option `sortData` must be a boolean")

    tick_count = raw.get("tickCount", base.tick_count)
    if isinstance(tick_count, bool) or not isinstance(tick_count, int) or tick_count <= 0:
        raise InvalidConfiguration("Option `tickCount` must be a positive integer")

    return ChartConfig(
        margin=margin,
        axis=axis,
        colors=colors,
        padding=float(padding),
        sort_data=sort_data,
        tick_count=tick_count,
    )


def load_chart_config(path: Path) -> ChartConfig:
    try:
        with path.open("rb") as f:
            raw = tomllib.load(f)
    except OSError as exc:
        raise InvalidConfiguration(f"cannot read chart config {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise InvalidConfiguration(f"invalid chart config {path}: {exc}") from exc
    return validate_chart_config(raw)


def _as_mapping(value: Any, name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidConfiguration(f"Option `{name}` must be a table")
    return value


def _validate_margin(value: Any, base: Margin) -> Margin:
    raw = _as_mapping(value, "margin")
    for key in raw:
        if key not in _MARGIN_KEYS:
            raise InvalidConfiguration(f"Unknown chart option: margin.{key}")
    out: dict[str, float] = {}
    for key in _MARGIN_KEYS:
        v = raw.get(key, getattr(base, key))
        if isinstance(v, bool) or not isinstance(v, (int, float)) or float(v) < 0:
            raise InvalidConfiguration(f"Option `margin.{key}` must be a non-negative number")
        out[key] = float(v)
    return Margin(**out)


def _validate_axis(value: Any, base: AxisOptions, name: str) -> AxisOptions:
    raw = _as_mapping(value, f"axis.{name}")
    for key in raw:
        if key not in _AXIS_KEYS:
            raise InvalidConfiguration(f"Unknown chart option: axis.{name}.{key}")
    visible = raw.get("visible", base.visible)
    grid_visible = raw.get("gridVisible", base.grid_visible)
    fmt = raw.get("format", base.format)
    if not isinstance(visible, bool) or not isinstance(grid_visible, bool):
        raise InvalidConfiguration(f"Options `axis.{name}.visible`/`gridVisible` must be booleans")
    if fmt is not None and not isinstance(fmt, str):
        raise InvalidConfiguration(f"Option `axis.{name}.format` must be a string")
    return AxisOptions(visible=visible, grid_visible=grid_visible, format=fmt)
