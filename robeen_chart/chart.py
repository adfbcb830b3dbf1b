from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import logging
from typing import Any, Protocol

from .config import ChartConfig, DEFAULT_CONFIG
from .errors import InvalidConfiguration, SurfaceUnavailable
from .geometry import ChartGeometry, build_geometry
from .interaction import InteractionRouter, TooltipCommand, parse_pointer_event
from .measurements import Measurement, normalize_measurements
from .palette import Palette
from .scales import PlotArea, Scales, build_scales, plot_area_for

LOGGER = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data"


@dataclass(frozen=True)
class ChartState:
    """Everything one redraw pass computed. Never mutated after creation."""

    plot_area: PlotArea
    scales: Scales
    geometry: ChartGeometry
    measurements: tuple[Measurement, ...]
    config: ChartConfig

    @property
    def no_data(self) -> bool:
        return self.geometry.is_empty


class RenderSurface(Protocol):
    def bounding_box(self) -> tuple[float, float]:
        """Current (width, height); raises ``SurfaceUnavailable`` if detached."""
        ...

    def mount(self, state: ChartState) -> None:
        ...

    def show_error(self, message: str) -> None:
        ...


class TooltipSink(Protocol):
    def apply(self, command: TooltipCommand, measurements: Sequence[Measurement]) -> bool:
        ...


def compute_chart_state(
    measurements: Sequence[Measurement],
    area: PlotArea,
    config: ChartConfig,
    palette: Palette,
) -> ChartState:
    scales = build_scales(measurements, area, padding=config.padding, sort_data=config.sort_data)
    geometry = build_geometry(measurements, scales, palette, config.axis, tick_count=config.tick_count)
    return ChartState(
        plot_area=area,
        scales=scales,
        geometry=geometry,
        measurements=tuple(measurements),
        config=config,
    )


class BarChart:
    def __init__(
        self,
        measurements: Iterable[Any],
        surface: RenderSurface,
        config: ChartConfig = DEFAULT_CONFIG,
        *,
        tooltip: TooltipSink | None = None,
    ) -> None:
        self.measurements = normalize_measurements(measurements)
        self.surface = surface
        self.config = config
        self.palette = Palette(config.colors)
        self.tooltip = tooltip
        self.router = InteractionRouter()
        self._state: ChartState | None = None
        self._attached = False

    @property
    def state(self) -> ChartState | None:
        return self._state

    def draw_chart(self) -> ChartState | None:
        """Run one redraw pass. Returns ``None`` while the surface is detached."""

        try:
            width, height = self.surface.bounding_box()
        except SurfaceUnavailable as exc:
            LOGGER.debug("surface unavailable, deferring draw: %s", exc)
            return None

        area = plot_area_for(width, height, self.config.margin)
        if area.width < 0 or area.height < 0:
            if not self._attached:
                raise InvalidConfiguration(
                    f"margins leave a negative plot area ({area.width:g}x{area.height:g}) on a {width:g}x{height:g} surface"
                )
            LOGGER.warning("plot area %gx%g is negative; clamping to zero", area.width, area.height)
            area = PlotArea(width=max(0.0, area.width), height=max(0.0, area.height))
        self._attached = True

        state = compute_chart_state(self.measurements, area, self.config, self.palette)
        if state.no_data:
            LOGGER.info("no positive measurements to draw (%d records)", len(self.measurements))
        self.surface.mount(state)
        self._state = state
        return state

    def draw_error(self, message: str) -> None:
        self.surface.show_error(message)

    def handle_pointer_move(self, data_index: int, pointer_x: float, pointer_y: float) -> TooltipCommand:
        return self._deliver(self.router.on_pointer_move(data_index, pointer_x, pointer_y))

    def handle_pointer_leave(self) -> TooltipCommand:
        return self._deliver(self.router.on_pointer_leave())

    def handle_pointer_event(self, event_type: str, payload: object) -> TooltipCommand | None:
        """Route a raw host event against the current geometry."""

        event = parse_pointer_event(event_type, payload)
        if event is None or self._state is None:
            return None
        return self._deliver(self.router.route(event, self._state.geometry))

    def _deliver(self, command: TooltipCommand) -> TooltipCommand:
        if self.tooltip is not None:
            self.tooltip.apply(command, self.measurements)
        return command
