from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping

from .geometry import ChartGeometry


PointerPhase = Literal["move", "leave"]


@dataclass(frozen=True)
class ShowTooltip:
    data_index: int
    pointer_x: float
    pointer_y: float


@dataclass(frozen=True)
class HideTooltip:
    pass


TooltipCommand = ShowTooltip | HideTooltip


@dataclass(frozen=True)
class PointerEvent:
    """Normalized pointer event in plot-space coordinates."""

    phase: PointerPhase
    x: float = 0.0
    y: float = 0.0


def parse_pointer_event(event_type: str, payload: object) -> PointerEvent | None:
    """Parse a host pointer event into a typed ``PointerEvent``.

    ``pointer_move`` needs a mapping payload with numeric ``x``/``y``;
    ``pointer_leave`` ignores its payload. Anything else yields ``None``.
    """

    if event_type == "pointer_leave":
        return PointerEvent(phase="leave")
    if event_type != "pointer_move" or not isinstance(payload, Mapping):
        return None
    try:
        x = float(payload["x"])
        y = float(payload["y"])
    except (KeyError, TypeError, ValueError):
        return None
    return PointerEvent(phase="move", x=x, y=y)


def bar_at(geometry: ChartGeometry, x: float, y: float) -> int | None:
    for bar in geometry.bars:
        if bar.x <= x <= bar.x + bar.width and bar.y <= y <= bar.y + bar.height:
            return bar.data_index
    return None


class InteractionRouter:
    """Turns pointer activity on bars into tooltip commands.

    Only the current hover target is kept. The router never talks to a
    tooltip; callers deliver the returned command.
    """

    def __init__(self) -> None:
        self.hovered_index: int | None = None

    def on_pointer_move(self, data_index: int, pointer_x: float, pointer_y: float) -> ShowTooltip:
        self.hovered_index = data_index
        return ShowTooltip(data_index=data_index, pointer_x=pointer_x, pointer_y=pointer_y)

    def on_pointer_leave(self) -> HideTooltip:
        self.hovered_index = None
        return HideTooltip()

    def route(self, event: PointerEvent, geometry: ChartGeometry) -> TooltipCommand:
        if event.phase == "leave":
            return self.on_pointer_leave()
        index = bar_at(geometry, event.x, event.y)
        if index is None:
            return self.on_pointer_leave()
        return self.on_pointer_move(index, event.x, event.y)
