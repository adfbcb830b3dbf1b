from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
from typing import Literal

from robeen_chart.interaction import HideTooltip, ShowTooltip, TooltipCommand
from robeen_chart.measurements import Measurement

LOGGER = logging.getLogger(__name__)

TooltipLifecycle = Literal["unready", "ready"]


@dataclass(frozen=True)
class TooltipContent:
    benchmark: str
    score: float


@dataclass
class TooltipModel:
    """Tooltip display state driven by router commands.

    Starts ``unready`` until the host has a slot to draw into. Commands that
    arrive before ``mark_ready`` are dropped.
    """

    lifecycle: TooltipLifecycle = "unready"
    visible: bool = False
    content: TooltipContent | None = None
    position: tuple[float, float] | None = None
    data_index: int | None = None

    def mark_ready(self) -> None:
        self.lifecycle = "ready"

    @property
    def ready(self) -> bool:
        return self.lifecycle == "ready"

    def apply(self, command: TooltipCommand, measurements: Sequence[Measurement]) -> bool:
        if not self.ready:
            LOGGER.debug("tooltip not ready; dropping %s", type(command).__name__)
            return False
        if isinstance(command, HideTooltip):
            self._hide()
            return True
        if isinstance(command, ShowTooltip):
            if not 0 <= command.data_index < len(measurements):
                LOGGER.debug("tooltip index %d out of range; hiding", command.data_index)
                self._hide()
                return True
            measurement = measurements[command.data_index]
            self.visible = True
            self.data_index = command.data_index
            self.content = TooltipContent(benchmark=measurement.label, score=measurement.value)
            self.position = (command.pointer_x, command.pointer_y)
            return True
        raise TypeError(f"unsupported tooltip command: {command!r}")

    def _hide(self) -> None:
        self.visible = False
        self.content = None
        self.position = None
        self.data_index = None
