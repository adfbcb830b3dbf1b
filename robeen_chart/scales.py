from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import math

import numpy as np

from .config import Margin
from .measurements import Measurement, category_key_of, values_array


DOMAIN_ROUNDING = 100.0


@dataclass(frozen=True)
class PlotArea:
    width: float
    height: float


def plot_area_for(width: float, height: float, margin: Margin) -> PlotArea:
    """Surface size minus margins. May be negative; callers decide the policy."""
    return PlotArea(
        width=width - margin.left - margin.right,
        height=height - margin.top - margin.bottom,
    )


@dataclass(frozen=True)
class LinearScale:
    """Maps ``[0, domain_max]`` onto ``[0, range_max]``."""

    domain_max: float
    range_max: float

    def __call__(self, value: float) -> float:
        if self.domain_max == 0:
            return 0.0
        return value * self.range_max / self.domain_max

    def ticks(self, count: int = 10) -> np.ndarray:
        if self.domain_max <= 0:
            return np.asarray([], dtype=np.float64)
        ticks = generate_nice_ticks(0.0, self.domain_max, count)
        step = float(ticks[1] - ticks[0]) if ticks.size > 1 else self.domain_max
        keep = (ticks >= 0.0) & (ticks <= self.domain_max + step * 1e-9)
        return ticks[keep]


@dataclass(frozen=True)
class BandScale:
    """Maps category keys to equal bands within ``[0, range_max]``.

    ``padding`` is the fraction of each step left as gap, split evenly on
    both sides of the band.
    """

    domain: tuple[str, ...]
    range_max: float
    padding: float = 0.2

    @property
    def step(self) -> float:
        if not self.domain:
            return 0.0
        return self.range_max / len(self.domain)

    @property
    def bandwidth(self) -> float:
        return self.step * (1.0 - self.padding)

    def __call__(self, key: str) -> float | None:
        try:
            idx = self.domain.index(key)
        except ValueError:
            return None
        return idx * self.step + self.step * self.padding / 2.0

    def center(self, key: str) -> float | None:
        start = self(key)
        if start is None:
            return None
        return start + self.bandwidth / 2.0


@dataclass(frozen=True)
class Scales:
    linear: LinearScale
    band: BandScale


def domain_max_for(values: np.ndarray) -> float:
    finite = values[np.isfinite(values)]
    if finite.size == 0:
        return 0.0
    max_value = float(np.max(finite))
    return max(0.0, math.ceil(max_value / DOMAIN_ROUNDING) * DOMAIN_ROUNDING)


def band_order(measurements: Sequence[Measurement], *, sort_data: bool) -> list[int]:
    indexes = list(range(len(measurements)))
    if sort_data:
        # Stable ascending order; NaN sorts last.
        indexes.sort(key=lambda i: (math.isnan(measurements[i].value), measurements[i].value))
    return indexes


def build_scales(
    measurements: Sequence[Measurement],
    area: PlotArea,
    *,
    padding: float = 0.2,
    sort_data: bool = False,
) -> Scales:
    linear = LinearScale(domain_max=domain_max_for(values_array(measurements)), range_max=area.width)
    keys = (category_key_of(measurements[i].label) for i in band_order(measurements, sort_data=sort_data))
    band = BandScale(domain=tuple(dict.fromkeys(keys)), range_max=area.height, padding=padding)
    return Scales(linear=linear, band=band)


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    span = _nice_number(vmax - vmin, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    tick_min = np.floor(vmin / step) * step
    tick_max = np.ceil(vmax / step) * step

    ticks = np.arange(tick_min, tick_max + 0.5 * step, step, dtype=np.float64)
    # Snap float drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))
