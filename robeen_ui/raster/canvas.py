from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Blend ``color`` over the half-open pixel box ``[x0, x1) x [y0, y1)``."""
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1], max(x0, x1))
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0], max(y0, y1))
    if xa >= xb or ya >= yb:
        return
    _blend(dst[ya:yb, xa:xb], color)


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0]:
        return
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    if xa > xb:
        return
    _blend(dst[y : y + 1, xa : xb + 1], color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    if x < 0 or x >= dst.shape[1]:
        return
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0] - 1, max(y0, y1))
    if ya > yb:
        return
    _blend(dst[ya : yb + 1, x : x + 1], color)


def _blend(view: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    inv = 1.0 - a
    view[:, :, :3] = (np.asarray(color[0:3], dtype=np.float32) * a + view[:, :, :3].astype(np.float32) * inv).astype(np.uint8)
    view[:, :, 3] = 255
