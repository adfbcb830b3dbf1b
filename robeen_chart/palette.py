from __future__ import annotations

from collections.abc import Sequence

from PIL import ImageColor

from .errors import InvalidConfiguration


DEFAULT_COLORS: tuple[str, ...] = (
    "#4E79A7",
    "#F28E2B",
    "#E15759",
    "#76B7B2",
    "#59A14F",
    "#EDC948",
    "#B07AA1",
    "#FF9DA7",
    "#9C755F",
    "#BAB0AC",
)


class Palette:
    """Ordered colour list addressed by bar index, wrapping around its end."""

    def __init__(self, colors: Sequence[str]) -> None:
        if isinstance(colors, str):
            raise InvalidConfiguration("palette must be a sequence of colours, not a string")
        self.colors: tuple[str, ...] = tuple(colors)
        if not self.colors:
            raise InvalidConfiguration("palette must not be empty")
        for color in self.colors:
            validate_color(color)

    def __len__(self) -> int:
        return len(self.colors)

    def color_at(self, index: int) -> str:
        return self.colors[index % len(self.colors)]


def validate_color(color: object) -> str:
    if not isinstance(color, str) or not color.strip():
        raise InvalidConfiguration(f"colour must be a non-empty string, got {color!r}")
    try:
        ImageColor.getrgb(color)
    except ValueError as exc:
        raise InvalidConfiguration(f"unrecognized colour: {color!r}") from exc
    return color


def to_rgba(color: str, alpha: float = 1.0) -> tuple[int, int, int, int]:
    rgb = ImageColor.getrgb(color)
    base_a = rgb[3] if len(rgb) == 4 else 255
    a = int(max(0.0, min(1.0, alpha)) * base_a)
    return (rgb[0], rgb[1], rgb[2], a)
