"""Display collaborators for robeen charts: tooltip model and render surfaces."""

from .surfaces import RasterSurface, SVGSurface
from .tooltip import TooltipContent, TooltipModel

__all__ = [
    "RasterSurface",
    "SVGSurface",
    "TooltipContent",
    "TooltipModel",
]
