"""Render surface adapters that materialize chart geometry."""

from .raster import RasterSurface
from .svg import SVGSurface

__all__ = ["RasterSurface", "SVGSurface"]
