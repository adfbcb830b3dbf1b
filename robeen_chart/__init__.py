from robeen_chart.chart import BarChart, ChartState, RenderSurface, compute_chart_state
from robeen_chart.config import AxisConfig, AxisOptions, ChartConfig, DEFAULT_CONFIG, Margin, load_chart_config, validate_chart_config
from robeen_chart.errors import ChartError, InvalidConfiguration, MeasurementDataError, SurfaceUnavailable
from robeen_chart.formatting import format_value
from robeen_chart.geometry import BarRect, ChartGeometry, GridLine, TickDescriptor, build_geometry
from robeen_chart.interaction import HideTooltip, InteractionRouter, ShowTooltip, TooltipCommand
from robeen_chart.measurements import Measurement, category_key_of, measurements_from_jmh, normalize_measurements
from robeen_chart.palette import Palette
from robeen_chart.scales import BandScale, LinearScale, PlotArea, Scales, build_scales

__all__ = [
    "AxisConfig",
    "AxisOptions",
    "BandScale",
    "BarChart",
    "BarRect",
    "ChartConfig",
    "ChartError",
    "ChartGeometry",
    "ChartState",
    "DEFAULT_CONFIG",
    "GridLine",
    "HideTooltip",
    "InteractionRouter",
    "InvalidConfiguration",
    "LinearScale",
    "Margin",
    "Measurement",
    "MeasurementDataError",
    "Palette",
    "PlotArea",
    "RenderSurface",
    "Scales",
    "ShowTooltip",
    "SurfaceUnavailable",
    "TickDescriptor",
    "TooltipCommand",
    "build_geometry",
    "build_scales",
    "category_key_of",
    "compute_chart_state",
    "format_value",
    "load_chart_config",
    "measurements_from_jmh",
    "normalize_measurements",
    "validate_chart_config",
]
