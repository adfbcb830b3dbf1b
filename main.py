from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from pathlib import Path
import sys

from robeen_chart import BarChart, ChartError, DEFAULT_CONFIG, load_chart_config, measurements_from_jmh
from robeen_chart.config import ChartConfig
from robeen_chart.measurements import Measurement
from robeen_ui import RasterSurface, SVGSurface

LOGGER = logging.getLogger("robeen")

DEFAULT_WIDTH = 960
DEFAULT_HEIGHT = 540


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="robeen")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a JMH results file as a horizontal bar chart (SVG or PNG).")
    render.add_argument("results", type=Path, help="JMH JSON results (a list of benchmark records).")
    render.add_argument("--output", "-o", type=Path, required=True, help="Output path; .svg or .png.")
    render.add_argument("--config", type=Path, default=None, help="Chart options as TOML.")
    render.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    render.add_argument("--height", type=int, default=DEFAULT_HEIGHT)

    inspect = sub.add_parser("inspect", help="Print the computed chart geometry as JSON.")
    inspect.add_argument("results", type=Path)
    inspect.add_argument("--config", type=Path, default=None)
    inspect.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    inspect.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        return _render(args.results, args.output, args.config, args.width, args.height)
    if args.command == "inspect":
        return _inspect(args.results, args.config, args.width, args.height)
    raise RuntimeError(f"unsupported command: {args.command}")


def _render(results: Path, output: Path, config_path: Path | None, width: int, height: int) -> int:
    suffix = output.suffix.lower()
    if suffix not in (".svg", ".png"):
        print(f"unsupported output format: {output.suffix or '(none)'}", file=sys.stderr)
        return 2
    surface = SVGSurface(width, height) if suffix == ".svg" else RasterSurface(width, height)

    status = 0
    try:
        chart = BarChart(_load_results(results), surface, _load_config(config_path))
        state = chart.draw_chart()
        if state is not None and state.no_data:
            LOGGER.warning("%s has no positive scores; rendered placeholder", results)
    except ChartError as exc:
        LOGGER.warning("cannot draw chart: %s", exc)
        surface.show_error(str(exc))
        status = 1

    if isinstance(surface, SVGSurface):
        surface.save(output)
    else:
        surface.save_png(output)
    LOGGER.info("wrote %s", output)
    return status


def _inspect(results: Path, config_path: Path | None, width: int, height: int) -> int:
    surface = SVGSurface(width, height)
    try:
        chart = BarChart(_load_results(results), surface, _load_config(config_path))
        state = chart.draw_chart()
    except ChartError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    if state is None:
        print("error: surface has no size to draw on", file=sys.stderr)
        return 1
    payload = {
        "plot_area": dataclasses.asdict(state.plot_area),
        "domain_max": state.scales.linear.domain_max,
        "categories": list(state.scales.band.domain),
        "no_data": state.no_data,
        "geometry": dataclasses.asdict(state.geometry),
    }
    print(json.dumps(payload, indent=2))
    return 0


def _load_results(path: Path) -> tuple[Measurement, ...]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SystemExit(f"cannot read results {path}: {exc}") from exc
    if not isinstance(raw, list):
        raise SystemExit(f"results {path} must contain a JSON list of benchmark records")
    return measurements_from_jmh(raw)


def _load_config(path: Path | None) -> ChartConfig:
    if path is None:
        return DEFAULT_CONFIG
    return load_chart_config(path)


if __name__ == "__main__":
    raise SystemExit(main())
