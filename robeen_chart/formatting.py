from __future__ import annotations

from decimal import Decimal, InvalidOperation
import math
from typing import Any


FormatSpec = str | None

_SI_PREFIXES = (
    (1e12, "T"),
    (1e9, "G"),
    (1e6, "M"),
    (1e3, "k"),
)


def format_value(spec: FormatSpec, value: Any, *, step: float | None = None) -> str:
    """Render ``value`` for an axis label according to ``spec``.

    Recognized specs: ``"auto"`` (or ``None``/empty), ``"integer"``,
    ``"thousands"``, ``"si"``, ``"percent"`` and ``"fixed:N"``. Anything else
    falls back to ``str(value)``. Never raises.

    ``step`` is the spacing of the axis the value belongs to; ``"auto"`` uses
    it so every label on one axis shares a notation.
    """

    if spec is not None and not isinstance(spec, str):
        return str(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return str(value)
    if not math.isfinite(number):
        return str(value)

    token = (spec or "auto").strip().lower()
    if token == "auto":
        return format_tick(number, step=step)
    if token == "integer":
        return str(int(round(number)))
    if token == "thousands":
        if number == int(number):
            return f"{int(number):,}"
        return f"{number:,.2f}".rstrip("0").rstrip(".")
    if token == "si":
        return _format_si(number)
    if token == "percent":
        return f"{format_tick(number * 100.0)}%"
    if token.startswith("fixed:"):
        digits = token.split(":", 1)[1]
        if digits.isdigit() and int(digits) <= 12:
            return f"{number:.{int(digits)}f}"
    return str(value)


def format_tick(value: float, *, step: float | None = None) -> str:
    if not math.isfinite(value):
        return str(value)
    if step is not None and math.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    # With a step, notation follows the axis spacing rather than each value.
    if step is not None and math.isfinite(step) and step > 0:
        scientific = step >= 1e6 or step < 1e-6
    else:
        scientific = abs_v >= 1e6 or abs_v < 1e-6
    if abs_v != 0 and scientific:
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Trim only fractional zeros so 30 stays 30.
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def _format_si(number: float) -> str:
    abs_v = abs(number)
    for threshold, suffix in _SI_PREFIXES:
        if abs_v >= threshold:
            return f"{format_tick(round(number / threshold, 2))}{suffix}"
    return format_tick(round(number, 2))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not math.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
