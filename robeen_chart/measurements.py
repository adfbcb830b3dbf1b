from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import numpy as np

from .errors import MeasurementDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


CATEGORY_SEPARATOR = "."


@dataclass(frozen=True)
class Measurement:
    label: str
    value: float


def category_key_of(label: str) -> str:
    """Return the band-scale key for a label: the part after the last dot."""
    return label.rsplit(CATEGORY_SEPARATOR, 1)[-1]


def normalize_measurements(records: Iterable[Any]) -> tuple[Measurement, ...]:
    out: list[Measurement] = []
    for i, record in enumerate(records):
        if isinstance(record, Measurement):
            out.append(record)
            continue
        if isinstance(record, Mapping):
            if "label" not in record or "value" not in record:
                raise MeasurementDataError(f"record {i} must have `label` and `value`")
            label, raw = record["label"], record["value"]
        elif isinstance(record, Sequence) and not isinstance(record, (str, bytes)) and len(record) == 2:
            label, raw = record
        else:
            raise MeasurementDataError(f"unsupported record type at index {i}: {type(record)!r}")
        out.append(Measurement(label=_coerce_label(label, index=i), value=_coerce_value(raw, index=i)))
    return tuple(out)


def measurements_from_jmh(records: Iterable[Mapping[str, Any]]) -> tuple[Measurement, ...]:
    """Map JMH result records (`benchmark`, `primaryMetric.score`) to measurements."""

    out: list[Measurement] = []
    for i, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise MeasurementDataError(f"JMH record {i} must be an object")
        metric = record.get("primaryMetric")
        if not isinstance(metric, Mapping) or "score" not in metric:
            raise MeasurementDataError(f"JMH record {i} is missing `primaryMetric.score`")
        out.append(
            Measurement(
                label=_coerce_label(record.get("benchmark"), index=i),
                value=_coerce_value(metric["score"], index=i),
            )
        )
    return tuple(out)


def measurements_from_arrays(labels: Sequence[str], values: Any) -> tuple[Measurement, ...]:
    arr = _coerce_1d_numeric(values)
    if len(labels) != arr.size:
        raise MeasurementDataError(f"labels and values length mismatch: {len(labels)} != {arr.size}")
    return tuple(
        Measurement(label=_coerce_label(label, index=i), value=float(v))
        for i, (label, v) in enumerate(zip(labels, arr.tolist(), strict=True))
    )


def values_array(measurements: Sequence[Measurement]) -> np.ndarray:
    return np.asarray([m.value for m in measurements], dtype=np.float64)


def _coerce_label(label: Any, *, index: int) -> str:
    if not isinstance(label, str) or not label:
        raise MeasurementDataError(f"label at index {index} must be a non-empty string")
    return label


def _coerce_value(raw: Any, *, index: int) -> float:
    if isinstance(raw, bool) or raw is None:
        raise MeasurementDataError(f"value at index {index} must be numeric, got {raw!r}")
    if isinstance(raw, Decimal):
        return float(raw)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise MeasurementDataError(f"value at index {index} must be numeric, got {raw!r}") from exc


def _coerce_1d_numeric(value: Any) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise MeasurementDataError("values must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy())

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise MeasurementDataError("values must be 1-D")
        return _coerce_ndarray(value)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object))

    raise MeasurementDataError(f"unsupported values input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f"}:
        return arr.astype(np.float64, copy=False)
    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        out[i] = _coerce_value(raw, index=i)
    return out
