"""Decode relaxed-JSON chart sources into ChartInput records."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, TextIO, Tuple

import json5

from linechart.errors import InputDecodeError


@dataclass(frozen=True)
class Sample:
    key: str
    value: float


@dataclass(frozen=True)
class ChartInput:
    title: str
    units: str
    samples: Tuple[Sample, ...]


def _require(doc: Mapping[str, Any], field: str, where: str) -> Any:
    if field not in doc:
        raise InputDecodeError(f"{where}: missing field '{field}'")
    return doc[field]


def _require_str(doc: Mapping[str, Any], field: str, where: str) -> str:
    value = _require(doc, field, where)
    if not isinstance(value, str):
        raise InputDecodeError(f"{where}: field '{field}' must be a string, got {type(value).__name__}")
    return value


def _parse_sample(entry: Any, index: int) -> Sample:
    where = f"data[{index}]"
    if not isinstance(entry, dict):
        raise InputDecodeError(f"{where}: expected an object, got {type(entry).__name__}")

    key = _require_str(entry, "key", where)
    value = _require(entry, "value", where)
    # bool is an int subclass; a true/false value is a schema error
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InputDecodeError(f"{where}: field 'value' must be a number, got {type(value).__name__}")
    try:
        number = float(value)
    except OverflowError as exc:
        raise InputDecodeError(f"{where}: field 'value' is out of range: {value}") from exc
    return Sample(key=key, value=number)


def parse_chart_input(text: str) -> ChartInput:
    """Parse chart source text.

    The source is JSON5, so comments, unquoted keys and trailing commas are
    accepted. Unknown fields are ignored.
    """

    try:
        doc = json5.loads(text)
    except ValueError as exc:
        raise InputDecodeError(f"malformed chart source: {exc}") from exc

    if not isinstance(doc, dict):
        raise InputDecodeError(f"chart source must be an object, got {type(doc).__name__}")

    title = _require_str(doc, "title", "chart")
    units = _require_str(doc, "units", "chart")
    data = _require(doc, "data", "chart")
    if not isinstance(data, list):
        raise InputDecodeError(f"chart: field 'data' must be a list, got {type(data).__name__}")

    samples = tuple(_parse_sample(entry, i) for i, entry in enumerate(data))
    return ChartInput(title=title, units=units, samples=samples)


def read_chart_input(reader: TextIO) -> ChartInput:
    try:
        text = reader.read()
    except UnicodeDecodeError as exc:
        raise InputDecodeError(f"chart source is not valid UTF-8: {exc}") from exc
    return parse_chart_input(text)
