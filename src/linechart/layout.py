"""Layout engine: turn chart samples into a renderer-ready model."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from linechart.chart_input import ChartInput
from linechart.config import LayoutSettings, Margins, default_settings
from linechart.errors import LayoutError

STYLE_RULES: Tuple[str, ...] = (
    ".line{fill:none;stroke:rgb(0,0,200);stroke-width:2;}",
    ".axis{fill:none;stroke:rgb(0,0,0);stroke-width:1;}",
    ".labels{fill:rgb(0,0,0);font-size:10;font-family:Arial}",
    ".y-labels{text-anchor:end;}",
    ".title{font-family:Arial;font-size:12;text-anchor:middle;}",
)


@dataclass(frozen=True)
class RenderModel:
    title: str
    units: str
    plot_width: float
    plot_height: float
    value_range: Tuple[float, float]
    tick_interval: float
    margins: Margins
    style_rules: Tuple[str, ...]
    samples: Tuple[Tuple[str, float], ...]


def _value_bounds(chart: ChartInput) -> Tuple[float, float]:
    raw_min = math.inf
    raw_max = -math.inf
    for sample in chart.samples:
        if not math.isfinite(sample.value):
            raise LayoutError(f"sample '{sample.key}' has a non-finite value: {sample.value}")
        if sample.value < raw_min:
            raw_min = sample.value
        if sample.value > raw_max:
            raw_max = sample.value
    return raw_min, raw_max


def nice_interval(span: float, num_intervals: int) -> float:
    """Tick spacing for a span: the next power of ten split into `num_intervals` steps."""
    if not (span > 0 and math.isfinite(span)):
        raise LayoutError(f"value span must be positive and finite, got {span}")
    try:
        interval = 10.0 ** math.ceil(math.log10(span)) / num_intervals
    except OverflowError as exc:
        raise LayoutError(f"value span is too large to lay out: {span}") from exc
    if not interval > 0:
        raise LayoutError(f"value span is too small to lay out: {span}")
    return interval


def snap_range(raw_min: float, raw_max: float, interval: float) -> Tuple[float, float]:
    return (
        math.floor(raw_min / interval) * interval,
        math.ceil(raw_max / interval) * interval,
    )


def compute_layout(chart: ChartInput, settings: Optional[LayoutSettings] = None) -> RenderModel:
    """Resolve axis range, tick interval and geometry constants for a chart.

    A constant series (one sample, or all samples equal) has no span of its
    own. It is laid out against a nominal span of ``abs(value)`` (``1.0`` for
    zero) and the axis is widened by one tick on each side, so the line sits
    mid-axis instead of collapsing the axis to zero height.
    """

    settings = settings or default_settings()
    if not chart.samples:
        raise LayoutError("chart has no samples")

    raw_min, raw_max = _value_bounds(chart)
    span = raw_max - raw_min
    constant = span == 0
    if constant:
        span = abs(raw_max) or 1.0

    interval = nice_interval(span, settings.num_intervals)
    low, high = snap_range(raw_min, raw_max, interval)
    if constant:
        low, high = low - interval, high + interval

    if not (math.isfinite(low) and math.isfinite(high) and high > low):
        raise LayoutError(f"cannot build an axis for values in [{raw_min}, {raw_max}]")
    if not math.isfinite(settings.plot_height / (high - low)):
        raise LayoutError(f"value span is too small to lay out: [{raw_min}, {raw_max}]")

    return RenderModel(
        title=chart.title,
        units=chart.units,
        plot_width=settings.plot_width,
        plot_height=settings.plot_height,
        value_range=(low, high),
        tick_interval=interval,
        margins=settings.margins,
        style_rules=STYLE_RULES,
        samples=tuple((s.key, s.value) for s in chart.samples),
    )
