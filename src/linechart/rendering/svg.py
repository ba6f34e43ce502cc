"""SVG line chart renderer (no extra plotting dependency)."""
from __future__ import annotations

import math
from typing import List, Optional
from xml.sax.saxutils import escape

from linechart.chart_input import ChartInput
from linechart.config import LayoutSettings
from linechart.layout import RenderModel, compute_layout

SVG_NS = "http://www.w3.org/2000/svg"


def _num(value: float) -> str:
    # at most two decimals, no trailing zeros: 80, 105.5, 246.67
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _tick_label(value: float, interval: float) -> str:
    decimals = max(0, -math.floor(math.log10(interval)))
    rounded = round(value, decimals)
    if rounded == 0:
        rounded = 0.0
    return f"{rounded:.{decimals}f}"


def render(model: RenderModel) -> str:
    """Render a layout model as a self-contained SVG document."""

    m = model.margins
    low, high = model.value_range
    width = m.left + len(model.samples) * model.plot_width + m.right
    height = m.top + m.bottom + model.plot_height
    tick_count = int(round((high - low) / model.tick_interval))
    y_scale = model.plot_height / (high - low)

    # whole hundredths, so every emitted step between samples is identical
    left_h = round(m.left * 100)
    step_h = round(model.plot_width * 100)
    half_h = round(model.plot_width * 50)

    def to_x(index: int) -> float:
        return (left_h + index * step_h + half_h) / 100

    def to_y(value: float) -> float:
        return height - m.bottom - (value - low) * y_scale

    parts: List[str] = [
        f'<svg xmlns="{SVG_NS}" width="{_num(width)}" height="{_num(height)}" '
        f'viewBox="0 0 {_num(width)} {_num(height)}" style="background-color: white;">',
        f"<style>{''.join(escape(rule) for rule in model.style_rules)}</style>",
    ]

    axis_points = [
        (m.left, m.top),
        (m.left, m.top + model.plot_height),
        (width - m.right, m.top + model.plot_height),
    ]
    parts.append(
        '<polyline class="axis" points="'
        + " ".join(f"{_num(x)},{_num(y)}" for x, y in axis_points)
        + '"/>'
    )

    parts.append('<g class="labels">')
    for i, (label, _) in enumerate(model.samples):
        parts.append(
            f'<text transform="translate({_num(to_x(i))},{_num(height - m.bottom + 15)}) rotate(45)">'
            f"{escape(label)}</text>"
        )
    parts.append("</g>")

    parts.append('<g class="labels y-labels">')
    for tick in range(tick_count + 1):
        value = low + tick * model.tick_interval
        parts.append(
            f'<text transform="translate({_num(m.left - 10)},{_num(to_y(value) + 5)})">'
            f"{_tick_label(value, model.tick_interval)}</text>"
        )
    parts.append("</g>")

    commands = []
    for i, (_, value) in enumerate(model.samples):
        op = "M" if i == 0 else "L"
        commands.append(f"{op} {_num(to_x(i))} {_num(to_y(value))}")
    parts.append(f'<path class="line" d="{" ".join(commands)}"/>')

    parts.append(
        f'<text class="title" x="{_num(width / 2)}" y="{_num(m.top / 2)}">'
        f"{escape(f'{model.title} ({model.units})')}</text>"
    )
    parts.append("</svg>")
    return "\n".join(parts) + "\n"


def convert(chart: ChartInput, settings: Optional[LayoutSettings] = None) -> str:
    return render(compute_layout(chart, settings))
