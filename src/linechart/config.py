"""Layout settings loader.

Precedence (highest to lowest):
1) --config FILE on the command line
2) LINECHART_CONFIG environment variable
3) Built-in defaults

The settings file is YAML; any key it leaves out keeps its default.
"""

from __future__ import annotations

import math
import os
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from linechart.errors import ConfigError


@dataclass(frozen=True)
class Margins:
    left: float
    top: float
    right: float
    bottom: float


@dataclass(frozen=True)
class LayoutSettings:
    plot_width: float
    plot_height: float
    margins: Margins
    num_intervals: int


_DEFAULTS = {
    "plot": {
        "width": 50.0,
        "height": 400.0,
    },
    "margins": {
        "left": 80.0,
        "top": 40.0,
        "right": 80.0,
        "bottom": 80.0,
    },
    "axis": {
        "intervals": 20,
    },
}


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"settings file does not exist: {path}")
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"settings file is not valid YAML: {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"unable to read settings file: {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"settings file must be a mapping: {path}")
    return data


def _deep_defaults(config: Dict[str, Any], defaults: Mapping[str, Any]) -> Dict[str, Any]:
    merged = deepcopy(config)
    for key, value in defaults.items():
        if key not in merged:
            merged[key] = deepcopy(value)
            continue
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _deep_defaults(dict(merged[key]), value)
    return merged


def _positive(section: Mapping[str, Any], key: str, *, field_name: str) -> float:
    raw = section.get(key)
    if isinstance(raw, bool):
        raise ConfigError(f"{field_name}.{key} must be a number: {raw}")
    try:
        n = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{field_name}.{key} must be a number: {raw}") from exc
    if not (n > 0 and math.isfinite(n)):
        raise ConfigError(f"{field_name}.{key} must be a finite number > 0: {n}")
    return n


def _section(cfg: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = cfg[name]
    if not isinstance(section, Mapping):
        raise ConfigError(f"{name} must be a mapping")
    return section


def _env(name: str) -> Optional[str]:
    value = os.environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def default_settings() -> LayoutSettings:
    return _build(deepcopy(_DEFAULTS))


def _build(cfg: Mapping[str, Any]) -> LayoutSettings:
    plot = _section(cfg, "plot")
    margins = _section(cfg, "margins")
    axis = _section(cfg, "axis")

    intervals = _positive(axis, "intervals", field_name="axis")
    if intervals != int(intervals):
        raise ConfigError(f"axis.intervals must be an integer: {intervals}")

    # the renderer emits hundredths; keep the sample step exact at that precision
    plot_width = round(_positive(plot, "width", field_name="plot"), 2)
    if plot_width <= 0:
        raise ConfigError(f"plot.width must be at least 0.01: {plot['width']}")

    return LayoutSettings(
        plot_width=plot_width,
        plot_height=_positive(plot, "height", field_name="plot"),
        margins=Margins(
            left=_positive(margins, "left", field_name="margins"),
            top=_positive(margins, "top", field_name="margins"),
            right=_positive(margins, "right", field_name="margins"),
            bottom=_positive(margins, "bottom", field_name="margins"),
        ),
        num_intervals=int(intervals),
    )


def load_settings(config_path: str | Path | None = None) -> LayoutSettings:
    """Resolve layout settings from the CLI path, the environment or defaults."""

    raw_path = config_path or _env("LINECHART_CONFIG")
    if raw_path is None:
        return default_settings()

    cfg_path = Path(raw_path).expanduser()
    cfg = _deep_defaults(_read_yaml(cfg_path), _DEFAULTS)
    return _build(cfg)
