from __future__ import annotations

import math

import pytest

from linechart.chart_input import ChartInput, Sample
from linechart.config import LayoutSettings, Margins, default_settings
from linechart.errors import LayoutError
from linechart.layout import STYLE_RULES, compute_layout, nice_interval, snap_range


def _chart(*values: float) -> ChartInput:
    return ChartInput(
        title="Series",
        units="u",
        samples=tuple(Sample(f"k{i}", v) for i, v in enumerate(values)),
    )


def test_two_samples_layout() -> None:
    model = compute_layout(_chart(10, 20))
    assert model.tick_interval == 0.5
    assert model.value_range == (10.0, 20.0)
    assert model.plot_width == 50
    assert model.plot_height == 400
    assert model.margins == Margins(left=80, top=40, right=80, bottom=80)
    assert model.style_rules == STYLE_RULES
    assert model.title == "Series"
    assert model.units == "u"


def test_interval_for_span_of_95() -> None:
    model = compute_layout(_chart(0, 42, 95))
    assert model.tick_interval == 5
    assert model.value_range == (0.0, 95.0)


def test_range_snaps_outward_to_interval() -> None:
    model = compute_layout(_chart(0, 97))
    assert model.tick_interval == 5
    assert model.value_range == (0.0, 100.0)

    model = compute_layout(_chart(-13, 7))
    assert model.tick_interval == 5
    assert model.value_range == (-15.0, 10.0)


def test_bounds_track_first_sample_on_both_sides() -> None:
    # descending data: the first sample is the maximum
    model = compute_layout(_chart(90, 50, 10))
    assert model.value_range == (10.0, 90.0)
    assert model.tick_interval == 5


@pytest.mark.parametrize(
    "values",
    [
        (10, 20),
        (0, 95),
        (0.1, 0.35, 0.2),
        (-3.7, 12.25, 8),
        (1234.5, 1999, 1500),
        (-0.004, -0.001),
        (7, 7, 7),
        (42,),
    ],
)
def test_values_within_range_and_ticks_aligned(values) -> None:
    model = compute_layout(_chart(*values))
    low, high = model.value_range
    eps = model.tick_interval * 1e-9
    assert high - low > 0
    assert model.tick_interval > 0
    for v in values:
        assert low - eps <= v <= high + eps
    steps = (high - low) / model.tick_interval
    assert steps == pytest.approx(round(steps), abs=1e-6)


def test_samples_keep_input_order() -> None:
    model = compute_layout(_chart(5, 1, 3))
    assert model.samples == (("k0", 5.0), ("k1", 1.0), ("k2", 3.0))


def test_single_sample_gets_a_non_zero_axis() -> None:
    model = compute_layout(_chart(10))
    assert model.tick_interval == 0.5
    assert model.value_range == (9.5, 10.5)


def test_constant_zero_series_gets_a_non_zero_axis() -> None:
    model = compute_layout(_chart(0, 0))
    assert model.tick_interval == pytest.approx(0.05)
    low, high = model.value_range
    assert low == pytest.approx(-0.05)
    assert high == pytest.approx(0.05)


def test_constant_negative_series() -> None:
    model = compute_layout(_chart(-3, -3))
    assert model.tick_interval == 0.5
    assert model.value_range == (-3.5, -2.5)


def test_empty_series_is_rejected() -> None:
    with pytest.raises(LayoutError, match="no samples"):
        compute_layout(_chart())


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_values_are_rejected(bad: float) -> None:
    with pytest.raises(LayoutError, match="k1"):
        compute_layout(_chart(1, bad, 3))


def test_overflowing_span_is_rejected() -> None:
    with pytest.raises(LayoutError):
        compute_layout(_chart(-1.5e308, 1.5e308))


def test_span_too_small_to_scale_is_rejected() -> None:
    with pytest.raises(LayoutError):
        compute_layout(_chart(1e-320, 2e-320))
    with pytest.raises(LayoutError, match="too small"):
        nice_interval(1e-323, 20)


def test_settings_drive_geometry_and_interval_count() -> None:
    settings = LayoutSettings(
        plot_width=30,
        plot_height=200,
        margins=Margins(left=10, top=20, right=30, bottom=40),
        num_intervals=10,
    )
    model = compute_layout(_chart(0, 95), settings)
    assert model.tick_interval == 10
    assert model.value_range == (0.0, 100.0)
    assert model.plot_width == 30
    assert model.plot_height == 200
    assert model.margins == settings.margins


def test_default_settings_match_fixed_constants() -> None:
    settings = default_settings()
    assert settings.num_intervals == 20
    assert (settings.plot_width, settings.plot_height) == (50, 400)


def test_nice_interval_and_snap_helpers() -> None:
    assert nice_interval(95, 20) == 5
    assert nice_interval(100, 20) == 5
    assert nice_interval(101, 20) == 50
    assert snap_range(3, 17, 5) == (0, 20)
    with pytest.raises(LayoutError):
        nice_interval(0, 20)
