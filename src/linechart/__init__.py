"""linechart: render a titled numeric series as an SVG line chart."""

__version__ = "0.2.0"
