"""Command line driver: JSON5 chart source in, SVG line chart out."""
from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path
from typing import List, Optional, Sequence

from linechart import __version__
from linechart.chart_input import ChartInput, read_chart_input
from linechart.config import load_settings
from linechart.errors import LineChartError
from linechart.log import ConsoleLog, Diagnostic, LineChartLog, Severity, emit
from linechart.rendering.svg import convert
from linechart.streams import open_source, write_document


class UsageExit(Exception):
    """Raised instead of exiting when argparse prints help, version or usage."""

    def __init__(self, text: str):
        super().__init__(text)
        self.text = text


class _ChartArgumentParser(argparse.ArgumentParser):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._messages: List[str] = []

    def _print_message(self, message: str, file=None) -> None:
        if message:
            self._messages.append(message)

    def exit(self, status: int = 0, message: Optional[str] = None):
        if message:
            self._messages.append(message)
        raise UsageExit("".join(self._messages).rstrip("\n"))

    def error(self, message: str):
        raise UsageExit(f"{self.format_usage()}{self.prog}: error: {message}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ChartArgumentParser(prog="linechart", description="Render a JSON5 data series as an SVG line chart")
    parser.add_argument("input_file", nargs="?", type=Path, metavar="INPUT_FILE", help="The JSON5 input file")
    parser.add_argument("output_file", nargs="?", type=Path, metavar="OUTPUT_FILE", help="The SVG output file")
    parser.add_argument("--config", default=None, help="YAML layout settings (default: $LINECHART_CONFIG)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def check_samples(chart: ChartInput) -> List[Diagnostic]:
    counts = Counter(s.key for s in chart.samples)
    return [
        Diagnostic(Severity.WARNING, f"duplicate sample key '{key}' appears {n} times")
        for key, n in counts.items()
        if n > 1
    ]


def run(args: argparse.Namespace, log: LineChartLog) -> int:
    settings = load_settings(args.config)

    with open_source(args.input_file) as reader:
        chart = read_chart_input(reader)

    for diagnostic in check_samples(chart):
        emit(log, diagnostic)

    document = convert(chart, settings)
    write_document(args.output_file, document)

    if args.output_file is not None:
        log.output(f"Wrote chart to '{args.output_file}'")
    return 0


def main(argv: Sequence[str] | None = None, log: LineChartLog | None = None) -> int:
    log = log or ConsoleLog()
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageExit as exc:
        log.output(exc.text)
        return 0

    try:
        return run(args, log)
    except LineChartError as exc:
        log.error(str(exc))
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
