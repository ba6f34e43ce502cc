"""Diagnostics for the CLI driver.

The core never logs. The driver reports through a LineChartLog, which has one
method per severity. ConsoleLog sends them to the terminal and BufferLog keeps
them for inspection.
"""
from __future__ import annotations

import enum
import logging
import sys
from dataclasses import dataclass
from typing import List, Protocol


class Severity(enum.Enum):
    OUTPUT = "output"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    text: str


class LineChartLog(Protocol):
    def output(self, text: str) -> None: ...

    def warning(self, text: str) -> None: ...

    def error(self, text: str) -> None: ...


def emit(log: LineChartLog, diagnostic: Diagnostic) -> None:
    if diagnostic.severity is Severity.OUTPUT:
        log.output(diagnostic.text)
    elif diagnostic.severity is Severity.WARNING:
        log.warning(diagnostic.text)
    else:
        log.error(diagnostic.text)


class _StdoutOnly(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def setup_logger(name: str = "linechart", level: str = "INFO") -> logging.Logger:
    """Console logger: INFO to stdout as-is, WARNING and above to stderr."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level))
    logger.propagate = False

    if logger.handlers:
        return logger

    out = logging.StreamHandler(sys.stdout)
    out.setLevel(logging.DEBUG)
    out.addFilter(_StdoutOnly())
    out.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(out)

    err = logging.StreamHandler(sys.stderr)
    err.setLevel(logging.WARNING)
    err.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(err)

    return logger


class ConsoleLog:
    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or setup_logger()

    def output(self, text: str) -> None:
        self.logger.info(text)

    def warning(self, text: str) -> None:
        self.logger.warning(text)

    def error(self, text: str) -> None:
        self.logger.error(text)


class BufferLog:
    def __init__(self) -> None:
        self.records: List[Diagnostic] = []

    def output(self, text: str) -> None:
        self.records.append(Diagnostic(Severity.OUTPUT, text))

    def warning(self, text: str) -> None:
        self.records.append(Diagnostic(Severity.WARNING, text))

    def error(self, text: str) -> None:
        self.records.append(Diagnostic(Severity.ERROR, text))

    def texts(self, severity: Severity) -> List[str]:
        return [d.text for d in self.records if d.severity is severity]
