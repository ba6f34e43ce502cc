"""Pick the readable source and writable sink for a conversion."""
from __future__ import annotations

import io
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO

from linechart.errors import SinkError, SourceError


@contextmanager
def open_source(path: Optional[Path]) -> Iterator[TextIO]:
    """Yield the input file, or stdin when no path is given."""
    if path is None:
        buffer = getattr(sys.stdin, "buffer", None)
        if buffer is None:
            # already-decoded text stream (e.g. replaced by a StringIO)
            yield sys.stdin
            return
        reader = io.TextIOWrapper(buffer, encoding="utf-8")
        try:
            yield reader
        finally:
            # leave sys.stdin open for the caller
            reader.detach()
        return
    try:
        fh = Path(path).open("r", encoding="utf-8")
    except OSError as exc:
        raise SourceError(f"Unable to open file '{path}': {exc.strerror or exc}") from exc
    with fh:
        yield fh


@contextmanager
def open_sink(path: Optional[Path]) -> Iterator[TextIO]:
    """Yield the output file, or stdout when no path is given."""
    if path is None:
        yield sys.stdout
        return
    try:
        fh = Path(path).open("w", encoding="utf-8")
    except OSError as exc:
        raise SinkError(f"Unable to create file '{path}': {exc.strerror or exc}") from exc
    with fh:
        yield fh


def write_document(path: Optional[Path], document: str) -> None:
    try:
        with open_sink(path) as sink:
            sink.write(document)
            sink.flush()
    except OSError as exc:
        raise SinkError(f"Unable to write file '{path or '<stdout>'}': {exc.strerror or exc}") from exc
