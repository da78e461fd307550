"""
This module provides text sources that read lines or words from a reader
into a conduit.

A reader is an open text file, an `io.StringIO`, or any iterable of strings.
Reading happens on the conduit's task; the reader is not closed.
"""
import io
from typing import Any, Iterator

from ..core.conduit import Conduit, Writer
from ..core.errors import SourceError


def _chunks(reader: Any) -> Iterator[str]:
    if hasattr(reader, "readline"):
        return iter(reader.readline, "")
    return iter(reader)


def _check_reader(reader: Any, source: str) -> None:
    # Binary streams have readline but yield bytes.
    if isinstance(reader, (str, bytes, io.RawIOBase, io.BufferedIOBase)) or not (
        hasattr(reader, "readline") or hasattr(reader, "__iter__")
    ):
        raise SourceError(f"{source}() requires a text reader, not {type(reader).__name__}")


def _split_lines(reader: Any) -> Iterator[str]:
    pending = ""
    for chunk in _chunks(reader):
        pending += chunk
        while True:
            index = pending.find("\n")
            if index < 0:
                break
            line, pending = pending[:index], pending[index + 1:]
            if line.endswith("\r"):
                line = line[:-1]
            yield line
    # A final line without a newline is still a line.
    if pending:
        if pending.endswith("\r"):
            pending = pending[:-1]
        yield pending


def from_text_lines(reader: Any) -> Conduit:
    """Creates a conduit of the lines of `reader`, without line endings.

    Lines are separated by ``\\n``; a ``\\r`` before it is dropped too. Input
    ending with a newline does not produce a trailing empty line, while a
    final line without one is still emitted.

    Raises:
        SourceError: If `reader` cannot be read as text.
    """
    _check_reader(reader, "from_text_lines")

    def _from_text_lines(out: Writer) -> None:
        for line in _split_lines(reader):
            out.put(line)

    return Conduit(_from_text_lines, name="from_text_lines")


def from_text_words(reader: Any) -> Conduit:
    """Creates a conduit of the whitespace-separated words of `reader`.

    Any run of whitespace separates two words; a final word is emitted even
    without trailing whitespace.

    Raises:
        SourceError: If `reader` cannot be read as text.
    """
    _check_reader(reader, "from_text_words")

    def _from_text_words(out: Writer) -> None:
        pending = ""
        for chunk in _chunks(reader):
            pending += chunk
            words = pending.split()
            if not words:
                pending = ""
                continue
            # The last word may continue in the next chunk.
            if not pending[-1].isspace():
                pending = words.pop()
            else:
                pending = ""
            for word in words:
                out.put(word)
        if pending:
            out.put(pending)

    return Conduit(_from_text_words, name="from_text_words")
