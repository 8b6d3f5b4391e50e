"""Quote-aware CSV field handling shared by the workout and attendance tables.

Fields are quoted only when they contain a comma, a double quote or a line
break character. Decoding is tolerant: a malformed row is logged and skipped,
only a bad header aborts the whole table.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List, NamedTuple, Optional, Sequence, TextIO, TypeVar

from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

QUOTE = '"'
SEPARATOR = ","
_NEEDS_QUOTING = (SEPARATOR, QUOTE, "\n", "\r")
_INTEGER = re.compile(r"^[+-]?\d+$")


class CsvField(NamedTuple):
    text: str
    quoted: bool


@dataclass
class _SplitState:
    fields: List[CsvField] = field(default_factory=list)
    buf: List[str] = field(default_factory=list)
    in_quotes: bool = False
    quoted: bool = False

    def emit(self) -> None:
        self.fields.append(CsvField("".join(self.buf), self.quoted))
        self.buf.clear()
        self.quoted = False


def escape_field(value: object) -> str:
    if value is None:
        return ""
    text = str(value)
    if any(ch in text for ch in _NEEDS_QUOTING):
        return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE
    return text


def join_fields(values: Iterable[object]) -> str:
    return SEPARATOR.join(escape_field(v) for v in values)


def _feed(line: str, state: _SplitState) -> None:
    # Two states: normal / in_quotes. A doubled quote inside quotes is a literal quote.
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if state.in_quotes:
            if ch == QUOTE:
                if i + 1 < n and line[i + 1] == QUOTE:
                    state.buf.append(QUOTE)
                    i += 2
                    continue
                state.in_quotes = False
            else:
                state.buf.append(ch)
        elif ch == QUOTE:
            state.in_quotes = True
            state.quoted = True
        elif ch == SEPARATOR:
            state.emit()
        else:
            state.buf.append(ch)
        i += 1


def split_line(line: str) -> List[str]:
    """Split one physical line into field texts.

    Raises ValidationError if a quoted field is left open at end of line.
    """
    state = _SplitState()
    _feed(line.rstrip("\r\n"), state)
    if state.in_quotes:
        raise ValidationError("Unterminated quoted field")
    state.emit()
    return [f.text for f in state.fields]


def iter_records(lines: Iterable[str], *, first_line_number: int = 1) -> Iterator[tuple[int, List[CsvField]]]:
    """Yield (line_number, fields) for each logical record.

    A line that ends inside quotes continues on the next physical line; its
    terminator (\\n, \\r or \\r\\n) is kept verbatim in the field. Blank lines
    between records are ignored. A record still inside quotes at end of input
    is dropped with a warning.
    """
    state = _SplitState()
    start = first_line_number

    for line_number, raw in enumerate(lines, start=first_line_number):
        line = raw.rstrip("\r\n")
        if not state.in_quotes:
            if not line.strip():
                continue
            start = line_number

        _feed(line, state)
        if state.in_quotes:
            state.buf.append(raw[len(line):])
            continue

        state.emit()
        fields, state.fields = state.fields, []
        yield start, fields

    if state.in_quotes:
        logger.warning("Skipping line %d: unterminated quoted field at end of file", start)


def clean_field(f: CsvField) -> Optional[str]:
    """Unquoted text is trimmed; blank fields (quoted or not) become None."""
    if not f.text.strip():
        return None
    return f.text if f.quoted else f.text.strip()


def parse_int(value: Optional[str], field_name: str, *, required: bool = False) -> Optional[int]:
    if value is None:
        if required:
            raise ValidationError(f"{field_name} is required")
        return None
    v = value.strip()
    if not _INTEGER.match(v):
        raise ValidationError(f"Invalid number format for {field_name}: {value!r}")
    return int(v)


def check_header(line: Optional[str], expected: str) -> None:
    if not line:
        raise ValidationError("CSV file is empty")
    header = line.lstrip("\ufeff").strip()
    if header.lower() != expected.lower():
        raise ValidationError(f"Invalid CSV header. Expected: {expected}")


def write_table(stream: TextIO, header: str, rows: Iterable[Sequence[object]]) -> int:
    stream.write(header + "\n")
    count = 0
    for values in rows:
        stream.write(join_fields(values) + "\n")
        count += 1
    return count


def read_table(
    stream: TextIO,
    *,
    header: str,
    min_fields: int,
    convert: Callable[[List[Optional[str]]], T],
) -> List[T]:
    """Read a header-checked table, converting each record with `convert`.

    `convert` raises ValidationError for a bad row; the row is then skipped.
    """
    check_header(stream.readline(), header)

    rows: List[T] = []
    for line_number, fields in iter_records(stream, first_line_number=2):
        try:
            if len(fields) < min_fields:
                raise ValidationError(f"insufficient fields (expected {min_fields}, got {len(fields)})")
            rows.append(convert([clean_field(f) for f in fields]))
        except ValidationError as e:
            logger.warning("Skipping line %d: %s", line_number, e)
    return rows
