"""
app/parsers/csv_stream.py

Lazy, header-driven CSV row parser for uploaded product files.

Column-count policy:
- fields beyond the header width are ignored;
- a short record yields a row holding only the columns it has, so the
  missing trailing keys are absent rather than padded with "".
Neither case is a parse error. Duplicate header names keep the rightmost value.

Whitespace: every value is trimmed, quoted or not, and spaces or tabs between
a closing quote and the next delimiter are dropped. Cells have no size cap.
"""

from __future__ import annotations

import codecs
import csv
import io
from collections.abc import Iterable, Iterator

from app.domain.product_ingestion import RawRow

# Largest value every platform's C long accepts; the stdlib default is 131072.
_FIELD_SIZE_LIMIT = 2**31 - 1

csv.field_size_limit(_FIELD_SIZE_LIMIT)

_QUOTE = '"'
_DELIMITER = ","
_LINE_BREAKS = "\r\n"
_PADDING = " \t"

# Scanner states for _drop_space_after_closing_quotes.
_FIELD_START = 0
_UNQUOTED = 1
_QUOTED = 2
_QUOTE_IN_QUOTED = 3
_PADDING_AFTER_QUOTE = 4


class CSVParseError(ValueError):
    """
    Raised when the upload cannot be read as well-formed UTF-8 CSV.
    """

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"{self.message} (line {self.line_number})"


def _is_blank_record(values: list[str]) -> bool:
    return not values or (len(values) == 1 and not values[0])


def _decode(buffer: bytes) -> str:
    body = buffer[len(codecs.BOM_UTF8) :] if buffer.startswith(codecs.BOM_UTF8) else buffer
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CSVParseError(
            "CSV must be UTF-8 encoded.",
            line_number=body.count(b"\n", 0, exc.start) + 1,
        ) from exc


def _drop_space_after_closing_quotes(lines: Iterable[str]) -> Iterator[str]:
    """
    Remove padding between a closing quote and the following delimiter or
    line break, yielding exactly one output line per input line.

    Quote state carries across lines, so padding inside a multi-line quoted
    field is left alone. Anything else after a closing quote is passed
    through for the strict reader to reject.
    """

    state = _FIELD_START
    for line in lines:
        if state == _FIELD_START and _QUOTE not in line:
            yield line
            continue

        out: list[str] = []
        pending = ""
        for char in line:
            if state == _QUOTED:
                if char == _QUOTE:
                    state = _QUOTE_IN_QUOTED
            elif state == _QUOTE_IN_QUOTED:
                if char == _QUOTE:
                    state = _QUOTED
                elif char in _PADDING:
                    state = _PADDING_AFTER_QUOTE
                    pending = char
                    continue
                elif char == _DELIMITER or char in _LINE_BREAKS:
                    state = _FIELD_START
                else:
                    state = _UNQUOTED
            elif state == _PADDING_AFTER_QUOTE:
                if char in _PADDING:
                    pending += char
                    continue
                if char == _DELIMITER or char in _LINE_BREAKS:
                    state = _FIELD_START
                else:
                    out.append(pending)
                    state = _UNQUOTED
                pending = ""
            elif state == _FIELD_START:
                if char == _QUOTE:
                    state = _QUOTED
                elif char != " " and char != _DELIMITER and char not in _LINE_BREAKS:
                    state = _UNQUOTED
            elif char == _DELIMITER or char in _LINE_BREAKS:
                state = _FIELD_START
            out.append(char)
        yield "".join(out)


def iter_csv_rows(buffer: bytes) -> Iterator[RawRow]:
    """
    Yield one RawRow per data line of ``buffer``.

    The first non-blank line is the header. Values and header names are
    whitespace-trimmed; blank lines yield nothing. Rows are produced in a
    single forward pass, so a CSVParseError may surface after earlier rows
    were already yielded. Callers that need all-or-nothing must drain it.
    """

    text_stream = io.StringIO(_decode(buffer), newline="")
    reader = csv.reader(
        _drop_space_after_closing_quotes(text_stream),
        strict=True,
        skipinitialspace=True,
    )
    header: list[str] | None = None

    try:
        for record in reader:
            values = [value.strip() for value in record]
            if _is_blank_record(values):
                continue

            if header is None:
                if not any(values):
                    raise CSVParseError(
                        "CSV header row has no column names.",
                        line_number=reader.line_num,
                    )
                header = values
                continue

            yield {name: value for name, value in zip(header, values) if name}
    except csv.Error as exc:
        raise CSVParseError(f"Invalid CSV format: {exc}", line_number=reader.line_num) from exc
    finally:
        text_stream.close()
