# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================


"""
CSV encoding of registrations.

Rows use a fixed ten-column layout (see shared.constants.CSV_COLUMNS) and
are terminated by a bare LF. A field is quoted only when it contains a
comma, a double quote or a line break; quotes inside a quoted field are
doubled.
"""

import csv
import io
from typing import Any, Iterable, Sequence

from shared.constants import CSV_ATTRIBUTES, CSV_HEADER
from shared.errors import MalformedDocumentError
from shared.types import RegistrationRecord

LINE_TERMINATOR = "\n"
_SPECIAL_CHARACTERS = (",", '"', "\n", "\r")


def escape_field(value: Any) -> str:
    if value is None:
        return ""
    text = value if isinstance(value, str) else str(value)
    if any(char in text for char in _SPECIAL_CHARACTERS):
        return '"' + text.replace('"', '""') + '"'
    return text


def encode_values(values: Iterable[Any]) -> str:
    return ",".join(escape_field(value) for value in values)


def header_line(header: Sequence[str] = CSV_HEADER) -> str:
    return encode_values(header)


def encode_row(record: RegistrationRecord) -> str:
    """Encodes one record as a single CSV line without the terminator."""
    return encode_values(getattr(record, attr) for attr in CSV_ATTRIBUTES)


def encode_document(
    records: Iterable[RegistrationRecord], header: Sequence[str] = CSV_HEADER
) -> str:
    """Returns the header line followed by one line per record, in order."""
    lines = [header_line(header)]
    lines.extend(encode_row(record) for record in records)
    return "".join(line + LINE_TERMINATOR for line in lines)


def _read_rows(document: str) -> list[list[str]]:
    if not document or not document.strip():
        raise MalformedDocumentError("Document is empty; expected a header line")
    reader = csv.reader(io.StringIO(document, newline=""))
    return [row for row in reader if row]


def decode_row(line: str) -> list[str]:
    """Splits one encoded row back into its field values."""
    reader = csv.reader(io.StringIO(line, newline=""))
    return next(reader, [])


def document_header(document: str) -> str:
    """Returns the first line of the document verbatim."""
    if not document or not document.strip():
        raise MalformedDocumentError("Document is empty; expected a header line")
    return document.split(LINE_TERMINATOR, 1)[0].rstrip("\r")


def count_rows(document: str) -> int:
    """
    Counts the registrations in a document, excluding the header.

    Rows are counted as CSV records, so a quoted field spanning several
    lines still counts once.
    """
    return len(_read_rows(document)) - 1


def decode_document(document: str) -> list[RegistrationRecord]:
    """Parses every data row of a document, in file order."""
    rows = _read_rows(document)
    records = []
    width = len(CSV_ATTRIBUTES)
    for index, row in enumerate(rows[1:], start=2):
        if len(row) > width:
            raise MalformedDocumentError(
                f"Record {index} has {len(row)} fields, expected {width}"
            )
        padded = row + [""] * (width - len(row))
        records.append(RegistrationRecord(**dict(zip(CSV_ATTRIBUTES, padded))))
    return records
