"""
CSV-backed registration stores: a local (or persistent-disk) file and a
single object in S3-compatible storage.

Both keep one UTF-8 document whose first line is the fixed header and whose
remaining lines are registrations in insertion order. Exports re-encode the
records most recent first, like every other store.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Optional

from shared.csv_codec import (
    LINE_TERMINATOR,
    count_rows,
    decode_document,
    encode_document,
    encode_row,
    header_line,
)
from shared.types import RegistrationRecord
from signup.storage import StorageClient

logger = logging.getLogger(__name__)

CSV_CONTENT_TYPE = "text/csv; charset=utf-8"


def _most_recent_first(
    records: list[RegistrationRecord], limit: Optional[int]
) -> list[RegistrationRecord]:
    ordered = sorted(
        reversed(records), key=lambda record: record.timestamp, reverse=True
    )
    return ordered if limit is None else ordered[:limit]


class CsvFileRegistrationStore:
    """Append-only CSV file. Appends are serialized within the process."""

    def __init__(self, path: str):
        if not path:
            raise ValueError("A file path is required for CsvFileRegistrationStore")
        self.path = path
        self.location = path
        self._lock = threading.Lock()

    def _ensure_directory(self) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

    def _write_header_if_missing(self) -> None:
        if os.path.exists(self.path) and os.path.getsize(self.path) > 0:
            return
        logger.info("Creating registrations file with header at %s", self.path)
        with open(self.path, "w", encoding="utf-8", newline="") as f:
            f.write(header_line() + LINE_TERMINATOR)

    def _append(self, line: str) -> None:
        self._write_header_if_missing()
        with open(self.path, "a", encoding="utf-8", newline="") as f:
            f.write(line)

    def ensure_ready(self) -> None:
        with self._lock:
            self._ensure_directory()
            self._write_header_if_missing()

    def add(self, record: RegistrationRecord) -> None:
        line = encode_row(record) + LINE_TERMINATOR
        with self._lock:
            try:
                self._append(line)
            except OSError as e:
                logger.warning(
                    "Writing registration to %s failed, retrying once: %s",
                    self.path,
                    e,
                )
                try:
                    self._ensure_directory()
                    self._append(line)
                except OSError:
                    logger.exception("Retry failed writing to %s", self.path)
                    raise
        logger.info("Registration saved to %s", self.path)

    def read_document(self) -> str:
        with self._lock:
            with open(self.path, "r", encoding="utf-8", newline="") as f:
                return f.read()

    def list_recent(self, limit: Optional[int] = None) -> list[RegistrationRecord]:
        return _most_recent_first(decode_document(self.read_document()), limit)

    def count(self) -> int:
        return count_rows(self.read_document())

    def export_document(self) -> str:
        return encode_document(self.list_recent())

    def reset(self) -> None:
        with self._lock:
            if os.path.exists(self.path):
                os.remove(self.path)
            self._ensure_directory()
            self._write_header_if_missing()
        logger.info("Registrations file reset at %s", self.path)


class ObjectCsvRegistrationStore:
    """
    The same CSV document kept as one object in S3-compatible storage.

    Appends read, extend and rewrite the whole object; the lock only
    serializes writers inside this process.
    """

    def __init__(self, storage: StorageClient, key: str):
        self.storage = storage
        self.key = key
        self.location = key
        self._lock = threading.Lock()

    def _write(self, document: str) -> None:
        self.storage.put_bytes(self.key, document.encode("utf-8"), CSV_CONTENT_TYPE)

    def ensure_ready(self) -> None:
        with self._lock:
            if not self.storage.exists(self.key):
                logger.info("Creating registrations object %s", self.key)
                self._write(header_line() + LINE_TERMINATOR)

    def read_document(self) -> str:
        return self.storage.get_bytes(self.key).decode("utf-8")

    def add(self, record: RegistrationRecord) -> None:
        with self._lock:
            try:
                document = self.read_document()
            except FileNotFoundError:
                document = ""
            if not document.strip():
                document = header_line() + LINE_TERMINATOR
            self._write(document + encode_row(record) + LINE_TERMINATOR)
        logger.info("Registration saved to object %s", self.key)

    def list_recent(self, limit: Optional[int] = None) -> list[RegistrationRecord]:
        return _most_recent_first(decode_document(self.read_document()), limit)

    def count(self) -> int:
        return count_rows(self.read_document())

    def export_document(self) -> str:
        return encode_document(self.list_recent())

    def reset(self) -> None:
        with self._lock:
            self.storage.delete(self.key)
            self._write(header_line() + LINE_TERMINATOR)
        logger.info("Registrations object reset at %s", self.key)
