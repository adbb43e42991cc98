"""
Maintenance commands for the configured registration store.

    python scripts/registrations_admin.py check
    python scripts/registrations_admin.py export -o registrations.csv
    python scripts/registrations_admin.py reset --yes
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from shared.csv_codec import count_rows, document_header
from shared.errors import MalformedDocumentError
from signup.dependencies import get_registration_store

logger = logging.getLogger(__name__)


def _check(store) -> int:
    try:
        document = store.export_document()
        header = document_header(document)
        total = count_rows(document)
    except (FileNotFoundError, MalformedDocumentError) as exc:
        logger.warning("No data available at %s: %s", store.location, exc)
        return 1
    print(f"location: {store.location}")
    print(f"headers: {header}")
    print(f"registrations: {total}")
    return 0


def _export(store, output: str | None) -> int:
    document = store.export_document()
    if output:
        Path(output).write_text(document, encoding="utf-8")
        logger.info("Wrote %d registrations to %s", count_rows(document), output)
    else:
        sys.stdout.write(document)
    return 0


def _reset(store, confirmed: bool) -> int:
    if not confirmed:
        logger.error("Refusing to reset %s without --yes", store.location)
        return 2
    store.reset()
    logger.info("Reset registrations at %s", store.location)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Registration store maintenance")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("check", help="Show header and registration count")

    export_parser = subparsers.add_parser("export", help="Write the CSV export")
    export_parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Destination file (defaults to stdout)",
    )

    reset_parser = subparsers.add_parser("reset", help="Discard every registration")
    reset_parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm the reset",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    store = get_registration_store()
    if args.command == "check":
        return _check(store)
    if args.command == "export":
        return _export(store, args.output)
    return _reset(store, args.yes)


if __name__ == "__main__":
    raise SystemExit(main())
