"""swql-inventory - query Orion node inventory from the command line.

Examples::

    swql-inventory --filter Vendor=Cisco --filter Status=1 --filter Status=2
    swql-inventory --filter "Caption=core-*" --custom-property Site=NYC --top 10
    swql-inventory --filter IOSVersion=15.* --query-only
"""

from __future__ import annotations

import argparse
import csv
import getpass
import json
import logging
import sys
from collections.abc import Sequence
from datetime import date
from pathlib import Path
from typing import Any, TextIO

import requests

from . import __version__
from .client.settings import DEFAULT_SETTINGS_FILE, load_settings
from .client.swis_client import SwisClient
from .core.exceptions import InventoryQueryError
from .core.query_builder import DEFAULT_ORDER_BY
from .service import get_nodes

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _key_value(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=PATTERN, got {raw!r}")
    return key.strip(), value


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="swql-inventory",
        description="Query Orion node inventory with SWQL filters",
    )
    parser.add_argument(
        "--filter", dest="filters", action="append", type=_key_value, default=[],
        metavar="NAME=PATTERN",
        help="Filter on a field; '*' matches any text. Repeat a name to OR patterns.",
    )
    parser.add_argument(
        "--field", dest="extra_fields", action="append", default=[], metavar="FIELD",
        help="Additional field to include in the output (e.g. N.MemoryUsed)",
    )
    parser.add_argument(
        "--custom-property", dest="custom_properties", action="append", default=[],
        metavar="NAME[=PATTERN]",
        help="Include a custom property, optionally filtering on it",
    )
    parser.add_argument("--order-by", default=DEFAULT_ORDER_BY, help="Ordering field")
    parser.add_argument("--top", type=int, default=0, help="Maximum rows to return")
    parser.add_argument(
        "--query-only", action="store_true",
        help="Print the SWQL query instead of executing it",
    )
    parser.add_argument(
        "--no-manufacture-date", dest="manufacture_date", action="store_false",
        help="Skip manufacture date decoding",
    )
    parser.add_argument(
        "--no-firmware-date", dest="firmware_date", action="store_false",
        help="Skip firmware build date extraction",
    )
    parser.add_argument("--format", choices=("json", "csv"), default="json")
    parser.add_argument("--config", type=Path, default=DEFAULT_SETTINGS_FILE)
    parser.add_argument("--host", help="Orion server (overrides settings)")
    parser.add_argument("--username", help="Orion username (overrides settings)")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_filters(pairs: Sequence[tuple[str, str]]) -> dict[str, list[str]]:
    """Group ``NAME=PATTERN`` pairs into a filter mapping."""
    filters: dict[str, list[str]] = {}
    for name, pattern in pairs:
        filters.setdefault(name, []).append(pattern)
    return filters


def parse_custom_properties(items: Sequence[str]) -> dict[str, str | None] | None:
    """Turn ``NAME[=PATTERN]`` items into a custom property mapping."""
    if not items:
        return None
    props: dict[str, str | None] = {}
    for item in items:
        name, sep, pattern = item.partition("=")
        props[name.strip()] = pattern if sep else None
    return props


def _json_default(value: Any) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def write_rows(rows: list[dict[str, Any]], fmt: str, out: TextIO) -> None:
    """Write enriched rows to ``out`` as JSON or CSV."""
    if fmt == "json":
        json.dump(rows, out, indent=2, default=_json_default)
        out.write("\n")
        return
    columns: list[str] = []
    for row in rows:
        columns.extend(k for k in row if k not in columns)
    writer = csv.DictWriter(out, fieldnames=columns, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow(
            {k: v.isoformat() if isinstance(v, date) else v for k, v in row.items()}
        )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``swql-inventory`` console script."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    query_kwargs: dict[str, Any] = {
        "extra_fields": args.extra_fields,
        "custom_properties": parse_custom_properties(args.custom_properties),
        "manufacture_date": args.manufacture_date,
        "firmware_date": args.firmware_date,
        "order_by": args.order_by,
        "top": args.top,
    }
    filters = parse_filters(args.filters)

    try:
        if args.query_only:
            print(get_nodes(None, filters, query_only=True, **query_kwargs))
            return 0

        settings = load_settings(args.config)
        if args.host:
            settings.host = args.host
        if args.username:
            settings.username = args.username
        settings.require_host()
        if not settings.username:
            settings.username = input(f"Username for {settings.host}: ")
        if not settings.password:
            settings.password = getpass.getpass(f"Password for {settings.username}: ")

        with SwisClient(settings) as client:
            rows = get_nodes(client, filters, **query_kwargs)
    except InventoryQueryError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except requests.RequestException as exc:
        logger.debug("Query failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    write_rows(rows, args.format, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
