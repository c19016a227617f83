"""Post-query row enrichment.

Each ``RowEnricher`` derives a single best-effort field from data already
present on a result row.  The ``EnrichmentPipeline`` runs the enabled
enrichers over every row in order.  Enrichers only ever add keys that
are not yet present, so running the pipeline twice is harmless, and a
failing enricher never aborts the remaining rows.

Usage::

    pipeline = EnrichmentPipeline.default(manufacture_date=True, firmware_date=False)
    rows = pipeline.run(rows)
"""

from __future__ import annotations

import abc
import logging
import re
from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import Any

from ..core.exceptions import InventoryQueryError
from .cisco_serial import decode_cisco_serial

logger = logging.getLogger(__name__)

ResultRow = dict[str, Any]

VENDOR_COLUMN = "Vendor"
SERIAL_COLUMN = "Serial"
DESCRIPTION_COLUMN = "NodeDescription"

MANUFACTURE_DATE_FIELD = "ManufactureDate"
FIRMWARE_BUILD_DATE_FIELD = "FirmwareBuildDate"

BUILD_DATE_RE = re.compile(
    r"(?<!\d)(\d{2}-(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)-\d{2})(?!\d)",
    re.IGNORECASE,
)
BUILD_DATE_FORMAT = "%d-%b-%y"


class RowEnricher(abc.ABC):
    """Base class for optional row transformers.

    Subclasses implement ``derive`` and name the ``target`` field they
    populate.  ``apply`` handles the shared rules: skip when disabled,
    never overwrite an existing key, and treat ``None`` as "nothing
    derived".

    Args:
        enabled: Whether the enricher runs at all.

    """

    target: str = ""

    def __init__(self, enabled: bool = True) -> None:
        """Initialize the enricher with its feature flag."""
        self.enabled = enabled
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def name(self) -> str:
        """Return a short identifier for logs."""
        return self.__class__.__name__

    @abc.abstractmethod
    def derive(self, row: ResultRow) -> Any | None:
        """Compute the derived value for ``row``, or ``None``."""

    def apply(self, row: ResultRow) -> ResultRow:
        """Add the derived field to ``row`` in place and return it."""
        if not self.enabled or self.target in row:
            return row
        value = self.derive(row)
        if value is not None:
            row[self.target] = value
        return row


class ManufactureDateEnricher(RowEnricher):
    """Decode the manufacture date from a Cisco chassis serial number.

    Args:
        enabled: Whether the enricher runs at all.
        decoder: Callable mapping a serial to a ``date``; raises
            ``InventoryQueryError`` (or ``ValueError``) when it cannot.

    """

    target = MANUFACTURE_DATE_FIELD

    def __init__(
        self,
        enabled: bool = True,
        decoder: Callable[[str], date] = decode_cisco_serial,
    ) -> None:
        """Initialize with the feature flag and serial decoder."""
        super().__init__(enabled)
        self._decoder = decoder

    def derive(self, row: ResultRow) -> date | None:
        vendor = row.get(VENDOR_COLUMN)
        serial = row.get(SERIAL_COLUMN)
        if not vendor or "cisco" not in str(vendor).lower() or not serial:
            return None
        try:
            return self._decoder(str(serial))
        except (InventoryQueryError, ValueError) as exc:
            self._logger.debug("No manufacture date for serial %s: %s", serial, exc)
            return None


class FirmwareBuildDateEnricher(RowEnricher):
    """Extract the firmware build date from the node description.

    Looks for the first ``DD-MMM-YY`` token, as found in Cisco IOS
    ``sysDescr`` strings (``Compiled Wed 03-Mar-21 09:12``).
    """

    target = FIRMWARE_BUILD_DATE_FIELD

    def derive(self, row: ResultRow) -> date | None:
        description = row.get(DESCRIPTION_COLUMN)
        if not description:
            return None
        match = BUILD_DATE_RE.search(str(description))
        if match is None:
            return None
        try:
            return datetime.strptime(match.group(1), BUILD_DATE_FORMAT).date()
        except ValueError:
            self._logger.debug("Unparseable build date %r", match.group(1))
            return None


class EnrichmentPipeline:
    """Ordered collection of ``RowEnricher`` instances.

    Args:
        enrichers: Enrichers applied to each row, in order.

    """

    def __init__(self, enrichers: Iterable[RowEnricher] = ()) -> None:
        """Initialize the pipeline with an ordered list of enrichers."""
        self._enrichers: list[RowEnricher] = list(enrichers)
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @classmethod
    def default(
        cls,
        manufacture_date: bool = True,
        firmware_date: bool = True,
    ) -> EnrichmentPipeline:
        """Build the standard pipeline with per-enrichment toggles."""
        return cls(
            [
                ManufactureDateEnricher(enabled=manufacture_date),
                FirmwareBuildDateEnricher(enabled=firmware_date),
            ]
        )

    def add(self, enricher: RowEnricher) -> None:
        """Append an enricher to the end of the pipeline."""
        self._enrichers.append(enricher)

    @property
    def enrichers(self) -> list[RowEnricher]:
        """Return a copy of the configured enrichers."""
        return list(self._enrichers)

    def enrich_row(self, row: ResultRow) -> ResultRow:
        """Run every enabled enricher over a single row."""
        for enricher in self._enrichers:
            try:
                enricher.apply(row)
            except Exception:
                if isinstance(row, dict):
                    row_id = row.get("NodeID", "?")
                else:
                    row_id = type(row).__name__
                self._logger.warning(
                    "Enricher %s failed on row %s",
                    enricher.name,
                    row_id,
                    exc_info=True,
                )
        return row

    def run(self, rows: Iterable[ResultRow]) -> list[ResultRow]:
        """Enrich ``rows`` in place and return them as a list."""
        enriched = [self.enrich_row(row) for row in rows]
        self._logger.info(
            "Enriched %d rows (%s)",
            len(enriched),
            ", ".join(e.name for e in self._enrichers if e.enabled) or "none enabled",
        )
        return enriched
