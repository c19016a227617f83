"""Best-effort enrichment of returned node rows.

Provides the ordered enrichment pipeline and the derivations it ships
with: Cisco manufacture dates and firmware build dates.
"""

from .cisco_serial import decode_cisco_serial
from .pipeline import (
    EnrichmentPipeline,
    FirmwareBuildDateEnricher,
    ManufactureDateEnricher,
    RowEnricher,
)

__all__ = [
    "EnrichmentPipeline",
    "FirmwareBuildDateEnricher",
    "ManufactureDateEnricher",
    "RowEnricher",
    "decode_cisco_serial",
]
