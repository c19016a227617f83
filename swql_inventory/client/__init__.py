"""Information service access: connection settings and the SWIS client.

The client is a thin boundary; the core only relies on the
``QueryExecutor`` protocol it implements.
"""

from .settings import SwisSettings, load_settings
from .swis_client import QueryExecutor, SwisClient

__all__ = [
    "QueryExecutor",
    "SwisClient",
    "SwisSettings",
    "load_settings",
]
