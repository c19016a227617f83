"""Custom exception hierarchy for the SWQL inventory tool.

All tool exceptions inherit from ``InventoryQueryError`` to enable
granular catch clauses while still allowing a single top-level handler.
Transport failures raised by the HTTP layer are not part
of this tree; they reach the caller unchanged.

Exception tree::

    InventoryQueryError
    ├── QueryBuildError
    ├── ConfigurationError
    └── SerialDecodeError
"""

from __future__ import annotations


class InventoryQueryError(Exception):
    """Base exception for all inventory query errors.

    Attributes:
        message: Human-readable error description.
        details: Optional mapping of additional contextual data.

    """

    def __init__(
        self,
        message: str,
        details: dict[str, object] | None = None,
    ) -> None:
        """Initialize with a message and optional details."""
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details."""
        if not self.details:
            return self.message
        detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({detail_str})"


class QueryBuildError(InventoryQueryError):
    """Raised when the supplied query parameters cannot form a query.

    Examples:
        - Custom properties given as neither a mapping nor a list
        - Custom property name that is not a valid identifier
        - Negative row cap

    """


class ConfigurationError(InventoryQueryError):
    """Raised when connection settings cannot be loaded.

    Examples:
        - Malformed YAML settings file
        - No information service host configured

    """


class SerialDecodeError(InventoryQueryError):
    """Raised when a vendor serial number cannot be decoded to a date.

    Never escapes the enrichment pipeline; the affected row simply
    receives no manufacture date.

    """
