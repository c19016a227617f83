"""SolarWinds Information Service (SWIS) query client over REST.

Sends SWQL text to the SWIS JSON endpoint and returns the ``results``
array as a list of row dictionaries.  Transport and HTTP errors from
``requests`` are not wrapped: callers see the native exception.

Requires:
    - requests

Usage::

    settings = load_settings()
    with SwisClient(settings) as client:
        rows = client.query("SELECT TOP 5 Caption FROM Orion.Nodes")
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests

from .settings import SwisSettings

logger = logging.getLogger(__name__)

QUERY_ENDPOINT = "Query"


class QueryExecutor(Protocol):
    """Anything that can run SWQL text and return result rows."""

    def query(self, swql: str) -> list[dict[str, Any]]:
        """Execute ``swql`` and return the result rows."""
        ...


class SwisClient:
    """Minimal SWIS REST client implementing ``QueryExecutor``.

    Supports context-manager usage for automatic session cleanup::

        with SwisClient(settings) as client:
            client.query(swql)

    Args:
        settings: Connection parameters for the Orion server.

    """

    def __init__(self, settings: SwisSettings) -> None:
        """Initialize the client with connection settings."""
        self._settings = settings
        self._session: Any = None
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def host(self) -> str:
        """Return the configured Orion server host."""
        return self._settings.host

    @property
    def is_connected(self) -> bool:
        """Return ``True`` if an HTTP session is open."""
        return self._session is not None

    # -- Session lifecycle --------------------------------------------------

    def connect(self) -> None:
        """Open an authenticated HTTP session.

        Raises:
            ConfigurationError: If no host is configured.

        """
        self._settings.require_host()
        session = requests.Session()
        session.auth = (self._settings.username, self._settings.password)
        session.verify = self._settings.verify_ssl
        session.headers.update({"Content-Type": "application/json"})
        self._session = session
        self._logger.info("Opened SWIS session to %s", self.host)

    def close(self) -> None:
        """Close the HTTP session.  Idempotent."""
        if self._session is not None:
            try:
                self._session.close()
            finally:
                self._session = None
            self._logger.debug("Closed SWIS session to %s", self.host)

    def __enter__(self) -> SwisClient:
        """Open the session upon entering a ``with`` block."""
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Close the session when leaving a ``with`` block."""
        self.close()

    # -- Queries ------------------------------------------------------------

    def query(self, swql: str, **parameters: Any) -> list[dict[str, Any]]:
        """Execute a SWQL query.

        Args:
            swql: Query text.
            **parameters: Named ``@parameters`` referenced by the query.

        Returns:
            The rows of the ``results`` array.

        Raises:
            requests.RequestException: On transport or HTTP failure.

        """
        if self._session is None:
            self.connect()

        url = f"{self._settings.base_url}/{QUERY_ENDPOINT}"
        self._logger.info("Executing SWQL query against %s", self.host)
        response = self._session.post(
            url,
            json={"query": swql, "parameters": parameters},
            timeout=self._settings.timeout,
        )
        response.raise_for_status()
        rows: list[dict[str, Any]] = response.json().get("results", [])
        self._logger.info("Query returned %d rows", len(rows))
        return rows
