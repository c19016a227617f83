"""Node inventory retrieval: build, execute, and enrich in one call.

Usage::

    with SwisClient(load_settings()) as client:
        rows = get_nodes(client, {"Vendor": ["Cisco"], "Status": ["1", "2"]})

    swql = get_nodes(None, {"Caption": ["core-*"]}, query_only=True)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .client.swis_client import QueryExecutor
from .core.fields import FieldRegistry
from .core.query_builder import DEFAULT_ORDER_BY, QueryBuilder
from .enrichment.pipeline import EnrichmentPipeline

logger = logging.getLogger(__name__)


def get_nodes(
    client: QueryExecutor | None,
    filters: Mapping[str, Any] | None = None,
    *,
    extra_fields: Sequence[str] | str | None = (),
    custom_properties: Any = None,
    manufacture_date: bool = True,
    firmware_date: bool = True,
    order_by: str = DEFAULT_ORDER_BY,
    query_only: bool = False,
    top: int = 0,
    registry: FieldRegistry | None = None,
    pipeline: EnrichmentPipeline | None = None,
) -> str | list[dict[str, Any]]:
    """Query node inventory and enrich the returned rows.

    Args:
        client: Query executor; unused (and may be ``None``) when
            ``query_only`` is set.
        filters: Logical filter name to pattern(s).
        extra_fields: Additional projection fields.
        custom_properties: Custom property names or name-to-pattern mapping.
        manufacture_date: Derive ``ManufactureDate`` from Cisco serials.
        firmware_date: Derive ``FirmwareBuildDate`` from the description.
        order_by: Ordering field.
        query_only: Return the SWQL text without executing it.
        top: Positive row cap, ``0`` for no cap.
        registry: Field registry, defaults to the standard one.
        pipeline: Enrichment pipeline overriding the two toggles.

    Returns:
        The SWQL text in query-only mode, otherwise the enriched rows.

    Raises:
        QueryBuildError: If the parameters cannot form a query.
        ValueError: If execution is requested without a client.

    """
    plan = QueryBuilder(registry).build(
        filters,
        extra_fields=extra_fields,
        custom_properties=custom_properties,
        order_by=order_by,
        top=top,
    )
    swql = plan.to_swql()
    if query_only:
        logger.info("Query-only mode, skipping execution")
        return swql

    if client is None:
        raise ValueError("A query executor is required unless query_only is set")

    rows = client.query(swql)
    if pipeline is None:
        pipeline = EnrichmentPipeline.default(
            manufacture_date=manufacture_date,
            firmware_date=firmware_date,
        )
    return pipeline.run(rows)
