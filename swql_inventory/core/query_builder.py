"""Assembly of complete SWQL inventory queries.

The ``QueryBuilder`` turns a caller's filter parameters into a
``QueryPlan``: the projection list, the fixed join topology, the
compiled WHERE clauses, ordering, and an optional row cap.  Rendering
the plan yields the query text sent to the information service.

Usage::

    builder = QueryBuilder(FieldRegistry())
    plan = builder.build({"Vendor": ["Cisco"], "Status": ["1", "2"]})
    print(plan.to_swql())
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .exceptions import QueryBuildError
from .fields import CUSTOM_PROPERTIES_KEY, FieldRegistry
from .where import CompiledClause, compile_clause, custom_property_path

logger = logging.getLogger(__name__)

DEFAULT_ORDER_BY = "N.Caption"

FROM_CLAUSE = "FROM NCM.NodeProperties P"
JOIN_CLAUSES: tuple[str, ...] = (
    "INNER JOIN Orion.Nodes N ON P.CoreNodeID = N.NodeID",
    "LEFT JOIN NCM.EntityPhysical E ON E.NodeID = P.NodeID AND E.EntityClass = 3",
)


@dataclass
class QueryPlan:
    """Fully assembled inventory query.

    Attributes:
        fields: Ordered projection list.
        clauses: Compiled WHERE fragments, AND-ed in order.
        order_by: Field used for ordering, rendered verbatim.
        top: Row cap; ``0`` means unlimited.

    """

    fields: list[str]
    clauses: list[CompiledClause] = field(default_factory=list)
    order_by: str = DEFAULT_ORDER_BY
    top: int = 0

    @property
    def where(self) -> str:
        """Return the AND-joined condition, or ``""`` when unfiltered."""
        return " AND ".join(clause.render() for clause in self.clauses)

    def to_swql(self) -> str:
        """Render the plan as SWQL text.

        The WHERE line is left out entirely when there are no clauses.
        """
        select = "SELECT "
        if self.top > 0:
            select += f"TOP {self.top} "
        lines = [select + ", ".join(self.fields), FROM_CLAUSE, *JOIN_CLAUSES]
        if self.clauses:
            lines.append(f"WHERE {self.where}")
        lines.append(f"ORDER BY {self.order_by}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_swql()


class QueryBuilder:
    """Build ``QueryPlan`` instances from caller filter parameters.

    Args:
        registry: Field registry used to resolve filter names.

    """

    def __init__(self, registry: FieldRegistry | None = None) -> None:
        """Initialize the builder with an explicit field registry."""
        self._registry = registry if registry is not None else FieldRegistry()
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def registry(self) -> FieldRegistry:
        """Return the registry used for filter resolution."""
        return self._registry

    def build(
        self,
        filters: Mapping[str, Any] | None = None,
        extra_fields: Sequence[str] | str | None = (),
        custom_properties: Any = None,
        order_by: str = DEFAULT_ORDER_BY,
        top: int | None = 0,
    ) -> QueryPlan:
        """Assemble a query plan.

        Args:
            filters: Logical filter name to pattern(s).  Names missing
                from the registry are ignored.  The ``CustomProperties``
                key is honoured when ``custom_properties`` is not given.
            extra_fields: Additional projection fields, appended verbatim.
                A single field name may be given as a plain string.
            custom_properties: List of property names (projection only)
                or mapping of name to pattern(s) (projection and filter).
            order_by: Ordering field, rendered verbatim.
            top: Positive row cap, or ``0``/``None`` for no cap.

        Returns:
            The assembled ``QueryPlan``.

        Raises:
            QueryBuildError: If ``custom_properties`` is malformed or
                ``top`` is negative.

        """
        filters = dict(filters or {})
        if custom_properties is None:
            custom_properties = filters.get(CUSTOM_PROPERTIES_KEY)

        top = top or 0
        if top < 0:
            raise QueryBuildError(
                "Row cap must not be negative",
                details={"top": top},
            )

        fields = self._registry.default_fields
        if isinstance(extra_fields, str):
            extra_fields = [extra_fields]
        fields.extend(extra_fields or ())

        clauses: list[CompiledClause] = []
        for name, descriptor in self._registry:
            clause = compile_clause(descriptor, filters.get(name))
            if clause is not None:
                clauses.append(clause)

        ignored = [
            key for key in filters
            if key != CUSTOM_PROPERTIES_KEY and key not in self._registry
        ]
        if ignored:
            self._logger.debug("Ignoring unknown filters: %s", ", ".join(ignored))

        cp_fields, cp_clauses = self._custom_property_parts(custom_properties)
        fields.extend(cp_fields)
        clauses.extend(cp_clauses)

        plan = QueryPlan(
            fields=fields,
            clauses=clauses,
            order_by=order_by or DEFAULT_ORDER_BY,
            top=top,
        )
        self._logger.info(
            "Built query: %d fields, %d clauses, top=%d",
            len(plan.fields),
            len(plan.clauses),
            plan.top,
        )
        self._logger.debug("SWQL:\n%s", plan.to_swql())
        return plan

    def build_swql(self, *args: Any, **kwargs: Any) -> str:
        """Build a plan and return its rendered text."""
        return self.build(*args, **kwargs).to_swql()

    @staticmethod
    def _custom_property_parts(
        custom_properties: Any,
    ) -> tuple[list[str], list[CompiledClause]]:
        """Derive projection paths and clauses from custom properties.

        Raises:
            QueryBuildError: If the value is neither a mapping nor a list.

        """
        if custom_properties is None:
            return [], []

        if isinstance(custom_properties, Mapping):
            fields: list[str] = []
            clauses: list[CompiledClause] = []
            for name, pattern in custom_properties.items():
                path = custom_property_path(name)
                fields.append(path)
                clause = compile_clause(path, pattern)
                if clause is not None:
                    clauses.append(clause)
            return fields, clauses

        if isinstance(custom_properties, (list, tuple)):
            return [custom_property_path(name) for name in custom_properties], []

        raise QueryBuildError(
            "Custom properties must be a list of names or a mapping of name to pattern",
            details={"type": type(custom_properties).__name__},
        )
