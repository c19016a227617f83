"""Registry of filterable SWQL fields and the default projection.

Maps the logical filter names accepted from callers to qualified fields
across the joined record sets.  The registry is passed explicitly into
the ``QueryBuilder`` rather than looked up globally, so callers can
extend or replace it per invocation.

Usage::

    registry = FieldRegistry()
    registry.resolve("Vendor")     # FieldDescriptor(alias=N, name="Vendor")
    registry.resolve("Unknown")    # None
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum

logger = logging.getLogger(__name__)


class TableAlias(StrEnum):
    """Aliases of the record sets joined by every inventory query."""

    NODE = "N"
    PROPERTIES = "P"
    ENTITY = "E"


@dataclass(frozen=True)
class FieldDescriptor:
    """Immutable qualified field reference.

    Attributes:
        alias: Alias of the record set the field belongs to.
        name: Bare field name within that record set.

    """

    alias: TableAlias
    name: str

    @property
    def qualified(self) -> str:
        """Return the ``<alias>.<name>`` form used in SWQL text."""
        return f"{self.alias}.{self.name}"

    def __str__(self) -> str:
        return self.qualified


def _node(name: str) -> FieldDescriptor:
    return FieldDescriptor(TableAlias.NODE, name)


FILTER_FIELD_MAP: dict[str, FieldDescriptor] = {
    "Caption": _node("Caption"),
    "IPAddress": _node("IPAddress"),
    "DNS": _node("DNS"),
    "SysName": _node("SysName"),
    "Vendor": _node("Vendor"),
    "MachineType": _node("MachineType"),
    "IOSImage": _node("IOSImage"),
    "IOSVersion": _node("IOSVersion"),
    "Status": _node("Status"),
    "Location": _node("Location"),
    "Contact": _node("Contact"),
    "ObjectSubType": _node("ObjectSubType"),
    "SysObjectID": _node("SysObjectID"),
    "NodeGroup": FieldDescriptor(TableAlias.PROPERTIES, "NodeGroup"),
    "Serial": FieldDescriptor(TableAlias.ENTITY, "Serial"),
    "Model": FieldDescriptor(TableAlias.ENTITY, "ModelName"),
}

DEFAULT_FIELDS: tuple[str, ...] = (
    "N.NodeID",
    "N.Caption",
    "N.IPAddress",
    "N.DNS",
    "N.SysName",
    "N.Vendor",
    "N.MachineType",
    "N.NodeDescription",
    "N.IOSImage",
    "N.IOSVersion",
    "N.Status",
    "N.StatusDescription",
    "N.Location",
    "N.Contact",
    "N.LastBoot",
    "N.SysObjectID",
    "N.ObjectSubType",
    "N.UnManaged",
    "P.NodeGroup",
    "P.LastInventory",
    "E.Serial",
    "E.ModelName",
)

CUSTOM_PROPERTIES_KEY = "CustomProperties"


class FieldRegistry:
    """Lookup table from logical filter names to ``FieldDescriptor``.

    Iteration order is the order in which WHERE clauses are emitted.

    Args:
        custom_fields: Optional additional filter name mappings for
            sites that expose extra filterable fields.

    """

    def __init__(
        self,
        custom_fields: dict[str, FieldDescriptor] | None = None,
    ) -> None:
        """Initialize the registry with optional extra mappings."""
        self._fields: dict[str, FieldDescriptor] = dict(FILTER_FIELD_MAP)
        if custom_fields:
            self._fields.update(custom_fields)
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def register(self, name: str, descriptor: FieldDescriptor) -> None:
        """Register an additional filterable field.

        Args:
            name: Logical filter name.
            descriptor: Qualified field the name maps to.

        """
        self._fields[name] = descriptor
        self._logger.info("Registered filter '%s' -> %s", name, descriptor)

    def resolve(self, name: str) -> FieldDescriptor | None:
        """Return the descriptor for ``name``, or ``None`` if not filterable."""
        return self._fields.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[tuple[str, FieldDescriptor]]:
        return iter(self._fields.items())

    def __len__(self) -> int:
        return len(self._fields)

    @property
    def default_fields(self) -> list[str]:
        """Return a copy of the fixed default projection."""
        return list(DEFAULT_FIELDS)

    @property
    def filter_names(self) -> list[str]:
        """Return the filterable names in registry order."""
        return list(self._fields)
