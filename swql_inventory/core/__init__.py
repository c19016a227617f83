"""Core query construction: field registry, clause compiler, and builder.

This module contains the foundational components of the inventory tool
including the filterable field registry, the WHERE-clause compiler, the
SWQL query builder, and the custom exception hierarchy.
"""

from .exceptions import (
    ConfigurationError,
    InventoryQueryError,
    QueryBuildError,
    SerialDecodeError,
)
from .fields import FieldDescriptor, FieldRegistry, TableAlias
from .query_builder import QueryBuilder, QueryPlan
from .where import CompiledClause, compile_clause, custom_property_path

__all__ = [
    "CompiledClause",
    "ConfigurationError",
    "FieldDescriptor",
    "FieldRegistry",
    "InventoryQueryError",
    "QueryBuildError",
    "QueryBuilder",
    "QueryPlan",
    "SerialDecodeError",
    "TableAlias",
    "compile_clause",
    "custom_property_path",
]
