"""Compilation of filter values into SWQL ``LIKE`` clauses.

Each filtered field produces at most one ``CompiledClause``.  Several
patterns for the same field are OR-ed inside parentheses so the clause
composes safely under the AND that joins distinct fields.

Only the user-facing ``*`` wildcard is translated.  SWQL's own ``LIKE``
metacharacters (``%``, ``_``, ``[``) in user input are passed through
unescaped, so ``10.0.0._`` behaves as a single-character wildcard on
the server.  Single quotes are doubled to keep the literal well-formed.

Usage::

    clause = compile_clause(registry.resolve("Status"), ["1", "2"])
    clause.render()   # "(N.Status LIKE '1' OR N.Status LIKE '2')"
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .exceptions import QueryBuildError
from .fields import FieldDescriptor

logger = logging.getLogger(__name__)

USER_WILDCARD = "*"
SWQL_WILDCARD = "%"
CUSTOM_PROPERTIES_BASE = "N.CustomProperties"

_PROPERTY_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class CompiledClause:
    """A boolean SWQL fragment constraining a single field.

    Attributes:
        field: Qualified field path the clause applies to.
        patterns: Translated ``LIKE`` patterns, OR-ed together.

    """

    field: str
    patterns: tuple[str, ...]

    def render(self) -> str:
        """Render the clause as SWQL text."""
        parts = [f"{self.field} LIKE {_quote(p)}" for p in self.patterns]
        if len(parts) == 1:
            return parts[0]
        return "(" + " OR ".join(parts) + ")"

    def __str__(self) -> str:
        return self.render()


def translate_wildcards(pattern: str) -> str:
    """Map the ``*`` wildcard to SWQL's any-sequence token.

    No other character is altered.
    """
    return pattern.replace(USER_WILDCARD, SWQL_WILDCARD)


def custom_property_path(name: str) -> str:
    """Build the field path for an administrator-defined custom property.

    Raises:
        QueryBuildError: If ``name`` is not a plain identifier.

    """
    if not isinstance(name, str) or not _PROPERTY_NAME_RE.match(name):
        raise QueryBuildError(
            f"Invalid custom property name {name!r}",
            details={"expected": "identifier"},
        )
    return f"{CUSTOM_PROPERTIES_BASE}.{name}"


def normalize_patterns(value: Any) -> list[str]:
    """Flatten a filter value into a list of non-empty string patterns."""
    if value is None:
        return []
    if isinstance(value, str):
        values: Iterable[Any] = [value]
    elif isinstance(value, Iterable):
        values = value
    else:
        values = [value]
    return [str(v) for v in values if v is not None and str(v) != ""]


def compile_clause(field: FieldDescriptor | str, value: Any) -> CompiledClause | None:
    """Compile a filter value for ``field`` into a clause.

    Args:
        field: Registry descriptor or an already-qualified field path.
        value: A single pattern, a sequence of patterns, or ``None``.

    Returns:
        The compiled clause, or ``None`` when the value is empty so the
        field contributes no constraint at all.

    """
    patterns = normalize_patterns(value)
    if not patterns:
        return None
    field_path = field.qualified if isinstance(field, FieldDescriptor) else field
    clause = CompiledClause(
        field=field_path,
        patterns=tuple(translate_wildcards(p) for p in patterns),
    )
    logger.debug("Compiled clause: %s", clause)
    return clause


def _quote(pattern: str) -> str:
    return "'" + pattern.replace("'", "''") + "'"
