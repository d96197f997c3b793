# =============================================================================
# Index Configuration — Field → Index Kind Table
# =============================================================================
#
# The single source of truth for which Person fields are queryable and how.
# Both store backends read this table:
#   - RedisPersonStore turns each entry into a RediSearch schema field
#   - InMemoryPersonStore uses the kind to pick an evaluation rule
#   - PersonQuery validates predicates against it
#
# Index kinds:
#   TAG     → exact match; set-valued fields support any-of / all-of
#   TEXT    → tokenized full-text match (optionally unstemmed)
#   NUMERIC → range match, optionally sortable
#   GEO     → radius match around a lon/lat point
#
# Paths are dotted JSON paths in the stored document ("address.city").
# The RediSearch attribute name replaces dots with underscores.
# =============================================================================

from __future__ import annotations

import enum
from dataclasses import dataclass


class IndexKind(str, enum.Enum):
    TAG = "TAG"
    TEXT = "TEXT"
    NUMERIC = "NUMERIC"
    GEO = "GEO"


@dataclass(frozen=True)
class IndexedField:
    """One indexed document path."""

    path: str
    kind: IndexKind
    nostem: bool = False
    sortable: bool = False
    multi: bool = False  # set-valued (JSON array)

    @property
    def alias(self) -> str:
        return self.path.replace(".", "_")

    @property
    def json_path(self) -> str:
        return f"$.{self.path}[*]" if self.multi else f"$.{self.path}"


PERSON_INDEX: tuple[IndexedField, ...] = (
    IndexedField("firstName", IndexKind.TAG),
    IndexedField("lastName", IndexKind.TAG),
    IndexedField("age", IndexKind.NUMERIC, sortable=True),
    IndexedField("personalStatement", IndexKind.TEXT),
    IndexedField("homeLoc", IndexKind.GEO),
    IndexedField("address.houseNumber", IndexKind.TAG),
    IndexedField("address.street", IndexKind.TEXT, nostem=True),
    IndexedField("address.city", IndexKind.TAG),
    IndexedField("address.state", IndexKind.TAG),
    IndexedField("address.postalCode", IndexKind.TAG),
    IndexedField("address.country", IndexKind.TAG),
    IndexedField("skills", IndexKind.TAG, multi=True),
)


def field_map(schema: tuple[IndexedField, ...] = PERSON_INDEX) -> dict[str, IndexedField]:
    """Index the schema by path."""
    return {f.path: f for f in schema}


def text_fields(schema: tuple[IndexedField, ...] = PERSON_INDEX) -> list[IndexedField]:
    return [f for f in schema if f.kind is IndexKind.TEXT]
