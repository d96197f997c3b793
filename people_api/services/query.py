# =============================================================================
# Query Builder — Predicates + Fluent PersonQuery
# =============================================================================
#
# A query is a list of predicates (ANDed together), an optional sort and a
# result limit. Predicates are plain value objects:
#
#     Predicate(field="age", operator=Operator.BETWEEN, operand=(30, 40))
#
# built with the helper functions below:
#
#     people = await (
#         store.query()
#         .filter(between("age", 30, 40))
#         .sort("age", SortOrder.ASC)
#         .collect()
#     )
#
# PersonQuery is immutable: filter()/sort()/limit() return a new query, so
# a partially built query can be reused as a base for several variants.
#
# Operators allowed per index kind:
#   TAG     → EQ, ANY, ALL
#   NUMERIC → EQ, BETWEEN
#   GEO     → NEAR
#   TEXT    → MATCH
# =============================================================================

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from people_api.db.schema import PERSON_INDEX, IndexedField, IndexKind, field_map
from people_api.exceptions import InvalidQueryError

if TYPE_CHECKING:
    from people_api.models.person import Person, Point
    from people_api.services.store import PersonStore

# Statute miles, the unit every radius query uses
MILES = "mi"


class Operator(str, enum.Enum):
    EQ = "eq"
    BETWEEN = "between"
    NEAR = "near"
    MATCH = "match"
    ANY = "any"
    ALL = "all"


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


_ALLOWED_OPERATORS: dict[IndexKind, frozenset[Operator]] = {
    IndexKind.TAG: frozenset({Operator.EQ, Operator.ANY, Operator.ALL}),
    IndexKind.NUMERIC: frozenset({Operator.EQ, Operator.BETWEEN}),
    IndexKind.GEO: frozenset({Operator.NEAR}),
    IndexKind.TEXT: frozenset({Operator.MATCH}),
}


@dataclass(frozen=True)
class GeoRadius:
    """Center point and radius (in miles) for a NEAR predicate."""

    lon: float
    lat: float
    radius: float
    unit: str = MILES


@dataclass(frozen=True)
class Predicate:
    field: str
    operator: Operator
    operand: Any


# ---------------------------------------------------------------------------
# Predicate helpers
# ---------------------------------------------------------------------------


def eq(path: str, value: Any) -> Predicate:
    return Predicate(path, Operator.EQ, value)


def between(path: str, low: float, high: float) -> Predicate:
    """Inclusive range on a NUMERIC field."""
    return Predicate(path, Operator.BETWEEN, (low, high))


def near(path: str, point: Point, miles: float) -> Predicate:
    return Predicate(path, Operator.NEAR, GeoRadius(lon=point.x, lat=point.y, radius=miles))


def match(path: str, text: str) -> Predicate:
    """Full-text match on a TEXT field."""
    return Predicate(path, Operator.MATCH, text)


def contains_any(path: str, values: Iterable[str]) -> Predicate:
    return Predicate(path, Operator.ANY, frozenset(values))


def contains_all(path: str, values: Iterable[str]) -> Predicate:
    return Predicate(path, Operator.ALL, frozenset(values))


# ---------------------------------------------------------------------------
# PersonQuery
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PersonQuery:
    """
    An immutable query over Person documents.

    `store` is the backend that `collect()` runs against; a query built
    without one can still be inspected or passed to `store.execute()`.
    """

    predicates: tuple[Predicate, ...] = ()
    sort_field: str | None = None
    sort_order: SortOrder = SortOrder.ASC
    max_results: int | None = None
    schema: tuple[IndexedField, ...] = field(default=PERSON_INDEX, repr=False)
    store: PersonStore | None = field(default=None, repr=False, compare=False)

    def filter(self, predicate: Predicate) -> PersonQuery:
        """Add a predicate (ANDed with the existing ones)."""
        indexed = self._lookup(predicate.field)
        if predicate.operator not in _ALLOWED_OPERATORS[indexed.kind]:
            raise InvalidQueryError(
                f"Operator '{predicate.operator.value}' is not supported on "
                f"{indexed.kind.value} field '{predicate.field}'"
            )
        return replace(self, predicates=self.predicates + (predicate,))

    def sort(self, path: str, order: SortOrder = SortOrder.ASC) -> PersonQuery:
        indexed = self._lookup(path)
        if not indexed.sortable:
            raise InvalidQueryError(f"Field '{path}' is not sortable")
        return replace(self, sort_field=path, sort_order=order)

    def limit(self, max_results: int) -> PersonQuery:
        if max_results < 0:
            raise InvalidQueryError("limit must be non-negative")
        return replace(self, max_results=max_results)

    async def collect(self) -> list[Person]:
        """Run the query against the bound store."""
        if self.store is None:
            raise RuntimeError("PersonQuery.collect() needs a query created by store.query()")
        return await self.store.execute(self)

    def indexed_field(self, path: str) -> IndexedField:
        return self._lookup(path)

    def _lookup(self, path: str) -> IndexedField:
        indexed = field_map(self.schema).get(path)
        if indexed is None:
            raise InvalidQueryError(f"Field '{path}' is not indexed")
        return indexed
