# =============================================================================
# Person Store — Pluggable Storage/Search Backend Protocol
# =============================================================================
#
# Provides a common interface for persisting and querying Person documents,
# with two implementations:
#
#   PersonStore (Protocol)
#   ├── RedisPersonStore     — RedisJSON documents + RediSearch index
#   │   ├── create_index()   — FT.CREATE built from PERSON_INDEX
#   │   └── execute()        — PersonQuery → RediSearch query string
#   └── InMemoryPersonStore  — dict of documents, predicates evaluated
#       └── execute()          in Python with the same semantics
#
# Both backends store the same document shape (Person.to_document()), so a
# query returns the same records regardless of backend, modulo the engine's
# own text analysis (RediSearch stems TEXT fields, the in-memory store does
# not; RediSearch TAG matching is case-insensitive, the in-memory store is
# case-sensitive).
#
# ERRORS:
# Redis connection and timeout failures surface as StoreUnavailableError;
# a query RediSearch rejects as malformed surfaces as InvalidQueryError.
# Nothing is retried.
# =============================================================================

from __future__ import annotations

import asyncio
import json
import logging
import math
import re
import uuid
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any, Protocol

import redis.asyncio as aioredis
from redis.commands.search.field import GeoField, NumericField, TagField, TextField
from redis.commands.search.index_definition import IndexDefinition, IndexType
from redis.commands.search.query import Query
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError
from redis.exceptions import TimeoutError as RedisTimeoutError

from people_api.config import settings
from people_api.db.engine import get_redis
from people_api.db.schema import PERSON_INDEX, IndexedField, IndexKind, text_fields
from people_api.exceptions import InvalidQueryError, StoreUnavailableError
from people_api.models.person import Person
from people_api.services.query import (
    GeoRadius,
    Operator,
    PersonQuery,
    Predicate,
    SortOrder,
)

logger = logging.getLogger(__name__)

# Mean Earth radius used by Redis GEO commands, in meters
EARTH_RADIUS_M = 6372797.560856
METERS_PER_MILE = 1609.344

# RediSearch's default stop-word list
STOP_WORDS = frozenset({
    "a", "is", "the", "an", "and", "are", "as", "at", "be", "but", "by",
    "for", "if", "in", "into", "it", "no", "not", "of", "on", "or", "such",
    "that", "their", "then", "there", "these", "they", "this", "to", "was",
    "will", "with",
})

_TOKEN_RE = re.compile(r"\w+")
_TAG_SPECIAL_RE = re.compile(r"([,.<>{}\[\]\"':;!@#$%^&*()\-+=~|/\\ ])")


# ---------------------------------------------------------------------------
# Protocol Definition
# ---------------------------------------------------------------------------


class PersonStore(Protocol):
    """
    Protocol defining the store interface.

    Every method is async so route handlers can await either backend.
    """

    async def create_index(self) -> None:
        """Create the search index if it does not exist yet."""
        ...

    async def save(self, person: Person) -> Person:
        """Insert or overwrite a person; assigns an id when `person.id` is None."""
        ...

    async def save_all(self, people: Iterable[Person]) -> list[Person]:
        ...

    async def find_by_id(self, person_id: str) -> Person | None:
        ...

    async def find_all(self) -> list[Person]:
        ...

    async def delete_by_id(self, person_id: str) -> None:
        """Remove a person. Unknown ids are ignored."""
        ...

    async def delete_all(self) -> int:
        """Remove every person, returning how many were removed."""
        ...

    async def count(self) -> int:
        ...

    async def execute(self, query: PersonQuery) -> list[Person]:
        """Run a PersonQuery: AND of all predicates, then sort, then limit."""
        ...

    async def search(self, text: str | None) -> list[Person]:
        """Free-text search across every TEXT field. Blank text matches all."""
        ...

    def query(self) -> PersonQuery:
        """Start a fluent query bound to this store."""
        ...

    async def close(self) -> None:
        ...


def new_person_id() -> str:
    return uuid.uuid4().hex


def tokenize(text: str) -> list[str]:
    """Lowercase word tokens with stop words removed."""
    return [t for t in _TOKEN_RE.findall(text.lower()) if t not in STOP_WORDS]


def escape_tag(value: str) -> str:
    """Backslash-escape characters RediSearch treats as tag syntax."""
    return _TAG_SPECIAL_RE.sub(r"\\\1", value)


def distance_miles(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Great-circle (haversine) distance in miles."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    meters = 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(a)))
    return meters / METERS_PER_MILE


# ---------------------------------------------------------------------------
# Implementation 1: Redis (RedisJSON + RediSearch)
# ---------------------------------------------------------------------------


@contextmanager
def _translate_redis_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except (RedisConnectionError, RedisTimeoutError) as e:
        logger.exception("Redis unavailable during %s", operation)
        raise StoreUnavailableError(f"Redis unavailable during {operation}: {e}") from e


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _predicate_clause(predicate: Predicate, indexed: IndexedField) -> str | None:
    """
    Translate one predicate into a RediSearch clause.

    Returns None when the predicate can never match (e.g. ANY of an empty
    set, or a MATCH with no searchable terms) and "" when it always matches
    (ALL of an empty set).
    """
    attr = f"@{indexed.alias}"
    op = predicate.operator
    operand = predicate.operand

    if indexed.kind is IndexKind.NUMERIC:
        if op is Operator.EQ:
            value = _format_number(operand)
            return f"{attr}:[{value} {value}]"
        low, high = operand
        return f"{attr}:[{_format_number(low)} {_format_number(high)}]"

    if indexed.kind is IndexKind.GEO:
        geo: GeoRadius = operand
        return f"{attr}:[{geo.lon} {geo.lat} {geo.radius} {geo.unit}]"

    if indexed.kind is IndexKind.TEXT:
        terms = tokenize(operand)
        if not terms:
            return None
        return f"{attr}:({' '.join(terms)})"

    # TAG
    if op is Operator.EQ:
        return f"{attr}:{{{escape_tag(str(operand))}}}"
    values = sorted(operand)
    if op is Operator.ANY:
        if not values:
            return None
        return f"{attr}:{{{' | '.join(escape_tag(v) for v in values)}}}"
    return " ".join(f"{attr}:{{{escape_tag(v)}}}" for v in values)


def build_query_string(query: PersonQuery) -> str | None:
    """
    Render a PersonQuery as a RediSearch query string.

    Returns None when the query is unsatisfiable, "*" when it has no
    effective predicates.
    """
    clauses: list[str] = []
    for predicate in query.predicates:
        clause = _predicate_clause(predicate, query.indexed_field(predicate.field))
        if clause is None:
            return None
        if clause:
            clauses.append(clause)
    return " ".join(clauses) if clauses else "*"


def build_schema_fields(schema: tuple[IndexedField, ...] = PERSON_INDEX) -> list:
    """Turn the index configuration table into RediSearch schema fields."""
    fields = []
    for indexed in schema:
        if indexed.kind is IndexKind.TAG:
            fields.append(TagField(indexed.json_path, as_name=indexed.alias))
        elif indexed.kind is IndexKind.TEXT:
            fields.append(TextField(indexed.json_path, as_name=indexed.alias, no_stem=indexed.nostem))
        elif indexed.kind is IndexKind.NUMERIC:
            fields.append(NumericField(indexed.json_path, as_name=indexed.alias, sortable=indexed.sortable))
        elif indexed.kind is IndexKind.GEO:
            fields.append(GeoField(indexed.json_path, as_name=indexed.alias))
    return fields


class RedisPersonStore:
    """
    Redis-backed store.

    Each person is a JSON document at `<key_prefix><id>`; a single
    RediSearch index over that prefix serves every query.
    """

    def __init__(
        self,
        client: aioredis.Redis | None = None,
        *,
        index_name: str | None = None,
        key_prefix: str | None = None,
        max_results: int | None = None,
        schema: tuple[IndexedField, ...] = PERSON_INDEX,
    ) -> None:
        self._client = client if client is not None else get_redis()
        self._index_name = index_name or settings.index_name
        self._key_prefix = key_prefix or settings.key_prefix
        self._max_results = max_results or settings.max_results
        self._schema = schema

    def _key(self, person_id: str) -> str:
        return f"{self._key_prefix}{person_id}"

    def _id_from_key(self, key: str) -> str:
        return key[len(self._key_prefix):] if key.startswith(self._key_prefix) else key

    async def create_index(self) -> None:
        ft = self._client.ft(self._index_name)
        with _translate_redis_errors("create_index"):
            try:
                await ft.info()
                logger.info("Search index '%s' already exists", self._index_name)
                return
            except ResponseError:
                pass

            await ft.create_index(
                build_schema_fields(self._schema),
                definition=IndexDefinition(prefix=[self._key_prefix], index_type=IndexType.JSON),
            )
        logger.info(
            "Created search index '%s' on prefix '%s' (%d fields)",
            self._index_name, self._key_prefix, len(self._schema),
        )

    async def save(self, person: Person) -> Person:
        stored = person if person.id else person.model_copy(update={"id": new_person_id()})
        with _translate_redis_errors("save"):
            await self._client.json().set(self._key(stored.id), "$", stored.to_document())
        logger.debug("Saved person id=%s", stored.id)
        return stored

    async def save_all(self, people: Iterable[Person]) -> list[Person]:
        return list(await asyncio.gather(*(self.save(p) for p in people)))

    async def find_by_id(self, person_id: str) -> Person | None:
        with _translate_redis_errors("find_by_id"):
            doc = await self._client.json().get(self._key(person_id))
        if doc is None:
            return None
        return Person.from_document(doc, person_id)

    async def find_all(self) -> list[Person]:
        return await self.execute(self.query())

    async def delete_by_id(self, person_id: str) -> None:
        with _translate_redis_errors("delete_by_id"):
            removed = await self._client.delete(self._key(person_id))
        logger.debug("Delete person id=%s (removed=%d)", person_id, removed)

    async def delete_all(self) -> int:
        removed = 0
        with _translate_redis_errors("delete_all"):
            batch: list[str] = []
            async for key in self._client.scan_iter(match=f"{self._key_prefix}*", count=500):
                batch.append(key)
                if len(batch) >= 500:
                    removed += await self._client.delete(*batch)
                    batch = []
            if batch:
                removed += await self._client.delete(*batch)
        logger.info("Deleted %d person documents", removed)
        return removed

    async def count(self) -> int:
        with _translate_redis_errors("count"):
            result = await self._client.ft(self._index_name).search(Query("*").paging(0, 0))
        return int(result.total)

    async def execute(self, query: PersonQuery) -> list[Person]:
        query_string = build_query_string(query)
        if query_string is None:
            return []
        return await self._run_search(query_string, query)

    async def search(self, text: str | None) -> list[Person]:
        if text is None or not text.strip():
            return await self.find_all()
        return await self._run_search(text.strip(), self.query())

    def query(self) -> PersonQuery:
        return PersonQuery(schema=self._schema, store=self)

    async def close(self) -> None:
        # The client is shared; people_api.db.engine.close_redis() owns it
        return None

    async def _run_search(self, query_string: str, query: PersonQuery) -> list[Person]:
        limit = self._max_results if query.max_results is None else query.max_results
        ft_query = Query(query_string).paging(0, limit)
        if query.sort_field is not None:
            ft_query = ft_query.sort_by(
                query.indexed_field(query.sort_field).alias,
                asc=query.sort_order is SortOrder.ASC,
            )

        logger.debug("FT.SEARCH %s '%s'", self._index_name, query_string)
        with _translate_redis_errors("search"):
            try:
                result = await self._client.ft(self._index_name).search(ft_query)
            except ResponseError as e:
                if "syntax error" not in str(e).lower():
                    raise
                raise InvalidQueryError(f"Search rejected by Redis: {e}") from e

        return [
            Person.from_document(json.loads(doc.json), self._id_from_key(doc.id))
            for doc in result.docs
        ]


# ---------------------------------------------------------------------------
# Implementation 2: In-memory
# ---------------------------------------------------------------------------


def _value_at(doc: dict[str, Any], path: str) -> Any:
    value: Any = doc
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _matches(doc: dict[str, Any], predicate: Predicate, indexed: IndexedField) -> bool:
    value = _value_at(doc, indexed.path)
    if value is None:
        return False
    op = predicate.operator
    operand = predicate.operand

    if indexed.kind is IndexKind.NUMERIC:
        if op is Operator.EQ:
            return value == operand
        low, high = operand
        return low <= value <= high

    if indexed.kind is IndexKind.GEO:
        geo: GeoRadius = operand
        lon, lat = (float(v) for v in value.split(","))
        return distance_miles(geo.lon, geo.lat, lon, lat) <= geo.radius

    if indexed.kind is IndexKind.TEXT:
        terms = tokenize(operand)
        return bool(terms) and set(terms) <= set(tokenize(value))

    # TAG
    values = set(value) if indexed.multi else {value}
    if op is Operator.EQ:
        return operand in values
    if op is Operator.ANY:
        return bool(values & operand)
    return operand <= values


class InMemoryPersonStore:
    """
    Process-local store for development and tests.

    Documents are kept in insertion order; `execute()` filters them with the
    same predicate semantics RediSearch applies.
    """

    def __init__(
        self,
        *,
        max_results: int | None = None,
        schema: tuple[IndexedField, ...] = PERSON_INDEX,
    ) -> None:
        self._docs: dict[str, dict[str, Any]] = {}
        self._max_results = max_results or settings.max_results
        self._schema = schema

    async def create_index(self) -> None:
        logger.info("In-memory store ready (%d indexed fields)", len(self._schema))

    async def save(self, person: Person) -> Person:
        stored = person if person.id else person.model_copy(update={"id": new_person_id()})
        self._docs[stored.id] = stored.to_document()
        return stored

    async def save_all(self, people: Iterable[Person]) -> list[Person]:
        return [await self.save(p) for p in people]

    async def find_by_id(self, person_id: str) -> Person | None:
        doc = self._docs.get(person_id)
        return Person.from_document(doc, person_id) if doc is not None else None

    async def find_all(self) -> list[Person]:
        return await self.execute(self.query())

    async def delete_by_id(self, person_id: str) -> None:
        self._docs.pop(person_id, None)

    async def delete_all(self) -> int:
        removed = len(self._docs)
        self._docs.clear()
        return removed

    async def count(self) -> int:
        return len(self._docs)

    async def execute(self, query: PersonQuery) -> list[Person]:
        checks = [(p, query.indexed_field(p.field)) for p in query.predicates]
        hits = [
            (person_id, doc)
            for person_id, doc in self._docs.items()
            if all(_matches(doc, p, indexed) for p, indexed in checks)
        ]

        if query.sort_field is not None:
            path = query.sort_field
            hits.sort(
                key=lambda hit: _value_at(hit[1], path),
                reverse=query.sort_order is SortOrder.DESC,
            )

        limit = self._max_results if query.max_results is None else query.max_results
        return [Person.from_document(doc, person_id) for person_id, doc in hits[:limit]]

    async def search(self, text: str | None) -> list[Person]:
        if text is None or not text.strip():
            return await self.find_all()

        terms = set(tokenize(text))
        if not terms:
            return []

        fields = text_fields(self._schema)
        results = []
        for person_id, doc in self._docs.items():
            tokens: set[str] = set()
            for indexed in fields:
                value = _value_at(doc, indexed.path)
                if isinstance(value, str):
                    tokens.update(tokenize(value))
            if terms <= tokens:
                results.append(Person.from_document(doc, person_id))
        return results[: self._max_results]

    def query(self) -> PersonQuery:
        return PersonQuery(schema=self._schema, store=self)

    async def close(self) -> None:
        return None


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

_store: RedisPersonStore | InMemoryPersonStore | None = None


def get_person_store(
    override_type: str | None = None,
) -> RedisPersonStore | InMemoryPersonStore:
    """
    Return the process-wide store for the configured backend.

    Reads `store_type` from settings:
    - "redis" → RedisPersonStore (default)
    - "memory" → InMemoryPersonStore

    Args:
        override_type: Build a fresh store of this type instead of the
            cached configured one (used by scripts and tests).
    """
    global _store
    if override_type is not None:
        return _build_store(override_type)
    if _store is None:
        _store = _build_store(settings.store_type)
    return _store


def reset_person_store() -> None:
    """Forget the cached store (the next get_person_store() builds a new one)."""
    global _store
    _store = None


def _build_store(store_type: str) -> RedisPersonStore | InMemoryPersonStore:
    if store_type == "memory":
        logger.info("Using in-memory person store")
        return InMemoryPersonStore()
    if store_type == "redis":
        logger.info("Using Redis person store (index=%s)", settings.index_name)
        return RedisPersonStore()
    raise ValueError(f"Unknown store_type '{store_type}' (expected 'redis' or 'memory')")
