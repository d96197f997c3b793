# =============================================================================
# People Repository — Named Finders + CRUD (V1 surface)
# =============================================================================
#
# Each finder is a one-line translation into predicates over the index
# configuration table; the store does the matching. CRUD operations sit
# on top of the store's save/find/delete.
#
# UPDATE SEMANTICS:
# update() copies firstName, lastName, age, address, homeLoc and
# personalStatement from the payload onto the stored record. `skills` is
# NOT copied: the stored skills survive an update. This mirrors the
# long-standing behaviour of the V1 PUT endpoint and is pinned by
# tests/test_repository.py. When the id is unknown, the payload is
# inserted as a brand-new record with a freshly assigned id.
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import Iterable

from people_api.models.person import Person, Point
from people_api.services.query import (
    between,
    contains_all,
    contains_any,
    eq,
    match,
    near,
)
from people_api.services.store import PersonStore

logger = logging.getLogger(__name__)

# Fields an update overwrites on an existing record
UPDATABLE_FIELDS = (
    "first_name",
    "last_name",
    "age",
    "address",
    "home_loc",
    "personal_statement",
)


class PeopleRepository:
    """Finder and CRUD operations over a PersonStore."""

    def __init__(self, store: PersonStore) -> None:
        self._store = store

    # -------------------------------------------------------------------------
    # Finders
    # -------------------------------------------------------------------------

    async def find_by_age_between(self, min_age: int, max_age: int) -> list[Person]:
        return await self._store.query().filter(between("age", min_age, max_age)).collect()

    async def find_by_home_loc(self, point: Point, miles: float) -> list[Person]:
        """Everyone whose homeLoc lies within `miles` of `point`."""
        return await self._store.query().filter(near("homeLoc", point, miles)).collect()

    async def find_by_first_name_and_last_name(self, first_name: str, last_name: str) -> list[Person]:
        return await (
            self._store.query()
            .filter(eq("firstName", first_name))
            .filter(eq("lastName", last_name))
            .collect()
        )

    async def search_by_personal_statement(self, text: str) -> list[Person]:
        return await self._store.query().filter(match("personalStatement", text)).collect()

    async def find_by_address_city(self, city: str) -> list[Person]:
        return await self._store.query().filter(eq("address.city", city)).collect()

    async def find_by_address_city_and_address_state(self, city: str, state: str) -> list[Person]:
        return await (
            self._store.query()
            .filter(eq("address.city", city))
            .filter(eq("address.state", state))
            .collect()
        )

    async def find_by_skills(self, skills: Iterable[str]) -> list[Person]:
        """People having at least one of `skills`."""
        return await self._store.query().filter(contains_any("skills", skills)).collect()

    async def find_by_skills_containing_all(self, skills: Iterable[str]) -> list[Person]:
        """People having every one of `skills`."""
        return await self._store.query().filter(contains_all("skills", skills)).collect()

    async def search(self, text: str | None) -> list[Person]:
        """Free-text search over all TEXT fields; blank text returns everyone."""
        return await self._store.search(text)

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    async def create(self, person: Person) -> Person:
        """Store a new person under a fresh id (any id in the payload is ignored)."""
        created = await self._store.save(person.model_copy(update={"id": None}))
        logger.info("Created person id=%s (%s %s)", created.id, created.first_name, created.last_name)
        return created

    async def find_by_id(self, person_id: str) -> Person | None:
        return await self._store.find_by_id(person_id)

    async def find_all(self) -> list[Person]:
        return await self._store.find_all()

    async def update(self, person_id: str, person: Person) -> Person:
        existing = await self._store.find_by_id(person_id)
        if existing is None:
            logger.info("Update of unknown id=%s, inserting as new record", person_id)
            return await self.create(person)

        changes = {name: getattr(person, name) for name in UPDATABLE_FIELDS}
        updated = await self._store.save(existing.model_copy(update=changes))
        logger.info("Updated person id=%s", updated.id)
        return updated

    async def delete_by_id(self, person_id: str) -> None:
        await self._store.delete_by_id(person_id)

    async def delete_all(self) -> int:
        return await self._store.delete_all()

    async def save_all(self, people: Iterable[Person]) -> list[Person]:
        return await self._store.save_all(people)
