# =============================================================================
# People Service — Fluent Query Composition (V2 surface)
# =============================================================================
# The same lookups as the repository finders, written as explicit
# filter/sort/collect chains. find_by_age_between additionally sorts by age.
# =============================================================================

from __future__ import annotations

from people_api.models.person import Person, Point
from people_api.services.query import SortOrder, between, eq, match, near
from people_api.services.store import PersonStore


class PeopleService:
    def __init__(self, store: PersonStore) -> None:
        self._store = store

    async def find_by_age_between(self, min_age: int, max_age: int) -> list[Person]:
        """People aged min_age..max_age inclusive, youngest first."""
        return await (
            self._store.query()
            .filter(between("age", min_age, max_age))
            .sort("age", SortOrder.ASC)
            .collect()
        )

    async def find_by_first_name_and_last_name(self, first_name: str, last_name: str) -> list[Person]:
        return await (
            self._store.query()
            .filter(eq("firstName", first_name))
            .filter(eq("lastName", last_name))
            .collect()
        )

    async def find_by_home_loc(self, point: Point, miles: float) -> list[Person]:
        return await (
            self._store.query()
            .filter(near("homeLoc", point, miles))
            .collect()
        )

    async def search_by_personal_statement(self, text: str) -> list[Person]:
        return await (
            self._store.query()
            .filter(match("personalStatement", text))
            .collect()
        )
