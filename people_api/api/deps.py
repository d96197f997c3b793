# =============================================================================
# API Dependencies
# =============================================================================
#
# FastAPI dependencies that hand route handlers their collaborators:
#   get_store()          → the process-wide PersonStore
#   get_repository()     → PeopleRepository over that store (V1)
#   get_people_service() → PeopleService over that store (V2)
#
# Tests either call handlers directly with their own objects or override
# these via app.dependency_overrides.
# =============================================================================

from __future__ import annotations

from collections.abc import Iterable

from fastapi import Depends

from people_api.services.people import PeopleService
from people_api.services.repository import PeopleRepository
from people_api.services.store import PersonStore, get_person_store


def get_store() -> PersonStore:
    return get_person_store()


def get_repository(store: PersonStore = Depends(get_store)) -> PeopleRepository:
    return PeopleRepository(store)


def get_people_service(store: PersonStore = Depends(get_store)) -> PeopleService:
    return PeopleService(store)


def parse_skills(values: Iterable[str]) -> set[str]:
    """
    Normalise a skills query parameter into a set.

    Accepts repeated parameters (`?skills=a&skills=b`), comma-delimited
    values (`?skills=a,b`) or a mix. Blank entries are dropped.
    """
    skills: set[str] = set()
    for value in values:
        skills.update(part.strip() for part in value.split(",") if part.strip())
    return skills
