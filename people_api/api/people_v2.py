# =============================================================================
# People API v2 — Fluent Query Service (read-only)
# =============================================================================
#
# Base path: /api/v2/people
#
#   GET /age_between?min=&max=   inclusive age range, sorted by age
#   GET /name?first=&last=       exact first AND last name
#   GET /homeloc?lat=&lon=&d=    within d miles of (lon, lat)
#   GET /statement/{q}           full-text on personalStatement
# =============================================================================

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from people_api.api.deps import get_people_service
from people_api.models.person import Person, Point
from people_api.services.people import PeopleService

router = APIRouter(prefix="/api/v2/people", tags=["People V2"])


@router.get("/age_between", response_model=list[Person])
async def by_age_between(
    min_age: int = Query(..., alias="min"),
    max_age: int = Query(..., alias="max"),
    service: PeopleService = Depends(get_people_service),
) -> list[Person]:
    return await service.find_by_age_between(min_age, max_age)


@router.get("/name", response_model=list[Person])
async def by_first_name_and_last_name(
    first_name: str = Query(..., alias="first"),
    last_name: str = Query(..., alias="last"),
    service: PeopleService = Depends(get_people_service),
) -> list[Person]:
    return await service.find_by_first_name_and_last_name(first_name, last_name)


@router.get("/homeloc", response_model=list[Person])
async def by_home_loc(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    distance: float = Query(..., alias="d", ge=0),
    service: PeopleService = Depends(get_people_service),
) -> list[Person]:
    return await service.find_by_home_loc(Point(x=lon, y=lat), distance)


@router.get("/statement/{q}", response_model=list[Person])
async def by_personal_statement(
    q: str,
    service: PeopleService = Depends(get_people_service),
) -> list[Person]:
    return await service.search_by_personal_statement(q)
