# =============================================================================
# People API v1 — Repository-backed Finders + CRUD
# =============================================================================
#
# Base path: /api/v1/people
#
#   GET    /age_between?min=&max=      inclusive age range
#   GET    /homeloc?lat=&lon=&d=       within d miles of (lon, lat)
#   GET    /name?first=&last=          exact first AND last name
#   GET    /statement?q=               full-text on personalStatement
#   POST   /new                        create (server assigns id)
#   GET    /{id}                       by id (null when absent)
#   PUT    /{id}                       update, or insert when absent
#   DELETE /{id}                       delete (unknown id is a no-op)
#   GET    /city?city=                 exact address.city
#   GET    /city_state?city=&state=    exact address.city AND address.state
#   GET    /skills?skills=             any of the given skills
#   GET    /skills/all?skills=         all of the given skills
#   GET    /search/{q}                 free-text over every TEXT field
#
# Handlers only bind parameters and delegate to PeopleRepository.
# Fixed paths are declared before /{id} so they win the route match.
# =============================================================================

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query, Response

from people_api.api.deps import get_repository, parse_skills
from people_api.models.person import Person, Point
from people_api.services.repository import PeopleRepository

router = APIRouter(prefix="/api/v1/people", tags=["People V1"])


@router.get(
    "/age_between",
    response_model=list[Person],
    summary="Find people in an age range (inclusive)",
)
async def by_age_between(
    min_age: int = Query(..., alias="min"),
    max_age: int = Query(..., alias="max"),
    repo: PeopleRepository = Depends(get_repository),
) -> list[Person]:
    return await repo.find_by_age_between(min_age, max_age)


@router.get(
    "/homeloc",
    response_model=list[Person],
    summary="Find people living within a radius (miles) of a point",
)
async def by_home_loc(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    distance: float = Query(..., alias="d", ge=0, description="Radius in miles"),
    repo: PeopleRepository = Depends(get_repository),
) -> list[Person]:
    return await repo.find_by_home_loc(Point(x=lon, y=lat), distance)


@router.get(
    "/name",
    response_model=list[Person],
    summary="Find people by exact first and last name",
)
async def by_first_name_and_last_name(
    first_name: str = Query(..., alias="first"),
    last_name: str = Query(..., alias="last"),
    repo: PeopleRepository = Depends(get_repository),
) -> list[Person]:
    return await repo.find_by_first_name_and_last_name(first_name, last_name)


@router.get(
    "/statement",
    response_model=list[Person],
    summary="Full-text search on personal statements",
)
async def by_personal_statement(
    q: str = Query(...),
    repo: PeopleRepository = Depends(get_repository),
) -> list[Person]:
    return await repo.search_by_personal_statement(q)


@router.post(
    "/new",
    response_model=Person,
    summary="Create a person",
    description="Stores the payload under a newly assigned id. Any id in the payload is ignored.",
)
async def create(
    new_person: Person = Body(...),
    repo: PeopleRepository = Depends(get_repository),
) -> Person:
    return await repo.create(new_person)


@router.get(
    "/city",
    response_model=list[Person],
    summary="Find people by city",
)
async def by_city(
    city: str = Query(...),
    repo: PeopleRepository = Depends(get_repository),
) -> list[Person]:
    return await repo.find_by_address_city(city)


@router.get(
    "/city_state",
    response_model=list[Person],
    summary="Find people by city and state",
)
async def by_city_and_state(
    city: str = Query(...),
    state: str = Query(...),
    repo: PeopleRepository = Depends(get_repository),
) -> list[Person]:
    return await repo.find_by_address_city_and_address_state(city, state)


@router.get(
    "/skills",
    response_model=list[Person],
    summary="Find people having any of the given skills",
)
async def by_any_skills(
    skills: list[str] = Query(..., description="Repeated or comma-delimited"),
    repo: PeopleRepository = Depends(get_repository),
) -> list[Person]:
    return await repo.find_by_skills(parse_skills(skills))


@router.get(
    "/skills/all",
    response_model=list[Person],
    summary="Find people having all of the given skills",
)
async def by_all_skills(
    skills: list[str] = Query(..., description="Repeated or comma-delimited"),
    repo: PeopleRepository = Depends(get_repository),
) -> list[Person]:
    return await repo.find_by_skills_containing_all(parse_skills(skills))


@router.get(
    "/search/{q}",
    response_model=list[Person],
    summary="Free-text search across all searchable fields",
)
async def full_text_search(
    q: str,
    repo: PeopleRepository = Depends(get_repository),
) -> list[Person]:
    return await repo.search(q)


@router.get(
    "/{person_id}",
    response_model=Person | None,
    summary="Get a person by id",
    description="Returns null (status 200) when no person has this id.",
)
async def by_id(
    person_id: str,
    repo: PeopleRepository = Depends(get_repository),
) -> Person | None:
    return await repo.find_by_id(person_id)


@router.put(
    "/{person_id}",
    response_model=Person,
    summary="Update a person, or create one if the id is unknown",
    description=(
        "Replaces firstName, lastName, age, address, homeLoc and "
        "personalStatement. Stored skills are kept as they are. If no person "
        "has this id the payload is stored as a new person with a new id."
    ),
)
async def update(
    person_id: str,
    new_person: Person = Body(...),
    repo: PeopleRepository = Depends(get_repository),
) -> Person:
    return await repo.update(person_id, new_person)


@router.delete(
    "/{person_id}",
    summary="Delete a person",
    description="Succeeds whether or not the person exists.",
)
async def delete(
    person_id: str,
    repo: PeopleRepository = Depends(get_repository),
) -> Response:
    await repo.delete_by_id(person_id)
    return Response(status_code=200)
