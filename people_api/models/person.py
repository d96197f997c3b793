# =============================================================================
# Person Models — Pydantic V2 Schemas
# =============================================================================
#
# One schema serves as request body, response body and stored document:
#   Person  → root entity, independently addressable by `id`
#   Address → embedded value, no identity of its own
#   Point   → geo point, x = longitude, y = latitude
#
# Python attributes are snake_case; the wire format is camelCase
# (`firstName`, `homeLoc`, ...) via an alias generator. Both spellings are
# accepted on input.
#
# STORAGE FORMAT:
# `to_document()` / `from_document()` convert to the JSON stored in Redis.
# The only differences from the wire format are:
#   - homeLoc is the string "lon,lat" (the format the GEO index reads)
#   - skills is a sorted list
# =============================================================================

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Point(BaseModel):
    """A longitude/latitude pair."""

    x: float = Field(ge=-180, le=180, description="Longitude")
    y: float = Field(ge=-90, le=90, description="Latitude")

    def to_geo(self) -> str:
        return f"{self.x},{self.y}"

    @classmethod
    def from_geo(cls, value: str) -> Point:
        lon, lat = value.split(",")
        return cls(x=float(lon), y=float(lat))


class Address(_CamelModel):
    house_number: str
    street: str
    city: str
    state: str
    postal_code: str
    country: str


class Person(_CamelModel):
    """
    A person document.

    `id` is assigned by the store on first save and never changes after.
    Any id sent by a client on create is ignored.

    Example:
        {
            "firstName": "Chris",
            "lastName": "Hemsworth",
            "age": 38,
            "personalStatement": "The Rabbit Is Correct, And Clearly The Smartest One Among You.",
            "homeLoc": {"x": 153.616667, "y": -28.716667},
            "address": {
                "houseNumber": "248",
                "street": "Seven Mile Beach Rd",
                "city": "Broken Head",
                "state": "NSW",
                "postalCode": "2481",
                "country": "Australia"
            },
            "skills": ["hammer", "biceps", "hair", "heart"]
        }
    """

    id: str | None = None
    first_name: str
    last_name: str
    age: int
    personal_statement: str
    home_loc: Point
    address: Address
    skills: set[str]

    def to_document(self) -> dict[str, Any]:
        """Serialize to the stored JSON document."""
        doc = self.model_dump(by_alias=True, mode="json")
        doc["homeLoc"] = self.home_loc.to_geo()
        doc["skills"] = sorted(self.skills)
        return doc

    @classmethod
    def from_document(cls, doc: dict[str, Any], person_id: str | None = None) -> Person:
        """Rebuild a Person from a stored JSON document."""
        data = dict(doc)
        home_loc = data.get("homeLoc")
        if isinstance(home_loc, str):
            data["homeLoc"] = Point.from_geo(home_loc)
        if person_id is not None:
            data["id"] = person_id
        return cls.model_validate(data)
