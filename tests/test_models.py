# =============================================================================
# Unit Tests — Person / Address / Point models
# =============================================================================
#
# Wire format (camelCase aliases), stored document format and validation.
# Pure Pydantic — no store needed.
# =============================================================================

import pytest
from pydantic import ValidationError

from people_api.models.person import Address, Person, Point


def _payload(**overrides):
    data = {
        "firstName": "Elizabeth",
        "lastName": "Olsen",
        "age": 32,
        "personalStatement": "You Guys Know I Can Move Things With My Mind, Right?",
        "homeLoc": {"x": 40.6976701, "y": -74.2598641},
        "address": {
            "houseNumber": "20",
            "street": "W 34th St",
            "city": "New York",
            "state": "NY",
            "postalCode": "10001",
            "country": "US",
        },
        "skills": ["magic", "loyalty"],
    }
    data.update(overrides)
    return data


class TestPersonWireFormat:
    def test_camel_case_payload_is_accepted(self):
        person = Person.model_validate(_payload())
        assert person.first_name == "Elizabeth"
        assert person.address.postal_code == "10001"
        assert person.home_loc == Point(x=40.6976701, y=-74.2598641)

    def test_id_is_optional(self):
        assert Person.model_validate(_payload()).id is None

    def test_dump_uses_camel_case(self):
        dumped = Person.model_validate(_payload(id="abc")).model_dump(by_alias=True, mode="json")
        assert set(dumped) == {
            "id", "firstName", "lastName", "age", "personalStatement",
            "homeLoc", "address", "skills",
        }
        assert dumped["homeLoc"] == {"x": 40.6976701, "y": -74.2598641}
        assert "houseNumber" in dumped["address"]

    def test_snake_case_names_also_accepted(self):
        person = Person(
            first_name="A", last_name="B", age=1, personal_statement="s",
            home_loc=Point(x=0, y=0),
            address=Address(
                house_number="1", street="s", city="c", state="st",
                postal_code="p", country="co",
            ),
            skills=set(),
        )
        assert person.first_name == "A"
        assert person.skills == set()

    def test_duplicate_skills_collapse(self):
        person = Person.model_validate(_payload(skills=["magic", "magic", "loyalty"]))
        assert person.skills == {"magic", "loyalty"}

    def test_missing_required_field_rejected(self):
        data = _payload()
        del data["age"]
        with pytest.raises(ValidationError):
            Person.model_validate(data)

    def test_missing_skills_rejected(self):
        data = _payload()
        del data["skills"]
        with pytest.raises(ValidationError):
            Person.model_validate(data)

    def test_non_integer_age_rejected(self):
        with pytest.raises(ValidationError):
            Person.model_validate(_payload(age="thirty"))

    def test_out_of_range_latitude_rejected(self):
        with pytest.raises(ValidationError):
            Person.model_validate(_payload(homeLoc={"x": 0, "y": 91}))


class TestStoredDocument:
    def test_home_loc_stored_as_lon_lat_string(self):
        doc = Person.model_validate(_payload()).to_document()
        assert doc["homeLoc"] == "40.6976701,-74.2598641"

    def test_skills_stored_sorted(self):
        doc = Person.model_validate(_payload(skills=["magic", "loyalty"])).to_document()
        assert doc["skills"] == ["loyalty", "magic"]

    def test_round_trip_through_document(self):
        person = Person.model_validate(_payload(id="p1"))
        assert Person.from_document(person.to_document()) == person

    def test_from_document_takes_id_from_key(self):
        doc = Person.model_validate(_payload()).to_document()
        assert Person.from_document(doc, "from-key").id == "from-key"


class TestPoint:
    def test_geo_string_round_trip(self):
        point = Point(x=153.616667, y=-28.716667)
        assert Point.from_geo(point.to_geo()) == point

    def test_from_geo_parses_lon_then_lat(self):
        point = Point.from_geo("-118.399968,34.073087")
        assert point.x == -118.399968
        assert point.y == 34.073087
