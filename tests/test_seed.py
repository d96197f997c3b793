# =============================================================================
# Unit Tests — Demo Data Loader
# =============================================================================

import asyncio

from people_api.models.person import Point
from people_api.services.repository import PeopleRepository
from people_api.services.seed import demo_people, load_demo_data
from people_api.services.store import InMemoryPersonStore


def _run(coro):
    """Helper to run async functions in sync tests."""
    return asyncio.run(coro)


class TestDemoPeople:
    def test_six_distinct_people(self):
        people = demo_people()
        assert len(people) == 6
        assert len({(p.first_name, p.last_name) for p in people}) == 6
        assert all(p.id is None for p in people)

    def test_hemsworth_record(self):
        hemsworth = next(p for p in demo_people() if p.last_name == "Hemsworth")
        assert hemsworth.first_name == "Chris"
        assert hemsworth.age == 38
        assert hemsworth.skills == {"hammer", "biceps", "hair", "heart"}
        assert hemsworth.home_loc == Point(x=153.616667, y=-28.716667)
        assert hemsworth.address.city == "Broken Head"


class TestLoadDemoData:
    def test_replaces_existing_records(self):
        store = InMemoryPersonStore()
        _run(store.save_all(demo_people()[:2]))

        stored = _run(load_demo_data(store))

        assert len(stored) == 6
        assert _run(store.count()) == 6

    def test_reseeding_is_stable(self):
        store = InMemoryPersonStore()
        _run(load_demo_data(store))
        _run(load_demo_data(store))
        assert _run(store.count()) == 6

    def test_age_scenario(self):
        store = InMemoryPersonStore()
        _run(load_demo_data(store))

        people = _run(PeopleRepository(store).find_by_age_between(30, 40))

        assert {(p.last_name, p.age) for p in people} == {
            ("Hemsworth", 38),
            ("Johansson", 37),
            ("Olsen", 32),
        }

    def test_logs_each_name(self, caplog):
        store = InMemoryPersonStore()
        with caplog.at_level("INFO", logger="people_api.services.seed"):
            _run(load_demo_data(store))
        assert "Name: Chris Hemsworth" in caplog.text
        assert "Name: Samuel L. Jackson" in caplog.text
