# =============================================================================
# Unit Tests — In-Memory Store
# =============================================================================
#
# Query semantics over the six demo people: numeric range, geo radius,
# exact tags, tag sets (any/all), full-text and free-text search, plus the
# basic save/find/delete contract.
# =============================================================================

import asyncio

import pytest

from people_api.models.person import Point
from people_api.services.query import (
    SortOrder,
    between,
    contains_all,
    contains_any,
    eq,
    match,
    near,
)
from people_api.services.seed import demo_people
from people_api.services.store import (
    InMemoryPersonStore,
    distance_miles,
    tokenize,
)


def _run(coro):
    """Helper to run async functions in sync tests."""
    return asyncio.run(coro)


def _last_names(people):
    return {p.last_name for p in people}


@pytest.fixture
def store():
    store = InMemoryPersonStore()
    _run(store.save_all(demo_people()))
    return store


class TestSaveAndFind:
    def test_save_assigns_unique_ids(self, store):
        people = _run(store.find_all())
        ids = [p.id for p in people]
        assert len(ids) == 6
        assert all(ids)
        assert len(set(ids)) == 6

    def test_save_keeps_existing_id(self):
        store = InMemoryPersonStore()
        person = demo_people()[0].model_copy(update={"id": "fixed"})
        saved = _run(store.save(person))
        assert saved.id == "fixed"
        assert _run(store.find_by_id("fixed")) == saved

    def test_find_by_unknown_id_returns_none(self, store):
        assert _run(store.find_by_id("missing")) is None

    def test_delete_is_idempotent(self, store):
        person = _run(store.find_all())[0]
        _run(store.delete_by_id(person.id))
        _run(store.delete_by_id(person.id))
        assert _run(store.find_by_id(person.id)) is None
        assert _run(store.count()) == 5

    def test_delete_all_reports_count(self, store):
        assert _run(store.delete_all()) == 6
        assert _run(store.count()) == 0


class TestNumericRange:
    def test_inclusive_bounds(self, store):
        people = _run(store.query().filter(between("age", 32, 38)).collect())
        assert _last_names(people) == {"Hemsworth", "Johansson", "Olsen"}

    def test_thirty_to_forty(self, store):
        people = _run(store.query().filter(between("age", 30, 40)).collect())
        assert _last_names(people) == {"Hemsworth", "Johansson", "Olsen"}

    def test_inverted_range_is_empty(self, store):
        assert _run(store.query().filter(between("age", 40, 30)).collect()) == []

    def test_exact_age(self, store):
        people = _run(store.query().filter(eq("age", 73)).collect())
        assert _last_names(people) == {"Jackson"}

    def test_sorted_ascending(self, store):
        people = _run(store.query().filter(between("age", 0, 100)).sort("age").collect())
        ages = [p.age for p in people]
        assert ages == sorted(ages)

    def test_sorted_descending(self, store):
        people = _run(store.query().sort("age", SortOrder.DESC).collect())
        assert [p.age for p in people] == [73, 56, 43, 38, 37, 32]

    def test_limit(self, store):
        people = _run(store.query().sort("age").limit(2).collect())
        assert [p.age for p in people] == [32, 37]


class TestGeoRadius:
    def test_small_radius_finds_only_center(self, store):
        # Saldana and Jackson live ~2 miles apart in Los Angeles
        center = Point(x=-118.399968, y=34.073087)
        people = _run(store.query().filter(near("homeLoc", center, 1)).collect())
        assert _last_names(people) == {"Saldana"}

    def test_wider_radius_includes_neighbour(self, store):
        center = Point(x=-118.399968, y=34.073087)
        people = _run(store.query().filter(near("homeLoc", center, 5)).collect())
        assert _last_names(people) == {"Saldana", "Jackson"}

    def test_results_lie_within_radius(self, store):
        center = Point(x=40.7215259, y=-74.0129994)
        people = _run(store.query().filter(near("homeLoc", center, 20)).collect())
        assert _last_names(people) == {"Johansson", "Olsen"}
        for person in people:
            assert distance_miles(center.x, center.y, person.home_loc.x, person.home_loc.y) <= 20

    def test_zero_radius_matches_exact_point(self, store):
        center = Point(x=153.616667, y=-28.716667)
        people = _run(store.query().filter(near("homeLoc", center, 0)).collect())
        assert _last_names(people) == {"Hemsworth"}


class TestDistance:
    def test_same_point_is_zero(self):
        assert distance_miles(10.0, 20.0, 10.0, 20.0) == 0.0

    def test_one_degree_latitude_is_about_69_miles(self):
        assert distance_miles(0.0, 0.0, 0.0, 1.0) == pytest.approx(69.1, abs=0.2)


class TestTags:
    def test_exact_first_and_last_name(self, store):
        people = _run(
            store.query()
            .filter(eq("firstName", "Samuel L."))
            .filter(eq("lastName", "Jackson"))
            .collect()
        )
        assert _last_names(people) == {"Jackson"}

    def test_exact_match_is_case_sensitive(self, store):
        people = _run(store.query().filter(eq("firstName", "chris")).collect())
        assert people == []

    def test_nested_city(self, store):
        people = _run(store.query().filter(eq("address.city", "New York")).collect())
        assert _last_names(people) == {"Johansson", "Olsen"}

    def test_skills_any(self, store):
        people = _run(store.query().filter(contains_any("skills", {"deception", "magic"})).collect())
        assert _last_names(people) == {"Johansson", "Olsen", "Jackson"}

    def test_skills_all(self, store):
        people = _run(store.query().filter(contains_all("skills", {"deception", "resources"})).collect())
        assert _last_names(people) == {"Jackson"}

    def test_skills_any_of_nothing_matches_nobody(self, store):
        assert _run(store.query().filter(contains_any("skills", set())).collect()) == []

    def test_skills_all_of_nothing_matches_everyone(self, store):
        assert len(_run(store.query().filter(contains_all("skills", set())).collect())) == 6

    def test_skills_semantics_hold_for_every_record(self, store):
        wanted = {"martial_arts", "resources"}
        everyone = _run(store.find_all())
        any_hits = {p.id for p in _run(store.query().filter(contains_any("skills", wanted)).collect())}
        all_hits = {p.id for p in _run(store.query().filter(contains_all("skills", wanted)).collect())}
        for person in everyone:
            assert (person.id in any_hits) == bool(person.skills & wanted)
            assert (person.id in all_hits) == (wanted <= person.skills)


class TestFullText:
    def test_tokenize_lowercases_and_drops_stop_words(self):
        assert tokenize("The Rabbit Is Correct!") == ["rabbit", "correct"]

    def test_statement_match_is_case_insensitive(self, store):
        people = _run(store.query().filter(match("personalStatement", "smithsonian")).collect())
        assert _last_names(people) == {"Johansson"}

    def test_all_terms_must_match(self, store):
        people = _run(store.query().filter(match("personalStatement", "galaxy donut")).collect())
        assert people == []

    def test_stop_words_only_matches_nothing(self, store):
        people = _run(store.query().filter(match("personalStatement", "the")).collect())
        assert people == []

    def test_tokenize_keeps_accented_words_whole(self):
        assert tokenize("Meet me at the Café in Zürich") == ["meet", "me", "café", "zürich"]

    def test_accented_terms_match_whole_words_only(self, store):
        traveller = demo_people()[0].model_copy(
            update={"personal_statement": "Meet me at the café in Zürich"}
        )
        saved = _run(store.save(traveller))

        people = _run(store.query().filter(match("personalStatement", "Café Zürich")).collect())
        assert [p.id for p in people] == [saved.id]
        assert _run(store.query().filter(match("personalStatement", "caf rich")).collect()) == []

    def test_search_spans_text_fields(self, store):
        # "beach" only appears in Hemsworth's street, not in any statement
        assert _last_names(_run(store.search("beach"))) == {"Hemsworth"}
        assert _last_names(_run(store.search("rabbit"))) == {"Hemsworth"}

    def test_search_blank_returns_everyone(self, store):
        assert len(_run(store.search(None))) == 6
        assert len(_run(store.search(""))) == 6
        assert len(_run(store.search("   "))) == 6
