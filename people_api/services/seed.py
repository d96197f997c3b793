# =============================================================================
# Demo Data Loader
# =============================================================================
#
# Wipes every Person and inserts six fixed records. Runs at startup when
# `seed_on_startup` is enabled, and from scripts/seed_people.py.
#
# This is destructive: all existing Person documents are deleted first.
# =============================================================================

from __future__ import annotations

import logging

from people_api.models.person import Address, Person, Point
from people_api.services.store import PersonStore

logger = logging.getLogger(__name__)


def demo_people() -> list[Person]:
    """The six demo records, without ids."""
    thors_address = Address(
        house_number="248", street="Seven Mile Beach Rd", city="Broken Head",
        state="NSW", postal_code="2481", country="Australia",
    )
    ironmans_address = Address(
        house_number="11", street="Commerce Dr", city="Riverhead",
        state="NY", postal_code="11901", country="US",
    )
    black_widows_address = Address(
        house_number="605", street="48th St", city="New York",
        state="NY", postal_code="10019", country="US",
    )
    wanda_maximoffs_address = Address(
        house_number="20", street="W 34th St", city="New York",
        state="NY", postal_code="10001", country="US",
    )
    gamoras_address = Address(
        house_number="107", street="S Beverly Glen Blvd", city="Los Angeles",
        state="CA", postal_code="90024", country="US",
    )
    nick_furys_address = Address(
        house_number="11461", street="Sunset Blvd", city="Los Angeles",
        state="CA", postal_code="90049", country="US",
    )

    return [
        Person(
            first_name="Chris",
            last_name="Hemsworth",
            age=38,
            personal_statement="The Rabbit Is Correct, And Clearly The Smartest One Among You.",
            home_loc=Point(x=153.616667, y=-28.716667),
            address=thors_address,
            skills={"hammer", "biceps", "hair", "heart"},
        ),
        Person(
            first_name="Robert",
            last_name="Downey",
            age=56,
            personal_statement="Doth mother know you weareth her drapes?",
            home_loc=Point(x=40.9190747, y=-72.5371874),
            address=ironmans_address,
            skills={"tech", "money", "one-liners", "intelligence", "resources"},
        ),
        Person(
            first_name="Scarlett",
            last_name="Johansson",
            age=37,
            personal_statement=(
                "Hey, fellas. Either one of you know where the Smithsonian is? "
                "I'm here to pick up a fossil."
            ),
            home_loc=Point(x=40.7215259, y=-74.0129994),
            address=black_widows_address,
            skills={"deception", "martial_arts"},
        ),
        Person(
            first_name="Elizabeth",
            last_name="Olsen",
            age=32,
            personal_statement="You Guys Know I Can Move Things With My Mind, Right?",
            home_loc=Point(x=40.6976701, y=-74.2598641),
            address=wanda_maximoffs_address,
            skills={"magic", "loyalty"},
        ),
        Person(
            first_name="Zoe",
            last_name="Saldana",
            age=43,
            personal_statement="I Am Going To Die Surrounded By The Biggest Idiots In The Galaxy.",
            home_loc=Point(x=-118.399968, y=34.073087),
            address=gamoras_address,
            skills={"skills", "martial_arts"},
        ),
        Person(
            first_name="Samuel L.",
            last_name="Jackson",
            age=73,
            personal_statement="Sir, I'm Gonna Have To Ask You To Exit The Donut",
            home_loc=Point(x=-118.4345534, y=34.082615),
            address=nick_furys_address,
            skills={"planning", "deception", "resources"},
        ),
    ]


async def load_demo_data(store: PersonStore) -> list[Person]:
    """Replace the store's contents with the demo records."""
    removed = await store.delete_all()
    logger.info("Seeding demo data (removed %d existing people)", removed)

    await store.save_all(demo_people())

    stored = await store.find_all()
    for person in stored:
        logger.info("Name: %s %s", person.first_name, person.last_name)
    return stored
