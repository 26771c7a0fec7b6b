"""Shared fixtures: the people, event and repository most tests start from."""
import pytest

from src.models.event import Event
from src.models.person import Person
from src.services.repository import InMemoryGroupRepository


@pytest.fixture
def mei():
    return Person(id="user_mei", name="Mei Chen", age=24, gender="Female",
                  country_of_birth="China", language_at_home="Mandarin", state="SA")


@pytest.fixture
def priya():
    return Person(id="user_priya", name="Priya Patel", age=32, gender="Female",
                  country_of_birth="India", language_at_home="Hindi", state="SA")


@pytest.fixture
def fatima():
    return Person(id="user_fatima", name="Fatima Al-Zahra", age=28, gender="Female",
                  country_of_birth="Lebanon", language_at_home="Arabic", state="SA")


@pytest.fixture
def james():
    return Person(id="user_james", name="James Wilson", age=45, gender="Male",
                  country_of_birth="Australia", language_at_home="English", state="SA",
                  is_first_nations=True)


@pytest.fixture
def four_attendees(mei, priya, fatima, james):
    """Four people scoring 48: varied country and language, all from SA."""
    return [mei, priya, fatima, james]


@pytest.fixture
def afl_event():
    return Event(
        id="evt_afl",
        title="AFL Match – Crows vs Power",
        date="2025-09-15T18:00:00+09:30",
        price_cents=6000,
        category="Sports",
        state="SA",
        city="Adelaide",
        venue="Adelaide Oval",
    )


@pytest.fixture
def repository(afl_event, four_attendees):
    """Repository holding the AFL event, the four attendees and a few extras."""
    repo = InMemoryGroupRepository()
    repo.add_event(afl_event)
    for person in four_attendees:
        repo.add_user(person)
    repo.add_user(Person(id="user_marco", name="Marco Rossi", age=35, gender="Male",
                         country_of_birth="Italy", language_at_home="Italian", state="SA",
                         has_disability=True))
    repo.add_user(Person(id="user_sophie", name="Sophie Dubois", age=22, gender="Female",
                         country_of_birth="France", language_at_home="French", state="VIC"))
    repo.add_user(Person(id="user_hiroshi", name="Hiroshi Tanaka", age=38, gender="Male",
                         country_of_birth="Japan", language_at_home="Japanese", state="NSW"))
    return repo
