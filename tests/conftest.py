import pytest

from tests.fakes import FakeDirectory, FakeEventSource, pacific_summer_record
from event_connect.events.source import EventSourceError


@pytest.fixture
def fake_directory():
    return FakeDirectory(users={"adele@contoso.com": "Adele Vance", "alex@contoso.com": "Alex Wilber"})


@pytest.fixture
def failing_event_source():
    return FakeEventSource(error=EventSourceError("Event API returned 500"))


@pytest.fixture
def event_source():
    return FakeEventSource(record=pacific_summer_record())
