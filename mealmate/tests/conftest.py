import pytest
import pytest_asyncio

from mealmate.events.Event_Bus import ALL_ALERTS, EventBus
from mealmate.events.notifications import Notifier
from mealmate.infra.Session_Storage import KeyValueStore, SecureKeyValueStore, SessionStorage
from mealmate.tests.fake_backend import FakeBackend


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def storage(tmp_path):
    # Use temporary files (don't touch the real data dir)
    return SessionStorage(
        general=KeyValueStore(tmp_path / "session.json"),
        secure=SecureKeyValueStore(tmp_path / "secure_session.json"),
    )


@pytest_asyncio.fixture
async def api(backend, storage):
    client = backend.client(storage)
    yield client
    await client.aclose()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def alerts(bus):
    """(event_name, options) for every alert published during the test."""
    received = []
    bus.subscribe_all(ALL_ALERTS, lambda name, options: received.append((name, options)))
    return received


@pytest.fixture
def notifier(bus):
    return Notifier(bus)
