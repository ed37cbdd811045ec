import pytest
from typing import Dict, List, Optional
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from triage.core.db import Base
from triage.core.fsm import TriageSession
from triage.core.store import TicketStore
from triage.schemas.ticket import Ticket
from triage.services.selection_log import SelectionLog, StateSlotStore
from triage.services.suggestions import SuggestionGenerator

# SQLite database file for the storage and API tests
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_triage.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

STORAGE_KEY = "selectedUserResponsesReact"


class MemorySlotStore(StateSlotStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.slots: Dict[str, str] = dict(initial or {})
        self.writes = 0

    def read(self, key):
        return self.slots.get(key)

    def write(self, key, value):
        self.writes += 1
        self.slots[key] = value

    def delete(self, key):
        self.slots.pop(key, None)


class RecordingSleep:
    """Stands in for asyncio.sleep without letting time pass."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, delay):
        self.calls.append(delay)


def make_ticket(ticket_id="t1", name="Jamie", tier=1, sentiment="frustrated", emotion="urgent"):
    return Ticket(
        id=ticket_id,
        customer_name=name,
        issue_summary=f"Issue reported by {name}",
        tier=tier,
        sentiment=sentiment,
        emotion=emotion,
    )


@pytest.fixture(scope="function")
def db_session_factory():
    Base.metadata.create_all(bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def slot_store():
    return MemorySlotStore()


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def two_tickets():
    return [
        make_ticket("A", name="Jamie", tier=1, sentiment="frustrated"),
        make_ticket("B", name="Casey", tier=0, sentiment="positive"),
    ]


@pytest.fixture
def session_factory(slot_store, sleep):
    def build(tickets, store=None):
        log = SelectionLog(store or slot_store, STORAGE_KEY)
        generator = SuggestionGenerator(delay=0.7, sleep=sleep)
        return TriageSession(TicketStore(tickets), log, generator, settle_delay=0.4, sleep=sleep)

    return build
