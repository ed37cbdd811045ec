import json
import pytest
from sqlalchemy.exc import OperationalError
from triage.core.config import Settings
from triage.models.state_slot import StateSlot
from triage.schemas.ticket import Selection
from triage.services.selection_log import SelectionLog, SqlStateSlotStore
from conftest import STORAGE_KEY, MemorySlotStore


def selection(ticket_id, tone="friendly"):
    return Selection(ticket_id=ticket_id, tone=tone, text=f"Reply for {ticket_id}")


def test_load_all_without_stored_state(slot_store):
    log = SelectionLog(slot_store, STORAGE_KEY)

    assert log.load_all() == []
    assert len(log) == 0


def test_append_survives_reload(slot_store):
    log = SelectionLog(slot_store, STORAGE_KEY)
    log.append(selection("A", "empathetic"))
    log.append(selection("B", "direct"))

    reloaded = SelectionLog(slot_store, STORAGE_KEY).load_all()

    assert reloaded == log.entries()
    assert [s.ticket_id for s in reloaded] == ["A", "B"]


@pytest.mark.parametrize("payload", [
    "[{\"ticketId\": \"A\", \"tone\"",
    "{\"ticketId\": \"A\"}",
    "[{\"id\": 1}]",
    "null",
    "42",
    "[{\"ticketId\": \"A\", \"tone\": \"\", \"text\": \"x\"}]",
    "[{\"ticketId\": \"A\", \"tone\": \"friendly\", \"text\": \"\"}]",
])
def test_malformed_state_loads_as_empty(payload):
    store = MemorySlotStore({STORAGE_KEY: payload})
    log = SelectionLog(store, STORAGE_KEY)

    assert log.load_all() == []
    assert len(log) == 0


def test_clear_removes_key(slot_store):
    log = SelectionLog(slot_store, STORAGE_KEY)
    log.append(selection("A"))

    log.clear()

    assert len(log) == 0
    assert STORAGE_KEY not in slot_store.slots


def test_sql_store_round_trip(db_session_factory):
    store = SqlStateSlotStore(db_session_factory)
    log = SelectionLog(store, STORAGE_KEY)
    log.append(selection("ticket001", "empathetic"))
    log.append(selection("ticket002", "direct"))

    db = db_session_factory()
    try:
        slot = db.get(StateSlot, STORAGE_KEY)
        assert json.loads(slot.value)[1] == {"ticketId": "ticket002", "tone": "direct", "text": "Reply for ticket002"}
    finally:
        db.close()

    reloaded = SelectionLog(store, STORAGE_KEY).load_all()
    assert [s.ticket_id for s in reloaded] == ["ticket001", "ticket002"]

    log.clear()
    assert store.read(STORAGE_KEY) is None


def test_sql_store_write_failure_propagates():
    class FailingSession:
        def get(self, *args):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        def rollback(self):
            pass

        def close(self):
            pass

    log = SelectionLog(SqlStateSlotStore(lambda: FailingSession()), STORAGE_KEY)

    with pytest.raises(OperationalError):
        log.append(selection("A"))
    assert len(log) == 0


def test_default_storage_key_matches_dashboard():
    assert Settings(_env_file=None).SELECTION_STORAGE_KEY == "selectedUserResponsesReact"
