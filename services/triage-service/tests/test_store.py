import pytest
from pydantic import ValidationError
from triage.core.store import TicketStore
from triage.data.tickets import SEED_TICKETS
from conftest import make_ticket


def test_seed_dataset_loads_in_order():
    store = TicketStore.from_records(SEED_TICKETS)

    assert len(store) == 9
    assert store.get(0).id == "ticket001"
    assert store.get(3).sentiment == "positive"
    assert [t.id for t in store.list()] == [r["id"] for r in SEED_TICKETS]


@pytest.mark.parametrize("index", [-1, 2, 100])
def test_get_out_of_range_returns_none(index):
    store = TicketStore([make_ticket("A"), make_ticket("B")])

    assert store.get(index) is None


def test_find_by_id():
    store = TicketStore([make_ticket("A"), make_ticket("B")])

    assert store.find("B").id == "B"
    assert store.find("missing") is None


def test_duplicate_ids_rejected():
    with pytest.raises(ValueError):
        TicketStore([make_ticket("A"), make_ticket("A")])


def test_tickets_are_immutable():
    ticket = make_ticket("A")

    with pytest.raises(ValidationError):
        ticket.tier = 5


def test_negative_tier_rejected():
    with pytest.raises(ValidationError):
        make_ticket("A", tier=-1)
