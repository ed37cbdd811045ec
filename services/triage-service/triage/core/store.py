from typing import Any, Dict, Iterable, List, Optional, Tuple
from triage.schemas.ticket import Ticket

class TicketStore:
    """
    Read-only, ordered ticket sequence. Order is fixed at load time and
    defines the traversal order of the triage queue.
    """

    def __init__(self, tickets: Iterable[Ticket]):
        self._tickets: Tuple[Ticket, ...] = tuple(tickets)
        ids = [t.id for t in self._tickets]
        if len(set(ids)) != len(ids):
            raise ValueError("Ticket ids must be unique")

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "TicketStore":
        return cls(Ticket.model_validate(record) for record in records)

    def list(self) -> List[Ticket]:
        return list(self._tickets)

    def get(self, index: int) -> Optional[Ticket]:
        if index < 0 or index >= len(self._tickets):
            return None
        return self._tickets[index]

    def find(self, ticket_id: str) -> Optional[Ticket]:
        for ticket in self._tickets:
            if ticket.id == ticket_id:
                return ticket
        return None

    def __len__(self) -> int:
        return len(self._tickets)
