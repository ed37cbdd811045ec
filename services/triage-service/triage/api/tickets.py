from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from triage.core.session import get_ticket_store
from triage.core.store import TicketStore
from triage.schemas.ticket import Ticket

router = APIRouter(prefix="/tickets", tags=["Tickets"])

@router.get("", response_model=List[Ticket])
def get_tickets(store: TicketStore = Depends(get_ticket_store)):
    """
    Retrieve the triage queue in traversal order.
    """
    return store.list()


@router.get("/{ticket_id}", response_model=Ticket)
def get_ticket(ticket_id: str, store: TicketStore = Depends(get_ticket_store)):
    ticket = store.find(ticket_id)
    if not ticket:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ticket not found")
    return ticket
