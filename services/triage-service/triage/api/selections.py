from typing import List
from fastapi import APIRouter, Depends
from triage.core.fsm import TriageSession
from triage.core.session import get_triage_session
from triage.schemas.ticket import Selection

router = APIRouter(prefix="/selections", tags=["Selections"])

@router.get("", response_model=List[Selection])
def get_selections(session: TriageSession = Depends(get_triage_session)):
    """
    Retrieve the recorded selections in the order they were made.
    """
    return session.log.entries()
