from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from triage.core.errors import StaleSuggestionsError
from triage.core.fsm import TriageSession
from triage.core.session import get_triage_session
from triage.schemas.ticket import SelectionRequest, SelectionResult, SessionSnapshot, SuggestionBatch

router = APIRouter(prefix="/session", tags=["Session"])

@router.get("", response_model=SessionSnapshot)
def get_session_state(session: TriageSession = Depends(get_triage_session)):
    return session.snapshot()


@router.get("/suggestions", response_model=SuggestionBatch)
async def get_suggestions(session: TriageSession = Depends(get_triage_session)):
    """
    Generate suggested responses for the ticket currently presented.
    """
    try:
        batch = await session.load_suggestions()
    except StaleSuggestionsError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "Stale suggestions", "reason": str(e)},
        )

    if batch is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "Queue exhausted", "reason": "All tickets have been processed. Reset the session to start over."},
        )
    return batch


@router.post("/select", response_model=SelectionResult, status_code=status.HTTP_202_ACCEPTED)
def select_response(
    request: SelectionRequest,
    background_tasks: BackgroundTasks,
    session: TriageSession = Depends(get_triage_session),
):
    """
    Commit the operator's chosen response for the current ticket.
    The queue advances once the settle delay has elapsed; selections made
    before then are ignored and reported with accepted=false.
    """
    selection, epoch = session.commit(request)
    if selection is not None:
        background_tasks.add_task(session.settle_later, epoch)

    return SelectionResult(accepted=selection is not None, selection=selection, session=session.snapshot())


@router.post("/reset", response_model=SessionSnapshot)
def reset_session(session: TriageSession = Depends(get_triage_session)):
    """
    Clear every recorded selection and return to the first ticket.
    """
    session.reset()
    return session.snapshot()
