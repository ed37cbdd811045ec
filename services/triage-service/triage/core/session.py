import logging
import threading
from fastapi import Depends, Request
from triage.core.config import settings
from triage.core.db import Base, SessionLocal, engine
from triage.core.fsm import TriageSession
from triage.core.store import TicketStore
from triage.data.tickets import SEED_TICKETS
from triage.services.selection_log import SelectionLog, SqlStateSlotStore
from triage.services.suggestions import SuggestionGenerator, build_prefix_policy

logger = logging.getLogger(__name__)

# Guards the lazy build when requests arrive before the lifespan has run
_build_lock = threading.Lock()

def build_triage_session() -> TriageSession:
    """
    Wire the triage session against the configured database and the embedded ticket dataset.
    """
    Base.metadata.create_all(bind=engine)

    store = TicketStore.from_records(SEED_TICKETS)
    log = SelectionLog(SqlStateSlotStore(SessionLocal), settings.SELECTION_STORAGE_KEY)
    generator = SuggestionGenerator(
        delay=settings.SUGGESTION_DELAY_SECONDS,
        policy=build_prefix_policy(settings.SUGGESTION_PREFIX_POLICY, settings.SUGGESTION_SEED),
    )
    logger.info(f"Building triage session (policy={settings.SUGGESTION_PREFIX_POLICY}, key={settings.SELECTION_STORAGE_KEY})")
    return TriageSession(store, log, generator, settle_delay=settings.SETTLE_DELAY_SECONDS)

def get_triage_session(request: Request) -> TriageSession:
    session = getattr(request.app.state, "triage_session", None)
    if session is None:
        with _build_lock:
            session = getattr(request.app.state, "triage_session", None)
            if session is None:
                session = build_triage_session()
                request.app.state.triage_session = session
    return session

def get_ticket_store(session: TriageSession = Depends(get_triage_session)) -> TicketStore:
    return session.store
