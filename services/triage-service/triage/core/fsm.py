import asyncio
import logging
import threading
from typing import Optional, Tuple

from fastapi.concurrency import run_in_threadpool

from triage.core.config import settings
from triage.core.errors import StaleSuggestionsError
from triage.core.store import TicketStore
from triage.schemas.ticket import Selection, SessionSnapshot, SuggestedResponse, SuggestionBatch, Ticket
from triage.services.selection_log import SelectionLog
from triage.services.suggestions import Sleep, SuggestionGenerator

logger = logging.getLogger(__name__)

class SessionState:
    ACTIVE = "ACTIVE"
    TRANSITIONING = "TRANSITIONING"
    EXHAUSTED = "EXHAUSTED"

VALID_TRANSITIONS = {
    SessionState.ACTIVE: [SessionState.TRANSITIONING],
    SessionState.TRANSITIONING: [SessionState.ACTIVE, SessionState.EXHAUSTED],
    SessionState.EXHAUSTED: []
}

class InvalidTransitionError(Exception):
    def __init__(self, current_state: str, attempted_state: str):
        super().__init__(f"Transition from {current_state} to {attempted_state} is not permitted.")
        self.current_state = current_state
        self.attempted_state = attempted_state


class TriageSession:
    """
    Sequential triage queue for a single operator.

    The session walks the ticket store in order. Committing a selection moves
    the session to TRANSITIONING, where further selections are ignored, until
    `settle()` advances the cursor. `reset()` is accepted from every state and
    is the only way out of EXHAUSTED.

    `epoch` increments whenever the presented ticket changes, so work started
    for one ticket can detect that the session has moved on.
    """

    def __init__(
        self,
        store: TicketStore,
        log: SelectionLog,
        generator: SuggestionGenerator,
        settle_delay: Optional[float] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.store = store
        self.log = log
        self.generator = generator
        self.settle_delay = settings.SETTLE_DELAY_SECONDS if settle_delay is None else settle_delay
        self.sleep = sleep

        self._lock = threading.RLock()
        # Serializes storage writes; _lock is never held while waiting on it
        self._write_lock = threading.Lock()
        self.epoch = 0
        self.cursor = 0
        self.state = self._initial_state()
        self._restore()

    def _initial_state(self) -> str:
        return SessionState.ACTIVE if len(self.store) > 0 else SessionState.EXHAUSTED

    def _restore(self):
        restored = self.log.load_all()
        known = [s for s in restored if self.store.find(s.ticket_id) is not None]
        if len(known) != len(restored):
            logger.warning(f"Dropping {len(restored) - len(known)} restored selection(s) for unknown tickets")
            self.log.replace(known)
        logger.info(f"Triage session ready: {len(self.store)} ticket(s), {len(known)} restored selection(s)")

    def validate_transition(self, current_state: str, new_state: str):
        if new_state not in VALID_TRANSITIONS.get(current_state, []):
            raise InvalidTransitionError(current_state, new_state)

    def _transition(self, new_state: str, cursor: int):
        self.validate_transition(self.state, new_state)
        previous_state = self.state
        if cursor != self.cursor or new_state == SessionState.EXHAUSTED:
            self.epoch += 1
        self.state = new_state
        self.cursor = cursor
        logger.debug(f"Session {previous_state} -> {new_state} (cursor={cursor}, epoch={self.epoch})")

    @property
    def current_ticket(self) -> Optional[Ticket]:
        if self.state == SessionState.EXHAUSTED:
            return None
        return self.store.get(self.cursor)

    def commit(self, response: SuggestedResponse) -> Tuple[Optional[Selection], int]:
        """
        Like `select_response`, but also returns the epoch the commit happened
        in, for scheduling the matching `settle_later`.

        The session enters TRANSITIONING before the storage write and the state
        lock is released for the write itself, so selections arriving
        meanwhile are rejected immediately instead of waiting on storage.
        """
        with self._lock:
            if self.state != SessionState.ACTIVE:
                logger.debug(f"Ignoring selection while {self.state}")
                return None, self.epoch

            ticket = self.store.get(self.cursor)
            selection = Selection(ticket_id=ticket.id, tone=response.tone, text=response.text)
            self._transition(SessionState.TRANSITIONING, self.cursor)
            epoch = self.epoch

        with self._write_lock:
            with self._lock:
                if self.epoch != epoch:
                    logger.info(f"Dropping selection for ticket {ticket.id}: session was reset")
                    return None, self.epoch

            try:
                self.log.append(selection)
            except Exception:
                # A failed write leaves the session ACTIVE on the same ticket
                with self._lock:
                    self._transition(SessionState.ACTIVE, self.cursor)
                raise

        logger.info(f"Recorded '{selection.tone}' response for ticket {ticket.id}")
        return selection, epoch

    def select_response(self, response: SuggestedResponse) -> Optional[Selection]:
        """
        Record the operator's choice for the current ticket and start the
        transition to the next one. Returns None, changing nothing, unless the
        session is ACTIVE.
        """
        selection, _ = self.commit(response)
        return selection

    def settle(self) -> bool:
        """
        Finish a pending transition. Returns False if none was pending.
        """
        with self._lock:
            if self.state != SessionState.TRANSITIONING:
                return False
            next_cursor = self.cursor + 1
            if next_cursor < len(self.store):
                self._transition(SessionState.ACTIVE, next_cursor)
            else:
                self._transition(SessionState.EXHAUSTED, self.cursor)
                logger.info("All tickets processed")
            return True

    async def settle_later(self, epoch: int) -> bool:
        """
        Settle after the configured delay, unless a reset happened meanwhile.
        """
        await self.sleep(self.settle_delay)
        with self._lock:
            if self.epoch != epoch:
                return False
            return self.settle()

    async def select_and_settle(self, response: SuggestedResponse) -> Optional[Selection]:
        selection, epoch = await run_in_threadpool(self.commit, response)
        if selection is not None:
            await self.settle_later(epoch)
        return selection

    def reset(self):
        with self._write_lock:
            self.log.clear()
            with self._lock:
                self.epoch += 1
                self.cursor = 0
                self.state = self._initial_state()
                logger.info("Triage session reset")

    async def load_suggestions(self) -> Optional[SuggestionBatch]:
        """
        Fetch suggestions for the current ticket. Returns None once the queue
        is exhausted and raises StaleSuggestionsError if the session moved to
        another ticket, or was reset, while the fetch was suspended.
        """
        with self._lock:
            ticket = self.current_ticket
            epoch = self.epoch
        if ticket is None:
            return None

        responses = await self.generator.suggest(ticket)

        with self._lock:
            stale = self.epoch != epoch
        if stale:
            logger.info(f"Discarding stale suggestions for ticket {ticket.id}")
            raise StaleSuggestionsError(f"Session moved on from ticket {ticket.id}")
        return SuggestionBatch(ticket_id=ticket.id, responses=responses)

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            exhausted = self.state == SessionState.EXHAUSTED
            return SessionSnapshot(
                state=self.state,
                cursor=None if exhausted else self.cursor,
                total=len(self.store),
                processed=len(self.log),
                current_ticket=self.current_ticket,
            )
