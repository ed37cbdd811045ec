import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from triage.models.state_slot import StateSlot
from triage.schemas.ticket import Selection

logger = logging.getLogger(__name__)


class StateSlotStore(ABC):
    """Durable key/value slot holding serialized state."""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass


class SqlStateSlotStore(StateSlotStore):
    """
    Stores each slot as a row in `state_slots`. Every call runs in its own
    session and commits before returning; errors are rolled back and re-raised.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def read(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            slot = db.get(StateSlot, key)
            return slot.value if slot is not None else None
        finally:
            db.close()

    def write(self, key: str, value: str) -> None:
        db = self.session_factory()
        try:
            slot = db.get(StateSlot, key)
            if slot is None:
                db.add(StateSlot(key=key, value=value))
            else:
                slot.value = value
                slot.updated_at = datetime.utcnow()
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def delete(self, key: str) -> None:
        db = self.session_factory()
        try:
            db.query(StateSlot).filter(StateSlot.key == key).delete()
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


class _StoredSelection(BaseModel):
    ticket_id: str = Field(..., alias="ticketId")
    tone: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)

    model_config = ConfigDict(populate_by_name=True)


_stored_list = TypeAdapter(List[_StoredSelection])


class SelectionLog:
    """
    Append-only, ordered record of committed selections, mirrored in full to
    a single slot on every append.
    """

    def __init__(self, store: StateSlotStore, key: str):
        self.store = store
        self.key = key
        self._entries: List[Selection] = []

    def load_all(self) -> List[Selection]:
        """
        Replace the in-memory log with the persisted one. A missing slot yields
        an empty log, and so does anything that does not parse as a list of
        selections.
        """
        raw = self.store.read(self.key)
        if raw is None:
            self._entries = []
            return []

        try:
            records = _stored_list.validate_python(json.loads(raw))
            entries = [Selection(ticket_id=r.ticket_id, tone=r.tone, text=r.text) for r in records]
        except (ValueError, ValidationError) as e:
            logger.warning(f"Discarding malformed selection log under '{self.key}': {e}")
            self._entries = []
            return []

        self._entries = entries
        return self.entries()

    def append(self, selection: Selection) -> None:
        self._entries.append(selection)
        try:
            self.store.write(self.key, self._serialize())
        except Exception:
            # Keep memory in step with what is actually persisted
            self._entries.pop()
            logger.error(f"Failed to persist selection for ticket {selection.ticket_id}", exc_info=True)
            raise

    def replace(self, selections: List[Selection]) -> None:
        self._entries = list(selections)
        self.store.write(self.key, self._serialize())

    def clear(self) -> None:
        self.store.delete(self.key)
        self._entries = []

    def entries(self) -> List[Selection]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _serialize(self) -> str:
        return json.dumps([{"ticketId": s.ticket_id, "tone": s.tone, "text": s.text} for s in self._entries])
