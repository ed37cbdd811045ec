from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text
from triage.core.db import Base

class StateSlot(Base):
    """
    A single durable key/value slot. The selection log is mirrored here as one
    JSON document under a fixed key.
    """
    __tablename__ = "state_slots"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
