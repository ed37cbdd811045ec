from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from enum import Enum

class SessionStateEnum(str, Enum):
    ACTIVE = "ACTIVE"
    TRANSITIONING = "TRANSITIONING"
    EXHAUSTED = "EXHAUSTED"

class Ticket(BaseModel):
    id: str = Field(..., description="Unique ticket identifier.")
    customer_name: str = Field(..., description="Display name of the customer.")
    issue_summary: str = Field(..., description="The customer's description of the issue.")
    tier: int = Field(..., ge=0, description="Severity/category tier, 0 for non-issues.")
    sentiment: str = Field(..., description="Sentiment label, e.g. frustrated, positive, calm.")
    emotion: str = Field("", description="Free-text emotion tags.")

    model_config = ConfigDict(frozen=True)


class SuggestedResponse(BaseModel):
    tone: str = Field(..., min_length=1, description="Short tone label, e.g. empathetic.")
    text: str = Field(..., min_length=1, description="The response body.")

    model_config = ConfigDict(frozen=True)


class Selection(SuggestedResponse):
    ticket_id: str = Field(..., description="The ticket this response was chosen for.")


class SuggestionBatch(BaseModel):
    ticket_id: str
    responses: List[SuggestedResponse] = []


class SessionSnapshot(BaseModel):
    state: SessionStateEnum
    cursor: Optional[int] = Field(None, description="Index of the current ticket, null once exhausted.")
    total: int = Field(..., description="Number of tickets in the queue.")
    processed: int = Field(..., description="Number of selections recorded in the log.")
    current_ticket: Optional[Ticket] = None


class SelectionRequest(SuggestedResponse):
    pass


class SelectionResult(BaseModel):
    accepted: bool = Field(..., description="False when the selection was ignored because the session was not active.")
    selection: Optional[Selection] = None
    session: SessionSnapshot
