import logging
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import text
from sqlalchemy.orm import Session
from triage.api.tickets import router as tickets_router
from triage.api.session import router as session_router
from triage.api.selections import router as selections_router
from triage.core.config import settings
from triage.core.db import get_db
from triage.core.errors import SuggestionUnavailableError
from triage.core.logging import setup_logging
from triage.core.session import build_triage_session

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if getattr(app.state, "triage_session", None) is None:
        app.state.triage_session = build_triage_session()
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Sequential ticket triage queue with suggested responses for support agents.",
    version="1.0.0",
    lifespan=lifespan,
)

@app.middleware("http")
async def add_correlation_id(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response

@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Storage failure: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Service Unavailable: Selection storage failure", "request_id": getattr(request.state, "request_id", None)},
    )

@app.exception_handler(SuggestionUnavailableError)
async def suggestion_exception_handler(request: Request, exc: SuggestionUnavailableError):
    logger.warning(f"Suggestions unavailable for ticket {exc.ticket_id}: {exc.reason}")
    return JSONResponse(
        status_code=503,
        content={
            "detail": exc.reason,
            "ticket_id": exc.ticket_id,
            "retryable": True,
            "request_id": getattr(request.state, "request_id", None),
        },
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error", "request_id": getattr(request.state, "request_id", None)},
    )

@app.get("/health", tags=["system"])
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        db_status = "ok"
    except SQLAlchemyError:
        db_status = "error"
    return {"status": "ok", "database": db_status}

app.include_router(tickets_router)
app.include_router(session_router)
app.include_router(selections_router)
