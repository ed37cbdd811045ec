from typing import Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Agent Assist Triage API"
    DATABASE_URL: str = "sqlite:///./triage.db"
    LOG_LEVEL: str = "INFO"

    SUGGESTION_DELAY_SECONDS: float = 0.7
    SETTLE_DELAY_SECONDS: float = 0.4
    # "full" returns every candidate, "random" keeps a prefix of 3-5 of them
    SUGGESTION_PREFIX_POLICY: str = "full"
    SUGGESTION_SEED: Optional[int] = None
    SELECTION_STORAGE_KEY: str = "selectedUserResponsesReact"

    class Config:
        env_file = ".env"

settings = Settings()
