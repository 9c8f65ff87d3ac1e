# neuromate configuration
# loads env vars for gemini, local storage, validation bounds, clinician access

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# load .env from project root
load_dotenv(Path(__file__).parent.parent / ".env")


class Settings(BaseSettings):
    # gemini (journal analysis)
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    ANALYSIS_TEMPERATURE: float = 0.4

    # local key-value storage
    STORAGE_DIR: Path = Path(os.getenv("STORAGE_DIR", str(Path.home() / ".neuromate")))
    ENTRIES_STORAGE_KEY: str = "neuroMateJournalEntries"
    GOALS_STORAGE_KEY: str = "neuroMateGoals"

    # validation bounds
    JOURNAL_MIN_LENGTH: int = 10
    JOURNAL_MAX_LENGTH: int = 10000
    GOAL_MIN_LENGTH: int = 5
    MAX_SUGGESTED_GOALS: int = 3

    # queued toast notifications
    NOTIFICATION_BACKLOG: int = 50

    # clinical view is disabled while this is empty
    CLINICIAN_API_KEY: str = os.getenv("CLINICIAN_API_KEY", "")

    # cors
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
