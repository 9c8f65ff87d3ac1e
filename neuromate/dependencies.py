# fastapi dependency injection
# provides the shared stores, notifier, analyzer and clinician access check

import hmac
import logging
from typing import Optional

from fastapi import Header, HTTPException, status

from neuromate.config import settings
from neuromate.services.analysis_service import AnalysisService
from neuromate.services.notifier import Notifier
from neuromate.services.storage import LocalStorage
from neuromate.services.store import GoalStore, JournalStore

logger = logging.getLogger(__name__)

# singleton instances, loaded from local storage in the app lifespan
storage = LocalStorage()
notifier = Notifier()
journal_store = JournalStore(storage, notifier)
goal_store = GoalStore(storage, notifier)
analyzer = AnalysisService()


async def get_notifier() -> Notifier:
    return notifier


async def get_journal_store() -> JournalStore:
    return journal_store


async def get_goal_store() -> GoalStore:
    return goal_store


async def get_analyzer() -> AnalysisService:
    return analyzer


async def require_clinician(
    clinician_key: Optional[str] = Header(None, alias="X-Clinician-Key"),
) -> None:
    """only callers holding the configured clinician key may read therapist notes"""
    expected = settings.CLINICIAN_API_KEY
    if not expected or not clinician_key or not hmac.compare_digest(clinician_key.encode(), expected.encode()):
        logger.warning("Rejected clinical view request")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Clinician access required",
        )
