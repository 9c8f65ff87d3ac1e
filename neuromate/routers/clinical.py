# clinical router - therapist notes for an entry, behind the clinician key

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from neuromate.dependencies import get_journal_store, require_clinician
from neuromate.models.journal import ClinicalView
from neuromate.services.store import JournalStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/clinical", tags=["clinical"], dependencies=[Depends(require_clinician)])


@router.get("/journal/{entry_id}", response_model=ClinicalView)
async def get_clinical_view(entry_id: str, store: JournalStore = Depends(get_journal_store)):
    try:
        view = store.clinical_view(entry_id)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Journal entry not found",
        )
    logger.info(f"Clinical view served for entry {entry_id}")
    return view
