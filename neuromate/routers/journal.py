# journal router - submit entries for analysis and list past entries
# responses use the user-facing view, therapist notes never leave this router

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from neuromate.dependencies import get_analyzer, get_journal_store
from neuromate.models.journal import JournalCreate, JournalEntryView
from neuromate.services.analysis_service import AnalysisService
from neuromate.services.store import JournalStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/journal", tags=["journal"])


@router.get("", response_model=list[JournalEntryView])
async def list_entries(store: JournalStore = Depends(get_journal_store)):
    """past entries, newest first"""
    return [JournalEntryView.from_entry(e) for e in store.list_entries()]


@router.post("", response_model=JournalEntryView, status_code=status.HTTP_201_CREATED)
async def submit_entry(
    body: JournalCreate,
    store: JournalStore = Depends(get_journal_store),
    analyzer: AnalysisService = Depends(get_analyzer),
):
    """analyze and save a new entry. saved without analysis if the provider fails."""
    logger.info(f"Submitting journal entry ({len(body.entry_text)} chars)")
    entry = await store.submit(body.entry_text, analyzer)
    return JournalEntryView.from_entry(entry)


@router.get("/{entry_id}", response_model=JournalEntryView)
async def get_entry(entry_id: str, store: JournalStore = Depends(get_journal_store)):
    try:
        entry = store.get(entry_id)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Journal entry not found",
        )
    return JournalEntryView.from_entry(entry)
