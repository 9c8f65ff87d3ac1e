# goals router - create, promote suggestions, toggle completion, delete

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from neuromate.dependencies import get_goal_store, get_journal_store
from neuromate.models.goal import Goal, GoalBoard, GoalCreate, GoalFromSuggestion
from neuromate.services.store import GoalStore, JournalStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/goals", tags=["goals"])


def _goal_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Goal not found",
    )


@router.get("", response_model=GoalBoard)
async def list_goals(store: GoalStore = Depends(get_goal_store)):
    """active and completed goals, newest first"""
    return store.board()


@router.post("", response_model=Goal, status_code=status.HTTP_201_CREATED)
async def create_goal(body: GoalCreate, store: GoalStore = Depends(get_goal_store)):
    return store.add(body.goal_description)


@router.post("/from-suggestion", response_model=Goal, status_code=status.HTTP_201_CREATED)
async def create_goal_from_suggestion(
    body: GoalFromSuggestion,
    store: GoalStore = Depends(get_goal_store),
    journal: JournalStore = Depends(get_journal_store),
):
    """adopt one of a journal entry's suggested goals"""
    try:
        entry = journal.get(body.entry_id)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Journal entry not found",
        )

    try:
        return store.add_from_suggestion(entry, body.index)
    except IndexError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Suggested goal not found",
        )


@router.patch("/{goal_id}/toggle", response_model=Goal)
async def toggle_goal(goal_id: str, store: GoalStore = Depends(get_goal_store)):
    try:
        return store.toggle(goal_id)
    except KeyError:
        raise _goal_not_found()


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal(goal_id: str, store: GoalStore = Depends(get_goal_store)):
    try:
        store.remove(goal_id)
    except KeyError:
        raise _goal_not_found()
