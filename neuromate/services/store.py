# local store synchronizer - explicit store objects mirrored to local storage
# lists are reloaded on startup and rewritten in full on every mutation.
# a failed write keeps the in-memory change, so memory and disk may diverge.

import json
import logging
import time
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ValidationError

from neuromate.config import settings
from neuromate.errors import AnalysisUnavailable, PersistenceFailure
from neuromate.models.goal import Goal, GoalBoard
from neuromate.models.journal import ClinicalView, JournalEntry
from neuromate.services.notifier import Notifier
from neuromate.services.storage import LocalStorage

logger = logging.getLogger(__name__)


class SyncedList:
    """in-memory list of models persisted as one json array under a fixed key"""

    model: type[BaseModel] = BaseModel
    load_error = ("Error Loading Items", "Could not retrieve your saved items.")
    save_error = ("Error Saving Items", "Could not save your updates.")
    empty_notice = ("No Saved Items", "Nothing was stored yet, starting fresh.")

    def __init__(self, storage: LocalStorage, key: str, notifier: Notifier):
        self.storage = storage
        self.key = key
        self.notifier = notifier
        self._items: list = []

    def __len__(self) -> int:
        return len(self._items)

    def load(self) -> list:
        """replace the in-memory list with the stored one. failures leave it empty."""
        self._items = []
        try:
            raw = self.storage.get_item(self.key)
            if raw is None:
                logger.info(f"No stored value under {self.key}, starting empty")
                self.notifier.push(*self.empty_notice)
                return []
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"stored value under {self.key} is not a list")
            # model validation turns iso timestamp strings back into datetimes
            items = [self.model.model_validate(item) for item in data]
        except (PersistenceFailure, json.JSONDecodeError, ValidationError, ValueError, RecursionError) as e:
            logger.error(f"Failed to load {self.key} from local storage: {e}")
            self.notifier.error(*self.load_error)
            return []

        self._items = items
        logger.info(f"Loaded {len(items)} items from {self.key}")
        return list(items)

    def _serialize(self) -> str:
        return json.dumps(
            [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in self._items],
            ensure_ascii=False,
        )

    def persist(self) -> bool:
        """rewrite the whole list. returns False (and notifies) if the write failed."""
        try:
            self.storage.set_item(self.key, self._serialize())
        except PersistenceFailure as e:
            logger.error(f"Failed to save {self.key} to local storage: {e}")
            self.notifier.error(*self.save_error)
            return False
        return True

    def _next_id(self) -> str:
        """millisecond timestamp id, bumped forward while it collides"""
        millis = int(time.time() * 1000)
        taken = {item.id for item in self._items}
        while str(millis) in taken:
            millis += 1
        return str(millis)

    def _find(self, item_id: str):
        for item in self._items:
            if item.id == item_id:
                return item
        raise KeyError(item_id)


class JournalStore(SyncedList):
    """journal entries, newest first. entries are never edited or deleted."""

    model = JournalEntry
    load_error = ("Error Loading Entries", "Could not retrieve your saved journal entries.")
    save_error = ("Error Saving Entry", "Could not save your journal entry.")
    empty_notice = ("No Saved Entries", "You haven't added any journal entries yet.")

    def __init__(self, storage: LocalStorage, notifier: Notifier, key: Optional[str] = None):
        super().__init__(storage, key or settings.ENTRIES_STORAGE_KEY, notifier)

    async def submit(self, text: str, analyzer) -> JournalEntry:
        """analyze and save an entry. the raw text is saved even if analysis fails."""
        analysis = None
        try:
            analysis = await analyzer.analyze(text)
        except AnalysisUnavailable as e:
            logger.error(f"Error analyzing journal entry: {e}")
            self.notifier.error("Analysis Failed", "Could not analyze your entry. Please try again.")

        entry = JournalEntry.from_analysis(
            self._next_id(), datetime.now(timezone.utc), text, analysis
        )
        self._items.insert(0, entry)
        self.persist()

        if analysis is not None:
            self.notifier.push("Journal Entry Saved", "Your thoughts have been recorded.")
        logger.info(f"Journal entry saved: {entry.id} (analyzed={analysis is not None})")
        return entry

    def list_entries(self) -> list[JournalEntry]:
        return sorted(self._items, key=lambda e: e.timestamp, reverse=True)

    def get(self, entry_id: str) -> JournalEntry:
        return self._find(entry_id)

    def clinical_view(self, entry_id: str) -> ClinicalView:
        """the only way to read an entry's confidential notes"""
        return ClinicalView.from_entry(self._find(entry_id))


class GoalStore(SyncedList):
    """user goals. toggled in place, removed by id."""

    model = Goal
    load_error = ("Error Loading Goals", "Could not retrieve your saved goals.")
    save_error = ("Error Saving Goals", "Could not save your goals updates.")
    empty_notice = ("No Saved Goals", "You haven't set any goals yet.")

    def __init__(self, storage: LocalStorage, notifier: Notifier, key: Optional[str] = None):
        super().__init__(storage, key or settings.GOALS_STORAGE_KEY, notifier)

    def list_goals(self) -> list[Goal]:
        return list(self._items)

    def get(self, goal_id: str) -> Goal:
        return self._find(goal_id)

    def add(self, description: str) -> Goal:
        goal = Goal(
            id=self._next_id(),
            description=description,
            is_completed=False,
            created_at=datetime.now(timezone.utc),
        )
        self._items.insert(0, goal)
        self.persist()
        self.notifier.push("Goal Added", f'"{description}" has been added to your goals.')
        logger.info(f"Goal added: {goal.id}")
        return goal

    def add_from_suggestion(self, entry: JournalEntry, index: int) -> Goal:
        """promote one of the entry's suggested goals. IndexError if there is none at index."""
        suggestions = entry.suggested_goals or []
        if index < 0 or index >= len(suggestions):
            raise IndexError(f"entry {entry.id} has no suggested goal at {index}")
        return self.add(suggestions[index])

    def toggle(self, goal_id: str) -> Goal:
        goal = self._find(goal_id)
        goal.is_completed = not goal.is_completed
        self.persist()
        state = "Marked as Complete" if goal.is_completed else "Marked as Incomplete"
        self.notifier.push(f"Goal {state}", f'"{goal.description}" status updated.')
        return goal

    def remove(self, goal_id: str) -> Goal:
        goal = self._find(goal_id)
        self._items = [g for g in self._items if g.id != goal_id]
        self.persist()
        self.notifier.error("Goal Deleted", f'"{goal.description}" has been removed.')
        logger.info(f"Goal deleted: {goal_id}")
        return goal

    def board(self) -> GoalBoard:
        """active and completed goals, each newest first"""
        newest_first = sorted(self._items, key=lambda g: g.created_at, reverse=True)
        return GoalBoard(
            active=[g for g in newest_first if not g.is_completed],
            completed=[g for g in newest_first if g.is_completed],
        )
