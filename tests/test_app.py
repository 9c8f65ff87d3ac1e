# tests for the health check and app configuration
# basic app-level tests

import json

from neuromate import main
from neuromate.config import settings
from neuromate.models.goal import GoalCreate
from neuromate.models.journal import JournalCreate


class TestHealthCheck:
    """app health and config"""

    async def test_health_check(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["service"] == "neuromate-api"

    async def test_openapi_schema(self, client):
        resp = await client.get("/openapi.json")
        assert resp.status_code == 200
        schema = resp.json()
        assert schema["info"]["title"] == "NeuroMate API"

    async def test_user_facing_schema_has_no_notes(self, client):
        resp = await client.get("/openapi.json")
        schemas = resp.json()["components"]["schemas"]
        views = [s for name, s in schemas.items() if name.startswith("JournalEntryView")]
        assert views
        for view in views:
            assert "therapistNotes" not in view["properties"]

    async def test_docs_available(self, client):
        resp = await client.get("/docs")
        assert resp.status_code == 200


class TestStartup:
    """lifespan reloads stored entries and goals"""

    async def test_lifespan_loads_stored_lists(self, client, storage, journal_store, goal_store, monkeypatch):
        storage.set_item("neuroMateJournalEntries", json.dumps([{
            "id": "1717000000000",
            "timestamp": "2025-06-10T12:00:00.000Z",
            "text": "Feeling much better today. Therapy session was really helpful.",
            "sentiment": "hopeful",
            "feedback": "I'm glad the session helped.",
        }]))
        storage.set_item("neuroMateGoals", json.dumps([{
            "id": "1717000000001",
            "description": "Practice mindfulness for 10 minutes daily",
            "isCompleted": False,
            "createdAt": "2025-06-10T12:05:00.000Z",
        }]))
        monkeypatch.setattr(main, "journal_store", journal_store)
        monkeypatch.setattr(main, "goal_store", goal_store)

        async with main.lifespan(main.app):
            entries = (await client.get("/journal")).json()
            board = (await client.get("/goals")).json()

        assert [e["id"] for e in entries] == ["1717000000000"]
        assert entries[0]["sentiment"] == "hopeful"
        assert [g["id"] for g in board["active"]] == ["1717000000001"]
        assert board["completed"] == []


class TestValidationBounds:
    """request bounds come from settings"""

    def test_journal_bounds(self):
        schema = JournalCreate.model_json_schema()["properties"]["entryText"]
        assert schema["minLength"] == settings.JOURNAL_MIN_LENGTH
        assert schema["maxLength"] == settings.JOURNAL_MAX_LENGTH

    def test_goal_min_length(self):
        schema = GoalCreate.model_json_schema()["properties"]["goalDescription"]
        assert schema["minLength"] == settings.GOAL_MIN_LENGTH
