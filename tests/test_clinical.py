# tests for the clinical router - notes only behind the clinician key

import pytest

from neuromate.config import settings
from neuromate.models.journal import JournalEntryView
from tests.conftest import FULL_ANALYSIS, SAMPLE_TEXT


@pytest.fixture
def clinician_key(monkeypatch):
    monkeypatch.setattr(settings, "CLINICIAN_API_KEY", "test-clinician-key")
    return "test-clinician-key"


class TestClinicalView:
    """GET /clinical/journal/{id}"""

    async def test_clinician_sees_notes(self, client, clinician_key):
        entry = (await client.post("/journal", json={"entryText": SAMPLE_TEXT})).json()
        resp = await client.get(f"/clinical/journal/{entry['id']}", headers={"X-Clinician-Key": clinician_key})
        assert resp.status_code == 200
        notes = resp.json()["therapistNotes"]
        assert notes["coreIssues"] == FULL_ANALYSIS["therapistNotes"]["coreIssues"]
        assert notes["potentialDiagnosis"] == FULL_ANALYSIS["therapistNotes"]["potentialDiagnosis"]

    async def test_wrong_key_forbidden(self, client, clinician_key):
        entry = (await client.post("/journal", json={"entryText": SAMPLE_TEXT})).json()
        resp = await client.get(f"/clinical/journal/{entry['id']}", headers={"X-Clinician-Key": "guess"})
        assert resp.status_code == 403

    async def test_non_ascii_key_forbidden(self, client, clinician_key):
        entry = (await client.post("/journal", json={"entryText": SAMPLE_TEXT})).json()
        resp = await client.get(f"/clinical/journal/{entry['id']}", headers={"X-Clinician-Key": b"cl\xe9"})
        assert resp.status_code == 403

    async def test_missing_key_forbidden(self, client, clinician_key):
        entry = (await client.post("/journal", json={"entryText": SAMPLE_TEXT})).json()
        resp = await client.get(f"/clinical/journal/{entry['id']}")
        assert resp.status_code == 403

    async def test_disabled_when_unconfigured(self, client, monkeypatch):
        monkeypatch.setattr(settings, "CLINICIAN_API_KEY", "")
        entry = (await client.post("/journal", json={"entryText": SAMPLE_TEXT})).json()
        resp = await client.get(f"/clinical/journal/{entry['id']}", headers={"X-Clinician-Key": ""})
        assert resp.status_code == 403

    async def test_unknown_entry(self, client, clinician_key):
        resp = await client.get("/clinical/journal/missing", headers={"X-Clinician-Key": clinician_key})
        assert resp.status_code == 404


class TestUserViewProjection:
    """the user-facing model can't carry notes"""

    async def test_view_rejects_notes(self, journal_store, analyzer):
        entry = await journal_store.submit(SAMPLE_TEXT, analyzer)
        with pytest.raises(ValueError):
            JournalEntryView.model_validate(entry.model_dump(by_alias=True))

    async def test_from_entry_drops_notes(self, journal_store, analyzer):
        entry = await journal_store.submit(SAMPLE_TEXT, analyzer)
        view = JournalEntryView.from_entry(entry)
        assert "therapistNotes" not in view.model_dump(by_alias=True)
        assert "therapist_notes" not in view.model_dump()
