# shared fixtures for neuromate tests
# provides tmp-dir storage, fresh stores, a fake analysis chain, and httpx test client

import json

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient, ASGITransport

from neuromate.errors import PersistenceFailure
from neuromate.main import app
from neuromate.dependencies import get_analyzer, get_goal_store, get_journal_store, get_notifier
from neuromate.services.analysis_service import AnalysisService
from neuromate.services.notifier import Notifier
from neuromate.services.storage import LocalStorage
from neuromate.services.store import GoalStore, JournalStore


# sample provider output

FULL_ANALYSIS = {
    "sentiment": "anxious and overwhelmed",
    "feedback": "I hear how heavy this deadline feels. It makes sense you'd feel stretched thin.",
    "therapistNotes": {
        "coreIssues": "Perfectionism and fear of failure around work performance.",
        "potentialDiagnosis": "Suggests features of generalized anxiety. This is not a diagnosis.",
        "therapeuticSuggestions": "Cognitive restructuring (CBT) for catastrophizing about deadlines.",
    },
    "suggestedGoals": [
        "Try a 3-minute breathing exercise when stress rises.",
        "Write down one small accomplishment each evening.",
    ],
}

SAMPLE_TEXT = "Today I felt really anxious about my work deadline. The pressure is overwhelming."


def make_chain(response=None, error=None):
    """fake langchain runnable - ainvoke returns the response or raises the error"""
    chain = MagicMock()
    if error is not None:
        chain.ainvoke = AsyncMock(side_effect=error)
    else:
        if isinstance(response, dict):
            response = json.dumps(response)
        chain.ainvoke = AsyncMock(return_value=response)
    return chain


class FailingWriteStorage(LocalStorage):
    """storage whose writes always fail"""

    def set_item(self, key: str, value: str) -> None:
        raise PersistenceFailure(key, "write", OSError("disk full"))


class FailingReadStorage(LocalStorage):
    """storage whose reads always fail"""

    def get_item(self, key: str):
        raise PersistenceFailure(key, "read", OSError("permission denied"))


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "storage")


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def journal_store(storage, notifier):
    return JournalStore(storage, notifier)


@pytest.fixture
def goal_store(storage, notifier):
    return GoalStore(storage, notifier)


@pytest.fixture
def chain():
    return make_chain(FULL_ANALYSIS)


@pytest.fixture
def analyzer(chain):
    return AnalysisService(chain=chain)


@pytest_asyncio.fixture
async def client(journal_store, goal_store, notifier, analyzer):
    """httpx async test client with fresh stores and a fake analyzer"""

    async def override_journal_store():
        return journal_store

    async def override_goal_store():
        return goal_store

    async def override_notifier():
        return notifier

    async def override_analyzer():
        return analyzer

    app.dependency_overrides[get_journal_store] = override_journal_store
    app.dependency_overrides[get_goal_store] = override_goal_store
    app.dependency_overrides[get_notifier] = override_notifier
    app.dependency_overrides[get_analyzer] = override_analyzer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
