import json
import pytest
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent))

from config import settings
from services.search import SearchProvider
from services.session import ConversationSession, ModelReply
from services.tools import ToolCallRequest

CENTRAL_HALL_CLAIM = "Emergency shelters are open at Central Hall"
REDCROSS_URL = "https://www.redcross.org/shelter-status"


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Configure API keys on the shared settings object for every test."""
    env_vars = {
        "GEMINI_API_KEY": "test_gemini_key",
        "TAVILY_API_KEY": "test_tavily_key",
        "GEMINI_MODEL": "gemini-2.5-flash",
    }
    for key, value in env_vars.items():
        monkeypatch.setattr(settings, key, value)
    return env_vars


@pytest.fixture
def test_client():
    """Create a TestClient for FastAPI app."""
    import main
    return TestClient(main.app)


@pytest.fixture
def mock_httpx_client():
    """Mock httpx.AsyncClient usable as an async context manager.

    ``__aexit__`` returns False so errors raised inside the block propagate.
    """
    mock_client = MagicMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


def make_http_response(payload: Any) -> MagicMock:
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.json.return_value = payload
    mock_response.raise_for_status = MagicMock()
    return mock_response


@pytest.fixture
def http_response():
    return make_http_response


@pytest.fixture
def central_hall_payload() -> Dict[str, Any]:
    return {
        "claim": CENTRAL_HALL_CLAIM,
        "status": "Verified",
        "confidence": "High",
        "summary": "The Red Cross lists Central Hall as an open emergency shelter.",
        "public_guidance": "Bring identification and essential medication.",
        "sources": [REDCROSS_URL],
        "last_verified": "2024-01-01T00:00:00Z",
        "crisis_relevance": "High",
    }


@pytest.fixture
def central_hall_json(central_hall_payload) -> str:
    return json.dumps(central_hall_payload)


@pytest.fixture
def sample_gemini_text_response(central_hall_json):
    """Gemini reply carrying only a final text answer."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": central_hall_json}]},
                "finishReason": "STOP"
            }
        ]
    }


@pytest.fixture
def sample_gemini_tool_call_response():
    """Gemini reply asking for the getResult tool."""
    return {
        "candidates": [
            {
                "content": {
                    "role": "model",
                    "parts": [
                        {"functionCall": {"name": "getResult", "args": {"itemName": "Emergency shelters Central Hall"}}}
                    ]
                },
                "finishReason": "STOP"
            }
        ]
    }


@pytest.fixture
def sample_tavily_response():
    """Sample Tavily search response."""
    return {
        "query": "Emergency shelters Central Hall",
        "results": [
            {
                "title": "Shelter status",
                "url": REDCROSS_URL,
                "content": "Central Hall shelter is open 24/7.",
                "score": 0.92
            },
            {
                "title": "City emergency updates",
                "url": "https://www.city.gov/emergency",
                "content": "Shelters at Central Hall and North School.",
                "score": 0.81
            },
            {
                "title": "Local news",
                "url": "https://news.example.com/shelters",
                "content": "Volunteers staff Central Hall.",
                "score": 0.64
            },
            {
                "title": "Forum post",
                "url": "https://forum.example.com/thread/1",
                "content": "Heard Central Hall is open?",
                "score": 0.20
            }
        ]
    }


def text_reply(text: Optional[str]) -> ModelReply:
    return ModelReply(text=text)


def tool_reply(*calls: Dict[str, Any], text: Optional[str] = None) -> ModelReply:
    return ModelReply(text=text, tool_calls=[ToolCallRequest.from_function_call(c) for c in calls])


class ScriptedSession(ConversationSession):
    """Session that replays prepared replies instead of calling a model."""

    def __init__(self, replies: List[Union[ModelReply, Exception]]):
        super().__init__()
        self.replies = list(replies)
        self.sent: List[Dict[str, Any]] = []

    async def _exchange(self, contents):
        self.sent.append(contents[-1])
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        parts = [{"text": reply.text}] if reply.text else []
        parts += [{"functionCall": {"name": c.name, "args": c.args}} for c in reply.tool_calls]
        return reply, {"role": "model", "parts": parts}


class ScriptedSessionFactory:
    def __init__(self, *scripts: List[Union[ModelReply, Exception]]):
        self.scripts = list(scripts)
        self.sessions: List[ScriptedSession] = []

    def __call__(self) -> ScriptedSession:
        session = ScriptedSession(self.scripts.pop(0))
        self.sessions.append(session)
        return session


class FakeSearchProvider(SearchProvider):

    def __init__(self, documents=None, error: Optional[Exception] = None):
        self.documents = documents if documents is not None else []
        self.error = error
        self.queries: List[str] = []

    async def search(self, query: str, max_results: int = 3):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self.documents)[:max_results]


@pytest.fixture
def scripted():
    """Helpers for building scripted sessions and fake search providers."""
    class Helpers:
        text = staticmethod(text_reply)
        tool = staticmethod(tool_reply)
        factory = ScriptedSessionFactory
        search = FakeSearchProvider
    return Helpers
